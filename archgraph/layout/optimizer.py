"""
Force-Directed Layout Optimizer

Fruchterman-Reingold style simulation over the model's adjacency matrix.

Per iteration t of N, with temperature tau = eta * (1 - t/N):
    for every ordered pair (i, j), i != j:
        delta = p_i - p_j,  d^2 = |delta|^2 + 0.01,  d = sqrt(d^2)
        repulsion on i:  +(delta / d) * k^2 / d^2
        attraction on i: -(delta / d) * (d^2 / k) * M[i][j]   if M[i][j] > 0
    p <- clip(p + displacement * tau, 0, sqrt(A))

Attraction follows the directed matrix entry only: an edge i -> j pulls i
toward j but does not pull j toward i unless the reverse edge exists.

Positions are written back to the nodes only after the last iteration, so a
run either sets every position or (on a failed precondition) none.
"""

import logging
import math
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import numpy as np

from ..core.errors import EmptyModelError, InvalidConfigurationError, MatrixNotBuiltError
from ..core.graph_model import GraphModel

#: Layout area used when none is given explicitly.
DEFAULT_AREA: float = 1000.0

#: Ideal edge length k when the area is not set explicitly.
DEFAULT_IDEAL_DISTANCE: float = 1.0

#: Added to squared distances so coincident nodes do not divide by zero.
SOFTENING: float = 0.01


@dataclass
class LayoutResult:
    """Statistics of a completed layout run"""
    iterations: int
    final_temperature: float
    duration_ms: float
    node_count: int
    edge_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class LayoutOptimizer:
    """
    Positions model nodes inside a square of side sqrt(area).

    Args:
        iterations: number of simulation steps N
        learning_rate: base step size eta (initial temperature)
        area: target layout area A. Setting it explicitly also sets the ideal
            distance k = sqrt(A / N); otherwise A = 1000 and k = 1.0.
        seed: seed for the initial random placement
    """

    def __init__(self,
                 iterations: int = 100,
                 learning_rate: float = 0.1,
                 area: Optional[float] = None,
                 seed: Optional[int] = None):
        if iterations < 0:
            raise InvalidConfigurationError(f"iterations must be >= 0, got {iterations}")
        if area is not None and area <= 0:
            raise InvalidConfigurationError(f"area must be positive, got {area}")

        self.iterations = int(iterations)
        self.learning_rate = float(learning_rate)
        self.seed = seed

        if area is None:
            self.area = DEFAULT_AREA
            self.ideal_distance = DEFAULT_IDEAL_DISTANCE
        else:
            self.area = float(area)
            self.ideal_distance = (
                math.sqrt(self.area / self.iterations) if self.iterations > 0
                else DEFAULT_IDEAL_DISTANCE
            )

        self.logger = logging.getLogger(__name__)

    @property
    def side(self) -> float:
        """Edge length of the square layout region."""
        return math.sqrt(self.area)

    def temperature(self, iteration: int) -> float:
        """Linear cooling: eta at iteration 0, approaching zero at the last one."""
        if self.iterations == 0:
            return 0.0
        return self.learning_rate * (1.0 - iteration / self.iterations)

    def optimize_layout(self, model: GraphModel) -> LayoutResult:
        """
        Run the simulation and write final positions onto every node.

        Raises:
            EmptyModelError: the model has no nodes.
            MatrixNotBuiltError: build_adjacency_matrix() was not called after
                the last change, or produced no matrix.
        """
        node_count = model.node_count()
        if node_count == 0:
            raise EmptyModelError()
        if not model.has_adjacency_matrix():
            raise MatrixNotBuiltError()

        self.logger.debug(
            f"Optimizing layout: {node_count} nodes, {model.edge_count()} edges, "
            f"iterations={self.iterations}, eta={self.learning_rate}, "
            f"area={self.area}, k={self.ideal_distance:.4f}"
        )
        start = time.perf_counter()

        rng = np.random.default_rng(self.seed)
        side = self.side
        positions = rng.uniform(0.0, side, size=(node_count, 2))
        weights = model.adjacency_matrix

        final_temperature = 0.0
        for iteration in range(self.iterations):
            final_temperature = self.temperature(iteration)
            displacement = self._displacement(positions, weights)
            positions = np.clip(positions + displacement * final_temperature, 0.0, side)

        for node, (x, y) in zip(model.nodes, positions):
            node.set_position(x, y)

        result = LayoutResult(
            iterations=self.iterations,
            final_temperature=final_temperature,
            duration_ms=(time.perf_counter() - start) * 1000.0,
            node_count=node_count,
            edge_count=model.edge_count(),
        )
        self.logger.info(
            f"Layout converged after {result.iterations} iterations "
            f"({result.duration_ms:.1f} ms, final temperature {result.final_temperature:.4f})"
        )
        return result

    def _displacement(self, positions: np.ndarray, weights: np.ndarray) -> np.ndarray:
        """Net force on each node for the current positions, shape (n, 2)."""
        k = self.ideal_distance

        delta = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        dist_sq = np.sum(delta ** 2, axis=-1) + SOFTENING
        dist = np.sqrt(dist_sq)
        direction = delta / dist[..., np.newaxis]

        repulsion = (k * k) / dist_sq
        attraction = np.where(weights > 0, dist_sq / k * weights, 0.0)
        magnitude = repulsion - attraction
        np.fill_diagonal(magnitude, 0.0)

        return np.sum(direction * magnitude[..., np.newaxis], axis=1)
