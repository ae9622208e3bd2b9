"""
Anti-Pattern Detector for Architecture Graphs
=============================================

Detects structural anti-patterns from the edge set of a GraphModel:

1. Cycle - circular dependency found by a three-colour depth-first search.
   The first back-edge ends the search and exactly one cycle is reported,
   even when the graph holds several disjoint cycles.
2. Bottleneck - in-degree >= bottleneck_threshold (high fan-in)
3. Over-Coupling - out-degree >= over_coupling_threshold (high fan-out)
4. Isolated Component - no incoming and no outgoing edges (optional)

Severity is degree / threshold for the degree-based patterns, 1.0 for cycle
members and 0.3 for isolated components.

Detection works on an adjacency list built fresh from model.edges, so the
cached adjacency matrix does not need to be current. Edges naming unknown
ids still take part in traversal and degree counts.

enumerate_cycles() is a separate, exhaustive listing of simple cycles.
"""

import itertools
import logging
from collections import Counter, defaultdict
from typing import Dict, List, Optional

import networkx as nx

from ..core.graph_model import GraphModel
from .models import (
    AntiPattern,
    AntiPatternAnalysisResult,
    AntiPatternConfig,
    AntiPatternType,
    CYCLE_SEVERITY,
    ISOLATED_SEVERITY,
    severity_by_node,
)

# DFS colours
UNVISITED, IN_PROGRESS, DONE = 0, 1, 2

RECOMMENDATIONS = {
    AntiPatternType.CYCLE: (
        "Break circular dependencies by introducing an interface, an event, "
        "or by moving shared logic into a separate component."
    ),
    AntiPatternType.BOTTLENECK: (
        "Reduce fan-in on heavily used components: add replicas, caching, "
        "or split responsibilities across several services."
    ),
    AntiPatternType.OVER_COUPLING: (
        "Reduce fan-out of over-coupled components: introduce a facade or "
        "orchestration layer, or split the component by responsibility."
    ),
    AntiPatternType.ISOLATED_COMPONENT: (
        "Connect or remove isolated components; they are either missing "
        "relationships in the model or dead architecture."
    ),
}


class AntiPatternDetector:
    """
    Detects cycles, bottlenecks, over-coupling and isolated components.

    Args:
        config: detection thresholds. Validated on construction; a threshold
            below 1 raises InvalidConfigurationError before any detection runs.
    """

    def __init__(self, config: Optional[AntiPatternConfig] = None):
        self.config = config or AntiPatternConfig()
        self.config.validate()
        self.logger = logging.getLogger('AntiPatternDetector')

    def detect(self, model: GraphModel) -> List[AntiPattern]:
        """Run every detector and return the patterns found (empty for an empty model)."""
        adjacency = self._build_adjacency_list(model)

        patterns: List[AntiPattern] = []
        cycle = self._detect_cycle(model, adjacency)
        if cycle is not None:
            patterns.append(cycle)
        patterns.extend(self._detect_degree_patterns(model))
        return patterns

    def analyze(self, model: GraphModel) -> AntiPatternAnalysisResult:
        """
        Detect all anti-patterns and summarize them.

        Returns:
            AntiPatternAnalysisResult with patterns, per-type counts and
            one recommendation per pattern type present
        """
        self.logger.info("Starting anti-pattern detection...")

        patterns = self.detect(model)
        for pattern in patterns:
            self.logger.info(
                f"Pattern detected: {pattern.pattern_type.value} "
                f"nodes={pattern.node_ids} severity={pattern.severity:.2f}"
            )

        result = AntiPatternAnalysisResult(
            patterns=patterns,
            summary=self._generate_summary(patterns),
            recommendations=self._generate_recommendations(patterns),
        )
        self.logger.info(f"Anti-pattern detection complete. Found {len(patterns)} patterns.")
        return result

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _build_adjacency_list(model: GraphModel) -> Dict[str, List[str]]:
        adjacency: Dict[str, List[str]] = defaultdict(list)
        for edge in model.edges:
            adjacency[edge.source].append(edge.target)
        return adjacency

    def _detect_cycle(self, model: GraphModel, adjacency: Dict[str, List[str]]) -> Optional[AntiPattern]:
        """
        Iterative three-colour DFS from each unvisited node in model order.

        Returns the cycle closed by the first back-edge, or None.
        """
        colour: Dict[str, int] = defaultdict(int)
        parent: Dict[str, str] = {}

        for start in (node.id for node in model.nodes):
            if colour[start] != UNVISITED:
                continue
            colour[start] = IN_PROGRESS
            stack = [(start, iter(adjacency.get(start, ())))]

            while stack:
                current, neighbours = stack[-1]
                descended = False
                for neighbour in neighbours:
                    state = colour[neighbour]
                    if state == IN_PROGRESS:
                        return self._cycle_pattern(self._reconstruct_cycle(parent, neighbour, current))
                    if state == UNVISITED:
                        colour[neighbour] = IN_PROGRESS
                        parent[neighbour] = current
                        stack.append((neighbour, iter(adjacency.get(neighbour, ()))))
                        descended = True
                        break
                if not descended:
                    colour[current] = DONE
                    stack.pop()
        return None

    @staticmethod
    def _reconstruct_cycle(parent: Dict[str, str], target: str, source: str) -> List[str]:
        """Path target -> ... -> source following parent links back from source."""
        path = [source]
        while path[-1] != target:
            path.append(parent[path[-1]])
        path.reverse()
        return path

    @staticmethod
    def _cycle_pattern(nodes: List[str]) -> AntiPattern:
        return AntiPattern(
            pattern_type=AntiPatternType.CYCLE,
            node_ids=nodes,
            severity=CYCLE_SEVERITY,
            description=f"Circular dependency detected: {len(nodes)} nodes",
            recommendation=RECOMMENDATIONS[AntiPatternType.CYCLE],
        )

    def _detect_degree_patterns(self, model: GraphModel) -> List[AntiPattern]:
        in_degree = Counter(edge.target for edge in model.edges)
        out_degree = Counter(edge.source for edge in model.edges)
        bottleneck = self.config.bottleneck_threshold
        coupling = self.config.over_coupling_threshold

        patterns: List[AntiPattern] = []
        for node in model.nodes:
            fan_in = in_degree[node.id]
            fan_out = out_degree[node.id]

            if fan_in >= bottleneck:
                patterns.append(AntiPattern(
                    pattern_type=AntiPatternType.BOTTLENECK,
                    node_ids=[node.id],
                    degree=fan_in,
                    severity=fan_in / max(bottleneck, 1),
                    description=f"High fan-in: {fan_in} incoming edges",
                    recommendation=RECOMMENDATIONS[AntiPatternType.BOTTLENECK],
                ))

            if fan_out >= coupling:
                patterns.append(AntiPattern(
                    pattern_type=AntiPatternType.OVER_COUPLING,
                    node_ids=[node.id],
                    degree=fan_out,
                    severity=fan_out / max(coupling, 1),
                    description=f"High fan-out: {fan_out} outgoing edges",
                    recommendation=RECOMMENDATIONS[AntiPatternType.OVER_COUPLING],
                ))

            if self.config.detect_isolated and fan_in == 0 and fan_out == 0:
                patterns.append(AntiPattern(
                    pattern_type=AntiPatternType.ISOLATED_COMPONENT,
                    node_ids=[node.id],
                    severity=ISOLATED_SEVERITY,
                    description="No connections to other components",
                    recommendation=RECOMMENDATIONS[AntiPatternType.ISOLATED_COMPONENT],
                ))
        return patterns

    @staticmethod
    def _generate_summary(patterns: List[AntiPattern]) -> Dict:
        by_type = Counter(p.pattern_type.value for p in patterns)
        severities = severity_by_node(patterns)
        return {
            "total": len(patterns),
            "by_type": {t.value: by_type.get(t.value, 0) for t in AntiPatternType},
            "affected_nodes": len(severities),
            "max_severity": max(severities.values(), default=0.0),
        }

    @staticmethod
    def _generate_recommendations(patterns: List[AntiPattern]) -> List[str]:
        present = {p.pattern_type for p in patterns}
        return [RECOMMENDATIONS[t] for t in AntiPatternType if t in present]


def detect_anti_patterns(model: GraphModel, config: Optional[AntiPatternConfig] = None) -> List[AntiPattern]:
    """Detect anti-patterns with the given (or default) configuration."""
    return AntiPatternDetector(config).detect(model)


def enumerate_cycles(model: GraphModel, limit: Optional[int] = None) -> List[List[str]]:
    """
    List every simple cycle (all of them, unlike detect()), optionally
    stopping after `limit` cycles. Parallel edges count once.
    """
    cycles = nx.simple_cycles(model.to_networkx())
    if limit is not None:
        cycles = itertools.islice(cycles, limit)
    return [list(cycle) for cycle in cycles]
