"""
Layout Quality Metrics

Scores a positioned model so layout runs can be compared:
    - edge_crossings: pairs of straight edge segments that properly intersect
      (segments sharing an endpoint are not counted)
    - overlap_penalty: total shortfall of node pairs closer than min_distance
    - quality_score: 1 / (1 + edge_crossings + overlap_penalty)
    - graph_hash: fingerprint of the node ids and edges, so scores are only
      compared between layouts of the same graph
"""

import hashlib
import itertools
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Tuple

from ..core.graph_model import GraphModel

Point = Tuple[float, float]
Segment = Tuple[str, str, Point, Point]


@dataclass
class LayoutQuality:
    graph_hash: str
    edge_crossings: int
    overlap_penalty: float
    quality_score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def graph_hash(model: GraphModel) -> str:
    digest = hashlib.sha256()
    for node in model.nodes:
        digest.update(f"n:{node.id}\n".encode("utf-8"))
    for edge in model.edges:
        digest.update(f"e:{edge.source}->{edge.target}:{edge.weight}\n".encode("utf-8"))
    return digest.hexdigest()[:16]


def _orientation(a: Point, b: Point, c: Point) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def _segments_cross(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    d1 = _orientation(q1, q2, p1)
    d2 = _orientation(q1, q2, p2)
    d3 = _orientation(p1, p2, q1)
    d4 = _orientation(p1, p2, q2)
    return d1 * d2 < 0 and d3 * d4 < 0


def _positioned_segments(model: GraphModel) -> List[Segment]:
    positions: Dict[str, Point] = {}
    for node in model.nodes:
        if node.position is not None:
            positions.setdefault(node.id, node.position)

    segments: List[Segment] = []
    for edge in model.edges:
        if edge.source == edge.target:
            continue
        start = positions.get(edge.source)
        end = positions.get(edge.target)
        if start is None or end is None:
            continue
        segments.append((edge.source, edge.target, start, end))
    return segments


def count_edge_crossings(model: GraphModel) -> int:
    crossings = 0
    for (a_src, a_dst, a1, a2), (b_src, b_dst, b1, b2) in itertools.combinations(_positioned_segments(model), 2):
        if {a_src, a_dst} & {b_src, b_dst}:
            continue
        if _segments_cross(a1, a2, b1, b2):
            crossings += 1
    return crossings


def overlap_penalty(model: GraphModel, min_distance: float = 1.0) -> float:
    points = [node.position for node in model.nodes if node.position is not None]
    penalty = 0.0
    for (x1, y1), (x2, y2) in itertools.combinations(points, 2):
        distance = math.hypot(x1 - x2, y1 - y2)
        if distance < min_distance:
            penalty += min_distance - distance
    return penalty


def evaluate_layout(model: GraphModel, min_distance: float = 1.0) -> LayoutQuality:
    """Score the current node positions. Unpositioned nodes and dangling edges are ignored."""
    crossings = count_edge_crossings(model)
    penalty = overlap_penalty(model, min_distance)
    return LayoutQuality(
        graph_hash=graph_hash(model),
        edge_crossings=crossings,
        overlap_penalty=penalty,
        quality_score=1.0 / (1.0 + crossings + penalty),
    )
