"""
Layout Package

Force-directed node placement and layout quality scoring.
"""

from .optimizer import (
    LayoutOptimizer,
    LayoutResult,
    DEFAULT_AREA,
    DEFAULT_IDEAL_DISTANCE,
    SOFTENING,
)
from .quality import (
    LayoutQuality,
    evaluate_layout,
    count_edge_crossings,
    overlap_penalty,
    graph_hash,
)

__all__ = [
    "LayoutOptimizer",
    "LayoutResult",
    "DEFAULT_AREA",
    "DEFAULT_IDEAL_DISTANCE",
    "SOFTENING",
    "LayoutQuality",
    "evaluate_layout",
    "count_edge_crossings",
    "overlap_penalty",
    "graph_hash",
]
