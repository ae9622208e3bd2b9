"""
archgraph

Graph analysis for C4-style software architecture descriptions:
DSL parsing, force-directed layout, structural anti-pattern detection and
Graphviz export.

Usage:
    from archgraph import parse_c4_dsl, LayoutOptimizer, detect_anti_patterns, to_dot

    model = parse_c4_dsl(open("system.c4").read())
    model.build_adjacency_matrix()
    LayoutOptimizer(iterations=200, seed=7).optimize_layout(model)
    print(to_dot(model, patterns=detect_anti_patterns(model)))
"""

__version__ = "1.0.0"

from .core import (
    ArchGraphError,
    EmptyModelError,
    MatrixNotBuiltError,
    InvalidConfigurationError,
    MalformedInterchangeError,
    NodeType,
    Node,
    Edge,
    GraphModel,
    load_model,
    save_model,
)
from .dsl import parse_c4_dsl, parse_file
from .layout import LayoutOptimizer, LayoutResult, evaluate_layout
from .analysis import (
    AntiPatternType,
    AntiPattern,
    AntiPatternConfig,
    AntiPatternDetector,
    detect_anti_patterns,
    enumerate_cycles,
)
from .visualization import to_dot, to_dot_with_positions

__all__ = [
    "__version__",
    "ArchGraphError",
    "EmptyModelError",
    "MatrixNotBuiltError",
    "InvalidConfigurationError",
    "MalformedInterchangeError",
    "NodeType",
    "Node",
    "Edge",
    "GraphModel",
    "load_model",
    "save_model",
    "parse_c4_dsl",
    "parse_file",
    "LayoutOptimizer",
    "LayoutResult",
    "evaluate_layout",
    "AntiPatternType",
    "AntiPattern",
    "AntiPatternConfig",
    "AntiPatternDetector",
    "detect_anti_patterns",
    "enumerate_cycles",
    "to_dot",
    "to_dot_with_positions",
]
