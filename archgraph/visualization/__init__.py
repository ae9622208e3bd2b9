"""
Visualization Package

Graphviz DOT export and static matplotlib rendering of architecture graphs.
"""

from .styles import (
    SHAPES,
    MARKERS,
    COLORS,
    node_type_to_shape,
    severity_level,
    severity_to_color,
)
from .dot_exporter import to_dot, to_dot_with_positions, edge_penwidth
from .plot import render_layout_image, edge_linewidth, MIN_LINEWIDTH

__all__ = [
    "SHAPES",
    "MARKERS",
    "COLORS",
    "node_type_to_shape",
    "severity_level",
    "severity_to_color",
    "to_dot",
    "to_dot_with_positions",
    "edge_penwidth",
    "render_layout_image",
    "edge_linewidth",
    "MIN_LINEWIDTH",
]
