"""
Visual Styles

Shapes and severity colours shared by the DOT exporter and the static plot.
"""

from typing import Dict

from ..core.models import NodeType

# Graphviz shape per node type
SHAPES: Dict[NodeType, str] = {
    NodeType.SYSTEM: "box3d",
    NodeType.CONTAINER: "component",
    NodeType.COMPONENT: "box",
    NodeType.PERSON: "ellipse",
}

# Closest matplotlib marker per node type
MARKERS: Dict[NodeType, str] = {
    NodeType.SYSTEM: "D",
    NodeType.CONTAINER: "s",
    NodeType.COMPONENT: "p",
    NodeType.PERSON: "o",
}

COLORS = {
    "critical": "#ff4444",
    "high": "#ff8844",
    "medium": "#ffcc44",
    "low": "#cccccc",
    "healthy": "#aaddaa",
    "cycle_edge": "#ff0000",
    "edge": "#555555",
    "font": "#333333",
}


def node_type_to_shape(node_type: NodeType) -> str:
    return SHAPES[node_type]


def severity_level(severity: float) -> str:
    """Severity band: >=1.0 critical, >=0.7 high, >=0.3 medium, >0 low, else healthy."""
    if severity >= 1.0:
        return "critical"
    if severity >= 0.7:
        return "high"
    if severity >= 0.3:
        return "medium"
    if severity > 0.0:
        return "low"
    return "healthy"


def severity_to_color(severity: float) -> str:
    return COLORS[severity_level(severity)]
