"""
DOT Exporter

Renders a GraphModel as Graphviz DOT text.

to_dot():
    Directed graph with severity colouring. Node fill follows the highest
    severity of any anti-pattern touching the node, isolated nodes get a
    dashed outline, edge width follows edge weight and edges inside the
    detected cycle are drawn thick and red. Detected patterns are listed in a
    trailing comment block.

to_dot_with_positions():
    Undirected neato graph pinning every positioned node to its layout
    coordinates (render with `neato -n`). No severity colouring.

Usage:
    dot = to_dot(model, config=AntiPatternConfig())
    Path("architecture.dot").write_text(dot)
    # dot -Tsvg architecture.dot > architecture.svg
"""

from typing import List, Optional

from ..analysis.antipattern_detector import detect_anti_patterns
from ..analysis.models import (
    AntiPattern,
    AntiPatternConfig,
    AntiPatternType,
    cycle_node_ids,
    isolated_node_ids,
    severity_by_node,
)
from ..core.graph_model import GraphModel
from .styles import COLORS, node_type_to_shape, severity_to_color

CYCLE_PENWIDTH = 3.0


def _quote(value: str) -> str:
    """Escape a value for a DOT double-quoted string."""
    return '"' + str(value).replace("\\", "\\\\").replace('"', '\\"') + '"'


def edge_penwidth(weight: float) -> float:
    return 1.0 + (weight - 1.0) * 0.5


def to_dot(model: GraphModel,
           config: Optional[AntiPatternConfig] = None,
           patterns: Optional[List[AntiPattern]] = None) -> str:
    """
    Export the model to DOT with severity-based colouring.

    Args:
        model: graph to render
        config: when given (and `patterns` is not), anti-patterns are detected
            with it
        patterns: already detected patterns; takes precedence over `config`

    Without either, every node is rendered healthy.
    """
    if patterns is None:
        patterns = detect_anti_patterns(model, config) if config is not None else []

    severity_map = severity_by_node(patterns)
    cycle_nodes = cycle_node_ids(patterns)
    isolated = isolated_node_ids(patterns)

    lines = [
        "digraph Architecture {",
        "  rankdir=TB;",
        "  splines=curved;",
        f"  node [style=filled, fontsize=10, fontcolor=\"{COLORS['font']}\"];",
        "  edge [penwidth=1.5];",
        "",
    ]

    for node in model.nodes:
        severity = severity_map.get(node.id, 0.0)
        style = "filled,dashed" if node.id in isolated else "filled"
        attrs = (
            f"label={_quote(node.name)}, fillcolor=\"{severity_to_color(severity)}\", "
            f"shape={node_type_to_shape(node.node_type)}, style=\"{style}\""
        )
        if severity > 0.0:
            attrs += f", tooltip=\"Severity: {severity:.2f}\""
        lines.append(f"  {_quote(node.id)} [{attrs}];")

        if node.position is not None:
            x, y = node.position
            lines.append(f"  // Position: ({x:.2f}, {y:.2f}), Severity: {severity:.2f}")
        elif severity > 0.0:
            lines.append(f"  // Severity: {severity:.2f}")

    lines.append("")

    for edge in model.edges:
        label = _quote(edge.label or "")
        if edge.source in cycle_nodes and edge.target in cycle_nodes:
            attrs = f"label={label}, penwidth={CYCLE_PENWIDTH:g}, color=\"{COLORS['cycle_edge']}\""
        else:
            attrs = f"label={label}, penwidth={edge_penwidth(edge.weight):g}"
        lines.append(f"  {_quote(edge.source)} -> {_quote(edge.target)} [{attrs}];")

    if patterns:
        lines.append("")
        lines.append("  // Anti-patterns detected:")
        lines.extend(f"  // {_describe(pattern)}" for pattern in patterns)

    lines.append("}")
    return "\n".join(lines) + "\n"


def _describe(pattern: AntiPattern) -> str:
    if pattern.pattern_type == AntiPatternType.CYCLE:
        return f"Cycle: {pattern.node_ids}"
    if pattern.pattern_type == AntiPatternType.BOTTLENECK:
        return f"Bottleneck: {pattern.node_id} (in_degree={pattern.degree}, severity={pattern.severity:.2f})"
    if pattern.pattern_type == AntiPatternType.OVER_COUPLING:
        return f"Over-coupled: {pattern.node_id} (out_degree={pattern.degree}, severity={pattern.severity:.2f})"
    return f"Isolated: {pattern.node_id}"


def to_dot_with_positions(model: GraphModel) -> str:
    """Export the model with fixed node coordinates for position-preserving rendering."""
    lines = [
        "graph Architecture {",
        "  layout=neato;",
        f"  node [style=filled, fixedsize=true, width=1.5, height=0.8, fontsize=10, fontcolor=\"{COLORS['font']}\"];",
        "",
    ]

    for node in model.nodes:
        attrs = f"label={_quote(node.name)}, shape={node_type_to_shape(node.node_type)}"
        if node.position is not None:
            x, y = node.position
            attrs += f", pos=\"{x:.2f},{y:.2f}!\""
        lines.append(f"  {_quote(node.id)} [{attrs}];")

    lines.append("")

    for edge in model.edges:
        lines.append(f"  {_quote(edge.source)} -- {_quote(edge.target)} [label={_quote(edge.label or '')}];")

    lines.append("}")
    return "\n".join(lines) + "\n"
