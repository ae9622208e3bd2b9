"""
Static Layout Plot
==================

Renders an optimized layout to PNG, SVG or PDF with matplotlib.
Nodes are drawn at their layout positions with a marker per node type and the
same severity colours as the DOT export; edges are arrows, red inside the
detected cycle.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from ..analysis.models import AntiPattern, cycle_node_ids, severity_by_node
from ..core.graph_model import GraphModel
from ..core.models import NodeType
from .dot_exporter import edge_penwidth
from .styles import COLORS, MARKERS, severity_level, severity_to_color

logger = logging.getLogger(__name__)

#: Thinnest arrow drawn, for edges of weight 0 or below.
MIN_LINEWIDTH = 0.5


def edge_linewidth(weight: float) -> float:
    return max(edge_penwidth(weight), MIN_LINEWIDTH)


def render_layout_image(model: GraphModel,
                        output_path: Union[str, Path],
                        patterns: Optional[List[AntiPattern]] = None,
                        title: str = "Architecture Layout",
                        dpi: int = 150,
                        show_labels: bool = True) -> Path:
    """
    Render positioned nodes and their edges to an image file.

    The format follows the file extension (png, svg, pdf). Unpositioned nodes
    and edges touching them are left out.

    Returns:
        Path of the written file

    Raises:
        ValueError: no node has a position
    """
    positions = {node.id: node.position for node in model.nodes if node.position is not None}
    if not positions:
        raise ValueError("No positioned nodes to render; run the layout optimizer first")

    patterns = patterns or []
    severities = severity_by_node(patterns)
    cycle_nodes = cycle_node_ids(patterns)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(12, 9), facecolor='white')

    # Edges
    for edge in model.edges:
        if edge.source not in positions or edge.target not in positions:
            continue
        in_cycle = edge.source in cycle_nodes and edge.target in cycle_nodes
        ax.annotate(
            '',
            xy=positions[edge.target], xytext=positions[edge.source],
            arrowprops=dict(
                arrowstyle='-|>',
                color=COLORS['cycle_edge'] if in_cycle else COLORS['edge'],
                linewidth=3.0 if in_cycle else edge_linewidth(edge.weight),
                shrinkA=8, shrinkB=8,
            ),
            zorder=1,
        )

    # Nodes, grouped by type so each group gets its own marker
    for node_type in NodeType:
        group = [n for n in model.nodes if n.node_type == node_type and n.id in positions]
        if not group:
            continue
        ax.scatter(
            [positions[n.id][0] for n in group],
            [positions[n.id][1] for n in group],
            s=400,
            marker=MARKERS[node_type],
            c=[severity_to_color(severities.get(n.id, 0.0)) for n in group],
            edgecolors=COLORS['font'],
            linewidths=1.0,
            label=node_type.value,
            zorder=2,
        )

    if show_labels:
        for node in model.nodes:
            if node.id in positions:
                x, y = positions[node.id]
                ax.annotate(node.name, (x, y), xytext=(0, -18), textcoords='offset points',
                            ha='center', va='top', fontsize=8, color=COLORS['font'], zorder=3)

    type_legend = ax.legend(loc='upper left', fontsize=8, title='Type')
    ax.add_artist(type_legend)
    levels = sorted({severity_level(severities.get(n, 0.0)) for n in positions},
                    key=["critical", "high", "medium", "low", "healthy"].index)
    ax.legend(handles=[mpatches.Patch(color=COLORS[level], label=level) for level in levels],
              loc='upper right', fontsize=8, title='Severity')

    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.set_aspect('equal', adjustable='datalim')
    ax.margins(0.1)
    ax.axis('off')

    fmt = output_path.suffix.lstrip('.').lower() or 'png'
    plt.tight_layout()
    plt.savefig(output_path, format=fmt, dpi=dpi, bbox_inches='tight')
    plt.close(fig)

    logger.info(f"Layout image saved to {output_path}")
    return output_path
