"""
Unit Tests for archgraph/visualization/plot.py
"""

import pytest

from archgraph.analysis import detect_anti_patterns
from archgraph.layout import LayoutOptimizer
from archgraph.core import Edge
from archgraph.visualization import MIN_LINEWIDTH, edge_linewidth, render_layout_image


class TestRenderLayoutImage:

    def test_requires_positions(self, ring_model, tmp_path):
        with pytest.raises(ValueError):
            render_layout_image(ring_model, tmp_path / "layout.png")

    def test_png(self, ring_model, tmp_path):
        ring_model.build_adjacency_matrix()
        LayoutOptimizer(iterations=20, seed=0).optimize_layout(ring_model)

        output = render_layout_image(
            ring_model, tmp_path / "images" / "layout.png",
            patterns=detect_anti_patterns(ring_model),
        )
        assert output.exists()
        assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_svg(self, positioned_model, tmp_path):
        output = render_layout_image(positioned_model, tmp_path / "layout.svg", show_labels=False)
        assert "<svg" in output.read_text(encoding="utf-8")

    def test_non_positive_weights(self, positioned_model, tmp_path):
        positioned_model.add_edge(Edge("A", "B", weight=0.0))
        positioned_model.add_edge(Edge("B", "A", weight=-3.0))
        output = render_layout_image(positioned_model, tmp_path / "weights.png")
        assert output.exists()


class TestEdgeLinewidth:

    def test_follows_penwidth_above_floor(self):
        assert edge_linewidth(1.0) == 1.0
        assert edge_linewidth(3.0) == 2.0

    @pytest.mark.parametrize("weight", [0.0, -1.0, -3.0])
    def test_floored(self, weight):
        assert edge_linewidth(weight) == MIN_LINEWIDTH
