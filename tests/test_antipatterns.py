"""
Unit Tests for archgraph/analysis

Tests for:
    - models.py: AntiPattern serialization, AntiPatternConfig validation
    - antipattern_detector.py: cycle, bottleneck, over-coupling, isolated
"""

import pytest

from archgraph.analysis import (
    CYCLE_SEVERITY,
    ISOLATED_SEVERITY,
    AntiPattern,
    AntiPatternConfig,
    AntiPatternDetector,
    AntiPatternType,
    detect_anti_patterns,
    enumerate_cycles,
    severity_by_node,
)
from archgraph.core import (
    Edge,
    GraphModel,
    InvalidConfigurationError,
    MalformedInterchangeError,
)
from archgraph.dsl import parse_c4_dsl

from conftest import make_model


def by_type(patterns, pattern_type):
    return [p for p in patterns if p.pattern_type == pattern_type]


# =============================================================================
# Configuration
# =============================================================================

class TestAntiPatternConfig:

    def test_defaults(self):
        config = AntiPatternConfig()
        assert config.bottleneck_threshold == 5
        assert config.over_coupling_threshold == 7
        assert config.detect_isolated is True

    @pytest.mark.parametrize("field_name", ["bottleneck_threshold", "over_coupling_threshold"])
    def test_threshold_below_one_rejected(self, field_name):
        config = AntiPatternConfig(**{field_name: 0})
        with pytest.raises(InvalidConfigurationError):
            config.validate()

    def test_detector_validates_on_construction(self):
        with pytest.raises(InvalidConfigurationError):
            AntiPatternDetector(AntiPatternConfig(bottleneck_threshold=0))

    def test_invalid_config_is_value_error(self):
        with pytest.raises(ValueError):
            detect_anti_patterns(GraphModel(), AntiPatternConfig(over_coupling_threshold=-3))

    def test_from_dict_partial(self):
        config = AntiPatternConfig.from_dict({"bottleneck_threshold": 2})
        assert config.bottleneck_threshold == 2
        assert config.over_coupling_threshold == 7

    def test_from_dict_none(self):
        assert AntiPatternConfig.from_dict(None) == AntiPatternConfig()

    def test_from_dict_wrong_type(self):
        with pytest.raises(MalformedInterchangeError):
            AntiPatternConfig.from_dict({"bottleneck_threshold": "five"})
        with pytest.raises(MalformedInterchangeError):
            AntiPatternConfig.from_dict({"detect_isolated": "yes"})

    def test_from_dict_rejects_bool_threshold(self):
        with pytest.raises(MalformedInterchangeError):
            AntiPatternConfig.from_dict({"bottleneck_threshold": True})

    def test_from_dict_validates(self):
        with pytest.raises(InvalidConfigurationError):
            AntiPatternConfig.from_dict({"over_coupling_threshold": 0})

    def test_to_dict_roundtrip(self):
        config = AntiPatternConfig(3, 4, False)
        assert AntiPatternConfig.from_dict(config.to_dict()) == config


# =============================================================================
# Cycle Detection
# =============================================================================

class TestCycleDetection:

    def test_ring(self, ring_model):
        cycles = by_type(detect_anti_patterns(ring_model), AntiPatternType.CYCLE)
        assert len(cycles) == 1
        cycle = cycles[0]
        assert set(cycle.node_ids) == {"A", "B", "C"}
        assert cycle.node_ids == ["A", "B", "C"]
        assert cycle.severity == CYCLE_SEVERITY

    def test_cycle_reported_first(self, ring_model):
        ring_model.add_node(make_model(["Lonely"], []).nodes[0])
        patterns = detect_anti_patterns(ring_model)
        assert patterns[0].pattern_type == AntiPatternType.CYCLE

    def test_no_cycle_in_dag(self, hub_model):
        assert by_type(detect_anti_patterns(hub_model), AntiPatternType.CYCLE) == []

    def test_self_loop(self):
        model = make_model(["A"], [("A", "A")])
        cycles = by_type(detect_anti_patterns(model), AntiPatternType.CYCLE)
        assert cycles[0].node_ids == ["A"]

    def test_cycle_path_excludes_prefix(self):
        model = make_model(["S", "A", "B"], [("S", "A"), ("A", "B"), ("B", "A")])
        cycle = by_type(detect_anti_patterns(model), AntiPatternType.CYCLE)[0]
        assert cycle.node_ids == ["A", "B"]

    def test_only_one_cycle_reported(self):
        model = make_model(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "A"), ("C", "D"), ("D", "C")],
        )
        cycles = by_type(detect_anti_patterns(model), AntiPatternType.CYCLE)
        assert len(cycles) == 1
        assert set(cycles[0].node_ids) == {"A", "B"}

    def test_cycle_through_undeclared_node(self):
        model = make_model(["A"], [("A", "Ghost"), ("Ghost", "A")])
        cycle = by_type(detect_anti_patterns(model), AntiPatternType.CYCLE)[0]
        assert cycle.node_ids == ["A", "Ghost"]

    def test_description(self, ring_model):
        cycle = detect_anti_patterns(ring_model)[0]
        assert cycle.description == "Circular dependency detected: 3 nodes"

    def test_matrix_not_required(self, ring_model):
        assert ring_model.adjacency_matrix is None
        assert detect_anti_patterns(ring_model)

    def test_deep_chain_does_not_recurse(self):
        ids = [f"N{i}" for i in range(5000)]
        edges = list(zip(ids, ids[1:])) + [(ids[-1], ids[0])]
        cycle = by_type(detect_anti_patterns(make_model(ids, edges)), AntiPatternType.CYCLE)[0]
        assert len(cycle.node_ids) == 5000


class TestEnumerateCycles:

    def test_lists_every_cycle(self):
        model = make_model(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "A"), ("C", "D"), ("D", "C")],
        )
        cycles = enumerate_cycles(model)
        assert sorted(sorted(c) for c in cycles) == [["A", "B"], ["C", "D"]]

    def test_limit(self):
        model = make_model(
            ["A", "B", "C", "D"],
            [("A", "B"), ("B", "A"), ("C", "D"), ("D", "C")],
        )
        assert len(enumerate_cycles(model, limit=1)) == 1

    def test_acyclic(self, hub_model):
        assert enumerate_cycles(hub_model) == []


# =============================================================================
# Degree-Based Patterns
# =============================================================================

class TestBottleneck:

    def test_fan_in_at_threshold(self, hub_model):
        bottlenecks = by_type(detect_anti_patterns(hub_model), AntiPatternType.BOTTLENECK)
        assert len(bottlenecks) == 1
        assert bottlenecks[0].node_id == "Hub"
        assert bottlenecks[0].degree == 5
        assert bottlenecks[0].severity >= 1.0
        assert bottlenecks[0].description == "High fan-in: 5 incoming edges"

    def test_below_threshold(self):
        model = make_model(["Hub", "A", "B"], [("A", "Hub"), ("B", "Hub")])
        assert by_type(detect_anti_patterns(model), AntiPatternType.BOTTLENECK) == []

    def test_severity_is_ratio(self, hub_model):
        config = AntiPatternConfig(bottleneck_threshold=2)
        bottleneck = by_type(detect_anti_patterns(hub_model, config), AntiPatternType.BOTTLENECK)[0]
        assert bottleneck.severity == pytest.approx(2.5)

    def test_parallel_edges_count(self):
        model = make_model(["Hub", "A"], [("A", "Hub")] * 5)
        bottleneck = by_type(detect_anti_patterns(model), AntiPatternType.BOTTLENECK)[0]
        assert bottleneck.degree == 5


class TestOverCoupling:

    def test_fan_out_at_threshold(self, fanout_model):
        coupled = by_type(detect_anti_patterns(fanout_model), AntiPatternType.OVER_COUPLING)
        assert len(coupled) == 1
        assert coupled[0].node_id == "Orchestrator"
        assert coupled[0].severity == pytest.approx(1.0)
        assert coupled[0].description == "High fan-out: 7 outgoing edges"

    def test_node_can_be_both(self):
        ids = ["X"] + [f"I{i}" for i in range(2)] + [f"O{i}" for i in range(2)]
        edges = [(f"I{i}", "X") for i in range(2)] + [("X", f"O{i}") for i in range(2)]
        config = AntiPatternConfig(bottleneck_threshold=2, over_coupling_threshold=2)
        patterns = [p for p in detect_anti_patterns(make_model(ids, edges), config) if p.node_ids == ["X"]]
        assert [p.pattern_type for p in patterns] == [
            AntiPatternType.BOTTLENECK,
            AntiPatternType.OVER_COUPLING,
        ]


class TestIsolated:

    def test_isolated_reported_when_enabled(self):
        model = make_model(["A", "B", "Lonely"], [("A", "B")])
        isolated = by_type(detect_anti_patterns(model), AntiPatternType.ISOLATED_COMPONENT)
        assert [p.node_id for p in isolated] == ["Lonely"]
        assert isolated[0].severity == ISOLATED_SEVERITY

    def test_isolated_disabled(self):
        model = make_model(["A", "B", "Lonely"], [("A", "B")])
        config = AntiPatternConfig(detect_isolated=False)
        assert by_type(detect_anti_patterns(model, config), AntiPatternType.ISOLATED_COMPONENT) == []

    def test_self_loop_is_not_isolated(self):
        model = make_model(["A"], [("A", "A")])
        assert by_type(detect_anti_patterns(model), AntiPatternType.ISOLATED_COMPONENT) == []

    def test_undeclared_endpoints_not_reported(self):
        model = make_model(["A"], [("A", "Ghost")])
        assert detect_anti_patterns(model) == []


class TestDetectorGeneral:

    def test_empty_model(self):
        assert detect_anti_patterns(GraphModel()) == []

    def test_node_order_preserved(self):
        model = make_model(["Z", "Y", "X"], [])
        ids = [p.node_id for p in detect_anti_patterns(model)]
        assert ids == ["Z", "Y", "X"]

    def test_parsed_ring(self, ring_dsl):
        patterns = detect_anti_patterns(parse_c4_dsl(ring_dsl))
        assert patterns[0].pattern_type == AntiPatternType.CYCLE
        assert set(patterns[0].node_ids) == {"A", "B", "C"}


# =============================================================================
# Results and Serialization
# =============================================================================

class TestAnalysisResult:

    def test_analyze_summary(self, ring_model):
        ring_model.add_edge(Edge("A", "C"))
        result = AntiPatternDetector().analyze(ring_model)
        assert result.summary["total"] == 1
        assert result.summary["by_type"]["Cycle"] == 1
        assert result.summary["by_type"]["Bottleneck"] == 0
        assert result.summary["affected_nodes"] == 3
        assert result.summary["max_severity"] == 1.0
        assert len(result.recommendations) == 1
        assert result.cycle_nodes() == {"A", "B", "C"}

    def test_analyze_clean_model(self):
        result = AntiPatternDetector().analyze(make_model(["A", "B"], [("A", "B")]))
        assert result.patterns == []
        assert result.summary["max_severity"] == 0.0
        assert result.recommendations == []

    def test_to_dict(self, hub_model):
        d = AntiPatternDetector().analyze(hub_model).to_dict()
        assert d["count"] == 1
        assert d["patterns"][0]["type"] == "Bottleneck"
        assert d["patterns"][0]["node_id"] == "Hub"
        assert d["patterns"][0]["in_degree"] == 5

    def test_cycle_to_dict(self, ring_model):
        d = detect_anti_patterns(ring_model)[0].to_dict()
        assert d["type"] == "Cycle"
        assert d["nodes"] == ["A", "B", "C"]
        assert d["severity"] == 1.0
        assert "node_id" not in d

    def test_over_coupling_to_dict(self, fanout_model):
        d = detect_anti_patterns(fanout_model)[0].to_dict()
        assert d["type"] == "OverCoupling"
        assert d["out_degree"] == 7

    def test_severity_by_node_takes_max(self):
        patterns = [
            AntiPattern(AntiPatternType.ISOLATED_COMPONENT, ["A"], 0.3),
            AntiPattern(AntiPatternType.CYCLE, ["A", "B"], 1.0),
            AntiPattern(AntiPatternType.BOTTLENECK, ["B"], 1.4, degree=7),
        ]
        assert severity_by_node(patterns) == {"A": 1.0, "B": 1.4}
