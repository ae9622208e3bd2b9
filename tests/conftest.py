"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the archgraph test suite.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -k "parser"        # Run only parser tests
    pytest tests/ --quick            # Skip slow tests
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from archgraph.core import Edge, GraphModel, Node, NodeType


# =============================================================================
# Custom Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


def pytest_addoption(parser):
    """Add custom command line options"""
    parser.addoption(
        "--quick",
        action="store_true",
        default=False,
        help="Skip slow tests",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests if --quick is specified"""
    if config.getoption("--quick"):
        skip_slow = pytest.mark.skip(reason="Skipped with --quick")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


# =============================================================================
# DSL Fixtures
# =============================================================================

@pytest.fixture
def ecommerce_dsl() -> str:
    """Small shop architecture: no cycle, one isolated system"""
    return '''
system Shop "E-Commerce Platform"
person Customer "Customer"
container Web "Web Shop" "React"
container API "API Gateway" "Node.js"
container DB "Orders Database" "PostgreSQL"
component Auth "Authentication" "JWT"

Customer -> Web "browses"
Web -> API "calls"
API -> Auth "validates tokens"
API -> DB "reads and writes"
'''


@pytest.fixture
def ring_dsl() -> str:
    """Three containers depending on each other in a ring"""
    return '''
container A "Service A"
container B "Service B"
container C "Service C"
A -> B
B -> C
C -> A
'''


@pytest.fixture
def ecommerce_dsl_file(tmp_path, ecommerce_dsl) -> Path:
    path = tmp_path / "shop.c4"
    path.write_text(ecommerce_dsl, encoding="utf-8")
    return path


@pytest.fixture
def ring_dsl_file(tmp_path, ring_dsl) -> Path:
    path = tmp_path / "ring.c4"
    path.write_text(ring_dsl, encoding="utf-8")
    return path


# =============================================================================
# GraphModel Fixtures
# =============================================================================

def make_model(node_ids, edges) -> GraphModel:
    """Build a model of Container nodes and weight-1 edges from (source, target) pairs."""
    model = GraphModel()
    for node_id in node_ids:
        model.add_node(Node(node_id, node_id, NodeType.CONTAINER))
    for source, target in edges:
        model.add_edge(Edge(source, target))
    return model


@pytest.fixture
def ring_model() -> GraphModel:
    return make_model(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def hub_model() -> GraphModel:
    """Five clients calling one hub (fan-in 5), no cycle"""
    clients = [f"C{i}" for i in range(5)]
    return make_model(["Hub"] + clients, [(c, "Hub") for c in clients])


@pytest.fixture
def fanout_model() -> GraphModel:
    """One orchestrator calling seven services (fan-out 7), no cycle"""
    services = [f"S{i}" for i in range(7)]
    return make_model(["Orchestrator"] + services, [("Orchestrator", s) for s in services])


@pytest.fixture
def positioned_model() -> GraphModel:
    model = make_model(["A", "B", "C", "D"], [("A", "B"), ("C", "D")])
    for node, (x, y) in zip(model.nodes, [(0, 0), (2, 2), (0, 2), (2, 0)]):
        node.set_position(x, y)
    return model
