"""
archgraph Core Module

Graph model for C4-style architecture descriptions.

Graph Model:
    Vertices: System, Container, Component, Person
    Edges: directed relationships (from, to, label?, weight)
    Cache: dense adjacency matrix indexed by node insertion order

Usage:
    from archgraph.core import GraphModel, Node, Edge, NodeType
    model = GraphModel()
    model.add_node(Node("api", "API Gateway", NodeType.CONTAINER))
    model.add_node(Node("db", "Database", NodeType.CONTAINER))
    model.add_edge(Edge("api", "db", label="queries"))
    model.build_adjacency_matrix()
"""

from .errors import (
    ArchGraphError,
    EmptyModelError,
    MatrixNotBuiltError,
    InvalidConfigurationError,
    MalformedInterchangeError,
)
from .models import (
    NodeType,
    Node,
    Edge,
    DEFAULT_EDGE_WEIGHT,
)
from .graph_model import GraphModel
from .interchange import (
    model_to_dict,
    model_from_dict,
    load_model,
    save_model,
    load_config_file,
)

__all__ = [
    # Errors
    "ArchGraphError",
    "EmptyModelError",
    "MatrixNotBuiltError",
    "InvalidConfigurationError",
    "MalformedInterchangeError",
    # Entities
    "NodeType",
    "Node",
    "Edge",
    "DEFAULT_EDGE_WEIGHT",
    # Model
    "GraphModel",
    # Interchange
    "model_to_dict",
    "model_from_dict",
    "load_model",
    "save_model",
    "load_config_file",
]
