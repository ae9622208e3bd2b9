"""
Graph Model

Container for an architecture graph: insertion-ordered nodes and edges plus a
cached dense adjacency matrix.

    matrix[i][j] = weight of the last edge from nodes[i] to nodes[j], else 0

Indices follow node insertion order. Adding a node or an edge drops the cached
matrix; it must be rebuilt with build_adjacency_matrix() before anything that
needs it (the layout optimizer) can run. Edges may name unknown node ids and
duplicate node ids are tolerated; neither is validated here.
"""

import logging
from collections import Counter
from typing import Any, Dict, List, Optional

import networkx as nx
import numpy as np

from .models import Edge, Node

logger = logging.getLogger(__name__)


class GraphModel:
    """Architecture graph with query helpers and an adjacency cache"""

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.adjacency_matrix: Optional[np.ndarray] = None

    # Mutation
    def add_node(self, node: Node) -> None:
        self.nodes.append(node)
        self.adjacency_matrix = None

    def add_edge(self, edge: Edge) -> None:
        self.edges.append(edge)
        self.adjacency_matrix = None

    # Adjacency matrix
    def node_index(self) -> Dict[str, int]:
        """Map node id -> insertion index. The first node with a given id owns it."""
        index: Dict[str, int] = {}
        for idx, node in enumerate(self.nodes):
            index.setdefault(node.id, idx)
        return index

    def build_adjacency_matrix(self) -> None:
        """
        Recompute the dense adjacency matrix from the current nodes and edges.

        Edges with an endpoint that resolves to no node are skipped. When several
        edges share an ordered pair the last one wins. With zero nodes the matrix
        is left absent.
        """
        node_count = len(self.nodes)
        if node_count == 0:
            self.adjacency_matrix = None
            return

        index = self.node_index()
        matrix = np.zeros((node_count, node_count), dtype=np.float64)
        skipped = 0
        for edge in self.edges:
            from_idx = index.get(edge.source)
            to_idx = index.get(edge.target)
            if from_idx is None or to_idx is None:
                skipped += 1
                continue
            matrix[from_idx, to_idx] = edge.weight

        if skipped:
            logger.debug(f"Skipped {skipped} edge(s) with unresolved endpoints")
        self.adjacency_matrix = matrix

    def has_adjacency_matrix(self) -> bool:
        """True when a matrix is cached and still matches the node count."""
        if self.adjacency_matrix is None:
            return False
        return self.adjacency_matrix.shape == (len(self.nodes), len(self.nodes))

    # Lookup
    def find_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def find_node_mut(self, node_id: str) -> Optional[Node]:
        """Same lookup as find_node; the returned node is the live instance and may be edited."""
        return self.find_node(node_id)

    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    # Conversion
    def to_networkx(self) -> nx.DiGraph:
        """
        Build a NetworkX DiGraph view of the model.

        Parallel edges collapse onto one DiGraph edge (last one wins), matching
        the adjacency matrix. Dangling endpoints become attribute-less nodes.
        """
        graph = nx.DiGraph()
        for node in self.nodes:
            if graph.has_node(node.id):
                continue
            graph.add_node(
                node.id,
                name=node.name,
                type=node.node_type.value,
                technology=node.technology,
                position=node.position,
            )
        for edge in self.edges:
            graph.add_edge(edge.source, edge.target, weight=edge.weight, label=edge.label)
        return graph

    def get_statistics(self) -> Dict[str, Any]:
        type_counts = Counter(node.node_type.value for node in self.nodes)
        return {
            "num_nodes": len(self.nodes),
            "num_edges": len(self.edges),
            "nodes_by_type": dict(type_counts),
            "positioned_nodes": sum(1 for node in self.nodes if node.position is not None),
            "adjacency_matrix_built": self.has_adjacency_matrix(),
        }

    def __repr__(self) -> str:
        return f"GraphModel(nodes={len(self.nodes)}, edges={len(self.edges)}, matrix={'built' if self.has_adjacency_matrix() else 'absent'})"
