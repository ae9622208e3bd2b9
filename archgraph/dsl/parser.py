"""
C4 DSL Parser

Regex-based reader for a flat, Structurizr-like architecture description:

    system ECommerce "E-Commerce Platform"
    container API "API Gateway" "Node.js"
    component Auth "Authentication" "JWT"
    person User "Customer"

    User -> API "makes requests"
    API -> Auth

Each category is matched independently over the whole text and appended in a
fixed order: containers, components, persons, systems, then relationships.
Node insertion order (and so adjacency-matrix indexing) follows that category
order, not the order lines appear in. Lines that match no pattern are dropped
without a diagnostic. Relationship endpoints do not have to be declared.

Limitations: no nesting (`system { container { ... } }` scopes are ignored),
no tags, comments or multi-line descriptions.
"""

import logging
import re
from pathlib import Path
from typing import Callable, Iterator, List, Tuple, Union

from ..core.graph_model import GraphModel
from ..core.models import Edge, Node, NodeType

logger = logging.getLogger(__name__)


CONTAINER_PATTERN = re.compile(r'^\s*container\s+(\w+)\s+"([^"]+)"(?:\s+"([^"]+)")?', re.MULTILINE)
COMPONENT_PATTERN = re.compile(r'^\s*component\s+(\w+)\s+"([^"]+)"(?:\s+"([^"]+)")?', re.MULTILINE)
PERSON_PATTERN = re.compile(r'^\s*person\s+(\w+)\s+"([^"]+)"', re.MULTILINE)
SYSTEM_PATTERN = re.compile(r'^\s*system\s+(\w+)\s+"([^"]+)"', re.MULTILINE)
RELATIONSHIP_PATTERN = re.compile(r'^\s*(\w+)\s*->\s*(\w+)(?:\s+"([^"]+)")?', re.MULTILINE)


def _technology_node(node_type: NodeType) -> Callable[["re.Match"], Node]:
    def build(match: "re.Match") -> Node:
        node_id, name, technology = match.groups()
        return Node(id=node_id, name=name, node_type=node_type, technology=technology)
    return build


def _plain_node(node_type: NodeType) -> Callable[["re.Match"], Node]:
    def build(match: "re.Match") -> Node:
        node_id, name = match.groups()
        return Node(id=node_id, name=name, node_type=node_type)
    return build


#: Declaration categories in the order their nodes are appended.
NODE_DECLARATIONS: List[Tuple[re.Pattern, Callable[["re.Match"], Node]]] = [
    (CONTAINER_PATTERN, _technology_node(NodeType.CONTAINER)),
    (COMPONENT_PATTERN, _technology_node(NodeType.COMPONENT)),
    (PERSON_PATTERN, _plain_node(NodeType.PERSON)),
    (SYSTEM_PATTERN, _plain_node(NodeType.SYSTEM)),
]


def iter_declarations(text: str) -> Iterator[Node]:
    """Yield declared nodes in category-then-occurrence order."""
    for pattern, build in NODE_DECLARATIONS:
        for match in pattern.finditer(text):
            yield build(match)


def iter_relationships(text: str) -> Iterator[Edge]:
    """Yield relationships in order of occurrence."""
    for match in RELATIONSHIP_PATTERN.finditer(text):
        source, target, label = match.groups()
        yield Edge(source=source, target=target, label=label)


def parse_c4_dsl(text: str) -> GraphModel:
    """
    Parse DSL text into a GraphModel.

    Never raises for malformed input: unquoted or otherwise unmatched
    declarations simply produce nothing. The adjacency matrix is not built.
    """
    model = GraphModel()
    for node in iter_declarations(text):
        model.add_node(node)
    for edge in iter_relationships(text):
        model.add_edge(edge)

    logger.debug(f"Parsed DSL ({len(text)} chars): {model.node_count()} nodes, {model.edge_count()} edges")
    return model


def parse_file(path: Union[str, Path]) -> GraphModel:
    """
    Read a DSL file (UTF-8) and parse it.

    Undecodable bytes are replaced with U+FFFD, so they can only make a line
    fail to match; they never raise.
    """
    logger.info(f"Parsing DSL file: {path}")
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return parse_c4_dsl(f.read())
