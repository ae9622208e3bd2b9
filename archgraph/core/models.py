"""
Core Value Objects and Entities

Vertices are architecture elements (C4 style):
    System, Container, Component, Person

Edges are directed, optionally labeled relationships with a numeric weight.
Both serialize to the model interchange format:
    node: {id, name, type, technology?, description?, position?}
    edge: {from, to, label?, weight}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import MalformedInterchangeError

#: Weight given to relationships that do not specify one.
DEFAULT_EDGE_WEIGHT: float = 1.0


# =============================================================================
# Enumerations
# =============================================================================

class NodeType(str, Enum):
    """Architecture element kinds"""
    SYSTEM = "System"
    CONTAINER = "Container"
    COMPONENT = "Component"
    PERSON = "Person"

    @classmethod
    def parse(cls, value: str) -> "NodeType":
        """Resolve a type name case-insensitively ("container" -> CONTAINER)."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise MalformedInterchangeError(f"Unknown node type: {value!r}")


# =============================================================================
# Vertex
# =============================================================================

@dataclass
class Node:
    """Architecture element. Position stays None until a layout run sets it."""
    id: str
    name: str
    node_type: NodeType
    technology: Optional[str] = None
    description: Optional[str] = None
    position: Optional[Tuple[float, float]] = None

    def set_position(self, x: float, y: float) -> None:
        self.position = (float(x), float(y))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.node_type.value,
        }
        if self.technology is not None:
            result["technology"] = self.technology
        if self.description is not None:
            result["description"] = self.description
        if self.position is not None:
            result["position"] = [self.position[0], self.position[1]]
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        if not isinstance(data, dict):
            raise MalformedInterchangeError(f"Node entry must be an object, got {type(data).__name__}")
        for key in ("id", "type"):
            if data.get(key) is None:
                raise MalformedInterchangeError(f"Node is missing required field '{key}'")

        node_id = str(data["id"])
        node = cls(
            id=node_id,
            name=str(data.get("name") or node_id),
            node_type=NodeType.parse(data["type"]),
            technology=data.get("technology"),
            description=data.get("description"),
        )

        position = data.get("position")
        if position is not None:
            try:
                x, y = position
                node.set_position(x, y)
            except (TypeError, ValueError) as exc:
                raise MalformedInterchangeError(
                    f"Node '{node_id}' has malformed position {position!r}"
                ) from exc
        return node


# =============================================================================
# Edge
# =============================================================================

@dataclass
class Edge:
    """Directed relationship between two node identifiers"""
    source: str
    target: str
    label: Optional[str] = None
    weight: float = DEFAULT_EDGE_WEIGHT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "label": self.label,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        if not isinstance(data, dict):
            raise MalformedInterchangeError(f"Edge entry must be an object, got {type(data).__name__}")
        for key in ("from", "to"):
            if data.get(key) is None:
                raise MalformedInterchangeError(f"Edge is missing required field '{key}'")

        weight = data.get("weight")
        try:
            weight = DEFAULT_EDGE_WEIGHT if weight is None else float(weight)
        except (TypeError, ValueError) as exc:
            raise MalformedInterchangeError(f"Edge weight must be numeric, got {weight!r}") from exc

        return cls(
            source=str(data["from"]),
            target=str(data["to"]),
            label=data.get("label"),
            weight=weight,
        )
