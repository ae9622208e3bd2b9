"""
Model Interchange

Converts GraphModel instances to and from the plain JSON-compatible
dictionaries exchanged with other tools:

    {"nodes": [{"id", "name", "type", "technology"?, "description"?, "position"?}],
     "edges": [{"from", "to", "label"?, "weight"}]}

Configuration files (see AntiPatternConfig.from_dict) may be JSON or YAML.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .errors import MalformedInterchangeError
from .graph_model import GraphModel
from .models import Edge, Node

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# =============================================================================
# Model
# =============================================================================

def model_to_dict(model: GraphModel) -> Dict[str, Any]:
    return {
        "nodes": [node.to_dict() for node in model.nodes],
        "edges": [edge.to_dict() for edge in model.edges],
        "node_count": model.node_count(),
        "edge_count": model.edge_count(),
    }


def model_from_dict(data: Dict[str, Any]) -> GraphModel:
    """
    Build a GraphModel from an interchange dictionary.

    Raises:
        MalformedInterchangeError: if the nodes/edges arrays are missing or an
            entry lacks a required field.
    """
    if not isinstance(data, dict):
        raise MalformedInterchangeError(f"Model payload must be an object, got {type(data).__name__}")

    for key in ("nodes", "edges"):
        if key not in data:
            raise MalformedInterchangeError(f"Model payload is missing '{key}' array")
        if not isinstance(data[key], list):
            raise MalformedInterchangeError(f"'{key}' must be an array")

    model = GraphModel()
    for entry in data["nodes"]:
        model.add_node(Node.from_dict(entry))
    for entry in data["edges"]:
        model.add_edge(Edge.from_dict(entry))
    return model


def load_model(path: PathLike) -> GraphModel:
    """Load a GraphModel from a JSON interchange file."""
    logger.info(f"Loading model from {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedInterchangeError(f"Invalid JSON in {path}: {exc}") from exc
    return model_from_dict(data)


def save_model(model: GraphModel, path: PathLike, indent: int = 2) -> str:
    """Write a GraphModel to a JSON interchange file, creating parent directories."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(model_to_dict(model), f, indent=indent)
    logger.info(f"Model written to {output_path}")
    return str(output_path)


# =============================================================================
# Anti-pattern configuration
# =============================================================================

def load_config_file(path: PathLike) -> Dict[str, Any]:
    """Read a JSON or YAML (.yaml/.yml) configuration file into a dictionary."""
    config_path = Path(path)
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            if config_path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
        except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedInterchangeError(f"Could not parse config file {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedInterchangeError(
            f"Config file {config_path} must contain an object, got {type(data).__name__}"
        )
    return data
