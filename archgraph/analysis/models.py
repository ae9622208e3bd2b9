"""
Anti-Pattern Models

Result and configuration types for structural anti-pattern detection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from ..core.errors import InvalidConfigurationError, MalformedInterchangeError

#: Fixed severity of every node on a detected cycle.
CYCLE_SEVERITY: float = 1.0

#: Fixed severity of an isolated component.
ISOLATED_SEVERITY: float = 0.3


# ============================================================================
# Enums and Types
# ============================================================================

class AntiPatternType(Enum):
    """Structural anti-patterns"""
    CYCLE = "Cycle"
    BOTTLENECK = "Bottleneck"
    OVER_COUPLING = "OverCoupling"
    ISOLATED_COMPONENT = "IsolatedComponent"


@dataclass
class AntiPattern:
    """Detected anti-pattern"""
    pattern_type: AntiPatternType
    node_ids: List[str]
    severity: float
    degree: Optional[int] = None
    description: str = ""
    recommendation: str = ""

    @property
    def node_id(self) -> str:
        """Primary affected node (the only one for degree-based patterns)."""
        return self.node_ids[0]

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.pattern_type.value}
        if self.pattern_type == AntiPatternType.CYCLE:
            result["nodes"] = list(self.node_ids)
        else:
            result["node_id"] = self.node_id
        if self.pattern_type == AntiPatternType.BOTTLENECK:
            result["in_degree"] = self.degree
        elif self.pattern_type == AntiPatternType.OVER_COUPLING:
            result["out_degree"] = self.degree
        result["severity"] = self.severity
        result["description"] = self.description
        if self.recommendation:
            result["recommendation"] = self.recommendation
        return result


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class AntiPatternConfig:
    """Thresholds for degree-based detection"""
    bottleneck_threshold: int = 5
    over_coupling_threshold: int = 7
    detect_isolated: bool = True

    def validate(self) -> None:
        """Raise InvalidConfigurationError when a threshold is below 1."""
        for key in ("bottleneck_threshold", "over_coupling_threshold"):
            value = getattr(self, key)
            if value < 1:
                raise InvalidConfigurationError(f"Invalid {key}: {value} (must be >= 1)")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bottleneck_threshold": self.bottleneck_threshold,
            "over_coupling_threshold": self.over_coupling_threshold,
            "detect_isolated": self.detect_isolated,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AntiPatternConfig":
        """
        Build a validated config from an interchange object; absent fields
        take the defaults.

        Raises:
            MalformedInterchangeError: a field has the wrong type.
            InvalidConfigurationError: a threshold is below 1.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise MalformedInterchangeError(f"Config payload must be an object, got {type(data).__name__}")

        defaults = cls()
        values: Dict[str, Any] = {}
        for key in ("bottleneck_threshold", "over_coupling_threshold"):
            value = data.get(key, getattr(defaults, key))
            if isinstance(value, bool) or not isinstance(value, int):
                raise MalformedInterchangeError(f"'{key}' must be an integer, got {value!r}")
            values[key] = value

        detect_isolated = data.get("detect_isolated", defaults.detect_isolated)
        if not isinstance(detect_isolated, bool):
            raise MalformedInterchangeError(f"'detect_isolated' must be a boolean, got {detect_isolated!r}")

        config = cls(detect_isolated=detect_isolated, **values)
        config.validate()
        return config


# ============================================================================
# Analysis Result
# ============================================================================

@dataclass
class AntiPatternAnalysisResult:
    """Result of anti-pattern analysis"""
    patterns: List[AntiPattern]
    summary: Dict[str, Any] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patterns": [p.to_dict() for p in self.patterns],
            "count": len(self.patterns),
            "summary": self.summary,
            "recommendations": self.recommendations,
        }

    def get_by_type(self, pattern_type: AntiPatternType) -> List[AntiPattern]:
        return [p for p in self.patterns if p.pattern_type == pattern_type]

    def severity_map(self) -> Dict[str, float]:
        return severity_by_node(self.patterns)

    def cycle_nodes(self) -> Set[str]:
        return cycle_node_ids(self.patterns)


def severity_by_node(patterns: List[AntiPattern]) -> Dict[str, float]:
    """Highest severity of any pattern touching each node."""
    severities: Dict[str, float] = {}
    for pattern in patterns:
        for node_id in pattern.node_ids:
            severities[node_id] = max(severities.get(node_id, 0.0), pattern.severity)
    return severities


def cycle_node_ids(patterns: List[AntiPattern]) -> Set[str]:
    return {
        node_id
        for pattern in patterns if pattern.pattern_type == AntiPatternType.CYCLE
        for node_id in pattern.node_ids
    }


def isolated_node_ids(patterns: List[AntiPattern]) -> Set[str]:
    return {
        pattern.node_id
        for pattern in patterns if pattern.pattern_type == AntiPatternType.ISOLATED_COMPONENT
    }
