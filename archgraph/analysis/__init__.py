"""
Analysis Package

Structural anti-pattern detection for architecture graphs.
"""

from .models import (
    AntiPatternType,
    AntiPattern,
    AntiPatternConfig,
    AntiPatternAnalysisResult,
    CYCLE_SEVERITY,
    ISOLATED_SEVERITY,
    severity_by_node,
    cycle_node_ids,
    isolated_node_ids,
)
from .antipattern_detector import (
    AntiPatternDetector,
    detect_anti_patterns,
    enumerate_cycles,
)

__all__ = [
    "AntiPatternType",
    "AntiPattern",
    "AntiPatternConfig",
    "AntiPatternAnalysisResult",
    "CYCLE_SEVERITY",
    "ISOLATED_SEVERITY",
    "severity_by_node",
    "cycle_node_ids",
    "isolated_node_ids",
    "AntiPatternDetector",
    "detect_anti_patterns",
    "enumerate_cycles",
]
