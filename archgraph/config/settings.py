"""
Application Settings

Environment configuration for layout and anti-pattern detection.
"""

import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from ..analysis.models import AntiPatternConfig
from ..core.errors import InvalidConfigurationError
from ..layout.optimizer import LayoutOptimizer

T = TypeVar("T")

ENV_PREFIX = "ARCHGRAPH_"


def _env(name: str, default: Optional[T], convert: Callable[[str], T]) -> Optional[T]:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw.strip())
    except ValueError as e:
        raise InvalidConfigurationError(f"Invalid {ENV_PREFIX}{name}: {raw!r}") from e


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(value)


@dataclass
class Settings:
    """Application settings from environment."""

    # Layout
    layout_iterations: int = 100
    learning_rate: float = 0.1
    layout_area: Optional[float] = None
    layout_seed: Optional[int] = None

    # Anti-pattern detection
    bottleneck_threshold: int = 5
    over_coupling_threshold: int = 7
    detect_isolated: bool = True

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from ARCHGRAPH_* environment variables."""
        defaults = cls()
        return cls(
            layout_iterations=_env("LAYOUT_ITERATIONS", defaults.layout_iterations, int),
            learning_rate=_env("LEARNING_RATE", defaults.learning_rate, float),
            layout_area=_env("LAYOUT_AREA", None, float),
            layout_seed=_env("LAYOUT_SEED", None, int),
            bottleneck_threshold=_env("BOTTLENECK_THRESHOLD", defaults.bottleneck_threshold, int),
            over_coupling_threshold=_env("OVER_COUPLING_THRESHOLD", defaults.over_coupling_threshold, int),
            detect_isolated=_env("DETECT_ISOLATED", defaults.detect_isolated, _parse_bool),
            log_level=_env("LOG_LEVEL", defaults.log_level, str.upper),
        )

    def optimizer(self) -> LayoutOptimizer:
        return LayoutOptimizer(
            iterations=self.layout_iterations,
            learning_rate=self.learning_rate,
            area=self.layout_area,
            seed=self.layout_seed,
        )

    def antipattern_config(self) -> AntiPatternConfig:
        config = AntiPatternConfig(
            bottleneck_threshold=self.bottleneck_threshold,
            over_coupling_threshold=self.over_coupling_threshold,
            detect_isolated=self.detect_isolated,
        )
        config.validate()
        return config
