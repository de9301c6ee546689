"""
Tunable engine constants.

``EngineConfig`` carries every constant the engine uses. Engine functions take
it as an optional argument; ``None`` means ``DEFAULT_CONFIG``.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


INITIAL_RATING = 1500.0
BASE_K = 40.0   # starting K-factor (aggressive early)
MIN_K = 16.0    # minimum K-factor (conservative late)


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for rating, sampling and extraction."""
    initial_rating: float = INITIAL_RATING
    base_k: float = BASE_K
    min_k: float = MIN_K
    top_n: int = 3                  # random pick among the best N pairs
    jitter: float = 0.5             # tie-break noise for natural dimension pairs
    axis_temperature: float = 100.0  # rating scale of the axis softmax
    total_rounds: int = 10
    min_rounds: int = 6
    rejection_prefix: str = "Anti-"
    rejection_category: str = "Rejection"
    default_category: str = "Design"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Create EngineConfig from dictionary, ignoring unknown keys."""
        known = {f.name: f for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                continue
            default = known[key].default
            if isinstance(default, int) and isinstance(value, float) and not value.is_integer():
                raise ValueError(f"{key} must be a whole number, got {value}")
            values[key] = type(default)(value)
        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ValueError on values the engine cannot work with."""
        if self.min_k < 0 or self.base_k < self.min_k:
            raise ValueError(f"Invalid K-factor range: base_k={self.base_k}, min_k={self.min_k}")
        if self.top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {self.top_n}")
        if self.axis_temperature <= 0:
            raise ValueError(f"axis_temperature must be positive, got {self.axis_temperature}")
        if self.total_rounds < 1 or self.min_rounds < 0:
            raise ValueError(
                f"Invalid round budget: total_rounds={self.total_rounds}, min_rounds={self.min_rounds}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = EngineConfig()


def resolve_config(config: Optional[EngineConfig]) -> EngineConfig:
    return config if config is not None else DEFAULT_CONFIG
