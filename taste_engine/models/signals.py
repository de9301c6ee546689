"""
Output data models.

This module contains Pydantic models for the two artifacts produced at the
end of a comparison session: tagged preference signals and the taste axes.
"""

from typing import Dict, Tuple
from pydantic import BaseModel, Field


AXIS_NAMES: Tuple[str, ...] = ("volume", "temperature", "time", "formality", "culture", "mood")


class PreferenceSignal(BaseModel):
    """A single tagged preference inferred from the final ranking."""
    tag: str = Field(description="Preference tag, prefixed with the rejection marker for negative signals")
    category: str = Field(description="Candidate category, or the rejection category for negative signals")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence in [0, 1], rounded to 2 decimals")


class TasteAxes(BaseModel):
    """Six continuous taste dimensions, each roughly in [0, 1]."""
    volume: float = Field(default=0.5, description="Quiet (0) to loud (1)")
    temperature: float = Field(default=0.5, description="Cool (0) to warm (1)")
    time: float = Field(default=0.5, description="Contemporary (0) to historic (1)")
    formality: float = Field(default=0.5, description="Casual (0) to formal (1)")
    culture: float = Field(default=0.5, description="Global (0) to local (1)")
    mood: float = Field(default=0.5, description="Calm (0) to energetic (1)")

    @classmethod
    def neutral(cls) -> "TasteAxes":
        """Every axis at 0.5."""
        return cls(**{axis: 0.5 for axis in AXIS_NAMES})

    @classmethod
    def from_values(cls, values) -> "TasteAxes":
        """Build from a sequence ordered like AXIS_NAMES."""
        return cls(**{axis: float(value) for axis, value in zip(AXIS_NAMES, values)})

    def as_tuple(self) -> Tuple[float, ...]:
        return tuple(getattr(self, axis) for axis in AXIS_NAMES)

    def as_dict(self) -> Dict[str, float]:
        return {axis: getattr(self, axis) for axis in AXIS_NAMES}
