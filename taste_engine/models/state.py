"""
Engine state data models.

The state value threaded through every round of a comparison session. All
classes are frozen: every transition builds a new value and the previous one
stays valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .candidate import PAIRED_WITH_KEY


class PairingMode(Enum):
    """Pair selection strategy, fixed when the state is built."""
    DIMENSION_PAIRED = "dimension_paired"  # candidates reference each other via paired_with
    CLUSTER_DISTANCE = "cluster_distance"  # phase-based cross-cluster sampling


@dataclass(frozen=True, slots=True)
class RatedItem:
    """A candidate augmented with its Elo rating and comparison count."""

    id: str
    cluster: str
    tags: Tuple[str, ...] = ()
    category: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    rating: float = 1500.0
    comparisons: int = 0

    @property
    def paired_with(self) -> Optional[str]:
        value = self.metadata.get(PAIRED_WITH_KEY)
        return str(value) if value else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "cluster": self.cluster,
            "tags": list(self.tags),
            "category": self.category,
            "metadata": dict(self.metadata),
            "rating": self.rating,
            "comparisons": self.comparisons,
        }


@dataclass(frozen=True, slots=True)
class ComparisonRecord:
    """Append-only log entry for one recorded choice."""

    winner_id: str
    loser_id: str
    round: int

    def to_dict(self) -> Dict[str, Any]:
        return {"winner_id": self.winner_id, "loser_id": self.loser_id, "round": self.round}


@dataclass(frozen=True, slots=True)
class EngineState:
    """Items, history and round counter for one session.

    ``round == len(history)`` holds for every state produced by the engine.
    """

    items: Tuple[RatedItem, ...] = ()
    history: Tuple[ComparisonRecord, ...] = ()
    round: int = 0
    mode: PairingMode = PairingMode.CLUSTER_DISTANCE

    def get_item(self, item_id: str) -> Optional[RatedItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def total_rating(self) -> float:
        return sum(item.rating for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "mode": self.mode.value,
            "round": self.round,
            "items": [item.to_dict() for item in self.items],
            "history": [record.to_dict() for record in self.history],
        }
