"""
Data Models for Comparison Sessions

Request payloads accepted by the comparison session endpoints and the
in-memory record kept per session.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from taste_engine.elo import ComparisonSession
from taste_engine.models import Candidate, PairingMode, RatedItem, TasteAxes
from taste_engine.pools import ensure_unique_ids


class SessionRequest(BaseModel):
    """Payload for starting a session: inline candidates or a bundled pool name."""
    candidates: Optional[List[Candidate]] = Field(default=None, description="Inline candidate pool")
    pool: Optional[str] = Field(default=None, description="Bundled pool name ('designer' or 'experience')")
    total_rounds: Optional[int] = Field(default=None, ge=1, description="Round budget for K decay")
    min_rounds: Optional[int] = Field(default=None, ge=0, description="Rounds before the session may complete")
    seed: Optional[int] = Field(default=None, description="Seed for the pair tie-break random source")
    mode: Optional[PairingMode] = Field(default=None, description="Override the detected pairing mode")
    axes: Dict[str, TasteAxes] = Field(default_factory=dict, description="Extra id -> axis coordinates")

    @field_validator("candidates")
    @classmethod
    def _unique_ids(cls, candidates: Optional[List[Candidate]]) -> Optional[List[Candidate]]:
        if candidates is not None:
            ensure_unique_ids(candidates)
        return candidates

    @model_validator(mode="after")
    def _one_pool_source(self) -> "SessionRequest":
        if (self.candidates is None) == (self.pool is None):
            raise ValueError("provide exactly one of 'candidates' or 'pool'")
        return self


class ChoiceRequest(BaseModel):
    """Payload for recording one forced choice."""
    winner_id: str = Field(min_length=1)
    loser_id: str = Field(min_length=1)


@dataclass
class SessionRecord:
    """A live session and the pair currently on screen."""
    session_id: str
    session: ComparisonSession
    current_pair: Optional[Tuple[RatedItem, RatedItem]] = None
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = self.session.to_dict()
        data.update({
            "session_id": self.session_id,
            "created_at": self.created_at,
            "pair": [item.to_dict() for item in self.current_pair] if self.current_pair else None,
        })
        return data
