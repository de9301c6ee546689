"""
Convenience facade for host loops.

``ComparisonSession`` owns one state value plus the round budget and random
source for a single user session, and threads them through the pure engine
functions. Sessions never share state.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import EngineState, PairingMode, PreferenceSignal, TasteAxes
from .extraction import AxisCoordinates, extract_axes, extract_signals
from .pairing import Pair, select_pair
from .rating import CandidateInput, initialize, is_complete, leaderboard, record_outcome
from .settings import EngineConfig, resolve_config

logger = logging.getLogger(__name__)


class ComparisonSession:
    """One user's comparison session."""

    def __init__(
        self,
        candidates: Sequence[CandidateInput],
        total_rounds: Optional[int] = None,
        min_rounds: Optional[int] = None,
        seed: Optional[int] = None,
        mode: Optional[PairingMode] = None,
        config: Optional[EngineConfig] = None,
        axis_lookup: Optional[Mapping[str, AxisCoordinates]] = None,
    ):
        self.config = resolve_config(config)
        self.total_rounds = total_rounds if total_rounds is not None else self.config.total_rounds
        self.min_rounds = min_rounds if min_rounds is not None else self.config.min_rounds
        if self.total_rounds < 1 or self.min_rounds < 0:
            raise ValueError(
                f"Invalid round budget: total_rounds={self.total_rounds}, min_rounds={self.min_rounds}"
            )
        self.rng = random.Random(seed)
        self.axis_lookup: Dict[str, AxisCoordinates] = dict(axis_lookup or {})
        self.state: EngineState = initialize(candidates, mode=mode, config=self.config)
        self._exhausted = False

    @property
    def round(self) -> int:
        return self.state.round

    def next_pair(self) -> Optional[Pair]:
        """Next pair to show; None once every pair has been shown."""
        pair = select_pair(self.state, self.total_rounds, rng=self.rng, config=self.config)
        self._exhausted = pair is None
        return pair

    def choose(self, winner_id: str, loser_id: str) -> EngineState:
        self.state = record_outcome(self.state, winner_id, loser_id, self.total_rounds, config=self.config)
        return self.state

    def is_complete(self) -> bool:
        """Minimum rounds reached, or no pair left to show."""
        return is_complete(self.state, self.min_rounds) or self._exhausted

    def signals(self) -> List[PreferenceSignal]:
        return extract_signals(self.state, config=self.config)

    def axes(self, axis_lookup: Optional[Mapping[str, AxisCoordinates]] = None) -> TasteAxes:
        lookup = axis_lookup if axis_lookup is not None else self.axis_lookup
        return extract_axes(self.state, lookup, config=self.config)

    def results(self) -> Dict[str, Any]:
        """Signals, axes and leaderboard as plain data."""
        return {
            "signals": [signal.model_dump() for signal in self.signals()],
            "axes": self.axes().as_dict(),
            "leaderboard": [{"id": item_id, "rating": rating} for item_id, rating in leaderboard(self.state)],
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_rounds": self.total_rounds,
            "min_rounds": self.min_rounds,
            "complete": self.is_complete(),
            "state": self.state.to_dict(),
        }
