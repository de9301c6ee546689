"""
State initialisation, Elo updates and completion checks.

Pure functional implementation: no I/O, no hidden storage. Every function
takes the state explicitly and returns a new value.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..models import Candidate, ComparisonRecord, EngineState, PairingMode, RatedItem
from .settings import EngineConfig, resolve_config

logger = logging.getLogger(__name__)

CandidateInput = Union[Candidate, Dict[str, Any]]


# ---------------------------------------------------------------------------
# Initialisation
# ---------------------------------------------------------------------------


def _as_candidate(candidate: CandidateInput) -> Candidate:
    if isinstance(candidate, Candidate):
        return candidate
    return Candidate.model_validate(candidate)


def detect_pairing_mode(candidates: Sequence[CandidateInput]) -> PairingMode:
    """Dimension-paired if any candidate names a natural partner."""
    for candidate in candidates:
        if _as_candidate(candidate).paired_with:
            return PairingMode.DIMENSION_PAIRED
    return PairingMode.CLUSTER_DISTANCE


def initialize(
    candidates: Sequence[CandidateInput],
    mode: Optional[PairingMode] = None,
    config: Optional[EngineConfig] = None,
) -> EngineState:
    """Build the initial state: every candidate at the initial rating, round 0.

    Args:
        candidates: Ordered candidate pool (Candidate objects or plain dicts)
        mode: Pairing strategy; detected from ``paired_with`` metadata when omitted
        config: Engine constants

    Returns:
        EngineState with empty history
    """
    cfg = resolve_config(config)
    parsed = [_as_candidate(c) for c in candidates]
    if mode is None:
        mode = detect_pairing_mode(parsed)

    items = tuple(
        RatedItem(
            id=c.id,
            cluster=c.cluster,
            tags=tuple(c.tags),
            category=c.category,
            metadata=dict(c.metadata),
            rating=cfg.initial_rating,
            comparisons=0,
        )
        for c in parsed
    )
    logger.debug("Initialised %d items in %s mode", len(items), mode.value)
    return EngineState(items=items, history=(), round=0, mode=mode)


# ---------------------------------------------------------------------------
# Rating updates
# ---------------------------------------------------------------------------


def k_factor(round_index: int, total_rounds: int, config: Optional[EngineConfig] = None) -> float:
    """Linearly decaying K-factor: base_k at round 0 down to min_k at total_rounds."""
    cfg = resolve_config(config)
    if total_rounds <= 0:
        return cfg.base_k
    progress = round_index / total_rounds
    return cfg.base_k - (cfg.base_k - cfg.min_k) * progress


def expected_score(rating_a: float, rating_b: float) -> float:
    """Expected win probability of A against B."""
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / 400.0))


def record_outcome(
    state: EngineState,
    winner_id: str,
    loser_id: str,
    total_rounds: int,
    config: Optional[EngineConfig] = None,
) -> EngineState:
    """Apply one forced choice and return the next state.

    Unknown ids, or an item compared with itself, leave the state untouched
    and the same object is returned.
    """
    winner = state.get_item(winner_id)
    loser = state.get_item(loser_id)
    if winner is None or loser is None:
        logger.debug("Ignoring outcome with unknown id(s): %s > %s", winner_id, loser_id)
        return state
    if winner_id == loser_id:
        logger.debug("Ignoring self-comparison for %s", winner_id)
        return state

    k = k_factor(state.round, total_rounds, config)
    expected_win = expected_score(winner.rating, loser.rating)
    expected_lose = 1.0 - expected_win

    new_winner_rating = winner.rating + k * (1.0 - expected_win)
    new_loser_rating = loser.rating + k * (0.0 - expected_lose)

    items = []
    for item in state.items:
        if item.id == winner_id:
            item = replace(item, rating=new_winner_rating, comparisons=item.comparisons + 1)
        elif item.id == loser_id:
            item = replace(item, rating=new_loser_rating, comparisons=item.comparisons + 1)
        items.append(item)

    record = ComparisonRecord(winner_id=winner_id, loser_id=loser_id, round=state.round)
    return replace(
        state,
        items=tuple(items),
        history=state.history + (record,),
        round=state.round + 1,
    )


# ---------------------------------------------------------------------------
# Completion & ranking
# ---------------------------------------------------------------------------


def is_complete(state: EngineState, min_rounds: int) -> bool:
    return state.round >= min_rounds


def leaderboard(state: EngineState) -> List[Tuple[str, float]]:
    return [(item.id, item.rating) for item in sorted(state.items, key=lambda i: i.rating, reverse=True)]
