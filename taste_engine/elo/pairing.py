"""
Pair selection strategies.

Two plug-in strategies choose the next pair to show, picked by the state's
``PairingMode``:

- ``DimensionPairedStrategy``: covers every natural dimension pair
  (``paired_with``) once, then refines with cross-dimension pairs.
- ``ClusterDistanceStrategy``: three phases keyed off the round counter.
  Early rounds maximise cluster distance (broad placement), middle rounds
  pick close ratings (refinement), late rounds favour under-sampled items
  (coverage).

No pair is ever shown twice within a session.
"""

from __future__ import annotations

import logging
import random
from typing import Dict, FrozenSet, List, Mapping, Optional, Protocol, Sequence, Tuple

from ..models import ComparisonRecord, EngineState, PairingMode, RatedItem
from .settings import EngineConfig, resolve_config

logger = logging.getLogger(__name__)

Pair = Tuple[RatedItem, RatedItem]

CROSS_CLUSTER_ROUNDS = 3
REFINE_ROUNDS = 7
DEFAULT_CLUSTER_DISTANCE = 0.5

# Inter-cluster distances from 6-axis centroid distances.
# Higher values = more aesthetically opposed = better early matchups.
CLUSTER_DISTANCES: Dict[FrozenSet[str], float] = {
    frozenset({"grand", "quiet"}): 1.00,        # formal authority vs. contemplative restraint
    frozenset({"expressive", "quiet"}): 0.99,   # loud vs. silent
    frozenset({"grand", "soulful"}): 0.81,      # institutional vs. human warmth
    frozenset({"quiet", "soulful"}): 0.77,
    frozenset({"expressive", "soulful"}): 0.70,
    frozenset({"expressive", "grand"}): 0.59,   # both high-volume, differ on formality
}


def cluster_distance(
    a: str,
    b: str,
    table: Mapping[FrozenSet[str], float] = CLUSTER_DISTANCES,
) -> float:
    """Distance between two clusters: 0 for the same cluster, 0.5 when unknown."""
    if a == b:
        return 0.0
    return table.get(frozenset({a, b}), DEFAULT_CLUSTER_DISTANCE)


def pair_shown(history: Sequence[ComparisonRecord], id_a: str, id_b: str) -> bool:
    """True if the unordered pair appears anywhere in history."""
    return any(
        (h.winner_id == id_a and h.loser_id == id_b) or (h.winner_id == id_b and h.loser_id == id_a)
        for h in history
    )


def valid_pairs(state: EngineState) -> List[Pair]:
    """All unordered pairs not yet shown, in stable item order."""
    items = state.items
    pairs: List[Pair] = []
    for i in range(len(items)):
        for j in range(i + 1, len(items)):
            if not pair_shown(state.history, items[i].id, items[j].id):
                pairs.append((items[i], items[j]))
    return pairs


def _pick_top(scored: List[Tuple[float, Pair]], rng: random.Random, top_n: int) -> Pair:
    ranked = sorted(scored, key=lambda entry: entry[0], reverse=True)
    return rng.choice(ranked[:top_n])[1]


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class PairingStrategy(Protocol):
    """Interface for pair selection strategies."""

    mode: PairingMode

    def select(self, state: EngineState, pairs: List[Pair], total_rounds: int, rng: random.Random) -> Optional[Pair]:
        """Return the next pair among ``pairs`` (all unshown), or None."""


class DimensionPairedStrategy:
    """Natural dimension pairs first, then close-rated cross pairs."""

    mode = PairingMode.DIMENSION_PAIRED

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = resolve_config(config)

    @staticmethod
    def is_natural(a: RatedItem, b: RatedItem) -> bool:
        return a.paired_with == b.id or b.paired_with == a.id

    def select(self, state: EngineState, pairs: List[Pair], total_rounds: int, rng: random.Random) -> Optional[Pair]:
        natural = [p for p in pairs if self.is_natural(*p)]
        cross = [p for p in pairs if not self.is_natural(*p)]

        if natural:
            scored = [
                (-(a.comparisons + b.comparisons) + rng.random() * self.config.jitter, (a, b))
                for a, b in natural
            ]
            return max(scored, key=lambda entry: entry[0])[1]

        if cross:
            scored = [
                (
                    -abs(a.rating - b.rating) * 0.5
                    + 30.0 / (1 + a.comparisons + b.comparisons)
                    + (5.0 if a.cluster != b.cluster else 0.0),
                    (a, b),
                )
                for a, b in cross
            ]
            return _pick_top(scored, rng, self.config.top_n)

        return None


class ClusterDistanceStrategy:
    """Cross-cluster, then refine, then coverage."""

    mode = PairingMode.CLUSTER_DISTANCE

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        distances: Mapping[FrozenSet[str], float] = CLUSTER_DISTANCES,
    ):
        self.config = resolve_config(config)
        self.distances = distances

    @staticmethod
    def phase(round_index: int) -> str:
        if round_index < CROSS_CLUSTER_ROUNDS:
            return "cross-cluster"
        if round_index < REFINE_ROUNDS:
            return "refine"
        return "coverage"

    def score(self, phase: str, a: RatedItem, b: RatedItem) -> float:
        seen = a.comparisons + b.comparisons
        if phase == "cross-cluster":
            return cluster_distance(a.cluster, b.cluster, self.distances) * 10 + 1.0 / (1 + seen)
        if phase == "refine":
            return -abs(a.rating - b.rating) + 50.0 / (1 + seen)
        return -seen + cluster_distance(a.cluster, b.cluster, self.distances) * 2

    def select(self, state: EngineState, pairs: List[Pair], total_rounds: int, rng: random.Random) -> Optional[Pair]:
        if not pairs:
            return None
        phase = self.phase(state.round)
        logger.debug("Round %d/%d in %s phase, %d candidate pairs", state.round, total_rounds, phase, len(pairs))
        scored = [(self.score(phase, a, b), (a, b)) for a, b in pairs]
        return _pick_top(scored, rng, self.config.top_n)


def build_strategy(mode: PairingMode, config: Optional[EngineConfig] = None) -> PairingStrategy:
    if mode is PairingMode.DIMENSION_PAIRED:
        return DimensionPairedStrategy(config)
    return ClusterDistanceStrategy(config)


def select_pair(
    state: EngineState,
    total_rounds: int,
    rng: Optional[random.Random] = None,
    config: Optional[EngineConfig] = None,
) -> Optional[Pair]:
    """Choose the next two items to compare, or None when no pair is available.

    Args:
        state: Current engine state
        total_rounds: Session round budget
        rng: Random source for top-N tie-breaking; a fresh unseeded one if omitted
        config: Engine constants

    Returns:
        Tuple of two distinct items, or None
    """
    if len(state.items) < 2:
        return None

    pairs = valid_pairs(state)
    if not pairs:
        logger.debug("All %d pairs exhausted after %d rounds", len(state.history), state.round)
        return None

    return build_strategy(state.mode, config).select(state, pairs, total_rounds, rng or random.Random())
