"""
Elo-style adaptive comparison engine for taste profiling.

Items start at equal ratings; each forced choice updates both sides. The
pairing algorithm maximises information gain under a fixed round budget, and
two extractors project the final ranking into tag signals and taste axes.
"""

from .settings import DEFAULT_CONFIG, EngineConfig
from .rating import (
    detect_pairing_mode,
    expected_score,
    initialize,
    is_complete,
    k_factor,
    leaderboard,
    record_outcome,
)
from .pairing import (
    CLUSTER_DISTANCES,
    ClusterDistanceStrategy,
    DimensionPairedStrategy,
    PairingStrategy,
    cluster_distance,
    pair_shown,
    select_pair,
)
from .extraction import extract_axes, extract_signals
from .session import ComparisonSession

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "detect_pairing_mode",
    "expected_score",
    "initialize",
    "is_complete",
    "k_factor",
    "leaderboard",
    "record_outcome",
    "CLUSTER_DISTANCES",
    "ClusterDistanceStrategy",
    "DimensionPairedStrategy",
    "PairingStrategy",
    "cluster_distance",
    "pair_shown",
    "select_pair",
    "extract_axes",
    "extract_signals",
    "ComparisonSession",
]
