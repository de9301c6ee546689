"""
Adaptive pairwise-comparison preference engine.

Infers taste preferences from a bounded sequence of forced binary choices and
turns the comparison history into tagged preference signals and a six-axis
taste vector. The package has no Flask dependency so the web host, the CLI and
any batch tooling can share it.
"""

from .models import (
    AXIS_NAMES,
    Candidate,
    ComparisonRecord,
    EngineState,
    PairingMode,
    PreferenceSignal,
    RatedItem,
    TasteAxes,
)
from .elo import (
    ComparisonSession,
    EngineConfig,
    extract_axes,
    extract_signals,
    initialize,
    is_complete,
    record_outcome,
    select_pair,
)

__all__ = [
    "AXIS_NAMES",
    "Candidate",
    "ComparisonRecord",
    "EngineState",
    "PairingMode",
    "PreferenceSignal",
    "RatedItem",
    "TasteAxes",
    "ComparisonSession",
    "EngineConfig",
    "extract_axes",
    "extract_signals",
    "initialize",
    "is_complete",
    "record_outcome",
    "select_pair",
]
