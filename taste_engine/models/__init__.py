"""
Models package for the preference engine.

This package contains the candidate input schema, the immutable engine state
and the output signal/axis models.
"""

from .signals import AXIS_NAMES, PreferenceSignal, TasteAxes
from .candidate import PAIRED_WITH_KEY, Candidate
from .state import ComparisonRecord, EngineState, PairingMode, RatedItem

__all__ = [
    # Output models
    "AXIS_NAMES",
    "PreferenceSignal",
    "TasteAxes",

    # Input models
    "PAIRED_WITH_KEY",
    "Candidate",

    # State models
    "ComparisonRecord",
    "EngineState",
    "PairingMode",
    "RatedItem",
]
