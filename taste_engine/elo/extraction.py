"""
Read-only projections of an engine state.

- ``extract_signals``: rank-banded tag signals (positive or rejection).
- ``extract_axes``: softmax-weighted blend of the shown items' axis coordinates.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Tuple, Union

import numpy as np

from ..models import AXIS_NAMES, EngineState, PreferenceSignal, TasteAxes
from .settings import EngineConfig, resolve_config

logger = logging.getLogger(__name__)

AxisCoordinates = Union[TasteAxes, Mapping[str, float]]


def _band_confidence(position: float) -> Tuple[float, bool]:
    """Confidence and rejection flag for a normalised rank position (0 = top)."""
    if position <= 0.25:
        return 0.9 - position * 0.2, False          # 0.90 -> 0.85
    if position <= 0.5:
        return 0.7 - (position - 0.25) * 0.4, False  # 0.70 -> 0.60
    if position <= 0.75:
        return 0.4, False                            # too weak to emit
    return 0.6 + (position - 0.75) * 0.8, True       # 0.60 -> 0.80


def extract_signals(state: EngineState, config: Optional[EngineConfig] = None) -> List[PreferenceSignal]:
    """Convert the ranking of shown items into tagged preference signals.

    Top items emit positive signals at high confidence, middle items at
    moderate confidence, bottom items emit rejection signals.
    """
    cfg = resolve_config(config)
    ranked = sorted(
        (item for item in state.items if item.comparisons > 0),
        key=lambda item: item.rating,
        reverse=True,
    )
    if not ranked:
        return []

    last = len(ranked) - 1
    signals: List[PreferenceSignal] = []
    for idx, item in enumerate(ranked):
        position = idx / last if last else 0.0
        confidence, is_rejection = _band_confidence(position)
        if confidence < 0.5 and not is_rejection:
            continue

        for tag in item.tags:
            if is_rejection:
                signals.append(PreferenceSignal(
                    tag=f"{cfg.rejection_prefix}{tag}",
                    category=cfg.rejection_category,
                    confidence=round(confidence, 2),
                ))
            else:
                signals.append(PreferenceSignal(
                    tag=tag,
                    category=item.category or cfg.default_category,
                    confidence=round(confidence, 2),
                ))

    return signals


def _coordinates(value: AxisCoordinates) -> np.ndarray:
    if isinstance(value, TasteAxes):
        return np.array(value.as_tuple(), dtype=float)
    return np.array([float(value.get(axis, 0.0)) for axis in AXIS_NAMES], dtype=float)


def extract_axes(
    state: EngineState,
    axis_lookup: Mapping[str, AxisCoordinates],
    config: Optional[EngineConfig] = None,
) -> TasteAxes:
    """Weighted average of the shown items' axis positions.

    Weights are a softmax over ratings (higher rated = more weight). Items
    missing from ``axis_lookup`` keep their weight in the normalisation but
    contribute zero coordinates, which pulls every axis toward 0.

    Args:
        state: Final (or in-progress) engine state
        axis_lookup: Item id -> precomputed axis coordinates
        config: Engine constants

    Returns:
        TasteAxes; all 0.5 when nothing has been compared yet
    """
    cfg = resolve_config(config)
    shown = [item for item in state.items if item.comparisons > 0]
    if not shown:
        return TasteAxes.neutral()

    ratings = np.array([item.rating for item in shown], dtype=float)
    weights = np.exp((ratings - ratings.max()) / cfg.axis_temperature)
    weights = weights / weights.sum()

    coords = np.zeros((len(shown), len(AXIS_NAMES)), dtype=float)
    missing = []
    for idx, item in enumerate(shown):
        value = axis_lookup.get(item.id)
        if value is None:
            missing.append(item.id)
            continue
        coords[idx] = _coordinates(value)

    if missing:
        logger.debug("No axis coordinates for %d shown item(s): %s", len(missing), ", ".join(missing))

    blended = weights @ coords
    return TasteAxes.from_values(blended.tolist())
