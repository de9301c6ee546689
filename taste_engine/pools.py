"""
Candidate pool loading.

Reads candidate pools and axis lookups from JSON files so the web layer and
the CLI can share them. Bundled sample pools live in ``taste_engine/data``.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import ValidationError

from .models import Candidate, TasteAxes

DATA_DIR = Path(__file__).parent / "data"
SAMPLE_POOLS = {
    "designer": "designer_pool.json",
    "experience": "experience_pool.json",
}


def sample_pool_path(name: str) -> Path:
    """Path of a bundled pool by short name ('designer' or 'experience')."""
    if name not in SAMPLE_POOLS:
        raise ValueError(f"Unknown sample pool: {name!r} (choose from {', '.join(sorted(SAMPLE_POOLS))})")
    return DATA_DIR / SAMPLE_POOLS[name]


def parse_candidates(data: Union[List[Any], Dict[str, Any]]) -> List[Candidate]:
    """Validate raw pool data: a list of candidates or {"candidates": [...]}."""
    raw = data.get("candidates") if isinstance(data, dict) else data
    if not isinstance(raw, list):
        raise ValueError("Candidate pool must be a list or an object with a 'candidates' list")

    try:
        candidates = [Candidate.model_validate(entry) for entry in raw]
    except ValidationError as e:
        raise ValueError(f"Invalid candidate: {e}") from e

    return ensure_unique_ids(candidates)


def ensure_unique_ids(candidates: List[Candidate]) -> List[Candidate]:
    """Raise ValueError if two candidates share an id."""
    seen = set()
    for candidate in candidates:
        if candidate.id in seen:
            raise ValueError(f"Duplicate candidate id: {candidate.id}")
        seen.add(candidate.id)
    return candidates


def load_candidate_pool(path: Union[str, Path]) -> List[Candidate]:
    """Load and validate a candidate pool from a JSON file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to load candidate pool {path}: {e}") from e
    return parse_candidates(data)


def build_axis_lookup(candidates: List[Candidate]) -> Dict[str, TasteAxes]:
    """Id -> axes for every candidate that carries coordinates."""
    return {c.id: c.axes for c in candidates if c.axes is not None}


def load_axis_lookup(path: Union[str, Path]) -> Dict[str, TasteAxes]:
    """Load a JSON object mapping candidate id to axis coordinates."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("axis lookup must be a JSON object")
        return {str(item_id): TasteAxes.model_validate(axes) for item_id, axes in data.items()}
    except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
        raise ValueError(f"Failed to load axis lookup {path}: {e}") from e
