"""
Comparison Session Subsystem

Runs in-memory pairwise comparison sessions over HTTP on top of the
taste_engine package.
"""

from .models import ChoiceRequest, SessionRecord, SessionRequest
from .services import ComparisonSessionService

__all__ = ['ChoiceRequest', 'SessionRecord', 'SessionRequest', 'ComparisonSessionService']
