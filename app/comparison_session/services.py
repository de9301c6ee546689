"""
Comparison Session Service

Keeps one ComparisonSession per session id in memory. Nothing is persisted;
restarting the host discards every session.
"""

import logging
import uuid
from threading import Lock
from typing import Any, Dict, Optional

from taste_engine.elo import ComparisonSession, EngineConfig
from taste_engine.pools import build_axis_lookup, load_candidate_pool, sample_pool_path

from .models import SessionRecord, SessionRequest

logger = logging.getLogger(__name__)


class ComparisonSessionService:
    """Service for creating and advancing in-memory comparison sessions."""

    def __init__(self, engine_config: EngineConfig, max_sessions: int = 1000):
        """Initialize the session service.

        Args:
            engine_config: Engine constants shared by every session
            max_sessions: Live sessions kept before the oldest is dropped
        """
        self.engine_config = engine_config
        self.max_sessions = max(1, max_sessions)
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = Lock()

    def create_session(self, request: SessionRequest) -> SessionRecord:
        """Start a session and pick its first pair.

        Raises:
            ValueError: If the bundled pool name is unknown or the pool is invalid
        """
        if request.pool is not None:
            candidates = load_candidate_pool(sample_pool_path(request.pool))
        else:
            candidates = request.candidates

        axis_lookup = build_axis_lookup(candidates)
        axis_lookup.update(request.axes)

        session = ComparisonSession(
            candidates,
            total_rounds=request.total_rounds,
            min_rounds=request.min_rounds,
            seed=request.seed,
            mode=request.mode,
            config=self.engine_config,
            axis_lookup=axis_lookup,
        )
        record = SessionRecord(session_id=uuid.uuid4().hex, session=session)
        record.current_pair = session.next_pair()

        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                oldest = next(iter(self._sessions))
                del self._sessions[oldest]
                logger.warning(f"Session limit reached, dropped oldest session {oldest}")
            self._sessions[record.session_id] = record

        logger.info(
            f"Created session {record.session_id} with {len(candidates)} candidates "
            f"({session.state.mode.value}, {session.total_rounds} rounds)"
        )
        return record

    def get_session(self, session_id: str) -> Optional[SessionRecord]:
        with self._lock:
            return self._sessions.get(session_id)

    def snapshot(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Session state and current pair as plain data; None if the session is unknown."""
        with self._lock:
            record = self._sessions.get(session_id)
            return record.to_dict() if record is not None else None

    def results(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Signals, axes and leaderboard built from one consistent state."""
        with self._lock:
            record = self._sessions.get(session_id)
            if record is None:
                return None
            results = record.session.results()
            results["session_id"] = session_id
            results["complete"] = record.session.is_complete()
            return results

    def record_choice(self, session_id: str, winner_id: str, loser_id: str) -> Optional[Dict[str, Any]]:
        """Record a choice on the pair on screen and advance to the next pair.

        Choices that do not name the current pair leave the session untouched.

        Returns:
            Session snapshot, or None if the session is unknown
        """
        with self._lock:
            record = self._sessions.get(session_id)
            if record is None:
                return None

            shown = {item.id for item in record.current_pair} if record.current_pair else set()
            if winner_id == loser_id or {winner_id, loser_id} != shown:
                logger.info(f"Session {session_id}: ignored choice {winner_id} > {loser_id} (not the current pair)")
                return record.to_dict()

            record.session.choose(winner_id, loser_id)
            record.current_pair = record.session.next_pair()
            if record.session.is_complete():
                logger.info(f"Session {session_id} complete after {record.session.round} rounds")
            return record.to_dict()

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)
