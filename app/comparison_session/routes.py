"""
Comparison Session Routes

Flask routes for running pairwise comparison sessions over HTTP.
"""

from flask import Blueprint, request, jsonify
from pydantic import ValidationError

from .models import ChoiceRequest, SessionRequest
from .services import ComparisonSessionService


def _validation_error(exc: Exception):
    if isinstance(exc, ValidationError):
        details = [
            {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in exc.errors()
        ]
        return jsonify({"error": "invalid-payload", "details": details}), 400
    return jsonify({"error": "invalid-payload", "details": [{"loc": "", "msg": str(exc)}]}), 400


def _not_found():
    return jsonify({"error": "session-not-found"}), 404


def create_comparison_session_blueprint(session_service: ComparisonSessionService) -> Blueprint:
    """Create comparison session blueprint with routes.

    Args:
        session_service: The in-memory session service

    Returns:
        Flask blueprint with comparison session routes
    """
    bp = Blueprint('comparison_session', __name__, url_prefix='/sessions')

    @bp.route("", methods=["POST"])
    def create_session():
        """Start a session from inline candidates or a bundled pool."""
        payload = request.get_json(silent=True) or {}
        try:
            session_request = SessionRequest.model_validate(payload)
            record = session_service.create_session(session_request)
        except (ValidationError, ValueError) as exc:
            return _validation_error(exc)
        return jsonify(record.to_dict()), 201

    @bp.route("/<session_id>", methods=["GET"])
    def get_session(session_id):
        snapshot = session_service.snapshot(session_id)
        if snapshot is None:
            return _not_found()
        return jsonify(snapshot)

    @bp.route("/<session_id>/choice", methods=["POST"])
    def record_choice(session_id):
        """Record which item of the current pair the user preferred."""
        payload = request.get_json(silent=True) or {}
        try:
            choice = ChoiceRequest.model_validate(payload)
        except ValidationError as exc:
            return _validation_error(exc)

        snapshot = session_service.record_choice(session_id, choice.winner_id, choice.loser_id)
        if snapshot is None:
            return _not_found()
        return jsonify(snapshot)

    @bp.route("/<session_id>/results", methods=["GET"])
    def get_results(session_id):
        """Preference signals, taste axes and leaderboard for the session so far."""
        results = session_service.results(session_id)
        if results is None:
            return _not_found()
        return jsonify(results)

    @bp.route("/<session_id>", methods=["DELETE"])
    def delete_session(session_id):
        if not session_service.delete_session(session_id):
            return _not_found()
        return jsonify({"status": "ok"})

    return bp
