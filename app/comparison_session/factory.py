"""
Factory for creating the comparison session module.
"""

from taste_engine.elo import EngineConfig

from .routes import create_comparison_session_blueprint
from .services import ComparisonSessionService


def create_comparison_session_module(
    engine_config: EngineConfig,
    max_sessions: int = 1000,
) -> dict:
    """Create comparison session module with service and routes.

    Args:
        engine_config: Engine constants shared by every session
        max_sessions: Live sessions kept in memory

    Returns:
        Dictionary containing the service and blueprint
    """
    session_service = ComparisonSessionService(
        engine_config=engine_config,
        max_sessions=max_sessions
    )

    blueprint = create_comparison_session_blueprint(session_service)

    return {
        "service": session_service,
        "blueprint": blueprint
    }
