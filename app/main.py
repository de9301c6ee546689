from typing import Optional

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from taste_engine.logging_config import get_logger


logger = get_logger(__name__)


def create_app(config_manager: Optional[ConfigManager] = None) -> Flask:
    """Build the Flask host for comparison sessions.

    Args:
        config_manager: Configuration source; a default ConfigManager if omitted

    Returns:
        Configured Flask application
    """
    config_manager = config_manager or ConfigManager()
    engine_config = config_manager.get_engine_config()
    app_config = config_manager.get_app_config()

    flask_app = Flask(__name__)
    flask_app.wsgi_app = ProxyFix(
        flask_app.wsgi_app,
        x_proto=1,     # trust 1 hop for X-Forwarded-Proto
        x_host=1,      # trust 1 hop for X-Forwarded-Host
        x_prefix=1)    # <-- pay attention to X-Forwarded-Prefix

    # -------------------------------------------------------------------------
    # Subsystems
    # -------------------------------------------------------------------------

    from app.comparison_session.factory import create_comparison_session_module

    session_module = create_comparison_session_module(
        engine_config=engine_config,
        max_sessions=app_config.max_sessions
    )
    flask_app.register_blueprint(session_module["blueprint"])
    flask_app.extensions["comparison_sessions"] = session_module["service"]

    @flask_app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    logger.info(
        f"Comparison host ready (total_rounds={engine_config.total_rounds}, "
        f"min_rounds={engine_config.min_rounds}, max_sessions={app_config.max_sessions})"
    )
    return flask_app


app = create_app()
