#!/usr/bin/env python3
"""
Simple runner script for the comparison session host.
This script ensures the correct Python path is set and runs the app.
"""

import sys
from pathlib import Path

# Add the current directory to Python path
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from config_manager import get_app_config
from taste_engine.logging_config import setup_logging

if __name__ == "__main__":
    app_config = get_app_config()
    setup_logging(debug=app_config.debug)

    from app.main import app

    print("🚀 Starting comparison session host...")
    print(f"📁 Working directory: {current_dir}")

    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
