"""
Flask application factory module.

This module creates and configures the Flask application using
the factory pattern, allowing for different configurations
(development, testing, production) and for tests to inject their own
task store.
"""

import logging
from collections.abc import Mapping
from typing import Any

from flask import Flask, current_app

from config import get_config
from todo_app.store import TaskStore
from todo_app.store_factory import build_store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

STORE_EXTENSION_KEY = "task_store"


def create_app(
    config_name: str | None = None,
    overrides: Mapping[str, Any] | None = None,
    store: TaskStore | None = None,
) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.
        overrides: Config values applied on top of the config class
                   (used by the CLI flags and by tests).
        store: Ready-made task store.  When None, one is built from
               ``TASKS_PERSIST`` / ``TASKS_DB_PATH``.

    Returns:
        Configured Flask application instance.

    Raises:
        StorageError: If the configured store cannot be opened.  The
            service must not start without a working store.
    """
    app = Flask(__name__)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    if overrides:
        app.config.update(overrides)

    logging.getLogger().setLevel(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    logger.info(f"Creating app with config: {config_class.__name__}")

    if store is None:
        store = build_store(app.config)
    app.extensions[STORE_EXTENSION_KEY] = store

    # Register blueprints
    from todo_app.routes.api import api_bp

    app.register_blueprint(api_bp)

    return app


def get_store() -> TaskStore:
    """Return the task store of the application handling the current request."""
    return current_app.extensions[STORE_EXTENSION_KEY]
