"""
Application configuration module.

This module defines configuration classes for different environments
(development, testing, production). Configuration values are loaded
from environment variables with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent

_TRUTHY = {"1", "true", "yes", "on"}


def env_flag(name: str, default: bool = False) -> bool:
    """
    Read a boolean flag from the environment.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset or blank.

    Returns:
        True when the variable holds one of ``1/true/yes/on`` (any case).
    """
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return raw.lower() in _TRUTHY


class Config:
    """
    Base configuration with default settings.

    Attributes:
        TASKS_PERSIST: Use the SQLite file-backed store instead of the
            in-memory one.
        TASKS_DB_PATH: Path of the SQLite file used when persisting.
        LOG_LEVEL: Root logging level name.
    """

    TASKS_PERSIST: bool = env_flag("TASKS_PERSIST")
    TASKS_DB_PATH: str = os.environ.get("TASKS_DB_PATH", "tasks.db")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    # Tests pick their backend explicitly through create_app overrides
    TASKS_PERSIST: bool = False
    TASKS_DB_PATH: str = str(BASE_DIR / "instance" / "test_tasks.db")


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
