"""Settings for the schema tooling, read from an optional YAML file and the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import yaml

from cboe_options_snapshot.database import get_database_url

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Runtime settings for connecting to the snapshot database."""
    database_url: Optional[str] = None
    echo: bool = False # Log every SQL statement emitted by the engine
    log_level: str = "INFO"


def load_settings(config_path: Optional[str] = None, database_url: Optional[str] = None) -> Settings:
    """Load settings from a YAML file, then apply environment overrides.

    Args:
        config_path: Path to the configuration file (YAML format). A path that
                     does not exist is ignored.
        database_url: Explicit database URL. When given it wins over the file
                      and the environment is not consulted for the URL.

    Returns:
        The resolved Settings.

    Raises:
        ValueError: If the file cannot be parsed, is not a mapping, or holds
                    a non-boolean echo value.
    """
    settings = Settings()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Failed to load configuration from {config_path}: {e}")
            raise ValueError(f"Invalid configuration file {config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"Configuration file {config_path} must contain a mapping")

        settings.database_url = config.get("database_url", settings.database_url)
        echo = config.get("echo", settings.echo)
        if not isinstance(echo, bool):
            raise ValueError(f"Configuration key 'echo' must be true or false, got {echo!r}")
        settings.echo = echo
        settings.log_level = str(config.get("log_level", settings.log_level))
        logger.debug(f"Loaded configuration from {config_path}")
    elif config_path:
        logger.warning(f"Configuration file {config_path} not found, using environment only")

    # Explicit URL, then environment, then the file
    if database_url:
        settings.database_url = database_url
    elif os.getenv("DATABASE_URL") or os.getenv("POSTGRES_HOST"):
        settings.database_url = get_database_url()
    if os.getenv("LOG_LEVEL"):
        settings.log_level = os.environ["LOG_LEVEL"]

    return settings
