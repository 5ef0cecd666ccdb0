"""Environment-driven settings for the rule and team stores.

Reads DISC_RULES_PATH, DISC_TEAMS_PATH and DISC_LOG_LEVEL from env.
"""

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = "disc_rules.json"
DEFAULT_TEAMS_PATH = "disc_teams.json"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_rules_path() -> str:
    """Path of the rule store JSON file."""
    return os.getenv("DISC_RULES_PATH", "") or DEFAULT_RULES_PATH


def get_teams_path() -> str:
    """Path of the team store JSON file."""
    return os.getenv("DISC_TEAMS_PATH", "") or DEFAULT_TEAMS_PATH


def get_log_level() -> str:
    """Log level name from DISC_LOG_LEVEL.

    Raises:
        ValueError: If the level is not a standard logging level name.
    """
    level = (os.getenv("DISC_LOG_LEVEL", "") or "INFO").upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"DISC_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got '{level}'")
    return level


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts embedding the engine."""
    resolved = level.upper() if level else get_log_level()
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Logging configured: level=%s", resolved)
