"""
Runtime settings loaded from the environment (and a .env file if present).

Variables:
    GROCERY_CONVERT_UNITS  Fold tsp->tbsp, pints/quarts->cups, ... (default false)
    GROCERY_FOLD_CUTS      Merge protein cuts, e.g. chicken thigh -> chicken (default false)
    LOG_LEVEL              Logging level name (default INFO)
    DEBUG                  "true" forces DEBUG logging
    PORT                   API port (default 5000)
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Engine options and service settings."""

    convert_units: bool = False
    fold_cuts: bool = False
    log_level: str = "INFO"
    port: int = 5000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, reading .env first."""
        load_dotenv()

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if _env_flag("DEBUG"):
            log_level = "DEBUG"

        return cls(
            convert_units=_env_flag("GROCERY_CONVERT_UNITS"),
            fold_cuts=_env_flag("GROCERY_FOLD_CUTS"),
            log_level=log_level,
            port=int(os.getenv("PORT", 5000)),
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for entry points (CLI and API)."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
