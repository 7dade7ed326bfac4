"""Settings read from the environment (and a local ``.env`` file).

  BOOLSOP_LOG_LEVEL          logging level of the command line tool
  BOOLSOP_NEGATION_STYLE     quote | ansi | html
  BOOLSOP_EQUIVALENCE_LIMIT  most variables the oracle may enumerate
"""

from __future__ import annotations

import logging
import logging.config
import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

from .render import NegationStyle
from .result import Err, Ok, Result

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    negation_style: NegationStyle = NegationStyle.QUOTE
    equivalence_limit: int = 16

    @classmethod
    def from_env(cls) -> Result[Settings, Exception]:
        """Build settings from BOOLSOP_* variables, loading ``.env`` first."""
        load_dotenv()
        defaults = cls()

        level = os.getenv("BOOLSOP_LOG_LEVEL", defaults.log_level).strip().upper()
        if level not in _LEVELS:
            return Err(ValueError(f"BOOLSOP_LOG_LEVEL must be one of {', '.join(_LEVELS)}, got {level!r}"))

        style_name = os.getenv("BOOLSOP_NEGATION_STYLE", defaults.negation_style.value)
        try:
            style = NegationStyle(style_name.strip().lower())
        except ValueError:
            return Err(ValueError(f"Unknown BOOLSOP_NEGATION_STYLE {style_name!r}"))

        raw_limit = os.getenv("BOOLSOP_EQUIVALENCE_LIMIT")
        match raw_limit:
            case None:
                limit = defaults.equivalence_limit
            case str(text) if text.strip().isdigit() and 0 < int(text) <= 63:
                limit = int(text)
            case _:
                return Err(ValueError(f"BOOLSOP_EQUIVALENCE_LIMIT must be an integer in 1..63, got {raw_limit!r}"))

        return Ok(cls(log_level=level, negation_style=style, equivalence_limit=limit))


def logging_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "defaultFormatter": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "consoleHandler": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "defaultFormatter",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "boolsop": {
                "level": level,
                "handlers": ["consoleHandler"],
                "propagate": True,
            },
        },
    }


def configure_logging(level: str) -> None:
    """Send ``boolsop`` log records to stderr; used by the command line tool only."""
    logging.config.dictConfig(logging_config(level))
    logging.getLogger(__name__).debug("logging configured at %s", level)
