"""Process-wide logging configuration."""

from __future__ import annotations

import logging
import logging.config

from nicolas_qui_paie.core.settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a console handler on the package logger.

    Args:
        level: Logging level name; defaults to ``settings.log_level``.
    """
    resolved = (level or settings.log_level).upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "nicolas_qui_paie": {
                    "handlers": ["console"],
                    "level": resolved,
                    "propagate": False,
                },
            },
        }
    )
