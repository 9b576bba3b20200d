import logging
from logging.config import dictConfig

from ticket_triage.core.config import Settings, settings as default_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root logging from LOG_LEVEL / LOG_FORMAT."""

    cfg = settings or default_settings
    level = getattr(logging, cfg.log_level.upper(), logging.INFO)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": cfg.log_format}},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                }
            },
            "root": {"handlers": ["default"], "level": level},
        }
    )
