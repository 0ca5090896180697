import logging
from logging.config import dictConfig


def configure_logging(log_level: str = "INFO") -> None:
    """Configure logging for the dashboard API, the store layer and uvicorn."""
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S%z",
                },
            },
            "handlers": {
                "default": {
                    "level": log_level,
                    "formatter": "standard",
                    "class": "logging.StreamHandler",
                },
            },
            "loggers": {
                "": {
                    "handlers": ["default"],
                    "level": log_level,
                },
                "roofcms": {
                    "handlers": ["default"],
                    "level": log_level,
                    "propagate": False,
                },
                # SQL echo stays off unless explicitly raised
                "sqlalchemy.engine": {
                    "handlers": ["default"],
                    "level": "WARNING",
                    "propagate": False,
                },
                "uvicorn": {
                    "handlers": ["default"],
                    "level": log_level,
                    "propagate": False,
                },
                "uvicorn.access": {
                    "handlers": ["default"],
                    "level": log_level,
                    "propagate": False,
                },
            },
        }
    )

    logging.getLogger("roofcms").info("logging_configured", extra={"level": log_level})
