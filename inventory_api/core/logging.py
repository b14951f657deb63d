import sys
from logging.config import dictConfig

from inventory_api.core.config import LOG_LEVEL

APP_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(client_addr)s | %(method)s %(path)s | "
    "%(status_code)s | %(process_time_ms)sms"
)

# Third-party loggers held above the app level
QUIET_LOGGERS = {
    # Superseded by the "access" logger
    "uvicorn.access": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "aiosqlite": "INFO",
    "botocore": "INFO",
    "boto3": "INFO",
    "s3transfer": "INFO",
    "urllib3": "INFO",
}


def _stdout_handler(formatter: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": sys.stdout,
        "formatter": formatter,
    }


def build_logging_config(level: str = LOG_LEVEL) -> dict:
    loggers = {name: {"level": quiet} for name, quiet in QUIET_LOGGERS.items()}
    # Written only by request_logging_middleware
    loggers["access"] = {
        "handlers": ["access"],
        "level": "INFO",
        "propagate": False,
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "app": {"format": APP_FORMAT},
            "access": {"format": ACCESS_FORMAT},
        },
        "handlers": {
            "app": _stdout_handler("app"),
            "access": _stdout_handler("access"),
        },
        "loggers": loggers,
        "root": {"level": level, "handlers": ["app"]},
    }


def setup_logging(level: str | None = None):
    dictConfig(build_logging_config(level or LOG_LEVEL))
