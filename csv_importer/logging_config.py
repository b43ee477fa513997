import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from csv_importer.config import Settings, get_settings

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
LOG_FILE_NAME = "csv_importer.log"


def _file_handler(log_dir: str, level: str) -> Dict[str, Any]:
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    return {
        "level": level,
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "filename": str(log_path / LOG_FILE_NAME),
        "maxBytes": 10485760,  # 10MB
        "backupCount": 5,
        "encoding": "utf-8",
    }


def configure_logging(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Build the dictConfig for the service.

    Console output is always on. JSON records also go to a rotating file
    under ``LOG_DIR`` unless it is empty. Uvicorn's access log is kept at
    WARNING because RequestLoggingMiddleware already logs every request,
    and SQL statements are only echoed with DEBUG enabled.

    Args:
        settings: Settings to read, defaults to the environment settings

    Returns:
        Dict: Logging configuration dictionary
    """
    settings = settings or get_settings()
    level = settings.LOG_LEVEL.upper()

    handlers: Dict[str, Any] = {
        "console": {
            "level": level,
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": sys.stdout,
        },
    }
    if settings.LOG_DIR:
        handlers["file"] = _file_handler(settings.LOG_DIR, level)
    names = list(handlers)

    def logger_config(logger_level: str) -> Dict[str, Any]:
        return {"handlers": names, "level": logger_level, "propagate": False}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": PLAIN_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "json": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "format": JSON_FORMAT,
            },
        },
        "handlers": handlers,
        "loggers": {
            "csv_importer": logger_config(level),
            "uvicorn.error": logger_config(level),
            "uvicorn.access": logger_config("WARNING"),
            "sqlalchemy.engine": logger_config("INFO" if settings.DEBUG else "WARNING"),
        },
    }


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``csv_importer`` namespace.

    Args:
        name: Dotted module-style name, e.g. ``api.events``

    Returns:
        logging.Logger: Configured logger instance
    """
    return logging.getLogger(f"csv_importer.{name}")
