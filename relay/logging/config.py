"""Structlog configuration for dual output: JSON files and colored console."""

import logging
import logging.handlers
import os
import time
from pathlib import Path

import structlog

from relay.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
    truncate_device_tokens,
)

DEFAULT_LOG_FILE_PATH = "./logs/push-relay-service.log"
MAX_LOG_FILE_BYTES = 100 * 1024 * 1024
LOG_BACKUP_COUNT = 240
LOG_RETENTION_DAYS = 10


def _shared_processors() -> list:
    """Processors applied to structlog and foreign (stdlib) records alike."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
        truncate_device_tokens,
    ]


def setup_logging() -> None:
    """Route structlog through stdlib logging to a JSON file and the console.

    The JSON file rotates at 100MB and keeps 240 backups. The console output
    is colored and always on, including in production containers.

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/push-relay-service.log)
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME: Service name attached to every event
    - ENVIRONMENT: Deployment environment attached to every event
    """
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE_PATH)
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=MAX_LOG_FILE_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[
                *_shared_processors(),
                add_service_context,
                add_process_info,
            ],
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in (file_handler, console_handler):
        handler.setLevel(log_level)
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_file=log_file_path,
        log_level=log_level_name,
    )


def cleanup_old_logs(
    log_file_path: str | None = None, retention_days: int = LOG_RETENTION_DAYS
) -> int:
    """Delete rotated log files older than ``retention_days``.

    The active log file is never removed.

    Args:
        log_file_path: Main log file; defaults to LOG_FILE_PATH.
        retention_days: Age after which rotated files are deleted.

    Returns:
        Number of files deleted.
    """
    log_path = Path(log_file_path or os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE_PATH))
    cutoff = time.time() - retention_days * 24 * 60 * 60
    logger = structlog.get_logger(__name__)

    deleted_count = 0
    for rotated in log_path.parent.glob(f"{log_path.name}.*"):
        if rotated.stat().st_mtime >= cutoff:
            continue
        try:
            rotated.unlink()
        except OSError as e:
            logger.warning("log_cleanup_failed", file=str(rotated), error=str(e))
            continue
        deleted_count += 1

    if deleted_count:
        logger.info(
            "old_logs_removed",
            deleted_count=deleted_count,
            retention_days=retention_days,
        )
    return deleted_count
