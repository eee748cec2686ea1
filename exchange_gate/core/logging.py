# Centralized logging configuration for the exchange_gate package.

import logging
import sys
from datetime import UTC, datetime
from typing import Any, Dict, Optional, TextIO

from exchange_gate.settings import Settings

# Recommended format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Default level if LOG_LEVEL env var is not set
DEFAULT_LOG_LEVEL = "INFO"

# Valid log levels
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Libraries known to be noisy that we might want to quiet down
NOISY_LIBRARIES = ["asyncio", "httpx", "httpcore"]


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> str:
    """Install a single console handler on the root logger.

    Args:
        level: Log level name. Falls back to `Settings.get_log_level()` (LOG_LEVEL).
        stream: Where log records are written. Defaults to sys.stderr.

    Returns:
        The level name actually applied. Unknown names are reported on stderr
        and replaced with DEFAULT_LOG_LEVEL.
    """
    level_name = (level or Settings().get_log_level(default=DEFAULT_LOG_LEVEL)).upper()
    if level_name not in VALID_LOG_LEVELS:
        print(
            f"WARNING: Invalid LOG_LEVEL '{level_name}', using {DEFAULT_LOG_LEVEL} "
            f"(expected one of {', '.join(VALID_LOG_LEVELS)})",
            file=sys.stderr,
        )
        level_name = DEFAULT_LOG_LEVEL

    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level_name)

    for lib_name in NOISY_LIBRARIES:
        logging.getLogger(lib_name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Root logger writing to {getattr(stream, 'name', stream)} at {level_name}")
    return level_name


# Pipeline Logging Utilities


def log_handler_execution(
    transaction_id: str,
    handler_name: str,
    status: str,
    duration: Optional[float] = None,
    error: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> None:
    """Log handler execution details."""
    logger = logging.getLogger("exchange_gate.pipeline.handler")
    log_data = {
        "transaction_id": transaction_id,
        "handler_name": handler_name,
        "status": status,
        "timestamp": datetime.now(UTC).isoformat(),
    }

    if duration is not None:
        log_data["duration_seconds"] = str(duration)

    if error:
        log_data["error"] = error

    if details:
        log_data.update(details)

    if status == "error":
        logger.error(f"[{transaction_id}] Handler {handler_name} failed", extra=log_data)
    else:
        logger.info(f"[{transaction_id}] Handler {handler_name} {status}", extra=log_data)
