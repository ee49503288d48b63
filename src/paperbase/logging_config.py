"""Logging configuration."""

import logging
import sys

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)-40s %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Guard against configuring twice (import-time and app startup)
_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO", debug: bool = False) -> None:
    """Configure root logging once for the process."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    log_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    # HTTP client request lines are noise at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
