"""
Centralized logging configuration using Loguru.
Follows Single Responsibility Principle - only handles logging setup.
"""

import sys
from pathlib import Path

from loguru import logger

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_configured = False


def setup_logger():
    """Configure logger handlers. Only configures once even if called multiple times."""
    global _configured
    if _configured:
        return

    from .config import get_settings

    settings = get_settings()

    # LOG_LEVEL takes precedence over DEBUG flag
    if settings.log_level:
        log_level = settings.log_level.upper()
        if log_level not in _LEVELS:
            log_level = "INFO"
    else:
        log_level = "DEBUG" if settings.debug else "INFO"

    logger.remove()

    def filter_reloader_logs(record):
        """Filter out logs from __main__ and __mp_main__ (uvicorn reloader)."""
        return record["name"] not in ("__main__", "__mp_main__")

    logger.add(
        sys.stdout,
        colorize=True,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=log_level,
        filter=filter_reloader_logs,
    )

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    # File logs always DEBUG to capture everything
    logger.add(
        log_dir / "app.log",
        rotation="100 MB",
        retention="30 days",
        compression="zip",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="DEBUG",
    )

    logger.add(
        log_dir / "error.log",
        rotation="100 MB",
        retention="30 days",
        compression="zip",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level="ERROR",
    )

    _configured = True


def format_exception_short(e: BaseException) -> str:
    """One-line description of an exception and its cause chain."""
    parts = [f"{type(e).__name__}: {e}"]
    cause = getattr(e, "cause", None) or e.__cause__
    if cause is not None and cause is not e:
        parts.append(f"caused by {type(cause).__name__}: {cause}")
    return " | ".join(parts)


# Configure logger on module import
setup_logger()

__all__ = ["logger", "format_exception_short"]
