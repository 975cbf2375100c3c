"""Logging configuration."""

import re
import sys

from loguru import logger

from settings import LOG_DIR

# Gateway URLs carry the shared token as a query parameter
_TOKEN_RE = re.compile(r"(token=)[^&\s'\"]+")


def redact_secrets(text: str) -> str:
    """Mask gateway tokens in a log line."""
    return _TOKEN_RE.sub(r"\1[REDACTED]", text)


def _redact(record) -> bool:
    """Handler filter: runs after the message is formatted, so arguments are masked too."""
    record["message"] = redact_secrets(record["message"])
    return True


def setup_logging(level: str = "INFO", to_file: bool = True, log_dir=None):
    """Configure logging with console and optional daily-rotated file output."""
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>",
        level=level,
        filter=_redact,
        colorize=True,
    )

    if to_file:
        target = log_dir or LOG_DIR
        target.mkdir(parents=True, exist_ok=True)
        logger.add(
            target / "election_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            filter=_redact,
            rotation="00:00",
            retention="7 days",
            compression="gz",
        )
        logger.info("Logging to {}", target)

    return logger
