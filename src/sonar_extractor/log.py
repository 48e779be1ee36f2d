"""Logging configuration with Rich formatting.

Log records go to stderr so that CLI output (tables, JSON, CSV) on stdout
stays pipeable. Use setup_logging() once at startup and get_logger() per module.
"""

import logging
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler
from .config import get_settings

def setup_logging(level: Optional[str] = None):
    settings = get_settings()
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )

    # The SDK and its transport log every request at INFO
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"sonar_extractor.{name}")
