"""Process-wide logging setup."""

import logging
from pathlib import Path

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DEFAULT_LOG_FILE = Path("server.log")


def configure_logging(log_file: Path | None = DEFAULT_LOG_FILE, level: str = "INFO") -> None:
    """Configure logging once at startup, appending to *log_file*.

    With ``log_file=None`` records go to stderr instead.
    """
    handlers: list[logging.Handler]
    if log_file is None:
        handlers = [logging.StreamHandler()]
    else:
        handlers = [logging.FileHandler(log_file, mode="a", encoding="utf-8")]

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=DEFAULT_LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
