"""
Logging setup for the listing service.
"""
from typing import Optional
import logging
import os
import sys


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure root logging to stdout, plus a file under ``log_dir`` when given.

    Args:
        level: Logging level name (e.g. "DEBUG", "INFO")
        log_dir: Directory for ``inmo_service.log``; file logging is skipped
                 when unset or when the directory cannot be created
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_dir:
        # Try to add file handler, but continue without it if directory creation fails
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "inmo_service.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True
    )
