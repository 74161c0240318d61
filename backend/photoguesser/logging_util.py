"""Logging configuration for PhotoGuesser."""
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    root_logger = logging.getLogger("photoguesser")
    root_logger.setLevel(logging.DEBUG)

    if root_logger.handlers:
        return

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(log_dir, "photoguesser.log"),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
        )
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root_logger.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(level.upper())
    ch.setFormatter(fmt)
    root_logger.addHandler(ch)
