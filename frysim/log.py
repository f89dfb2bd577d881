"""Logger setup shared by the engine modules."""

import logging
import os

from rich.logging import RichHandler

LOG_LEVEL = os.getenv("FRYSIM_LOG_LEVEL", "WARNING").upper()

_handler = RichHandler(show_path=False, rich_tracebacks=True)
_handler.setFormatter(logging.Formatter("%(name)s | %(message)s", datefmt="%H:%M:%S"))


def get_logger(name: str = "frysim") -> logging.Logger:
    """Return a logger wired to the shared Rich handler."""
    logger = logging.getLogger(name)
    root = logging.getLogger("frysim")
    root.setLevel(LOG_LEVEL)

    # Attach once, on the package logger; children propagate to it
    if _handler not in root.handlers:
        root.addHandler(_handler)

    return logger
