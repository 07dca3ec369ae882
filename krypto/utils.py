import logging
import os
import time
from typing import Callable, Optional


# -----------------------------
# Logging setup
# -----------------------------
logger = logging.getLogger("krypto")
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.WARNING)


def configure_logging(level: Optional[str] = None) -> None:
    """Set the package log level from ``level`` or ``KRYPTO_LOG_LEVEL``.

    Unknown level names fall back to ``WARNING`` so the CLI table output is
    not interleaved with request chatter.
    """
    name = (level or os.getenv("KRYPTO_LOG_LEVEL") or "WARNING").upper()
    logger.setLevel(getattr(logging, name, logging.WARNING))


# -----------------------------
# Utility functions
# -----------------------------
def timestamp(clock: Callable[[], float] = time.time) -> str:
    """Unix time in whole seconds, as the API expects in ``CB-ACCESS-TIMESTAMP``."""
    return str(int(clock()))
