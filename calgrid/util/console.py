# calgrid/util/console.py
from __future__ import annotations

import logging
import sys
from typing import Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def eprint(*args: Any) -> None:
    print(*args, file=sys.stderr)


def setup_logging(level: str = "WARNING") -> None:
    """Configure root logging for command-line entrypoints (stderr only)."""
    lvl = getattr(logging, str(level).upper(), None)
    if not isinstance(lvl, int):
        raise ValueError(f"Invalid log level: {level!r}")
    logging.basicConfig(level=lvl, format=LOG_FORMAT, datefmt=LOG_DATEFMT, stream=sys.stderr)
