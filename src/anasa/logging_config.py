"""Console logging for the command-line tool.

The library modules only create loggers; handlers are installed here.
"""

from __future__ import annotations

import logging
import sys

FORMAT_CONSOLE = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "WARNING") -> None:
    """Send ``anasa`` log records to stderr at *level*."""
    level_value = getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger("anasa")
    root.setLevel(level_value)

    # Replace rather than stack handlers on repeated CLI invocations in one
    # process; stderr may have been swapped in between.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level_value)
    console.setFormatter(logging.Formatter(FORMAT_CONSOLE, datefmt=DATE_FMT))
    root.addHandler(console)
