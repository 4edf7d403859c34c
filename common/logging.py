# common/logging.py
"""
Logging setup shared by the datapath model and the command-line agents.

    from common.logging import get_logger, setup_logging

    setup_logging("DEBUG")
    log = get_logger(__name__)

The datapath dumps register contents at TRACE (5), below DEBUG. A simulation
runs thousands of ticks, so callers check ``log.isEnabledFor(TRACE)`` before
building those messages.

Env:
    LOG_LEVEL: level name used when none is passed explicitly.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import IO, Optional, Union

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVEL_CHOICES = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "TRACE"]
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# -v counts: none, -v, -vv, -vvv
_VERBOSITY = (logging.WARNING, logging.INFO, logging.DEBUG, TRACE)


def resolve_level(level: Optional[Union[str, int]] = None) -> int:
    """Level from an int, a level name, or LOG_LEVEL; INFO if none is usable."""
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Optional[Union[str, int]] = None,
    *,
    stream: Optional[IO[str]] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Install a single stream handler on the root logger and return it.

    Calling this again replaces the handler rather than adding a second one.
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name else __name__)


def set_verbosity(v: int) -> None:
    """0 → WARNING, 1 → INFO, 2 → DEBUG, 3+ → TRACE."""
    logging.getLogger().setLevel(_VERBOSITY[min(max(v, 0), len(_VERBOSITY) - 1)])


def add_logging_args(parser: argparse.ArgumentParser) -> None:
    """The -v/--log-level pair every agent accepts."""
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v=INFO, -vv=DEBUG, -vvv=TRACE)",
    )
    parser.add_argument(
        "--log-level",
        choices=LEVEL_CHOICES,
        default=None,
        help="Explicit log level (overrides -v and LOG_LEVEL)",
    )


def init_cli_logging(args: argparse.Namespace) -> None:
    """Apply --log-level if given, otherwise the -v count."""
    setup_logging(level=args.log_level)
    if args.log_level is None:
        set_verbosity(args.verbose)
