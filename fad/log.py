"""
Logging — Diagnostic output on stderr via loguru

Results go to stdout with print(); this sink only carries diagnostics,
so piping git-fad output stays clean.
"""

import sys

from loguru import logger


LOG_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan> - {message}"


def configure_logging(level: str = "WARNING", sink=None) -> int:
    """
    Replace loguru's default sink with a single one at the given level.

    Args:
        level: loguru level name
        sink: Destination (default: sys.stderr)

    Returns:
        Handler id of the installed sink
    """
    logger.remove()
    return logger.add(
        sink if sink is not None else sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        colorize=None if sink is None else False,
    )
