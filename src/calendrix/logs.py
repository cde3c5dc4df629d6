"""
Logging setup.

The library logs through loguru but stays silent until an application
calls ``configure_logging`` (the package disables its own records on
import, as loguru recommends for libraries).
"""

from __future__ import annotations

import sys
from typing import Any, Optional

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message}"
_sink_id: Optional[int] = None


def configure_logging(level: str = "WARNING", sink: Any = None) -> int:
    """Enable calendrix records and route them to a single sink (stderr by default)."""
    global _sink_id
    if _sink_id is not None:
        logger.remove(_sink_id)
    _sink_id = logger.add(
        sys.stderr if sink is None else sink,
        level=level,
        format=_FORMAT,
        filter="calendrix",
    )
    logger.enable("calendrix")
    return _sink_id


def disable_logging() -> None:
    global _sink_id
    if _sink_id is not None:
        logger.remove(_sink_id)
        _sink_id = None
    logger.disable("calendrix")
