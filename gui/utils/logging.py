"""Operation-boundary logging for the client core.

The store, staging buffer, dialog coordinator and mutation gateway report
loads, failed mutations and discarded previews here instead of raising.
Only the `personal_info.gui` logger is touched; handlers are configured by
the entry point, so importing the core in tests leaves logging alone.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("personal_info.gui")


def log(message: str, level: int = logging.INFO) -> None:
    logger.log(level, message)
