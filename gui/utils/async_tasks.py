"""Async helpers.

API calls and image decoding are blocking; `run_async` moves them onto a
worker thread so the event loop keeps serving other interactions.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable


async def run_async(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    return await asyncio.to_thread(fn, *args, **kwargs)
