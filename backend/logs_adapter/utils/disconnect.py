"""
Copyright (c) 2026, openobserve-logs-adapter Project.
All rights reserved.
"""

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import HTTPException, Request


logger = logging.getLogger("disconnect")

T = TypeVar("T")

# nginx convention for "client closed request"
CLIENT_CLOSED_REQUEST = 499


async def cancel_on_disconnect(request: Request, call: Awaitable[T], poll_interval: float = 0.5) -> T:
    """Await a backend call, cancelling it if the HTTP client goes away.

    The caller's connection is polled while the call is in flight so a
    disconnect aborts the outbound request instead of leaking it.
    """
    task = asyncio.ensure_future(call)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.warning("request.client.disconnected", extra={"path": request.url.path})
                raise HTTPException(status_code=CLIENT_CLOSED_REQUEST, detail="Client closed request")
    finally:
        if not task.done():
            task.cancel()
