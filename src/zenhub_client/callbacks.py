"""Bridge endpoint coroutines to `(error, result)` completion callbacks."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

from .client import ZenHubError, ZenHubTransportError

Callback = Callable[[Optional[BaseException], Any], None]


def _callback_error(exc: ZenHubError) -> BaseException:
    # Transport failures reach the callback as the original httpx exception.
    if isinstance(exc, ZenHubTransportError) and exc.__cause__ is not None:
        return exc.__cause__
    return exc


async def deliver(awaitable: Awaitable[Any], callback: Callback) -> None:
    """
    Await an endpoint call and report it to `callback` exactly once.

    Success -> callback(None, result)
    ZenHubTransportError -> callback(<httpx error>, error.body)
    ZenHubStatusError -> callback(error, error.body)

    Any other exception (e.g. a payload httpx cannot JSON-encode) propagates
    and the callback is not invoked.
    """
    try:
        result = await awaitable
    except ZenHubError as exc:
        callback(_callback_error(exc), exc.body)
        return
    callback(None, result)


def submit(awaitable: Awaitable[Any], callback: Callback) -> "asyncio.Task[None]":
    """
    Schedule `deliver` on the running loop and return the task.

    The caller owns the task: await it (or add a done callback) to observe
    exceptions that are not ZenHubError, since those bypass `callback`.
    """
    return asyncio.ensure_future(deliver(awaitable, callback))


__all__ = ["Callback", "deliver", "submit"]
