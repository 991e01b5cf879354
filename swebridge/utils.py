"""Helpers shared by both clients: error-message extraction, status lines, and
the bounded/cancellable wrapper around an outbound call."""

import asyncio
from typing import Awaitable, Optional

import httpx

from .errors import TransportError
from .models import ErrorEnvelope


def extract_error_message(envelope: Optional[ErrorEnvelope], raw_body: str) -> str:
    msg = ((envelope.message if envelope is not None else None) or "").strip()
    if msg:
        return msg
    return raw_body.strip()


def status_line(resp: httpx.Response) -> str:
    return f"{resp.status_code} {resp.reason_phrase}".strip()


def is_success(resp: httpx.Response) -> bool:
    return 200 <= resp.status_code < 300


async def run_bounded(
    call: Awaitable[httpx.Response],
    *,
    timeout: float,
    cancel: Optional[asyncio.Event],
    label: str,
) -> httpx.Response:
    """Await ``call``, aborting it when ``cancel`` is set or ``timeout`` elapses.

    Both aborts surface as ``TransportError``, as do httpx network failures.
    Unfinished tasks are cancelled and awaited before this returns, also when
    the caller itself is cancelled, so the connection is always closed.
    """
    request = asyncio.ensure_future(call)
    watcher = asyncio.ensure_future(cancel.wait()) if cancel is not None else None
    waiters = {request} if watcher is None else {request, watcher}
    try:
        done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [task for task in waiters if not task.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    if request not in done:
        if watcher is not None and watcher in done:
            raise TransportError(f"{label} request cancelled")
        raise TransportError(f"{label} request timed out after {timeout:g}s")

    try:
        return request.result()
    except httpx.TimeoutException as exc:
        raise TransportError(f"{label} request timed out: {exc}") from exc
    except httpx.HTTPError as exc:
        raise TransportError(f"{label} request failed: {exc}") from exc
