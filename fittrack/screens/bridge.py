# -*- coding: utf-8 -*-
"""Run a service call on behalf of a screen and fold the outcome into its store."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from .store import Store

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ERROR = "Operation failed"


def error_message(exc: BaseException) -> str:
    detail = getattr(exc, "detail", None)
    if detail:
        return str(detail)
    return str(exc) or DEFAULT_ERROR


async def run_request(
    store: Store,
    call: Callable[[], Awaitable[T]],
    apply: Optional[Callable[[T], Optional[Dict[str, Any]]]] = None,
) -> Optional[T]:
    """Await ``call`` with ``is_loading`` set; returns None when it failed.

    On success ``apply`` maps the result to store changes. On failure the
    store gets a user-facing ``error`` string instead.
    """
    store.set(is_loading=True, error=None)
    try:
        result = await call()
    except Exception as exc:
        logger.warning("screen request failed: %s", exc)
        store.set(is_loading=False, error=error_message(exc))
        return None
    changes = apply(result) if apply else None
    store.set(is_loading=False, **(changes or {}))
    return result
