"""Shared PocketBase call wrapper for the repositories.

The PocketBase SDK is synchronous; calls run in a worker thread with an
optional timeout. Store failures surface as GraphUnavailableError so the
engines are never invoked on partial data.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from ..errors import GraphUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def call_pocketbase(
    func: Callable[..., T],
    *args: Any,
    timeout: float | None = None,
    description: str = "PocketBase call",
    allow_missing: bool = False,
    **kwargs: Any,
) -> T | None:
    """Run a blocking PocketBase SDK call off the event loop.

    Args:
        func: Bound SDK method, e.g. ``pb.collection("connections").get_full_list``
        timeout: Seconds before giving up; None waits indefinitely
        description: Used in log and error messages
        allow_missing: Return None instead of raising on a 404

    Raises:
        GraphUnavailableError: the call failed or timed out
    """
    try:
        return await asyncio.wait_for(asyncio.to_thread(func, *args, **kwargs), timeout)
    except TimeoutError as e:
        logger.error(f"{description} timed out after {timeout}s")
        raise GraphUnavailableError(f"{description} timed out") from e
    except ClientResponseError as e:
        if allow_missing and e.status == 404:
            return None
        logger.error(f"{description} failed: {e}")
        raise GraphUnavailableError(f"{description} failed: {e}") from e
    except OSError as e:
        logger.error(f"{description} failed: {e}")
        raise GraphUnavailableError(f"{description} failed: {e}") from e


def chunked(ids: list[str], size: int) -> list[list[str]]:
    """Split ids into filter-sized batches."""
    size = max(size, 1)
    return [ids[i : i + size] for i in range(0, len(ids), size)]
