from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

from postgrest.exceptions import APIError

from ..core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@contextmanager
def remote_call(action: str):
    """Translate PostgREST failures into UpstreamError.

    Remote calls are never retried; the caller decides the HTTP status.
    """
    try:
        yield
    except APIError as e:
        message = e.message or str(e)
        logger.error("%s failed: %s", action, message)
        raise UpstreamError(message, code=e.code)


def rows(response) -> List[Dict[str, Any]]:
    data = getattr(response, "data", None)
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    return list(data)


def first(response) -> Optional[Dict[str, Any]]:
    items = rows(response)
    return items[0] if items else None


def total(response, fallback: int = 0) -> int:
    count = getattr(response, "count", None)
    return int(count) if count is not None else fallback


def ilike_any(columns: Iterable[str], term: str) -> str:
    """PostgREST `or` filter matching `term` in any of `columns`."""
    pattern = term.replace(",", " ").strip()
    return ",".join(f"{col}.ilike.%{pattern}%" for col in columns)


def compact(params: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset parameters so the procedure defaults apply."""
    return {k: v for k, v in params.items() if v is not None}


def page_range(page: int, limit: int) -> tuple:
    start = (page - 1) * limit
    return start, start + limit - 1
