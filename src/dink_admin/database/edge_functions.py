from __future__ import annotations

import json
import logging
from typing import Any, Dict

from supabase import FunctionsError

from ..core.exceptions import UpstreamError
from .connection import SupabaseConnection

logger = logging.getLogger(__name__)


def invoke_function(conn: SupabaseConnection, name: str, body: Dict[str, Any]) -> Dict[str, Any]:
    """Call a Supabase edge function and return its JSON body."""
    try:
        raw = conn.client().functions.invoke(name, invoke_options={"body": body})
    except FunctionsError as e:
        logger.error("Edge function %s failed: %s", name, e.message)
        raise UpstreamError(e.message or f"{name} failed", status=getattr(e, "status", None))

    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw else {}
        except ValueError:
            raise UpstreamError(f"{name} returned a non-JSON response")
    if not isinstance(raw, dict):
        raise UpstreamError(f"{name} returned an unexpected response")
    if raw.get("error"):
        raise UpstreamError(str(raw["error"]))
    return raw
