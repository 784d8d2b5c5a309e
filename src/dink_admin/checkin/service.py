from __future__ import annotations

import io
from typing import Any, Dict, Optional

from ..auth.service import AuthService
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..events.service import EventService
from .qr import player_payload, render_png
from .scanner import ScanDebouncer, decode_image, parse_scan


class CheckinService:
    """Live event check-in from scanned player QR codes."""

    def __init__(self, events: EventService, auth: AuthService, debouncer: Optional[ScanDebouncer] = None):
        self._events = events
        self._auth = auth
        self._debouncer = debouncer or ScanDebouncer()

    def scan(self, event_id: str, *, code: Optional[str] = None, image=None) -> Dict[str, Any]:
        if not code and image is not None:
            code = decode_image(image)
            if not code:
                raise ValidationError("No QR code found in image")
        if not code:
            raise ValidationError("QR code is required")

        player_id = parse_scan(code, event_id)
        key = f"{event_id}:{code}"
        if not self._debouncer.should_process(key):
            return {"success": True, "ignored": True, "message": "Duplicate scan ignored"}

        try:
            result = self._events.check_in_player(event_id, player_id)
        except Exception:
            self._debouncer.release(key)
            raise
        if isinstance(result, dict):
            if not result.get("success", True):
                self._debouncer.release(key)
            return result
        return {"success": True, "data": result}

    def player_qr(self, session_token: Optional[str], event_id: Optional[str]) -> io.BytesIO:
        event_id = require_non_empty(event_id, "event_id is required")
        player = self._auth.player(session_token)
        return render_png(player_payload(str(player["id"]), event_id))
