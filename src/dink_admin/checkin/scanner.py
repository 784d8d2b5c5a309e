from __future__ import annotations

import json
import threading
import time
from typing import Callable, Dict, Optional

from PIL import Image

from ..core.constants import QR_DUPLICATE_WINDOW_SECONDS
from ..core.exceptions import ValidationError


def parse_scan(decoded_text: str, event_id: str) -> str:
    """Return the player id encoded in a scanned QR code for this event."""
    try:
        data = json.loads(decoded_text)
    except (TypeError, ValueError):
        raise ValidationError("Invalid QR code")

    if not isinstance(data, dict) or not data.get("playerId"):
        raise ValidationError("Invalid QR code format")
    if str(data.get("eventId")) != str(event_id):
        raise ValidationError("QR code is for a different event")
    return str(data["playerId"])


class ScanDebouncer:
    """Drops a payload seen again within the duplicate window.

    A camera keeps decoding the same code while it stays in frame; only the
    first read inside the window is acted on.
    """

    def __init__(self, window_seconds: float = QR_DUPLICATE_WINDOW_SECONDS, clock: Callable[[], float] = time.monotonic):
        self._window = window_seconds
        self._clock = clock
        self._seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def should_process(self, payload: str) -> bool:
        with self._lock:
            now = self._clock()
            self._seen = {k: t for k, t in self._seen.items() if now - t < self._window}
            if payload in self._seen:
                return False
            self._seen[payload] = now
            return True

    def release(self, payload: str) -> None:
        """Forget a payload whose check-in failed so a rescan is processed."""
        with self._lock:
            self._seen.pop(payload, None)


def decode_image(stream) -> Optional[str]:
    """Decode the first QR code in an uploaded camera frame, if any."""
    # pyzbar loads the native zbar library on import
    from pyzbar.pyzbar import decode as pyzbar_decode

    img = Image.open(stream).convert("RGB")
    decoded = pyzbar_decode(img)
    if not decoded:
        return None
    return decoded[0].data.decode("utf-8").strip()
