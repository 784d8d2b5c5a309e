from __future__ import annotations

import io
import json
from typing import Optional

import qrcode

from ..common.datetime_utils import now_utc


def player_payload(player_id: str, event_id: str, *, timestamp_ms: Optional[int] = None) -> str:
    """JSON a player shows at the door: playerId, eventId and a millisecond timestamp."""
    if timestamp_ms is None:
        timestamp_ms = int(now_utc().timestamp() * 1000)
    return json.dumps({"playerId": player_id, "eventId": event_id, "timestamp": timestamp_ms})


def render_png(data: str) -> io.BytesIO:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return buf
