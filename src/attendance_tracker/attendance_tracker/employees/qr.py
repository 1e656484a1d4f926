"""QR payload helpers.

The payload is a compact JSON object `{"id": <employee_id>, "name": <name>}`; scanners
send it back verbatim (or just the id) to mark attendance.
"""

from __future__ import annotations

import base64
import io
import json
from typing import Any

import qrcode
from qrcode.constants import ERROR_CORRECT_H

from ..core.exceptions import ValidationError


def build_qr_payload(employee_id: int, name: str) -> str:
    return json.dumps({"id": employee_id, "name": name}, separators=(",", ":"), ensure_ascii=False)


def parse_qr_payload(text: Any) -> int:
    """Return the employee id carried by a scanned code.

    Accepts the JSON payload, a JSON number or a bare numeric string.
    """
    if isinstance(text, int) and not isinstance(text, bool):
        return text

    raw = str(text or "").strip()
    if not raw:
        raise ValidationError("QR code is empty")

    try:
        data = json.loads(raw)
    except ValueError:
        data = raw

    if isinstance(data, dict):
        data = data.get("id")
    try:
        return int(data)
    except (TypeError, ValueError):
        raise ValidationError("QR code does not contain an employee id")


def render_qr_png(payload: str) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_H,
        box_size=8,
        border=2,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def render_qr_data_url(payload: str) -> str:
    encoded = base64.b64encode(render_qr_png(payload)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
