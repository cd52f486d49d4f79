"""
src/qr/codes.py
───────────────
QR code generation for equipment tags and inspection records.

Equipment codes carry a self-describing JSON payload (readable offline by
the resolver); record codes carry the URL of the record's detail page.
"""
from __future__ import annotations

import base64
import io
import json

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from config.settings import settings
from src.data.models import Equipment, RecordKind


def equipment_url(equipment_id: int | str) -> str:
    return f"{settings.BASE_URL}/equipment/{equipment_id}"


def record_url(kind: RecordKind | str, record_id: int) -> str:
    return f"{settings.BASE_URL}/{RecordKind(kind).value}/{record_id}"


def equipment_qr_payload(equipment: Equipment) -> str:
    """JSON text encoded in an equipment tag's QR code."""
    payload = {
        "type": "equipment",
        "id": equipment.id,
        "tagNo": equipment.tag_no,
        "equipmentName": equipment.equipment_name,
        "equipmentType": equipment.equipment_type,
    }
    if equipment.id is not None:
        payload["url"] = equipment_url(equipment.id)
    return json.dumps(payload)


def qr_png(data: str, box_size: int = 8, border: int = 2) -> bytes:
    """Render `data` as a black-on-white PNG."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=box_size, border=border)
    qr.add_data(data)
    qr.make(fit=True)
    image = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def qr_data_uri(data: str) -> str:
    """PNG data URI, usable directly as an <img> src."""
    return "data:image/png;base64," + base64.b64encode(qr_png(data)).decode("ascii")
