"""
src/qr/resolver.py
──────────────────
Interpretation of decoded QR text.

A scanned code can carry one of three shapes, tried in this order:

  1. JSON equipment object  {"type": "equipment", "tagNo": ..., ...}
  2. URL whose path contains /equipment/<id-or-tag>
  3. anything else, taken as a bare tag number

Valid JSON that is not an equipment object (no "type"/"tagNo") is not
special-cased: it continues down the chain and, in practice, resolves to
nothing. Resolution never creates equipment.
"""
from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

from pydantic import ValidationError

from config.equipment import DEFAULT_EQUIPMENT_TYPE
from src.data.models import Equipment


@dataclass(frozen=True)
class EquipmentPayload:
    tag_no: str
    equipment_name: str = ""
    equipment_type: str = DEFAULT_EQUIPMENT_TYPE


@dataclass(frozen=True)
class UrlPayload:
    identifier: str


@dataclass(frozen=True)
class RawTag:
    text: str


QrPayload = EquipmentPayload | UrlPayload | RawTag


# ── Parse chain ───────────────────────────────────────────────────────────────

def _as_equipment_payload(raw: str) -> EquipmentPayload | None:
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict) or data.get("type") != "equipment":
        return None
    tag_no = str(data.get("tagNo") or "").strip()
    if not tag_no:
        return None
    return EquipmentPayload(
        tag_no=tag_no,
        equipment_name=str(data.get("equipmentName") or ""),
        equipment_type=str(data.get("equipmentType") or DEFAULT_EQUIPMENT_TYPE),
    )


def _as_url_payload(raw: str) -> UrlPayload | None:
    try:
        parsed = urlparse(raw.strip())
    except ValueError:
        return None
    # scheme-only text such as "tag:CF-01" is left to the raw-tag step
    if not parsed.scheme or not parsed.netloc:
        return None
    parts = parsed.path.split("/")
    if "equipment" not in parts:
        return None
    idx = parts.index("equipment") + 1
    if idx >= len(parts) or not parts[idx]:
        return None
    return UrlPayload(identifier=unquote(parts[idx]))


def parse_qr_payload(raw: str) -> QrPayload:
    """Classify decoded QR text into one of the three payload shapes."""
    return _as_equipment_payload(raw) or _as_url_payload(raw) or RawTag(text=raw)


# ── Resolution ────────────────────────────────────────────────────────────────

def _find_by_identifier(identifier: str, known: Iterable[Equipment]) -> Equipment | None:
    for eq in known:
        if (eq.id is not None and str(eq.id) == identifier) or eq.tag_no == identifier:
            return eq
    return None


def _find_by_tag(tag_no: str, known: Iterable[Equipment]) -> Equipment | None:
    for eq in known:
        if eq.tag_no == tag_no:
            return eq
    return None


def resolve_qr_payload(raw: str, known_equipment: Sequence[Equipment]) -> Equipment | None:
    """
    Resolve decoded QR text to an equipment reference.

    Self-describing JSON payloads resolve without a lookup (a matching
    catalog entry is preferred so the id is filled in). Returns None when the
    payload is not recognised; the caller decides whether to offer
    registering it as new equipment.
    """
    if raw is None:
        return None
    payload = parse_qr_payload(raw)

    if isinstance(payload, EquipmentPayload):
        known = _find_by_tag(payload.tag_no, known_equipment)
        if known is not None:
            return known
        try:
            return Equipment(
                tag_no=payload.tag_no,
                equipment_name=payload.equipment_name,
                equipment_type=payload.equipment_type,
            )
        except ValidationError:
            return None

    if isinstance(payload, UrlPayload):
        found = _find_by_identifier(payload.identifier, known_equipment)
        if found is not None:
            return found

    return _find_by_tag(raw, known_equipment)


def merge_known_identifiers(
    static_list: Iterable[str],
    dynamic_list: Iterable[str],
) -> list[str]:
    """Static identifiers first, then database ones; duplicates and blanks dropped."""
    seen: set[str] = set()
    merged: list[str] = []
    for ident in [*static_list, *dynamic_list]:
        if ident and ident not in seen:
            seen.add(ident)
            merged.append(ident)
    return merged
