"""
src/services/records.py
───────────────────────
Record submission and dashboard aggregates.

submit_record() is the single write path used by the forms: it makes sure the
equipment exists, stores the record and then sends the notification. The
notification result never affects the stored record.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from src.analytics.metrics import needs_attention
from src.data import store
from src.data.models import CarbonBrushRecord, InspectionRecord, RecordKind
from src.services.notify import send_record_created_email

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardStats:
    total_equipment: int
    carbon_brush_records: int
    winding_resistance_records: int
    thermography_records: int
    recent_inspections: int  # created in the last 30 days
    critical_equipment: int
    attention_tags: list[str]

    @property
    def total_records(self) -> int:
        return self.carbon_brush_records + self.winding_resistance_records + self.thermography_records


def submit_record(record: InspectionRecord, notify: bool = True) -> InspectionRecord:
    """Store a validated record; returns it with id and created_at filled in."""
    equipment_type = getattr(record, "equipment_type", "") or "Motor"
    store.ensure_equipment(record.tag_no, record.equipment_name, equipment_type)
    stored = store.insert_record(record)
    if notify:
        sent = send_record_created_email(stored)
        logger.debug("Notification for %s id=%s sent=%s", stored.kind.value, stored.id, sent)
    return stored


def latest_carbon_brush_by_tag() -> dict[str, CarbonBrushRecord]:
    latest: dict[str, CarbonBrushRecord] = {}
    # newest first, so the first record seen per tag is the latest
    for record in store.get_records(RecordKind.CARBON_BRUSH):
        latest.setdefault(record.tag_no, record)
    return latest


def dashboard_stats(now: datetime | None = None) -> DashboardStats:
    since = (now or datetime.now(tz=UTC)) - timedelta(days=30)
    attention = sorted(
        tag for tag, record in latest_carbon_brush_by_tag().items() if needs_attention(record)
    )
    return DashboardStats(
        total_equipment=len(store.list_equipment()),
        carbon_brush_records=store.count_records(RecordKind.CARBON_BRUSH),
        winding_resistance_records=store.count_records(RecordKind.WINDING_RESISTANCE),
        thermography_records=store.count_records(RecordKind.THERMOGRAPHY),
        recent_inspections=sum(store.count_records(kind, since=since) for kind in RecordKind),
        critical_equipment=len(attention),
        attention_tags=attention,
    )
