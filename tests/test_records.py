"""
tests/test_records.py
──────────────────────
Tests for record submission and dashboard aggregates.
"""
from datetime import UTC, datetime, timedelta

from config.settings import settings
from src.data.models import Equipment, RecordKind
from src.services import notify, records
from src.services.records import dashboard_stats, latest_carbon_brush_by_tag, submit_record


class TestSubmitRecord:
    def test_creates_equipment_and_stores(self, db, esp_session):
        stored = submit_record(esp_session)
        assert stored.id is not None
        assert stored.created_at is not None
        eq = db.get_equipment_by_tag("ESP-01")
        assert eq.equipment_name == "ESP MCC Panel 1"
        assert eq.equipment_type == "ESP - MCC Panel"
        assert db.get_record(RecordKind.THERMOGRAPHY, stored.id).points == esp_session.points

    def test_existing_equipment_untouched(self, db, brush_record):
        db.create_equipment(Equipment(tag_no=brush_record.tag_no, equipment_name="Catalog name"))
        submit_record(brush_record)
        assert db.get_equipment_by_tag(brush_record.tag_no).equipment_name == "Catalog name"
        assert len(db.list_equipment()) == 1

    def test_carbon_brush_equipment_defaults_to_motor(self, db, brush_record):
        submit_record(brush_record)
        assert db.get_equipment_by_tag(brush_record.tag_no).equipment_type == "Motor"

    def test_notifies_with_stored_record(self, db, winding_record, monkeypatch):
        sent = []
        monkeypatch.setattr(records, "send_record_created_email", lambda r: sent.append(r) or True)
        stored = submit_record(winding_record)
        assert [r.id for r in sent] == [stored.id]

    def test_failed_notification_keeps_record(self, db, winding_record, monkeypatch):
        monkeypatch.setattr(records, "send_record_created_email", lambda r: False)
        stored = submit_record(winding_record)
        assert db.get_record(RecordKind.WINDING_RESISTANCE, stored.id) is not None

    def test_notify_disabled(self, db, brush_record, monkeypatch):
        sent = []
        monkeypatch.setattr(records, "send_record_created_email", lambda r: sent.append(r) or True)
        submit_record(brush_record, notify=False)
        assert sent == []


class TestDashboard:
    def test_latest_per_tag(self, db, brush_record):
        older = brush_record.model_copy(update={
            "inspection_date": brush_record.inspection_date - timedelta(days=30),
            "measurements": {"1A_inner": 45.0},
        })
        db.insert_record(older)
        db.insert_record(brush_record)
        latest = latest_carbon_brush_by_tag()
        assert latest[brush_record.tag_no].inspection_date == brush_record.inspection_date

    def test_stats(self, db, brush_record, winding_record, esp_session):
        db.create_equipment(Equipment(tag_no="CF-01"))
        submit_record(brush_record, notify=False)  # min 28.5 mm, needs attention
        submit_record(brush_record.model_copy(update={
            "tag_no": "BO.3161.06.M1", "measurements": {"1A_inner": 41.0}, "slip_ring_ir": 1.2,
        }), notify=False)  # IR below limit
        submit_record(brush_record.model_copy(update={
            "tag_no": "BO.3161.07.M1", "measurements": {"1A_inner": 41.0}, "slip_ring_ir": 5.0,
        }), notify=False)
        submit_record(winding_record, notify=False)
        submit_record(esp_session, notify=False)

        stats = dashboard_stats()
        assert stats.total_equipment == 6
        assert stats.carbon_brush_records == 3
        assert stats.winding_resistance_records == 1
        assert stats.thermography_records == 1
        assert stats.total_records == 5
        assert stats.recent_inspections == 5
        assert stats.attention_tags == ["BO.3161.04.M1", "BO.3161.06.M1"]
        assert stats.critical_equipment == 2

    def test_recent_window(self, db, brush_record):
        submit_record(brush_record, notify=False)
        later = datetime.now(tz=UTC) + timedelta(days=31)
        assert dashboard_stats(now=later).recent_inspections == 0

    def test_empty(self, db):
        stats = dashboard_stats()
        assert stats.total_records == 0
        assert stats.attention_tags == []


class TestSubmitWithBrokenMail:
    def test_attachment_failure_does_not_fail_submit(self, db, brush_record, monkeypatch):
        def broken(_record):
            raise ValueError("cannot write workbook")

        monkeypatch.setattr(settings, "SMTP_HOST", "smtp.plant.example")
        monkeypatch.setattr(settings, "EMAIL_RECIPIENTS", ["maintenance@plant.example"])
        monkeypatch.setattr(notify, "build_spreadsheet", broken)
        stored = submit_record(brush_record)
        assert db.get_record(RecordKind.CARBON_BRUSH, stored.id) is not None
