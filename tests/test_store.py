"""
tests/test_store.py
────────────────────
Tests for the SQLite store (in-memory database).
"""
import json
from datetime import UTC, date, datetime, timedelta

import pytest

from src.data.models import Equipment, RecordKind, ThermographyKind


class TestEquipment:
    def test_create_and_get(self, db):
        created = db.create_equipment(Equipment(tag_no="CF-01", equipment_name="Primary Cooler Fan",
                                                equipment_type="Cooler Fan", location="Cooling Section",
                                                installation_date=date(2020, 3, 1)))
        assert created.id is not None
        assert created.created_at is not None
        fetched = db.get_equipment(created.id)
        assert fetched.tag_no == "CF-01"
        assert fetched.installation_date == date(2020, 3, 1)
        assert db.get_equipment_by_tag("CF-01").id == created.id

    def test_name_defaults_to_tag(self, db):
        assert db.create_equipment(Equipment(tag_no="M-7")).equipment_name == "M-7"

    def test_duplicate_tag(self, db):
        db.create_equipment(Equipment(tag_no="M-7"))
        with pytest.raises(db.DuplicateTagError):
            db.create_equipment(Equipment(tag_no="M-7"))

    def test_missing(self, db):
        assert db.get_equipment(999) is None
        assert db.get_equipment_by_tag("NOPE") is None

    def test_list_sorted_by_tag(self, db):
        for tag in ("M-3", "A-1", "K-2"):
            db.create_equipment(Equipment(tag_no=tag))
        assert [eq.tag_no for eq in db.list_equipment()] == ["A-1", "K-2", "M-3"]

    def test_ensure_is_find_or_create(self, db):
        first = db.ensure_equipment("LRS-05", "Starter 5", "Liquid Resistor Starter")
        second = db.ensure_equipment("LRS-05", "Other name")
        assert first.id == second.id
        assert second.equipment_name == "Starter 5"
        assert len(db.list_equipment()) == 1

    def test_update(self, db):
        eq = db.create_equipment(Equipment(tag_no="M-1"))
        db.update_equipment(eq.model_copy(update={"location": "Kiln"}))
        assert db.get_equipment(eq.id).location == "Kiln"

    def test_update_to_taken_tag(self, db):
        db.create_equipment(Equipment(tag_no="M-1"))
        other = db.create_equipment(Equipment(tag_no="M-2"))
        with pytest.raises(db.DuplicateTagError):
            db.update_equipment(other.model_copy(update={"tag_no": "M-1"}))

    def test_update_unsaved(self, db):
        with pytest.raises(db.RecordNotFoundError):
            db.update_equipment(Equipment(tag_no="M-1"))

    def test_delete(self, db):
        eq = db.create_equipment(Equipment(tag_no="M-1"))
        db.delete_equipment(eq.id)
        assert db.get_equipment(eq.id) is None
        with pytest.raises(db.RecordNotFoundError):
            db.delete_equipment(eq.id)


class TestRecords:
    def test_insert_and_get(self, db, brush_record):
        stored = db.insert_record(brush_record)
        assert stored.id is not None
        fetched = db.get_record(RecordKind.CARBON_BRUSH, stored.id)
        assert fetched.measurements == brush_record.measurements
        assert fetched.slip_ring_ir == 4.1
        assert fetched.created_at is not None

    def test_each_kind_has_own_table(self, db, brush_record, winding_record, esp_session):
        b = db.insert_record(brush_record)
        w = db.insert_record(winding_record)
        t = db.insert_record(esp_session)
        assert db.get_record(RecordKind.WINDING_RESISTANCE, w.id).ir_values == winding_record.ir_values
        assert db.get_record(RecordKind.THERMOGRAPHY, t.id).points == esp_session.points
        assert db.get_record("carbon-brush", b.id).tag_no == brush_record.tag_no

    def test_missing_record(self, db):
        assert db.get_record(RecordKind.THERMOGRAPHY, 12345) is None

    def test_newest_inspection_first(self, db, brush_record, today):
        for days_ago in (60, 0, 30):
            db.insert_record(brush_record.model_copy(update={"inspection_date": today - timedelta(days=days_ago)}))
        dates = [r.inspection_date for r in db.get_records(RecordKind.CARBON_BRUSH)]
        assert dates == sorted(dates, reverse=True)

    def test_filter_by_tag_and_limit(self, db, brush_record):
        db.insert_record(brush_record)
        db.insert_record(brush_record)
        db.insert_record(brush_record.model_copy(update={"tag_no": "OTHER"}))
        assert len(db.get_records(RecordKind.CARBON_BRUSH, tag_no="OTHER")) == 1
        assert len(db.get_records(RecordKind.CARBON_BRUSH, tag_no=brush_record.tag_no)) == 2
        assert len(db.get_records(RecordKind.CARBON_BRUSH, limit=1)) == 1

    def test_filter_by_session_kind(self, db, esp_session):
        db.insert_record(esp_session)
        db.insert_record(esp_session.model_copy(update={"session_kind": ThermographyKind.LRS, "tag_no": "LRS-01"}))
        lrs = db.get_records(RecordKind.THERMOGRAPHY, session_kind="lrs")
        assert [s.tag_no for s in lrs] == ["LRS-01"]

    def test_update_record(self, db, brush_record):
        stored = db.insert_record(brush_record)
        db.update_record(stored.model_copy(update={"remarks": "Brushes replaced"}))
        assert db.get_record(RecordKind.CARBON_BRUSH, stored.id).remarks == "Brushes replaced"

    def test_update_unsaved_record(self, db, brush_record):
        with pytest.raises(db.RecordNotFoundError):
            db.update_record(brush_record)

    def test_delete_record(self, db, winding_record):
        stored = db.insert_record(winding_record)
        db.delete_record(RecordKind.WINDING_RESISTANCE, stored.id)
        assert db.get_record(RecordKind.WINDING_RESISTANCE, stored.id) is None
        with pytest.raises(db.RecordNotFoundError):
            db.delete_record(RecordKind.WINDING_RESISTANCE, stored.id)

    def test_derived_values_not_stored(self, db, winding_record):
        stored = db.insert_record(winding_record)
        conn = db._get_conn()
        payload = json.loads(conn.execute(
            "SELECT payload FROM winding_resistance_records WHERE id = ?", (stored.id,)
        ).fetchone()[0])
        assert "pi" not in payload
        assert "id" not in payload


class TestCounts:
    def test_count_by_tag(self, db, brush_record):
        db.insert_record(brush_record)
        db.insert_record(brush_record.model_copy(update={"tag_no": "OTHER"}))
        assert db.count_records(RecordKind.CARBON_BRUSH) == 2
        assert db.count_records(RecordKind.CARBON_BRUSH, tag_no="OTHER") == 1

    def test_count_since_uses_creation_time(self, db, brush_record):
        db.insert_record(brush_record)
        now = datetime.now(tz=UTC)
        assert db.count_records(RecordKind.CARBON_BRUSH, since=now - timedelta(days=30)) == 1
        assert db.count_records(RecordKind.CARBON_BRUSH, since=now + timedelta(days=1)) == 0


class TestInspectionLog:
    def test_union_of_all_kinds(self, db, brush_record, winding_record, esp_session):
        recent = date.today() - timedelta(days=5)
        db.insert_record(brush_record.model_copy(update={"inspection_date": recent}))
        db.insert_record(winding_record.model_copy(update={"inspection_date": recent}))
        db.insert_record(esp_session.model_copy(update={"inspection_date": recent}))
        db.insert_record(esp_session.model_copy(update={"inspection_date": recent - timedelta(days=400)}))
        df = db.get_inspection_log(days=365)
        assert len(df) == 3
        assert set(df["kind"]) == {k.value for k in RecordKind}
        assert str(df["inspection_date"].dtype).startswith("datetime64")

    def test_empty(self, db):
        assert db.get_inspection_log().empty


class TestInitialize:
    def test_idempotent(self, db):
        db.create_equipment(Equipment(tag_no="M-1"))
        db.initialize_db(seed=False)
        assert len(db.list_equipment()) == 1

    def test_force_reseed_clears(self, db, brush_record):
        db.create_equipment(Equipment(tag_no="M-1"))
        db.insert_record(brush_record)
        db.initialize_db(force_reseed=True, seed=False)
        assert db.list_equipment() == []
        assert db.count_records(RecordKind.CARBON_BRUSH) == 0

    def test_seeds_empty_database(self, db):
        db.initialize_db(seed=True)
        assert len(db.list_equipment()) == 12
        assert db.count_records(RecordKind.CARBON_BRUSH) > 0
