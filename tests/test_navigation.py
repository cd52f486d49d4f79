"""
tests/test_navigation.py
─────────────────────────
Tests for URL routing and page layouts.
"""
from dash.development.base_component import Component

from src.callbacks.navigation import resolve_page
from src.data.models import Equipment


def _walk(node):
    if isinstance(node, (list, tuple)):
        for child in node:
            yield from _walk(child)
    elif isinstance(node, Component):
        yield node
        yield from _walk(getattr(node, "children", None))


def _ids(layout) -> set:
    return {c.id for c in _walk(layout) if isinstance(getattr(c, "id", None), str)}


def _text(layout) -> str:
    parts = []
    for c in _walk(layout):
        children = getattr(c, "children", None)
        if isinstance(children, str):
            parts.append(children)
    return " ".join(parts)


class TestRoutes:
    def test_dashboard(self, db):
        assert "dashboard-kpi-banner" in _ids(resolve_page("/"))
        assert "dashboard-kpi-banner" in _ids(resolve_page("/dashboard"))
        assert "dashboard-kpi-banner" in _ids(resolve_page(None))

    def test_record_pages(self, db):
        assert "cb-tag" in _ids(resolve_page("/carbon-brush"))
        assert "wr-tag" in _ids(resolve_page("/winding-resistance"))
        assert "th-table" in _ids(resolve_page("/thermography/"))

    def test_equipment_tag_prefill(self, db):
        layout = resolve_page("/equipment", "?tag=BO.3161.09.M1")
        field = next(c for c in _walk(layout) if getattr(c, "id", None) == "eq-new-tag")
        assert field.value == "BO.3161.09.M1"

    def test_equipment_without_query(self, db):
        layout = resolve_page("/equipment", "")
        field = next(c for c in _walk(layout) if getattr(c, "id", None) == "eq-new-tag")
        assert field.value == ""

    def test_unknown_path(self, db):
        assert "Page not found" in _text(resolve_page("/nowhere"))
        assert "Page not found" in _text(resolve_page("/carbon-brush/abc"))


class TestDetailPages:
    def test_missing_records(self, db):
        assert "Equipment not found" in _text(resolve_page("/equipment/99"))
        assert "Inspection not found" in _text(resolve_page("/carbon-brush/99"))
        assert "Test not found" in _text(resolve_page("/winding-resistance/99"))
        assert "Session not found" in _text(resolve_page("/thermography/99"))

    def test_equipment_detail(self, db, brush_record):
        eq = db.create_equipment(Equipment(tag_no=brush_record.tag_no, equipment_name="Induration Fan Motor"))
        db.insert_record(brush_record)
        layout = resolve_page(f"/equipment/{eq.id}")
        assert "eq-detail-id" in _ids(layout)
        assert "Induration Fan Motor" in _text(layout)

    def test_record_details(self, db, brush_record, winding_record, esp_session):
        b = db.insert_record(brush_record)
        w = db.insert_record(winding_record)
        t = db.insert_record(esp_session)
        assert "cb-detail-id" in _ids(resolve_page(f"/carbon-brush/{b.id}"))
        assert "wr-detail-id" in _ids(resolve_page(f"/winding-resistance/{w.id}"))
        assert "th-detail-id" in _ids(resolve_page(f"/thermography/{t.id}"))
