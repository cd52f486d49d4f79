"""
tests/test_notify.py
─────────────────────
Tests for the record-created e-mail notification.
"""
import smtplib

import pytest

from config.settings import settings
from src.services import notify
from src.services.notify import build_message, email_body, email_subject, send_record_created_email


class FakeSMTP:
    """Records what would have been sent instead of opening a connection."""
    sent: list = []
    fail_with: Exception | None = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = user

    def send_message(self, msg):
        if FakeSMTP.fail_with is not None:
            raise FakeSMTP.fail_with
        FakeSMTP.sent.append((self, msg))


@pytest.fixture
def smtp(monkeypatch):
    FakeSMTP.sent = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(settings, "SMTP_HOST", "smtp.plant.example")
    monkeypatch.setattr(settings, "SMTP_USER", "tracker")
    monkeypatch.setattr(settings, "EMAIL_RECIPIENTS", ["maintenance@plant.example"])
    monkeypatch.setattr(settings, "EMAIL_RECIPIENTS_BY_KIND", {
        "carbon-brush": [],
        "winding-resistance": ["electrical@plant.example", "planner@plant.example"],
        "thermography": [],
    })
    return FakeSMTP


class TestContent:
    def test_subjects(self, brush_record, winding_record, esp_session):
        assert email_subject(brush_record) == "New Carbon Brush Inspection - BO.3161.04.M1"
        assert email_subject(winding_record) == "New Winding Resistance Test - BO.3161.05.M1"
        assert email_subject(esp_session) == "New Thermography Test - ESP-01"

    def test_carbon_brush_body(self, brush_record):
        body = email_body(brush_record)
        assert "28.5 mm" in body
        assert "Monitor" in body
        assert "WO-2406-101" in body

    def test_winding_body_has_derived_metrics(self, winding_record):
        body = email_body(winding_record)
        assert "Polarization index:  2.75 (Good)" in body
        assert "1.50" in body
        assert "N/A" in body  # W-G DAR not measured

    def test_thermography_body(self, esp_session):
        body = email_body(esp_session)
        assert "ESP" in body
        assert "91.0 °C" in body

    def test_link_only_for_stored_records(self, brush_record):
        assert "View record" not in email_body(brush_record)
        stored = brush_record.model_copy(update={"id": 12})
        assert "/carbon-brush/12" in email_body(stored)

    def test_attachment(self, brush_record):
        msg = build_message(brush_record, ["a@plant.example", "b@plant.example"])
        assert msg["To"] == "a@plant.example, b@plant.example"
        attachments = list(msg.iter_attachments())
        assert len(attachments) == 1
        assert attachments[0].get_filename().startswith("carbon-brush-BO.3161.04.M1-")
        assert attachments[0].get_content().startswith(b"PK")  # xlsx is a zip


class TestDelivery:
    def test_not_configured(self, brush_record, monkeypatch):
        monkeypatch.setattr(settings, "SMTP_HOST", "")
        assert send_record_created_email(brush_record) is False

    def test_no_recipients(self, smtp, brush_record, monkeypatch):
        monkeypatch.setattr(settings, "EMAIL_RECIPIENTS", [])
        assert send_record_created_email(brush_record) is False
        assert smtp.sent == []

    def test_sends_to_default_recipients(self, smtp, brush_record):
        assert send_record_created_email(brush_record) is True
        conn, msg = smtp.sent[0]
        assert conn.host == "smtp.plant.example"
        assert conn.started_tls
        assert conn.logged_in == "tracker"
        assert msg["To"] == "maintenance@plant.example"

    def test_per_kind_recipients(self, smtp, winding_record):
        assert send_record_created_email(winding_record) is True
        _, msg = smtp.sent[0]
        assert msg["To"] == "electrical@plant.example, planner@plant.example"

    def test_transport_error_returns_false(self, smtp, esp_session):
        smtp.fail_with = smtplib.SMTPException("relay refused")
        assert send_record_created_email(esp_session) is False

    def test_connection_error_returns_false(self, smtp, esp_session):
        smtp.fail_with = ConnectionRefusedError()
        assert send_record_created_email(esp_session) is False

    def test_attachment_error_returns_false(self, smtp, brush_record, monkeypatch):
        def broken(_record):
            raise ValueError("cannot write workbook")

        monkeypatch.setattr(notify, "build_spreadsheet", broken)
        assert send_record_created_email(brush_record) is False
        assert smtp.sent == []
