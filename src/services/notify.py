"""
src/services/notify.py
──────────────────────
E-mail notification sent when a new inspection record is stored.

Delivery is best-effort: a missing SMTP configuration, an empty recipient
list or a transport error is logged and reported as False, and never
propagates to the caller that stored the record.
"""
from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from config.equipment import PHASE_LABELS
from config.settings import settings
from src.analytics.classifier import MeasurementKind, band_label, classify_optional
from src.analytics.metrics import (
    carbon_brush_status,
    compute_pi,
    display_metric,
    min_brush_measurement,
    temperature_summary,
    winding_dar,
)
from src.data.models import (
    CarbonBrushRecord,
    InspectionRecord,
    ThermographySession,
    WindingResistanceRecord,
)
from src.qr.codes import record_url
from src.services.export import build_spreadsheet, record_filename

logger = logging.getLogger(__name__)

XLSX_MIME = ("application", "vnd.openxmlformats-officedocument.spreadsheetml.sheet")


# ── Message content ───────────────────────────────────────────────────────────

def email_subject(record: InspectionRecord) -> str:
    if isinstance(record, CarbonBrushRecord):
        return f"New Carbon Brush Inspection - {record.tag_no}"
    if isinstance(record, WindingResistanceRecord):
        return f"New Winding Resistance Test - {record.tag_no}"
    return f"New Thermography Test - {record.tag_no}"


def _carbon_brush_summary(record: CarbonBrushRecord) -> list[str]:
    return [
        f"Brush type:          {record.brush_type}",
        f"Work order:          {record.work_order_no or '-'}",
        f"Minimum brush:       {display_metric(min_brush_measurement(record), 1)} mm",
        f"Slip ring IR:        {display_metric(record.slip_ring_ir)} GΩ",
        f"Status:              {carbon_brush_status(record)}",
    ]


def _winding_summary(record: WindingResistanceRecord) -> list[str]:
    pi = compute_pi(record.ir_values)
    lines = [
        f"Polarization index:  {display_metric(pi)} "
        f"({band_label(classify_optional(pi, MeasurementKind.POLARIZATION_INDEX))})",
    ]
    for phase, dar in winding_dar(record).items():
        lines.append(
            f"DAR {PHASE_LABELS[phase]}:             {display_metric(dar)} "
            f"({band_label(classify_optional(dar, MeasurementKind.DIELECTRIC_ABSORPTION))})"
        )
    return lines


def _thermography_summary(record: ThermographySession) -> list[str]:
    summary = temperature_summary(record)
    max_temp = display_metric(summary.stats.max if summary.stats else None, 1)
    return [
        f"Session type:        {record.session_kind.value.upper()}",
        f"Points measured:     {summary.total}",
        f"Max temperature:     {max_temp} °C",
        f"Warning / critical:  {summary.warning} / {summary.critical}",
        f"Overall:             {band_label(summary.worst)}",
    ]


def email_body(record: InspectionRecord) -> str:
    """Plain-text summary with the derived metrics of the record."""
    lines = [
        email_subject(record),
        "",
        f"Tag:                 {record.tag_no}",
        f"Equipment:           {record.equipment_name or '-'}",
        f"Inspection date:     {record.inspection_date.isoformat()}",
        f"Done by:             {record.done_by or '-'}",
    ]
    if isinstance(record, CarbonBrushRecord):
        lines += _carbon_brush_summary(record)
    elif isinstance(record, WindingResistanceRecord):
        lines += _winding_summary(record)
    else:
        lines += _thermography_summary(record)
    if record.remarks:
        lines += ["", f"Remarks: {record.remarks}"]
    if record.id is not None:
        lines += ["", f"View record: {record_url(record.kind, record.id)}"]
    lines += ["", "The full record is attached as an Excel workbook."]
    return "\n".join(lines)


def build_message(record: InspectionRecord, recipients: list[str]) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = email_subject(record)
    msg["From"] = settings.EMAIL_FROM
    msg["To"] = ", ".join(recipients)
    msg.set_content(email_body(record))
    maintype, subtype = XLSX_MIME
    msg.add_attachment(
        build_spreadsheet(record),
        maintype=maintype,
        subtype=subtype,
        filename=record_filename(record),
    )
    return msg


# ── Delivery ──────────────────────────────────────────────────────────────────

def send_record_created_email(record: InspectionRecord) -> bool:
    """
    Notify the recipients configured for the record's type.

    Returns True when the message was handed to the SMTP server, False when
    notification is not configured or delivery failed.
    """
    recipients = settings.recipients_for(record.kind.value)
    if not settings.smtp_configured or not recipients:
        logger.info("E-mail notification not configured; skipping %s for %s",
                    record.kind.value, record.tag_no)
        return False

    try:
        msg = build_message(record, recipients)
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as smtp:
            if settings.SMTP_USE_TLS:
                smtp.starttls()
            if settings.SMTP_USER:
                smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            smtp.send_message(msg)
    except Exception:
        # export, transport and auth failures alike; the record is already stored
        logger.exception("Failed to send %s notification for %s", record.kind.value, record.tag_no)
        return False

    logger.info("Sent %s notification for %s to %d recipient(s)",
                record.kind.value, record.tag_no, len(recipients))
    return True
