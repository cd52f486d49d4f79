"""
src/data/store.py
─────────────────
SQLite data store abstraction.

Provides:
  - initialize_db()      : Create tables (+ seed demo data on first run)
  - equipment CRUD       : list / get / get_by_tag / create / ensure / update / delete
  - record CRUD          : insert / get / list / update / delete / count
                           for carbon brush, winding resistance and thermography
  - get_inspection_log() : DataFrame of inspections for dashboard charts

Inspection records are stored as validated JSON payloads next to the columns
used for filtering (tag, inspection date, creation time).

Thread safety: uses check_same_thread=False + a module-level lock. Writes that
span several statements (find-or-create equipment, then insert the record)
are not transactional across calls: two first submissions of the same new tag
can both miss the lookup, and the second create then fails on the unique tag.
"""
from __future__ import annotations

import logging
import sqlite3
import threading
from datetime import UTC, date, datetime, timedelta

import pandas as pd

from config.settings import settings
from src.data.models import (
    RECORD_MODELS,
    Equipment,
    InspectionRecord,
    RecordKind,
    ThermographyKind,
)

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_DB: sqlite3.Connection | None = None


class StoreError(Exception):
    """Base class for persistence errors."""


class RecordNotFoundError(StoreError):
    def __init__(self, what: str, key: object) -> None:
        super().__init__(f"{what} {key!r} not found")
        self.what = what
        self.key = key


class DuplicateTagError(StoreError):
    def __init__(self, tag_no: str) -> None:
        super().__init__(f"equipment with tag {tag_no!r} already exists")
        self.tag_no = tag_no


# ── Connection ────────────────────────────────────────────────────────────────

def _get_conn() -> sqlite3.Connection:
    global _DB
    if _DB is None:
        _DB = sqlite3.connect(settings.DATABASE_URL, check_same_thread=False)
        _DB.row_factory = sqlite3.Row
        _DB.execute("PRAGMA foreign_keys = ON")
    return _DB


# ── Schema ────────────────────────────────────────────────────────────────────

_TABLES: dict[RecordKind, str] = {
    RecordKind.CARBON_BRUSH: "carbon_brush_records",
    RecordKind.WINDING_RESISTANCE: "winding_resistance_records",
    RecordKind.THERMOGRAPHY: "thermography_sessions",
}

_CREATE_EQUIPMENT = """
CREATE TABLE IF NOT EXISTS equipment (
    id                INTEGER PRIMARY KEY AUTOINCREMENT,
    tag_no            TEXT NOT NULL UNIQUE,
    equipment_name    TEXT NOT NULL DEFAULT '',
    equipment_type    TEXT NOT NULL DEFAULT 'Motor',
    location          TEXT,
    installation_date TEXT,
    created_at        TEXT NOT NULL
);
"""

_CREATE_RECORDS = """
CREATE TABLE IF NOT EXISTS {table} (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    tag_no          TEXT NOT NULL,
    session_kind    TEXT,
    inspection_date TEXT NOT NULL,
    created_at      TEXT NOT NULL,
    payload         TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_{table}_tag_date ON {table} (tag_no, inspection_date);
"""


def _create_tables(conn: sqlite3.Connection) -> None:
    script = _CREATE_EQUIPMENT + "".join(
        _CREATE_RECORDS.format(table=table) for table in _TABLES.values()
    )
    with conn:
        conn.executescript(script)


# ── Lifecycle ─────────────────────────────────────────────────────────────────

def initialize_db(force_reseed: bool = False, seed: bool | None = None) -> None:
    """
    Create tables and, if enabled, populate demo data when the DB is empty.
    Safe to call multiple times (idempotent). `force_reseed` wipes all rows first.
    """
    # Import here to avoid circular deps
    from src.data.seed import seed_database

    if seed is None:
        seed = settings.SEED_DEMO_DATA

    conn = _get_conn()
    _create_tables(conn)

    with _lock:
        if force_reseed:
            with conn:
                for table in _TABLES.values():
                    conn.execute(f"DELETE FROM {table}")
                conn.execute("DELETE FROM equipment")
            logger.info("Cleared all equipment and inspection records")

        count = conn.execute("SELECT COUNT(*) FROM equipment").fetchone()[0]
        if count > 0 or not seed:
            return

        seed_database()
        logger.info("Seeded demo equipment and inspection history")


def _now() -> str:
    return datetime.now(tz=UTC).isoformat()


# ── Equipment ─────────────────────────────────────────────────────────────────

def _row_to_equipment(row: sqlite3.Row) -> Equipment:
    return Equipment(
        id=row["id"],
        tag_no=row["tag_no"],
        equipment_name=row["equipment_name"],
        equipment_type=row["equipment_type"],
        location=row["location"],
        installation_date=row["installation_date"],
        created_at=row["created_at"],
    )


def list_equipment() -> list[Equipment]:
    conn = _get_conn()
    with _lock:
        rows = conn.execute("SELECT * FROM equipment ORDER BY tag_no ASC").fetchall()
    return [_row_to_equipment(r) for r in rows]


def get_equipment(equipment_id: int) -> Equipment | None:
    conn = _get_conn()
    with _lock:
        row = conn.execute("SELECT * FROM equipment WHERE id = ?", (equipment_id,)).fetchone()
    return _row_to_equipment(row) if row else None


def get_equipment_by_tag(tag_no: str) -> Equipment | None:
    conn = _get_conn()
    with _lock:
        row = conn.execute("SELECT * FROM equipment WHERE tag_no = ?", (tag_no.strip(),)).fetchone()
    return _row_to_equipment(row) if row else None


def create_equipment(equipment: Equipment) -> Equipment:
    """Insert new equipment. Raises DuplicateTagError if the tag is taken."""
    conn = _get_conn()
    created_at = _now()
    try:
        with _lock, conn:
            cur = conn.execute(
                """INSERT INTO equipment
                   (tag_no, equipment_name, equipment_type, location, installation_date, created_at)
                   VALUES (?,?,?,?,?,?)""",
                (
                    equipment.tag_no,
                    equipment.equipment_name or equipment.tag_no,
                    equipment.equipment_type,
                    equipment.location,
                    equipment.installation_date.isoformat() if equipment.installation_date else None,
                    created_at,
                ),
            )
    except sqlite3.IntegrityError as exc:
        raise DuplicateTagError(equipment.tag_no) from exc
    logger.info("Created equipment %s", equipment.tag_no)
    return equipment.model_copy(
        update={
            "id": cur.lastrowid,
            "equipment_name": equipment.equipment_name or equipment.tag_no,
            "created_at": datetime.fromisoformat(created_at),
        }
    )


def ensure_equipment(tag_no: str, equipment_name: str = "", equipment_type: str = "Motor") -> Equipment:
    """Find equipment by tag, creating it when it does not exist yet."""
    existing = get_equipment_by_tag(tag_no)
    if existing is not None:
        return existing
    return create_equipment(
        Equipment(tag_no=tag_no, equipment_name=equipment_name, equipment_type=equipment_type)
    )


def update_equipment(equipment: Equipment) -> Equipment:
    if equipment.id is None:
        raise RecordNotFoundError("equipment", None)
    conn = _get_conn()
    try:
        with _lock, conn:
            cur = conn.execute(
                """UPDATE equipment
                   SET tag_no = ?, equipment_name = ?, equipment_type = ?,
                       location = ?, installation_date = ?
                   WHERE id = ?""",
                (
                    equipment.tag_no,
                    equipment.equipment_name,
                    equipment.equipment_type,
                    equipment.location,
                    equipment.installation_date.isoformat() if equipment.installation_date else None,
                    equipment.id,
                ),
            )
    except sqlite3.IntegrityError as exc:
        raise DuplicateTagError(equipment.tag_no) from exc
    if cur.rowcount == 0:
        raise RecordNotFoundError("equipment", equipment.id)
    return equipment


def delete_equipment(equipment_id: int) -> None:
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute("DELETE FROM equipment WHERE id = ?", (equipment_id,))
    if cur.rowcount == 0:
        raise RecordNotFoundError("equipment", equipment_id)
    logger.info("Deleted equipment id=%s", equipment_id)


# ── Inspection records ────────────────────────────────────────────────────────

def _table_for(kind: RecordKind | str) -> str:
    return _TABLES[RecordKind(kind)]


def _row_to_record(kind: RecordKind, row: sqlite3.Row) -> InspectionRecord:
    model = RECORD_MODELS[kind]
    record = model.model_validate_json(row["payload"])
    return record.model_copy(
        update={"id": row["id"], "created_at": datetime.fromisoformat(row["created_at"])}
    )


def _payload(record: InspectionRecord) -> str:
    return record.model_dump_json(exclude={"id", "created_at"})


def insert_record(record: InspectionRecord) -> InspectionRecord:
    """Persist a validated record and return it with id and created_at set."""
    table = _table_for(record.kind)
    created_at = _now()
    session_kind = getattr(record, "session_kind", None)
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute(
            f"""INSERT INTO {table}
                (tag_no, session_kind, inspection_date, created_at, payload)
                VALUES (?,?,?,?,?)""",
            (
                record.tag_no,
                session_kind.value if session_kind else None,
                record.inspection_date.isoformat(),
                created_at,
                _payload(record),
            ),
        )
    logger.info("Stored %s record id=%s for %s", record.kind.value, cur.lastrowid, record.tag_no)
    return record.model_copy(
        update={"id": cur.lastrowid, "created_at": datetime.fromisoformat(created_at)}
    )


def get_record(kind: RecordKind | str, record_id: int) -> InspectionRecord | None:
    kind = RecordKind(kind)
    conn = _get_conn()
    with _lock:
        row = conn.execute(
            f"SELECT * FROM {_table_for(kind)} WHERE id = ?", (record_id,)
        ).fetchone()
    return _row_to_record(kind, row) if row else None


def get_records(
    kind: RecordKind | str,
    tag_no: str | None = None,
    session_kind: ThermographyKind | str | None = None,
    limit: int | None = None,
) -> list[InspectionRecord]:
    """Records of one kind, newest inspection first."""
    kind = RecordKind(kind)
    where: list[str] = []
    params: list = []
    if tag_no:
        where.append("tag_no = ?")
        params.append(tag_no)
    if session_kind:
        where.append("session_kind = ?")
        params.append(ThermographyKind(session_kind).value)

    sql = f"SELECT * FROM {_table_for(kind)}"
    if where:
        sql += f" WHERE {' AND '.join(where)}"
    sql += " ORDER BY inspection_date DESC, id DESC"
    if limit is not None:
        sql += " LIMIT ?"
        params.append(limit)

    conn = _get_conn()
    with _lock:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_record(kind, r) for r in rows]


def update_record(record: InspectionRecord) -> InspectionRecord:
    if record.id is None:
        raise RecordNotFoundError(record.kind.value, None)
    session_kind = getattr(record, "session_kind", None)
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute(
            f"""UPDATE {_table_for(record.kind)}
                SET tag_no = ?, session_kind = ?, inspection_date = ?, payload = ?
                WHERE id = ?""",
            (
                record.tag_no,
                session_kind.value if session_kind else None,
                record.inspection_date.isoformat(),
                _payload(record),
                record.id,
            ),
        )
    if cur.rowcount == 0:
        raise RecordNotFoundError(record.kind.value, record.id)
    return record


def delete_record(kind: RecordKind | str, record_id: int) -> None:
    kind = RecordKind(kind)
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute(f"DELETE FROM {_table_for(kind)} WHERE id = ?", (record_id,))
    if cur.rowcount == 0:
        raise RecordNotFoundError(kind.value, record_id)
    logger.info("Deleted %s record id=%s", kind.value, record_id)


def count_records(
    kind: RecordKind | str,
    tag_no: str | None = None,
    since: datetime | None = None,
) -> int:
    """Count records, optionally for one tag and/or created after `since`."""
    where = ["1 = 1"]
    params: list = []
    if tag_no:
        where.append("tag_no = ?")
        params.append(tag_no)
    if since is not None:
        where.append("created_at >= ?")
        params.append(since.isoformat())
    conn = _get_conn()
    with _lock:
        return conn.execute(
            f"SELECT COUNT(*) FROM {_table_for(kind)} WHERE {' AND '.join(where)}", params
        ).fetchone()[0]


def get_inspection_log(days: int = 365) -> pd.DataFrame:
    """All inspections in the last `days` days: kind, tag_no, inspection_date."""
    since = (date.today() - timedelta(days=days)).isoformat()
    union = " UNION ALL ".join(
        f"SELECT '{kind.value}' AS kind, tag_no, inspection_date FROM {table} "
        f"WHERE inspection_date >= :since"
        for kind, table in _TABLES.items()
    )
    conn = _get_conn()
    with _lock:
        df = pd.read_sql_query(
            f"SELECT * FROM ({union}) ORDER BY inspection_date ASC",
            conn,
            params={"since": since},
        )
    if not df.empty:
        df["inspection_date"] = pd.to_datetime(df["inspection_date"])
    return df
