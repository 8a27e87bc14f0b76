# boxmfg/db/crud.py

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import Table, func, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from boxmfg.errors import NotFoundError, ValidationError
from boxmfg.pagination import ListParams, PageWindow, compute_window, order_by_clauses

logger = logging.getLogger(__name__)

# Unique columns, with the wire name used in duplicate-key messages
UNIQUE_FIELDS = {
    "email": "email",
    "invoice_number": "invoiceNumber",
    "payment_number": "paymentNumber",
    "shipment_number": "shipmentNumber",
}


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Naive UTC, matching what DateTime columns hand back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def fetch_one(conn: Connection, table: Table, row_id: Optional[str]) -> Optional[Mapping[str, Any]]:
    if not row_id:
        return None
    return conn.execute(select(table).where(table.c.id == row_id)).mappings().first()


def get_or_404(conn: Connection, table: Table, row_id: str, resource: str) -> Mapping[str, Any]:
    row = fetch_one(conn, table, row_id)
    if row is None:
        raise NotFoundError(resource)
    return row


def _raise_duplicate(exc: IntegrityError) -> None:
    text = str(exc.orig).lower()
    for column, field in UNIQUE_FIELDS.items():
        if column in text:
            raise ValidationError.from_messages([f"{field} already exists"]) from exc
    raise ValidationError.from_messages([str(exc.orig)]) from exc


def insert_row(conn: Connection, table: Table, values: Dict[str, Any]) -> Mapping[str, Any]:
    now = utcnow()
    row = dict(values)
    row.setdefault("id", new_id())
    if "created_at" in table.c:
        row.setdefault("created_at", now)
    if "updated_at" in table.c:
        row["updated_at"] = now

    try:
        conn.execute(table.insert().values(**row))
    except IntegrityError as exc:
        _raise_duplicate(exc)

    return fetch_one(conn, table, row["id"])


def update_row(conn: Connection, table: Table, row_id: str, values: Dict[str, Any]) -> Mapping[str, Any]:
    values = dict(values)
    if "updated_at" in table.c:
        values["updated_at"] = utcnow()

    if values:
        try:
            conn.execute(table.update().where(table.c.id == row_id).values(**values))
        except IntegrityError as exc:
            _raise_duplicate(exc)

    return fetch_one(conn, table, row_id)


def delete_row(conn: Connection, table: Table, row_id: str) -> bool:
    result = conn.execute(table.delete().where(table.c.id == row_id))
    return result.rowcount > 0


def list_page(
    conn: Connection,
    table: Table,
    params: ListParams,
    where: Sequence = (),
) -> Tuple[List[Mapping[str, Any]], PageWindow]:
    """Count, compute the window, then fetch one sorted page."""
    count_stmt = select(func.count()).select_from(table)
    for clause in where:
        count_stmt = count_stmt.where(clause)
    total = conn.execute(count_stmt).scalar_one()

    window = compute_window(params.page, params.limit, total)

    stmt = select(table)
    for clause in where:
        stmt = stmt.where(clause)
    stmt = (
        stmt.order_by(*order_by_clauses(table, params.sort))
        .limit(window.page_size)
        .offset(window.skip)
    )
    rows = conn.execute(stmt).mappings().all()
    return rows, window


def list_all(conn: Connection, table: Table, where: Sequence = (), order_by: Sequence = ()) -> List[Mapping[str, Any]]:
    stmt = select(table)
    for clause in where:
        stmt = stmt.where(clause)
    if order_by:
        stmt = stmt.order_by(*order_by)
    return conn.execute(stmt).mappings().all()
