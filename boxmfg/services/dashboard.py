# boxmfg/services/dashboard.py
"""
Dashboard statistics.

Each figure comes from its own read-only query; none depends on another, so
they can run in any order. All of them share one connection, which gives the
dashboard a single consistent read. An empty table yields zeros and empty
lists, never a missing key.
"""

import calendar
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import case, extract, func, select
from sqlalchemy.engine import Connection

from boxmfg.db.crud import utcnow
from boxmfg.db.schema import clients, materials, orders, payments
from boxmfg.models.orders import PENDING_ORDER_STATUSES

RECENT_LIMIT = 5
REVENUE_MONTHS = 6
UNKNOWN_CLIENT = "Unknown Client"


def _count_if(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


def order_counts(conn: Connection) -> Dict[str, int]:
    row = conn.execute(
        select(
            func.count().label("total_orders"),
            _count_if(orders.c.status.in_(PENDING_ORDER_STATUSES)).label("pending_orders"),
            _count_if(orders.c.status == "Completed").label("completed_orders"),
        ).select_from(orders)
    ).mappings().one()
    return {k: int(v or 0) for k, v in row.items()}


def client_counts(conn: Connection) -> Dict[str, int]:
    row = conn.execute(
        select(
            func.count().label("total_clients"),
            _count_if(clients.c.status == "active").label("active_clients"),
        ).select_from(clients)
    ).mappings().one()
    return {k: int(v or 0) for k, v in row.items()}


def material_counts(conn: Connection) -> Dict[str, int]:
    row = conn.execute(
        select(
            func.count().label("total_materials"),
            _count_if(materials.c.current_stock <= materials.c.low_stock_threshold).label("low_stock_materials"),
        ).select_from(materials)
    ).mappings().one()
    return {k: int(v or 0) for k, v in row.items()}


def payment_totals(conn: Connection) -> Dict[str, Any]:
    # Revenue counts every payment, whatever its status
    row = conn.execute(
        select(
            func.coalesce(func.sum(payments.c.amount), 0).label("total_revenue"),
            _count_if(payments.c.status == "Pending").label("pending_payments"),
        ).select_from(payments)
    ).mappings().one()
    return {
        "total_revenue": Decimal(str(row["total_revenue"] or 0)),
        "pending_payments": int(row["pending_payments"] or 0),
    }


def recent_orders(conn: Connection, limit: int = RECENT_LIMIT) -> List[Dict[str, Any]]:
    stmt = (
        select(
            orders.c.id,
            orders.c.client_id,
            func.coalesce(clients.c.name, UNKNOWN_CLIENT).label("client_name"),
            orders.c.order_date,
            orders.c.delivery_date,
            orders.c.status,
            orders.c.priority,
            orders.c.total_amount,
            orders.c.created_at,
        )
        .select_from(orders.outerjoin(clients, clients.c.id == orders.c.client_id))
        .order_by(orders.c.created_at.desc(), orders.c.id.desc())
        .limit(limit)
    )
    return [dict(row) for row in conn.execute(stmt).mappings().all()]


def recent_payments(conn: Connection, limit: int = RECENT_LIMIT) -> List[Dict[str, Any]]:
    stmt = (
        select(
            payments.c.id,
            payments.c.payment_number,
            payments.c.client_id,
            func.coalesce(clients.c.name, UNKNOWN_CLIENT).label("client_name"),
            payments.c.amount,
            payments.c.date,
            payments.c.payment_method,
            payments.c.status,
            payments.c.created_at,
        )
        .select_from(payments.outerjoin(clients, clients.c.id == payments.c.client_id))
        .order_by(payments.c.created_at.desc(), payments.c.id.desc())
        .limit(limit)
    )
    return [dict(row) for row in conn.execute(stmt).mappings().all()]


def low_stock_items(conn: Connection) -> List[Dict[str, Any]]:
    stmt = (
        select(
            materials.c.id,
            materials.c.name,
            materials.c.current_stock,
            materials.c.low_stock_threshold,
            materials.c.unit,
        )
        .where(materials.c.current_stock <= materials.c.low_stock_threshold)
        .order_by(materials.c.current_stock.asc(), materials.c.name.asc())
    )
    return [dict(row) for row in conn.execute(stmt).mappings().all()]


def revenue_window_start(now: datetime, months: int = REVENUE_MONTHS) -> datetime:
    """First day of the month (months - 1) months before `now`."""
    index = now.year * 12 + (now.month - 1) - (months - 1)
    return datetime(index // 12, index % 12 + 1, 1)


def monthly_revenue(conn: Connection, now: datetime) -> List[Dict[str, Any]]:
    year = extract("year", orders.c.order_date)
    month = extract("month", orders.c.order_date)
    stmt = (
        select(
            year.label("year"),
            month.label("month"),
            func.coalesce(func.sum(orders.c.total_amount), 0).label("revenue"),
        )
        .where(orders.c.order_date >= revenue_window_start(now))
        .group_by(year, month)
        .order_by(year.asc(), month.asc())
    )

    buckets = []
    for row in conn.execute(stmt).mappings().all():
        buckets.append(
            {
                "year": int(row["year"]),
                "month": calendar.month_abbr[int(row["month"])],
                "revenue": Decimal(str(row["revenue"] or 0)),
            }
        )
    return buckets


def get_stats(conn: Connection, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or utcnow()

    stats: Dict[str, Any] = {}
    stats.update(order_counts(conn))
    stats.update(client_counts(conn))
    stats.update(material_counts(conn))
    stats.update(payment_totals(conn))
    stats["recent_orders"] = recent_orders(conn)
    stats["recent_payments"] = recent_payments(conn)
    stats["low_stock_items"] = low_stock_items(conn)
    stats["monthly_revenue"] = monthly_revenue(conn, now)
    return stats
