# boxmfg/api/orders.py

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Sequence

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.engine import Connection

from boxmfg.db.crud import (
    delete_row,
    get_or_404,
    insert_row,
    list_page,
    new_id,
    update_row,
    utcnow,
)
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import order_items, orders
from boxmfg.errors import NotFoundError
from boxmfg.models.common import DataResponse, DeletedResponse, PageResponse, supplied_fields
from boxmfg.models.orders import OrderCreate, OrderItemOut, OrderOut, OrderUpdate
from boxmfg.pagination import ListParams, list_params, paginated_response
from boxmfg.services.derived import ZERO, order_total, price_items
from boxmfg.services.references import ORDER_REFS, PRODUCT, resolve_lines, resolve_references

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


# ---- Line items ----

def load_items(conn: Connection, order_ids: Sequence[str]) -> Dict[str, List[Mapping[str, Any]]]:
    by_order: Dict[str, List[Mapping[str, Any]]] = defaultdict(list)
    if not order_ids:
        return by_order

    stmt = (
        select(order_items)
        .where(order_items.c.order_id.in_(list(order_ids)))
        .order_by(order_items.c.order_id, order_items.c.position)
    )
    for row in conn.execute(stmt).mappings().all():
        by_order[row["order_id"]].append(row)
    return by_order


def build_items(conn: Connection, items: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Check every productId, snapshot product names and price each line."""
    products = resolve_lines(conn, items, PRODUCT, "items")
    lines = []
    for item, product in zip(items, products):
        line = dict(item)
        line["product_name"] = product["name"]
        lines.append(line)
    return price_items(lines)


def replace_items(conn: Connection, order_id: str, items: Sequence[Mapping[str, Any]]) -> None:
    conn.execute(order_items.delete().where(order_items.c.order_id == order_id))
    now = utcnow()
    for position, item in enumerate(items):
        conn.execute(
            order_items.insert().values(
                id=new_id(),
                order_id=order_id,
                position=position,
                product_id=item["product_id"],
                product_name=item["product_name"],
                quantity=item["quantity"],
                unit_price=item["unit_price"],
                total_price=item["total_price"],
                specifications=item.get("specifications") or "",
                created_at=now,
            )
        )


def refresh_order_total(conn: Connection, order_id: str) -> None:
    order = get_or_404(conn, orders, order_id, "Order")
    items = load_items(conn, [order_id])[order_id]
    update_row(conn, orders, order_id, {"total_amount": order_total(items, order["total_amount"])})


def attach_items(conn: Connection, rows: Sequence[Mapping[str, Any]]) -> List[OrderOut]:
    items = load_items(conn, [r["id"] for r in rows])
    return [_row_to_order(row, items[row["id"]]) for row in rows]


def _row_to_order(row, items) -> OrderOut:
    data = dict(row)
    data["items"] = [OrderItemOut.model_validate(dict(i)) for i in items]
    return OrderOut.model_validate(data)


def _load_order(conn: Connection, order_id: str) -> OrderOut:
    row = get_or_404(conn, orders, order_id, "Order")
    return attach_items(conn, [row])[0]


# ---- Routes ----

@router.get("", response_model=PageResponse[OrderOut])
def list_orders(params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        rows, window = list_page(conn, orders, params)
        data = attach_items(conn, rows)

    return paginated_response(data, window)


@router.get("/{order_id}", response_model=DataResponse[OrderOut])
def get_order(order_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        order = _load_order(conn, order_id)

    return {"success": True, "data": order}


@router.post("", response_model=DataResponse[OrderOut], status_code=201)
def create_order(payload: OrderCreate):
    engine = get_engine()
    values = payload.model_dump(exclude={"items", "total_amount"})
    requested_items = [item.model_dump() for item in payload.items]

    with engine.begin() as conn:
        client = resolve_references(conn, values, ORDER_REFS)["client_id"]
        items = build_items(conn, requested_items)

        values["client_name"] = client["name"]
        values["order_date"] = values["order_date"] or utcnow()
        values["total_amount"] = order_total(items, payload.total_amount or ZERO)

        row = insert_row(conn, orders, values)
        replace_items(conn, row["id"], items)
        order = _load_order(conn, row["id"])

    logger.info("Created order %s for client %s (%d items)", order.id, order.client_id, len(order.items))
    return {"success": True, "data": order}


@router.put("/{order_id}", response_model=DataResponse[OrderOut])
def update_order(order_id: str, payload: OrderUpdate):
    engine = get_engine()
    values = supplied_fields(payload)
    requested_items = values.pop("items", None)
    requested_total = values.pop("total_amount", None)

    with engine.begin() as conn:
        existing = get_or_404(conn, orders, order_id, "Order")

        resolved = resolve_references(conn, values, ORDER_REFS)
        if "client_id" in resolved:
            values["client_name"] = resolved["client_id"]["name"]

        if requested_items is not None:
            items = build_items(conn, requested_items)
            replace_items(conn, order_id, items)
        else:
            items = load_items(conn, [order_id])[order_id]

        current = requested_total if requested_total is not None else Decimal(existing["total_amount"])
        values["total_amount"] = order_total(items, current)

        update_row(conn, orders, order_id, values)
        order = _load_order(conn, order_id)

    return {"success": True, "data": order}


@router.delete("/{order_id}", response_model=DeletedResponse)
def delete_order(order_id: str):
    engine = get_engine()

    with engine.begin() as conn:
        if not delete_row(conn, orders, order_id):
            raise NotFoundError("Order")
        # Items go with their order; invoices and shipments keep their orderId
        conn.execute(order_items.delete().where(order_items.c.order_id == order_id))

    logger.info("Deleted order %s", order_id)
    return {"success": True, "data": {}, "message": "Order deleted successfully"}
