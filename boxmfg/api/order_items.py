# boxmfg/api/order_items.py

import logging

from fastapi import APIRouter
from sqlalchemy import func, select

from boxmfg.api.orders import build_items, load_items, refresh_order_total
from boxmfg.db.crud import fetch_one, get_or_404, new_id, utcnow
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import order_items, orders
from boxmfg.errors import NotFoundError
from boxmfg.models.common import DataResponse, DeletedResponse, ListResponse, supplied_fields
from boxmfg.models.orders import OrderItemIn, OrderItemOut, OrderItemUpdate
from boxmfg.services.derived import line_total

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["order items"])


def _row_to_item(row) -> OrderItemOut:
    return OrderItemOut.model_validate(dict(row))


@router.get("/orders/{order_id}/items", response_model=ListResponse[OrderItemOut])
def list_order_items(order_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        get_or_404(conn, orders, order_id, "Order")
        rows = load_items(conn, [order_id])[order_id]

    data = [_row_to_item(r) for r in rows]
    return {"success": True, "count": len(data), "data": data}


@router.post("/orders/{order_id}/items", response_model=DataResponse[OrderItemOut], status_code=201)
def add_order_item(order_id: str, payload: OrderItemIn):
    engine = get_engine()

    with engine.begin() as conn:
        get_or_404(conn, orders, order_id, "Order")
        item = build_items(conn, [payload.model_dump()])[0]

        last = conn.execute(
            select(func.max(order_items.c.position)).where(order_items.c.order_id == order_id)
        ).scalar()

        item_id = new_id()
        conn.execute(
            order_items.insert().values(
                id=item_id,
                order_id=order_id,
                position=0 if last is None else last + 1,
                product_id=item["product_id"],
                product_name=item["product_name"],
                quantity=item["quantity"],
                unit_price=item["unit_price"],
                total_price=item["total_price"],
                specifications=item["specifications"],
                created_at=utcnow(),
            )
        )
        refresh_order_total(conn, order_id)
        row = fetch_one(conn, order_items, item_id)

    logger.info("Added item %s to order %s", item_id, order_id)
    return {"success": True, "data": _row_to_item(row)}


@router.put("/order-items/{item_id}", response_model=DataResponse[OrderItemOut])
def update_order_item(item_id: str, payload: OrderItemUpdate):
    engine = get_engine()
    values = supplied_fields(payload)

    with engine.begin() as conn:
        existing = get_or_404(conn, order_items, item_id, "Order item")

        quantity = values.get("quantity", existing["quantity"])
        unit_price = values.get("unit_price", existing["unit_price"])
        values["total_price"] = line_total(quantity, unit_price)

        conn.execute(order_items.update().where(order_items.c.id == item_id).values(**values))
        refresh_order_total(conn, existing["order_id"])
        row = fetch_one(conn, order_items, item_id)

    return {"success": True, "data": _row_to_item(row)}


@router.delete("/order-items/{item_id}", response_model=DeletedResponse)
def delete_order_item(item_id: str):
    engine = get_engine()

    with engine.begin() as conn:
        existing = fetch_one(conn, order_items, item_id)
        if existing is None:
            raise NotFoundError("Order item")

        conn.execute(order_items.delete().where(order_items.c.id == item_id))
        if fetch_one(conn, orders, existing["order_id"]) is not None:
            refresh_order_total(conn, existing["order_id"])

    logger.info("Deleted item %s from order %s", item_id, existing["order_id"])
    return {"success": True, "data": {}, "message": "Order item deleted successfully"}
