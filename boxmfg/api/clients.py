# boxmfg/api/clients.py

import logging

from fastapi import APIRouter, Depends

from boxmfg.api.orders import attach_items
from boxmfg.db.crud import delete_row, get_or_404, insert_row, list_all, list_page, update_row
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import branches, clients, orders, payments
from boxmfg.errors import NotFoundError
from boxmfg.models.branches import BranchOut
from boxmfg.models.clients import ClientCreate, ClientOut, ClientUpdate
from boxmfg.models.common import (
    DataResponse,
    DeletedResponse,
    ListResponse,
    PageResponse,
    supplied_fields,
)
from boxmfg.models.orders import OrderOut
from boxmfg.models.payments import PaymentOut
from boxmfg.pagination import ListParams, list_params, paginated_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["clients"])


def _row_to_client(row) -> ClientOut:
    return ClientOut.model_validate(dict(row))


@router.get("", response_model=PageResponse[ClientOut])
def list_clients(params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        rows, window = list_page(conn, clients, params)

    return paginated_response([_row_to_client(r) for r in rows], window)


@router.get("/{client_id}", response_model=DataResponse[ClientOut])
def get_client(client_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        row = get_or_404(conn, clients, client_id, "Client")

    return {"success": True, "data": _row_to_client(row)}


@router.post("", response_model=DataResponse[ClientOut], status_code=201)
def create_client(payload: ClientCreate):
    engine = get_engine()

    with engine.begin() as conn:
        row = insert_row(conn, clients, payload.model_dump())

    logger.info("Created client %s (%s)", row["id"], row["email"])
    return {"success": True, "data": _row_to_client(row)}


@router.put("/{client_id}", response_model=DataResponse[ClientOut])
def update_client(client_id: str, payload: ClientUpdate):
    engine = get_engine()
    values = supplied_fields(payload)

    with engine.begin() as conn:
        get_or_404(conn, clients, client_id, "Client")
        row = update_row(conn, clients, client_id, values)

    return {"success": True, "data": _row_to_client(row)}


@router.delete("/{client_id}", response_model=DeletedResponse)
def delete_client(client_id: str):
    engine = get_engine()

    # Dependent records keep their clientId and clientName
    with engine.begin() as conn:
        if not delete_row(conn, clients, client_id):
            raise NotFoundError("Client")

    logger.info("Deleted client %s", client_id)
    return {"success": True, "data": {}, "message": "Client deleted successfully"}


@router.get("/{client_id}/branches", response_model=ListResponse[BranchOut])
def list_client_branches(client_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        rows = list_all(
            conn,
            branches,
            where=[branches.c.client_id == client_id],
            order_by=[branches.c.created_at.desc(), branches.c.id.desc()],
        )

    data = [BranchOut.model_validate(dict(r)) for r in rows]
    return {"success": True, "count": len(data), "data": data}


@router.get("/{client_id}/orders", response_model=PageResponse[OrderOut])
def list_client_orders(client_id: str, params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        get_or_404(conn, clients, client_id, "Client")
        rows, window = list_page(conn, orders, params, where=[orders.c.client_id == client_id])
        data = attach_items(conn, rows)

    return paginated_response(data, window)


@router.get("/{client_id}/payments", response_model=ListResponse[PaymentOut])
def list_client_payments(client_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        rows = list_all(
            conn,
            payments,
            where=[payments.c.client_id == client_id],
            order_by=[payments.c.date.desc(), payments.c.id.desc()],
        )

    data = [PaymentOut.model_validate(dict(r)) for r in rows]
    return {"success": True, "count": len(data), "data": data}
