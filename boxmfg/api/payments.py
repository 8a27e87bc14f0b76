# boxmfg/api/payments.py

import logging

from fastapi import APIRouter, Depends

from boxmfg.db.crud import delete_row, get_or_404, insert_row, list_page, update_row, utcnow
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import payments
from boxmfg.errors import NotFoundError
from boxmfg.models.common import DataResponse, DeletedResponse, PageResponse, supplied_fields
from boxmfg.models.payments import PaymentCreate, PaymentOut, PaymentUpdate
from boxmfg.pagination import ListParams, list_params, paginated_response
from boxmfg.services.derived import payment_number
from boxmfg.services.references import PAYMENT_REFS, resolve_references

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])


def _row_to_payment(row) -> PaymentOut:
    return PaymentOut.model_validate(dict(row))


@router.get("", response_model=PageResponse[PaymentOut])
def list_payments(params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        rows, window = list_page(conn, payments, params)

    return paginated_response([_row_to_payment(r) for r in rows], window)


@router.get("/{payment_id}", response_model=DataResponse[PaymentOut])
def get_payment(payment_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        row = get_or_404(conn, payments, payment_id, "Payment")

    return {"success": True, "data": _row_to_payment(row)}


@router.post("", response_model=DataResponse[PaymentOut], status_code=201)
def create_payment(payload: PaymentCreate):
    engine = get_engine()
    values = payload.model_dump()

    with engine.begin() as conn:
        resolved = resolve_references(conn, values, PAYMENT_REFS)
        values["client_name"] = resolved["client_id"]["name"]
        values["payment_number"] = values["payment_number"] or payment_number()
        values["date"] = values["date"] or utcnow()
        row = insert_row(conn, payments, values)

    logger.info("Recorded payment %s (%s)", row["payment_number"], row["payment_method"])
    return {"success": True, "data": _row_to_payment(row)}


@router.put("/{payment_id}", response_model=DataResponse[PaymentOut])
def update_payment(payment_id: str, payload: PaymentUpdate):
    engine = get_engine()
    values = supplied_fields(payload, clearable=("invoice_id",))

    with engine.begin() as conn:
        get_or_404(conn, payments, payment_id, "Payment")
        resolved = resolve_references(conn, values, PAYMENT_REFS)
        if "client_id" in resolved:
            values["client_name"] = resolved["client_id"]["name"]
        row = update_row(conn, payments, payment_id, values)

    return {"success": True, "data": _row_to_payment(row)}


@router.delete("/{payment_id}", response_model=DeletedResponse)
def delete_payment(payment_id: str):
    engine = get_engine()

    with engine.begin() as conn:
        if not delete_row(conn, payments, payment_id):
            raise NotFoundError("Payment")

    logger.info("Deleted payment %s", payment_id)
    return {"success": True, "data": {}, "message": "Payment deleted successfully"}
