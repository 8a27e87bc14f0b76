# boxmfg/api/invoices.py

import logging

from fastapi import APIRouter, Depends

from boxmfg.db.crud import delete_row, get_or_404, insert_row, list_page, update_row, utcnow
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import invoices
from boxmfg.errors import NotFoundError
from boxmfg.models.common import DataResponse, DeletedResponse, PageResponse, supplied_fields
from boxmfg.models.invoices import InvoiceCreate, InvoiceOut, InvoiceUpdate
from boxmfg.pagination import ListParams, list_params, paginated_response
from boxmfg.services.derived import invoice_number
from boxmfg.services.references import INVOICE_REFS, resolve_references

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


def _row_to_invoice(row) -> InvoiceOut:
    return InvoiceOut.model_validate(dict(row))


@router.get("", response_model=PageResponse[InvoiceOut])
def list_invoices(params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        rows, window = list_page(conn, invoices, params)

    return paginated_response([_row_to_invoice(r) for r in rows], window)


@router.get("/{invoice_id}", response_model=DataResponse[InvoiceOut])
def get_invoice(invoice_id: str):
    """
    Look up a single invoice by id.
    """
    engine = get_engine()

    with engine.connect() as conn:
        row = get_or_404(conn, invoices, invoice_id, "Invoice")

    return {"success": True, "data": _row_to_invoice(row)}


@router.post("", response_model=DataResponse[InvoiceOut], status_code=201)
def create_invoice(payload: InvoiceCreate):
    """
    Create an invoice for an existing client, optionally tied to an order.

    invoiceNumber is generated when not supplied; a duplicate number is
    rejected by the unique constraint.
    """
    engine = get_engine()
    values = payload.model_dump()

    with engine.begin() as conn:
        resolved = resolve_references(conn, values, INVOICE_REFS)
        values["client_name"] = resolved["client_id"]["name"]
        values["invoice_number"] = values["invoice_number"] or invoice_number()
        values["invoice_date"] = values["invoice_date"] or utcnow()
        row = insert_row(conn, invoices, values)

    logger.info("Created invoice %s for client %s", row["invoice_number"], row["client_id"])
    return {"success": True, "data": _row_to_invoice(row)}


@router.put("/{invoice_id}", response_model=DataResponse[InvoiceOut])
def update_invoice(invoice_id: str, payload: InvoiceUpdate):
    engine = get_engine()
    # orderId: null or "" unlinks the invoice from its order
    values = supplied_fields(payload, clearable=("order_id",))

    with engine.begin() as conn:
        get_or_404(conn, invoices, invoice_id, "Invoice")
        resolved = resolve_references(conn, values, INVOICE_REFS)
        if "client_id" in resolved:
            values["client_name"] = resolved["client_id"]["name"]
        row = update_row(conn, invoices, invoice_id, values)

    return {"success": True, "data": _row_to_invoice(row)}


@router.delete("/{invoice_id}", response_model=DeletedResponse)
def delete_invoice(invoice_id: str):
    engine = get_engine()

    with engine.begin() as conn:
        if not delete_row(conn, invoices, invoice_id):
            raise NotFoundError("Invoice")

    logger.info("Deleted invoice %s", invoice_id)
    return {"success": True, "data": {}, "message": "Invoice deleted successfully"}
