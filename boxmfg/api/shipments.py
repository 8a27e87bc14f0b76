# boxmfg/api/shipments.py

import logging

from fastapi import APIRouter, Depends

from boxmfg.db.crud import delete_row, get_or_404, insert_row, list_page, update_row, utcnow
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import shipments
from boxmfg.errors import NotFoundError
from boxmfg.models.common import DataResponse, DeletedResponse, PageResponse, supplied_fields
from boxmfg.models.shipments import ShipmentCreate, ShipmentOut, ShipmentUpdate
from boxmfg.pagination import ListParams, list_params, paginated_response
from boxmfg.services.derived import shipment_number
from boxmfg.services.references import SHIPMENT_REFS, resolve_references

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shipments", tags=["shipments"])


def _row_to_shipment(row) -> ShipmentOut:
    return ShipmentOut.model_validate(dict(row))


@router.get("", response_model=PageResponse[ShipmentOut])
def list_shipments(params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        rows, window = list_page(conn, shipments, params)

    return paginated_response([_row_to_shipment(r) for r in rows], window)


@router.get("/{shipment_id}", response_model=DataResponse[ShipmentOut])
def get_shipment(shipment_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        row = get_or_404(conn, shipments, shipment_id, "Shipment")

    return {"success": True, "data": _row_to_shipment(row)}


@router.post("", response_model=DataResponse[ShipmentOut], status_code=201)
def create_shipment(payload: ShipmentCreate):
    engine = get_engine()
    values = payload.model_dump()

    with engine.begin() as conn:
        resolved = resolve_references(conn, values, SHIPMENT_REFS)
        values["client_name"] = resolved["client_id"]["name"]
        values["shipment_number"] = values["shipment_number"] or shipment_number()
        values["shipment_date"] = values["shipment_date"] or utcnow()
        row = insert_row(conn, shipments, values)

    logger.info("Created shipment %s, tracking %s", row["shipment_number"], row["tracking_number"])
    return {"success": True, "data": _row_to_shipment(row)}


@router.put("/{shipment_id}", response_model=DataResponse[ShipmentOut])
def update_shipment(shipment_id: str, payload: ShipmentUpdate):
    engine = get_engine()
    values = supplied_fields(payload, clearable=("order_id",))

    with engine.begin() as conn:
        get_or_404(conn, shipments, shipment_id, "Shipment")
        resolved = resolve_references(conn, values, SHIPMENT_REFS)
        if "client_id" in resolved:
            values["client_name"] = resolved["client_id"]["name"]
        row = update_row(conn, shipments, shipment_id, values)

    return {"success": True, "data": _row_to_shipment(row)}


@router.delete("/{shipment_id}", response_model=DeletedResponse)
def delete_shipment(shipment_id: str):
    engine = get_engine()

    with engine.begin() as conn:
        if not delete_row(conn, shipments, shipment_id):
            raise NotFoundError("Shipment")

    logger.info("Deleted shipment %s", shipment_id)
    return {"success": True, "data": {}, "message": "Shipment deleted successfully"}
