# boxmfg/api/materials.py

import logging

from fastapi import APIRouter, Depends

from boxmfg.db.crud import delete_row, get_or_404, insert_row, list_page, update_row
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import materials
from boxmfg.errors import NotFoundError
from boxmfg.models.common import DataResponse, DeletedResponse, PageResponse, supplied_fields
from boxmfg.models.materials import MaterialCreate, MaterialOut, MaterialUpdate
from boxmfg.pagination import ListParams, list_params, paginated_response
from boxmfg.services.derived import material_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/materials", tags=["materials"])


def _row_to_material(row) -> MaterialOut:
    return MaterialOut.model_validate(dict(row))


@router.get("", response_model=PageResponse[MaterialOut])
def list_materials(params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        rows, window = list_page(conn, materials, params)

    return paginated_response([_row_to_material(r) for r in rows], window)


@router.get("/{material_id}", response_model=DataResponse[MaterialOut])
def get_material(material_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        row = get_or_404(conn, materials, material_id, "Material")

    return {"success": True, "data": _row_to_material(row)}


@router.post("", response_model=DataResponse[MaterialOut], status_code=201)
def create_material(payload: MaterialCreate):
    engine = get_engine()
    values = payload.model_dump()
    values["status"] = material_status(values["current_stock"], values["low_stock_threshold"])

    with engine.begin() as conn:
        row = insert_row(conn, materials, values)

    logger.info("Created material %s (%s)", row["id"], row["status"])
    return {"success": True, "data": _row_to_material(row)}


@router.put("/{material_id}", response_model=DataResponse[MaterialOut])
def update_material(material_id: str, payload: MaterialUpdate):
    engine = get_engine()
    values = supplied_fields(payload)

    with engine.begin() as conn:
        existing = get_or_404(conn, materials, material_id, "Material")
        values["status"] = material_status(
            values.get("current_stock", existing["current_stock"]),
            values.get("low_stock_threshold", existing["low_stock_threshold"]),
        )
        row = update_row(conn, materials, material_id, values)

    return {"success": True, "data": _row_to_material(row)}


@router.delete("/{material_id}", response_model=DeletedResponse)
def delete_material(material_id: str):
    engine = get_engine()

    # Products keep their BOM snapshot of this material
    with engine.begin() as conn:
        if not delete_row(conn, materials, material_id):
            raise NotFoundError("Material")

    logger.info("Deleted material %s", material_id)
    return {"success": True, "data": {}, "message": "Material deleted successfully"}
