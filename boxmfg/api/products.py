# boxmfg/api/products.py

import logging
from collections import defaultdict
from typing import Any, Dict, List, Mapping, Sequence

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.engine import Connection

from boxmfg.db.crud import delete_row, get_or_404, insert_row, list_page, new_id, update_row
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import product_materials, products
from boxmfg.errors import NotFoundError
from boxmfg.models.common import (
    DataResponse,
    DeletedResponse,
    ListResponse,
    PageResponse,
    supplied_fields,
)
from boxmfg.models.products import BomLineOut, ProductCreate, ProductOut, ProductUpdate
from boxmfg.pagination import ListParams, list_params, paginated_response
from boxmfg.services.references import MATERIAL, resolve_lines

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def _load_bom(conn: Connection, product_ids: Sequence[str]) -> Dict[str, List[Mapping[str, Any]]]:
    by_product: Dict[str, List[Mapping[str, Any]]] = defaultdict(list)
    if not product_ids:
        return by_product

    stmt = (
        select(product_materials)
        .where(product_materials.c.product_id.in_(list(product_ids)))
        .order_by(product_materials.c.product_id, product_materials.c.position)
    )
    for row in conn.execute(stmt).mappings().all():
        by_product[row["product_id"]].append(row)
    return by_product


def _build_bom(conn: Connection, lines: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Snapshot each referenced material into a BOM line.

    Name and unit always come from the material; unit price too, unless the
    caller supplied one.
    """
    found = resolve_lines(conn, lines, MATERIAL, "materials")
    bom = []
    for line, material in zip(lines, found):
        unit_price = line.get("unit_price")
        bom.append(
            {
                "material_id": material["id"],
                "material_name": material["name"],
                "quantity": line["quantity"],
                "unit": material["unit"],
                "unit_price": material["price"] if unit_price is None else unit_price,
            }
        )
    return bom


def _replace_bom(conn: Connection, product_id: str, bom: Sequence[Mapping[str, Any]]) -> None:
    conn.execute(product_materials.delete().where(product_materials.c.product_id == product_id))
    for position, line in enumerate(bom):
        conn.execute(
            product_materials.insert().values(
                id=new_id(),
                product_id=product_id,
                position=position,
                **line,
            )
        )


def _attach_bom(conn: Connection, rows: Sequence[Mapping[str, Any]]) -> List[ProductOut]:
    bom = _load_bom(conn, [r["id"] for r in rows])
    out = []
    for row in rows:
        data = dict(row)
        data["materials"] = [BomLineOut.model_validate(dict(line)) for line in bom[row["id"]]]
        out.append(ProductOut.model_validate(data))
    return out


def _load_product(conn: Connection, product_id: str) -> ProductOut:
    row = get_or_404(conn, products, product_id, "Product")
    return _attach_bom(conn, [row])[0]


@router.get("", response_model=PageResponse[ProductOut])
def list_products(params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        rows, window = list_page(conn, products, params)
        data = _attach_bom(conn, rows)

    return paginated_response(data, window)


@router.get("/{product_id}", response_model=DataResponse[ProductOut])
def get_product(product_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        product = _load_product(conn, product_id)

    return {"success": True, "data": product}


@router.get("/{product_id}/materials", response_model=ListResponse[BomLineOut])
def list_product_materials(product_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        product = _load_product(conn, product_id)

    return {"success": True, "count": len(product.materials), "data": product.materials}


@router.post("", response_model=DataResponse[ProductOut], status_code=201)
def create_product(payload: ProductCreate):
    engine = get_engine()
    values = payload.model_dump(exclude={"materials"})
    requested_bom = [line.model_dump() for line in payload.materials]

    with engine.begin() as conn:
        bom = _build_bom(conn, requested_bom)
        row = insert_row(conn, products, values)
        _replace_bom(conn, row["id"], bom)
        product = _load_product(conn, row["id"])

    logger.info("Created product %s with %d materials", product.id, len(product.materials))
    return {"success": True, "data": product}


@router.put("/{product_id}", response_model=DataResponse[ProductOut])
def update_product(product_id: str, payload: ProductUpdate):
    engine = get_engine()
    values = supplied_fields(payload)
    requested_bom = values.pop("materials", None)

    with engine.begin() as conn:
        get_or_404(conn, products, product_id, "Product")
        if requested_bom is not None:
            _replace_bom(conn, product_id, _build_bom(conn, requested_bom))
        update_row(conn, products, product_id, values)
        product = _load_product(conn, product_id)

    return {"success": True, "data": product}


@router.delete("/{product_id}", response_model=DeletedResponse)
def delete_product(product_id: str):
    engine = get_engine()

    with engine.begin() as conn:
        if not delete_row(conn, products, product_id):
            raise NotFoundError("Product")
        conn.execute(product_materials.delete().where(product_materials.c.product_id == product_id))

    logger.info("Deleted product %s", product_id)
    return {"success": True, "data": {}, "message": "Product deleted successfully"}
