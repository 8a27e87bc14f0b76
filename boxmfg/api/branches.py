# boxmfg/api/branches.py

import logging

from fastapi import APIRouter, Depends

from boxmfg.db.crud import delete_row, get_or_404, insert_row, list_page, update_row
from boxmfg.db.engine import get_engine
from boxmfg.db.schema import branches
from boxmfg.errors import NotFoundError
from boxmfg.models.branches import BranchCreate, BranchOut, BranchUpdate
from boxmfg.models.common import DataResponse, DeletedResponse, PageResponse, supplied_fields
from boxmfg.pagination import ListParams, list_params, paginated_response
from boxmfg.services.references import BRANCH_REFS, resolve_references

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/branches", tags=["branches"])


def _row_to_branch(row) -> BranchOut:
    return BranchOut.model_validate(dict(row))


@router.get("", response_model=PageResponse[BranchOut])
def list_branches(params: ListParams = Depends(list_params)):
    engine = get_engine()

    with engine.connect() as conn:
        rows, window = list_page(conn, branches, params)

    return paginated_response([_row_to_branch(r) for r in rows], window)


@router.get("/{branch_id}", response_model=DataResponse[BranchOut])
def get_branch(branch_id: str):
    engine = get_engine()

    with engine.connect() as conn:
        row = get_or_404(conn, branches, branch_id, "Branch")

    return {"success": True, "data": _row_to_branch(row)}


@router.post("", response_model=DataResponse[BranchOut], status_code=201)
def create_branch(payload: BranchCreate):
    engine = get_engine()
    values = payload.model_dump()

    with engine.begin() as conn:
        client = resolve_references(conn, values, BRANCH_REFS)["client_id"]
        values["client_name"] = client["name"]
        row = insert_row(conn, branches, values)

    logger.info("Created branch %s for client %s", row["id"], row["client_id"])
    return {"success": True, "data": _row_to_branch(row)}


@router.put("/{branch_id}", response_model=DataResponse[BranchOut])
def update_branch(branch_id: str, payload: BranchUpdate):
    engine = get_engine()
    values = supplied_fields(payload)

    with engine.begin() as conn:
        get_or_404(conn, branches, branch_id, "Branch")
        resolved = resolve_references(conn, values, BRANCH_REFS)
        if "client_id" in resolved:
            values["client_name"] = resolved["client_id"]["name"]
        row = update_row(conn, branches, branch_id, values)

    return {"success": True, "data": _row_to_branch(row)}


@router.delete("/{branch_id}", response_model=DeletedResponse)
def delete_branch(branch_id: str):
    engine = get_engine()

    with engine.begin() as conn:
        if not delete_row(conn, branches, branch_id):
            raise NotFoundError("Branch")

    logger.info("Deleted branch %s", branch_id)
    return {"success": True, "data": {}, "message": "Branch deleted successfully"}
