# boxmfg/api/dashboard.py

from fastapi import APIRouter

from boxmfg.db.engine import get_engine
from boxmfg.models.common import DataResponse
from boxmfg.models.dashboard import DashboardStats
from boxmfg.services.dashboard import get_stats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DataResponse[DashboardStats])
def dashboard_stats():
    """
    Counts, revenue, recent activity, low-stock materials and the last six
    months of order revenue, in one payload.
    """
    engine = get_engine()

    with engine.connect() as conn:
        stats = get_stats(conn)

    return {"success": True, "data": stats}
