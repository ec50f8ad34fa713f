from fastapi import APIRouter, Depends

from ..security import require_admin
from ..services.analytics_svc import compute_analytics

router = APIRouter()


@router.get("/api/analytics", dependencies=[Depends(require_admin)])
def api_analytics():
    return compute_analytics()
