from fastapi import APIRouter, Depends

from ..auth.security import get_current_session
from ..schemas.dashboard import DashboardStats
from ..schemas.records import UserPublic
from ..services.dashboard import compute_stats
from ..storage.gateway import PersistenceGateway, get_gateway


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardStats, response_model_exclude_none=True)
def dashboard(gateway: PersistenceGateway = Depends(get_gateway), _: UserPublic = Depends(get_current_session)):
    return compute_stats(gateway)
