from typing import List, Optional

from fastapi import APIRouter, Depends

from ..auth.security import get_current_session
from ..schemas.records import Log, LogAction, UserPublic
from ..services.audit import get_audit_logs
from ..storage.gateway import PersistenceGateway, get_gateway


router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("", response_model=List[Log])
def list_logs(
    q: Optional[str] = None,
    action: Optional[LogAction] = None,
    gateway: PersistenceGateway = Depends(get_gateway),
    _: UserPublic = Depends(get_current_session),
):
    """Up to the 100 most recent entries, newest first, then filtered."""
    return get_audit_logs(gateway, q=q, action=action)
