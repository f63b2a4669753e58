from typing import List

from fastapi import APIRouter, Depends

from ..auth.security import get_current_session, require_admin
from ..schemas.inventory import AreaInput
from ..schemas.records import Area, UserPublic
from ..services import areas as area_service
from ..storage.gateway import PersistenceGateway, get_gateway


router = APIRouter(prefix="/areas", tags=["areas"])


@router.get("", response_model=List[Area])
def list_areas(gateway: PersistenceGateway = Depends(get_gateway), _: UserPublic = Depends(get_current_session)):
    return gateway.get_areas()


@router.post("", response_model=Area, status_code=201)
def create_area(body: AreaInput, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_admin)):
    return area_service.create_area(gateway, body, user)


@router.put("/{area_id}", response_model=Area)
def update_area(area_id: str, body: AreaInput, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_admin)):
    return area_service.update_area(gateway, area_id, body, user)


@router.delete("/{area_id}")
def delete_area(area_id: str, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_admin)):
    area_service.delete_area(gateway, area_id, user)
    return {"message": "Area deleted successfully"}
