from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from ..auth.security import get_current_session, require_admin
from ..schemas.inventory import ItemInput
from ..schemas.records import Item, ItemStatus, UserPublic
from ..services import export, inventory
from ..storage.gateway import PersistenceGateway, get_gateway


router = APIRouter(prefix="/inventory", tags=["inventory"])


def _filtered(
    gateway: PersistenceGateway,
    q: Optional[str],
    status: Optional[ItemStatus],
    area_id: Optional[str],
) -> List[Item]:
    return inventory.filter_items(gateway.get_items(), q=q, status=status, area_id=area_id)


# ---------- ITEMS ----------
@router.get("/items", response_model=List[Item])
def list_items(
    q: Optional[str] = None,
    status: Optional[ItemStatus] = None,
    area_id: Optional[str] = Query(default=None, alias="areaId"),
    gateway: PersistenceGateway = Depends(get_gateway),
    _: UserPublic = Depends(get_current_session),
):
    return _filtered(gateway, q, status, area_id)


@router.post("/items", response_model=Item, status_code=201)
def create_item(body: ItemInput, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_admin)):
    return inventory.create_item(gateway, body, user)


@router.put("/items/{item_id}", response_model=Item)
def update_item(item_id: str, body: ItemInput, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_admin)):
    return inventory.update_item(gateway, item_id, body, user)


@router.delete("/items/{item_id}")
def delete_item(item_id: str, gateway: PersistenceGateway = Depends(get_gateway), user: UserPublic = Depends(require_admin)):
    inventory.delete_item(gateway, item_id, user)
    return {"message": "Item deleted successfully"}


# ---------- EXPORTS ----------
@router.get("/export.csv")
def export_csv(
    q: Optional[str] = None,
    status: Optional[ItemStatus] = None,
    area_id: Optional[str] = Query(default=None, alias="areaId"),
    gateway: PersistenceGateway = Depends(get_gateway),
    _: UserPublic = Depends(get_current_session),
):
    items = _filtered(gateway, q, status, area_id)
    content = export.items_to_csv(items, gateway.get_areas())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="inventory_nexus.csv"'},
    )


@router.get("/export.pdf")
def export_pdf(
    q: Optional[str] = None,
    status: Optional[ItemStatus] = None,
    area_id: Optional[str] = Query(default=None, alias="areaId"),
    gateway: PersistenceGateway = Depends(get_gateway),
    _: UserPublic = Depends(get_current_session),
):
    items = _filtered(gateway, q, status, area_id)
    content = export.items_to_pdf(items, gateway.get_areas())
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="inventory.pdf"'},
    )
