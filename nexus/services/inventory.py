import time
import uuid
from typing import List, Optional

from fastapi import HTTPException

from ..schemas.inventory import ItemInput
from ..schemas.records import Item, ItemStatus, LogAction, UserPublic
from ..storage.gateway import PersistenceGateway, utc_now_iso
from .audit import create_audit_log
from .validation import bad_request


DEFAULT_ITEM_IMAGE = "https://picsum.photos/200"


def generate_item_code() -> str:
    return f"INV-{str(int(time.time() * 1000))[-6:]}"


def filter_items(
    items: List[Item],
    q: Optional[str] = None,
    status: Optional[ItemStatus] = None,
    area_id: Optional[str] = None,
) -> List[Item]:
    """Narrow ``items`` by search term, then status, then area; order is kept."""
    result = items
    if q:
        term = q.lower()
        result = [
            i for i in result
            if term in i.name.lower() or term in i.code.lower() or term in i.category.lower()
        ]
    if status:
        result = [i for i in result if i.status == status]
    if area_id:
        result = [i for i in result if i.area_id == area_id]
    return result


def _require_fields(body: ItemInput) -> None:
    if not body.name or not body.area_id or not body.category:
        raise bad_request("Please complete the required fields: name, category and area.")


def create_item(gateway: PersistenceGateway, body: ItemInput, actor: UserPublic) -> Item:
    _require_fields(body)
    now = utc_now_iso()
    item = Item(
        id=str(uuid.uuid4()),
        code=(body.code or "").strip() or generate_item_code(),
        name=body.name,
        category=body.category,
        status=body.status or ItemStatus.SERVICE,
        description=body.description or "",
        area_id=body.area_id,
        image=DEFAULT_ITEM_IMAGE if body.image is None else body.image,
        created_at=now,
        updated_at=now,
    )
    gateway.save_item(item)
    create_audit_log(gateway, LogAction.CREATE, f"Created item: {item.name}", actor)
    return item


def update_item(gateway: PersistenceGateway, item_id: str, body: ItemInput, actor: UserPublic) -> Item:
    existing = gateway.get_item(item_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Item not found")
    _require_fields(body)
    item = Item(
        id=existing.id,
        code=existing.code if body.code is None else body.code,
        name=body.name,
        category=body.category,
        status=body.status or existing.status,
        description=existing.description if body.description is None else body.description,
        area_id=body.area_id,
        image=existing.image if body.image is None else body.image,
        created_at=existing.created_at,
        updated_at=utc_now_iso(),
    )
    gateway.save_item(item)
    create_audit_log(gateway, LogAction.UPDATE, f"Updated item: {item.name}", actor)
    return item


def delete_item(gateway: PersistenceGateway, item_id: str, actor: UserPublic) -> None:
    if gateway.get_item(item_id) is None:
        raise HTTPException(status_code=404, detail="Item not found")
    gateway.delete_item(item_id)
    create_audit_log(gateway, LogAction.DELETE, f"Deleted item ID: {item_id}", actor)
