"""
Area management.
Deleting an area leaves the items that reference it untouched; their
``areaId`` keeps pointing at the removed record.
"""
import uuid

from fastapi import HTTPException

from ..schemas.inventory import AreaInput
from ..schemas.records import Area, LogAction, UserPublic
from ..storage.gateway import PersistenceGateway
from .audit import create_audit_log
from .validation import bad_request


DEFAULT_AREA_IMAGE = "https://picsum.photos/400/300"


def create_area(gateway: PersistenceGateway, body: AreaInput, actor: UserPublic) -> Area:
    if not body.name or not body.description:
        raise bad_request("Please complete the name and the description.")
    area = Area(
        id=str(uuid.uuid4()),
        name=body.name,
        description=body.description,
        image=body.image or DEFAULT_AREA_IMAGE,
    )
    gateway.add_area(area)
    create_audit_log(gateway, LogAction.CREATE, f"New area created: {area.name}", actor)
    return area


def update_area(gateway: PersistenceGateway, area_id: str, body: AreaInput, actor: UserPublic) -> Area:
    if not body.name:
        raise bad_request("Area name is required.")
    existing = gateway.get_area(area_id)
    if existing is None:
        raise HTTPException(status_code=404, detail="Area not found")
    # Fields left out of the body keep their stored values
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    area = existing.model_copy(update=changes)
    gateway.update_area(area)
    create_audit_log(gateway, LogAction.UPDATE, f"Area updated: {area.name}", actor)
    return area


def delete_area(gateway: PersistenceGateway, area_id: str, actor: UserPublic) -> None:
    if gateway.get_area(area_id) is None:
        raise HTTPException(status_code=404, detail="Area not found")
    gateway.delete_area(area_id)
    create_audit_log(gateway, LogAction.DELETE, f"Area deleted ID: {area_id}", actor)
