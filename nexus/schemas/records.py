"""Record shapes stored in the document collections.

Records are serialized with camelCase keys (``fullName``, ``areaId``...) both in
the store and on the wire; attribute names stay snake_case in Python.
"""
import enum
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


SUPERADMIN_USERNAME = "ElSuperAdmin"


class Collection(str, enum.Enum):
    users = "users"
    areas = "areas"
    items = "items"
    logs = "logs"


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class ItemStatus(str, enum.Enum):
    SERVICE = "SERVICE"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    ItemStatus.SERVICE: "In Service",
    ItemStatus.MAINTENANCE: "Maintenance",
    ItemStatus.OUT_OF_SERVICE: "Out of Service",
}


class LogAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"


class Record(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class UserPublic(Record):
    id: str
    username: str
    email: str = ""
    full_name: str = ""
    role: UserRole = UserRole.USER
    created_at: str = ""

    @property
    def is_superadmin(self) -> bool:
        return self.username == SUPERADMIN_USERNAME


class User(UserPublic):
    # Stored as entered; login compares by equality
    password: str = ""

    def public(self) -> UserPublic:
        return UserPublic(**self.model_dump(exclude={"password"}))


class Area(Record):
    id: str
    name: str
    description: str = ""
    image: str = ""


class Item(Record):
    id: str
    code: str = ""
    name: str
    category: str = ""
    status: ItemStatus = ItemStatus.SERVICE
    description: str = ""
    area_id: str = ""
    image: str = ""
    created_at: str = ""
    updated_at: str = ""


class Log(Record):
    id: str
    action: LogAction
    details: str = ""
    timestamp: str
    user_id: str = ""
    username: str = ""


class InventoryFilter(Record):
    """Navigation parameters understood by the inventory listing."""
    area_id: Optional[str] = None
    status: Optional[ItemStatus] = None
