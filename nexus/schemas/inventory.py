from typing import Optional

from pydantic import field_validator

from .records import ItemStatus, Record


class ItemInput(Record):
    code: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    status: Optional[ItemStatus] = None
    description: Optional[str] = None
    area_id: Optional[str] = None
    image: Optional[str] = None

    @field_validator("name", "category", "area_id", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class AreaInput(Record):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None
