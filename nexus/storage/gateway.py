"""
Persistence gateway.
Typed get-all/add/update/delete helpers for the users, areas, items and logs
collections on top of a DocumentStore, plus the idempotent first-run seed.
"""
from datetime import datetime, timezone
from typing import List, Optional

import structlog
from fastapi import Request

from ..config import Settings, settings as default_settings
from ..schemas.records import (
    Area,
    Collection,
    Item,
    Log,
    SUPERADMIN_USERNAME,
    User,
    UserRole,
)
from .provider import DocumentStore, StoreError


SUPERADMIN_ID = "super-admin-001"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _timestamp_key(log: dict) -> datetime:
    raw = log.get("timestamp") or ""
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


class PersistenceGateway:
    def __init__(self, store: DocumentStore, config: Optional[Settings] = None):
        self.store = store
        self.config = config or default_settings

    # ---------- generic ----------
    def list(self, collection: Collection) -> List[dict]:
        return self.store.list(collection.value)

    def put(self, collection: Collection, id: str, record: dict) -> None:
        self.store.put(collection.value, id, record)

    def delete(self, collection: Collection, id: str) -> None:
        self.store.delete(collection.value, id)

    def query_recent_logs(self, limit: Optional[int] = None) -> List[dict]:
        """Newest logs first, at most ``limit`` of them.

        Falls back to sorting the whole collection in memory when the store
        cannot serve an ordered query.
        """
        if limit is None:
            limit = self.config.logs_read_limit
        try:
            return self.store.list_ordered(Collection.logs.value, "timestamp", limit, descending=True)
        except (NotImplementedError, StoreError) as e:
            structlog.get_logger().warning("store_ordered_query_fallback", collection="logs", error=str(e) or type(e).__name__)
        records = self.store.list(Collection.logs.value)
        records.sort(key=_timestamp_key, reverse=True)
        return records[:limit]

    # ---------- users ----------
    def get_users(self) -> List[User]:
        return [User(**r) for r in self.list(Collection.users)]

    def get_user(self, user_id: str) -> Optional[User]:
        raw = self.store.get(Collection.users.value, user_id)
        return User(**raw) if raw else None

    def add_user(self, user: User) -> None:
        self.put(Collection.users, user.id, user.to_document())

    def update_user(self, user: User) -> None:
        self.put(Collection.users, user.id, user.to_document())

    def delete_user(self, user_id: str) -> None:
        self.delete(Collection.users, user_id)

    # ---------- areas ----------
    def get_areas(self) -> List[Area]:
        return [Area(**r) for r in self.list(Collection.areas)]

    def get_area(self, area_id: str) -> Optional[Area]:
        raw = self.store.get(Collection.areas.value, area_id)
        return Area(**raw) if raw else None

    def add_area(self, area: Area) -> None:
        self.put(Collection.areas, area.id, area.to_document())

    def update_area(self, area: Area) -> None:
        self.put(Collection.areas, area.id, area.to_document())

    def delete_area(self, area_id: str) -> None:
        self.delete(Collection.areas, area_id)

    # ---------- items ----------
    def get_items(self) -> List[Item]:
        return [Item(**r) for r in self.list(Collection.items)]

    def get_item(self, item_id: str) -> Optional[Item]:
        raw = self.store.get(Collection.items.value, item_id)
        return Item(**raw) if raw else None

    def save_item(self, item: Item) -> None:
        self.put(Collection.items, item.id, item.to_document())

    def delete_item(self, item_id: str) -> None:
        self.delete(Collection.items, item_id)

    # ---------- logs ----------
    def add_log(self, log: Log) -> None:
        self.put(Collection.logs, log.id, log.to_document())

    def get_logs(self, limit: Optional[int] = None) -> List[Log]:
        return [Log(**r) for r in self.query_recent_logs(limit)]

    # ---------- seed ----------
    def init(self) -> None:
        """Create the bootstrap admin and the default areas when absent.

        Seed records use fixed ids, so two concurrent runs overwrite each
        other instead of duplicating.
        """
        log = structlog.get_logger()
        if not any(u.username == SUPERADMIN_USERNAME for u in self.get_users()):
            self.add_user(User(
                id=SUPERADMIN_ID,
                username=SUPERADMIN_USERNAME,
                email=self.config.bootstrap_admin_email,
                password=self.config.bootstrap_admin_password,
                full_name="General Administrator",
                role=UserRole.ADMIN,
                created_at=utc_now_iso(),
            ))
            log.info("seed_admin_created", username=SUPERADMIN_USERNAME)

        if not self.list(Collection.areas):
            for i in range(self.config.default_area_count):
                self.add_area(Area(
                    id=f"area-{i + 1}",
                    name=f"Area {i + 1}",
                    description="Designated space for operations.",
                    image=f"https://picsum.photos/seed/area{i}/400/300",
                ))
            log.info("seed_areas_created", count=self.config.default_area_count)


def get_gateway(request: Request) -> PersistenceGateway:
    return request.app.state.gateway
