from typing import Optional

from ..config import Settings, settings as default_settings
from .provider import DocumentStore, StoreError
from .memory_store import MemoryDocumentStore
from .sql_store import SqlDocumentStore


def build_store(config: Optional[Settings] = None) -> DocumentStore:
    config = config or default_settings
    if config.store_provider == "memory":
        return MemoryDocumentStore()
    from ..db import engine
    return SqlDocumentStore(engine)


__all__ = ["DocumentStore", "StoreError", "MemoryDocumentStore", "SqlDocumentStore", "build_store"]
