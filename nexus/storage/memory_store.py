"""
Process-local document store.
Useful for development and tests; it has no index support, so ordered
queries are left to the caller.
"""
import copy
import threading
from typing import Dict, List, Optional

from .provider import DocumentStore


class MemoryDocumentStore(DocumentStore):
    def __init__(self):
        self._collections: Dict[str, Dict[str, dict]] = {}
        self._lock = threading.Lock()

    def list(self, collection: str) -> List[dict]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._collections.get(collection, {}).values()]

    def get(self, collection: str, id: str) -> Optional[dict]:
        with self._lock:
            record = self._collections.get(collection, {}).get(id)
            return copy.deepcopy(record) if record is not None else None

    def put(self, collection: str, id: str, record: dict) -> None:
        with self._lock:
            self._collections.setdefault(collection, {})[id] = copy.deepcopy(record)

    def delete(self, collection: str, id: str) -> None:
        with self._lock:
            self._collections.get(collection, {}).pop(id, None)
