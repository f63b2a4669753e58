from typing import List, Optional


class StoreError(Exception):
    """The backing store could not be reached or rejected the operation."""


class DocumentStore:
    def list(self, collection: str) -> List[dict]:
        raise NotImplementedError

    def get(self, collection: str, id: str) -> Optional[dict]:
        raise NotImplementedError

    def put(self, collection: str, id: str, record: dict) -> None:
        raise NotImplementedError

    def delete(self, collection: str, id: str) -> None:
        raise NotImplementedError

    def list_ordered(self, collection: str, field: str, limit: int, descending: bool = True) -> List[dict]:
        raise NotImplementedError
