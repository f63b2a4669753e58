"""
SQL-backed document store.
Each collection lives in the shared ``documents`` table keyed by (collection, id).
"""
import os
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..db import Base
from ..models.models import Document
from .provider import DocumentStore, StoreError


class SqlDocumentStore(DocumentStore):
    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    def create_schema(self) -> None:
        # Ensure local SQLite directory exists
        database = self.engine.url.database or ""
        if self.engine.url.get_backend_name() == "sqlite" and os.path.dirname(database):
            os.makedirs(os.path.dirname(database), exist_ok=True)
        Base.metadata.create_all(bind=self.engine)

    def list(self, collection: str) -> List[dict]:
        try:
            with self.session_factory() as db:
                rows = db.execute(
                    select(Document.data).where(Document.collection == collection).order_by(Document.created_at.asc(), Document.id.asc())
                ).scalars().all()
                return [dict(r) for r in rows]
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def get(self, collection: str, id: str) -> Optional[dict]:
        try:
            with self.session_factory() as db:
                row = db.get(Document, (collection, id))
                return dict(row.data) if row else None
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def put(self, collection: str, id: str, record: dict) -> None:
        try:
            with self.session_factory() as db:
                row = db.get(Document, (collection, id))
                if row is None:
                    db.add(Document(collection=collection, id=id, data=dict(record)))
                else:
                    # Full overwrite, never a merge
                    row.data = dict(record)
                db.commit()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def delete(self, collection: str, id: str) -> None:
        try:
            with self.session_factory() as db:
                row = db.get(Document, (collection, id))
                if row is not None:
                    db.delete(row)
                    db.commit()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def list_ordered(self, collection: str, field: str, limit: int, descending: bool = True) -> List[dict]:
        key = Document.data[field].as_string()
        try:
            with self.session_factory() as db:
                rows = db.execute(
                    select(Document.data)
                    .where(Document.collection == collection)
                    .order_by(key.desc() if descending else key.asc())
                    .limit(limit)
                ).scalars().all()
                return [dict(r) for r in rows]
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
