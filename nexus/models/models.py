from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base


class Document(Base):
    """One record of a document collection (users, areas, items, logs).

    The payload is stored whole as JSON; ``put`` overwrites it entirely.
    """
    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(32), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_documents_collection", "collection"),
    )
