from sqlalchemy.orm import declarative_base
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from .config import settings


def build_engine(url: str):
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads
        if url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                url,
                future=True,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(url, future=True, connect_args={"check_same_thread": False})
    # Configure connection pool for server databases
    return create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,  # Recycle connections after 1 hour
    )


engine = build_engine(settings.database_url)

Base = declarative_base()
