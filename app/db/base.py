from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings


def build_engine(database_uri: str, **kwargs) -> AsyncEngine:
    """
    Create an async engine for the given URI

    Extra keyword arguments go straight to create_async_engine, e.g. a poolclass.
    """
    kwargs.setdefault("echo", settings.DB_ECHO)
    return create_async_engine(database_uri, **kwargs)


# Process-wide engine; the only shared handle on the backing store
engine = build_engine(settings.SQLALCHEMY_DATABASE_URI)

# Declarative base for all ORM models
Base = declarative_base()
