"""
Database Engine Management

Provides the async SQLAlchemy engine the storage layer reads from.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from ..config import settings


def create_engine(url: Optional[str] = None, **kwargs: Any) -> AsyncEngine:
    """
    Create an async engine for ``url`` (defaults to settings.database_url).
    """
    kwargs.setdefault("echo", False)  # Set True for SQL debugging
    kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url or settings.database_url, **kwargs)


@lru_cache
def get_engine() -> AsyncEngine:
    return create_engine()
