"""
Database Package

Provides the async SQLAlchemy engine, the metadata/tag models and the
SQL-backed storage used by the indexer.
"""

from .session import create_engine, get_engine
from .models import Base, ElementSet, Element, ElementText, Tag, RecordTag
from .storage import SqlStorage

__all__ = [
    "create_engine",
    "get_engine",
    "Base",
    "ElementSet",
    "Element",
    "ElementText",
    "Tag",
    "RecordTag",
    "SqlStorage",
]
