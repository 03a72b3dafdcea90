"""
SQLAlchemy Models

Defines the schema of the shared stores the indexer reads besides the
addon tables themselves:

- Element sets, elements and element texts (the metadata store)
- Tags and their record assignments

Addon tables are not modelled here; they are reflected at runtime.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


# ---------------------------------------------------------------------
# Metadata Store
# ---------------------------------------------------------------------

class ElementSet(Base):
    """A named group of elements, e.g. "Dublin Core"."""
    __tablename__ = "element_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class Element(Base):
    """A metadata element within a set, e.g. "Title"."""
    __tablename__ = "elements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    element_set_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("element_sets.id"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (
        Index("idx_element_set_name", "element_set_id", "name", unique=True),
    )


class ElementText(Base):
    """
    One value of an element for a record.

    ``record_type`` is the name of the table the record lives in.
    """
    __tablename__ = "element_texts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[int] = mapped_column(Integer, nullable=False)
    record_type: Mapped[str] = mapped_column(String(64), nullable=False)
    element_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("elements.id"),
        nullable=False,
    )
    html: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("idx_element_text_record", "record_type", "record_id"),
    )


# ---------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------

class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class RecordTag(Base):
    """Assignment of a tag to a record."""
    __tablename__ = "records_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[int] = mapped_column(Integer, nullable=False)
    record_type: Mapped[str] = mapped_column(String(64), nullable=False)
    tag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tags.id"),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_records_tags_record", "record_type", "record_id"),
    )
