"""
Base Model Classes

This module provides the foundational classes for all SQLAlchemy models in Inkpress.
It includes the declarative base, a timestamp mixin, and the column type used
for every status-like enum.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       └── TimestampMixin   ← Automatic created_at/updated_at

Enum Columns:
=============
Status-like columns (post_status, taxonomy, format, audio_status) are stored
as plain VARCHAR holding the enum VALUE ("publish", "post_tag", ...), not a
native database enum. This keeps the on-disk values identical to the blog
schema the tables mirror, and works unchanged on PostgreSQL and SQLite.

Usage:
======
    from inkpress.shared.models.base import Base, TimestampMixin, str_enum

    class Post(Base):
        __tablename__ = "posts"
        id: Mapped[int] = mapped_column(Integer, primary_key=True)
        post_status: Mapped[PostStatus] = mapped_column(str_enum(PostStatus))
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Type

from sqlalchemy import DateTime, Enum as SQLEnum, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the application inherit from this class either
    directly or through the mixin classes.
    """


def str_enum(enum_cls: Type[Enum], length: int = 20) -> SQLEnum:
    """
    Build a VARCHAR-backed enum column type that persists member values.

    Args:
        enum_cls: A ``str``-valued Enum class
        length: VARCHAR length

    Returns:
        SQLAlchemy Enum type (non-native, value-based)
    """
    return SQLEnum(
        enum_cls,
        native_enum=False,
        create_constraint=False,
        length=length,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    Provides two timestamp columns that are automatically managed:
    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified through the ORM

    Database Behavior:
    ==================
    - created_at: Set by the database on INSERT via server_default
    - updated_at: Set on INSERT, updated by SQLAlchemy on UPDATE via onupdate
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
