"""SQLAlchemy declarative base for ORM models.

Applications declare their tenant and tenant-scoped models on this base
(or on their own ``DeclarativeBase``; the tenancy adapter works with any
mapped class).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for SQLAlchemy ORM models.

    Provides the declarative base functionality and type hints for SQLAlchemy 2.0.
    """

    # Type annotation for SQLAlchemy
    type_annotation_map: dict[type, Any] = {}
