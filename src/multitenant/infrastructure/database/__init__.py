"""Database infrastructure - shared engine and model primitives."""

from infrastructure.database.engines import (
    create_engine_from_settings,
    create_session_factory,
)
from infrastructure.database.models import Base

__all__ = [
    "Base",
    "create_engine_from_settings",
    "create_session_factory",
]
