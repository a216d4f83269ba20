"""Infrastructure adapters for the tenancy bounded context."""

from tenancy.infrastructure.sqlalchemy_mapper import SQLAlchemyDataMapper

__all__ = ["SQLAlchemyDataMapper"]
