"""Domain layer for the tenancy bounded context."""

from tenancy.domain.value_objects import (
    Dimension,
    ScopedAssociation,
    ScopedEntityType,
    TenantFilter,
)

__all__ = [
    "Dimension",
    "ScopedAssociation",
    "ScopedEntityType",
    "TenantFilter",
]
