"""Ports for the tenancy bounded context.

Ports define the contract the tenancy core requires from the underlying
data-mapping layer, and the exceptions it raises to application code.
"""

from tenancy.ports.exceptions import (
    AssociationNotFoundError,
    ConfigurationError,
    TenancyError,
    UnidentifiedTenantError,
    UnscopedEntityTypeError,
)
from tenancy.ports.mapping import (
    AssociationReflection,
    DataMapper,
    PrePersistHook,
    ReadFilter,
)

__all__ = [
    "AssociationNotFoundError",
    "AssociationReflection",
    "ConfigurationError",
    "DataMapper",
    "PrePersistHook",
    "ReadFilter",
    "TenancyError",
    "UnidentifiedTenantError",
    "UnscopedEntityTypeError",
]
