"""Tenancy bounded context.

Row-level multi-tenant scoping for ORM-mapped entity types. Entity types
registered with ``register_scoped`` own a tenant dimension; entity types
declared with ``belongs_to_tenant`` have every read filtered to the tenant
active in the current execution context and get their tenant foreign key
stamped on insert.

Example:
    register_scoped(Company)
    belongs_to_tenant(User, "company")

    with tenant_scope(Company, acme):
        users = session.scalars(select(User)).all()
"""

from tenancy.dependencies import (
    belongs_to_tenant,
    current_tenant,
    get_tenant_scoping,
    register_scoped,
    set_current_tenant,
    tenant_scope,
    with_tenant,
)
from tenancy.domain.value_objects import Dimension
from tenancy.ports.exceptions import (
    AssociationNotFoundError,
    ConfigurationError,
    TenancyError,
    UnidentifiedTenantError,
    UnscopedEntityTypeError,
)

__all__ = [
    "AssociationNotFoundError",
    "ConfigurationError",
    "Dimension",
    "TenancyError",
    "UnidentifiedTenantError",
    "UnscopedEntityTypeError",
    "belongs_to_tenant",
    "current_tenant",
    "get_tenant_scoping",
    "register_scoped",
    "set_current_tenant",
    "tenant_scope",
    "with_tenant",
]
