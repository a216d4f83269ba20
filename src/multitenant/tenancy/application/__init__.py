"""Application layer for the tenancy bounded context."""

from tenancy.application.context import TenantContext
from tenancy.application.enforcement import (
    TenantAutoPopulator,
    TenantIdentifier,
    TenantReadFilter,
)
from tenancy.application.registry import DimensionRegistry
from tenancy.application.scoped_execution import tenant_scope, with_tenant
from tenancy.application.scoping import TenantScoping

__all__ = [
    "DimensionRegistry",
    "TenantAutoPopulator",
    "TenantContext",
    "TenantIdentifier",
    "TenantReadFilter",
    "TenantScoping",
    "tenant_scope",
    "with_tenant",
]
