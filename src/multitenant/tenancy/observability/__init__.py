"""Observability for tenancy operations."""

from tenancy.observability.scoping_probe import (
    DefaultTenantScopingProbe,
    TenantScopingProbe,
)

__all__ = [
    "DefaultTenantScopingProbe",
    "TenantScopingProbe",
]
