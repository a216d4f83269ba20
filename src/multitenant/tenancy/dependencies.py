"""Dependency wiring for the tenancy bounded context.

Composes the process-wide ``TenantScoping`` service from settings and the
SQLAlchemy adapter, and exposes module-level functions bound to it. Read
filters are attached to the ``Session`` class, so they apply to every ORM
session in the process.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from functools import lru_cache
from typing import Any, Callable, TypeVar

from infrastructure.settings import get_tenancy_settings
from tenancy.application.scoping import TenantScoping
from tenancy.domain.value_objects import Dimension, ScopedAssociation
from tenancy.infrastructure.sqlalchemy_mapper import SQLAlchemyDataMapper
from tenancy.observability import DefaultTenantScopingProbe

T = TypeVar("T")


@lru_cache
def get_tenant_scoping() -> TenantScoping:
    """Get the process-wide tenant scoping service.

    Uses lru_cache so every caller shares one registry.
    """
    settings = get_tenancy_settings()
    return TenantScoping(
        mapper=SQLAlchemyDataMapper(),
        probe=DefaultTenantScopingProbe(),
        default_association=settings.default_association,
        restore_outer_tenant=settings.restore_outer_tenant,
    )


def register_scoped(entity_type: type, **options: Any) -> Dimension:
    """Register ``entity_type`` as the owner of a tenant dimension."""
    return get_tenant_scoping().register_scoped(entity_type, **options)


def belongs_to_tenant(
    entity_type: type, association_name: str | None = None
) -> ScopedAssociation:
    """Scope reads and inserts of ``entity_type`` by one of its associations."""
    return get_tenant_scoping().belongs_to_tenant(entity_type, association_name)


def current_tenant(entity_type: type) -> Any | None:
    return get_tenant_scoping().current_tenant(entity_type)


def set_current_tenant(entity_type: type, tenant: Any | None) -> None:
    get_tenant_scoping().set_current_tenant(entity_type, tenant)


def tenant_scope(entity_type: type, tenant: Any) -> AbstractContextManager[Any]:
    return get_tenant_scoping().tenant_scope(entity_type, tenant)


def with_tenant(entity_type: type, tenant: Any, body: Callable[[], T]) -> T:
    return get_tenant_scoping().with_tenant(entity_type, tenant, body)
