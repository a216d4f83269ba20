"""Scoped execution of a unit of work under a tenant.

The slot for the entity type's dimension is set on entry and restored
exactly once on exit, whether the body returns, raises, or is cancelled.
Errors raised by the body are never caught or altered.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from tenancy.application.registry import DimensionRegistry
from tenancy.observability import DefaultTenantScopingProbe, TenantScopingProbe

T = TypeVar("T")


@contextmanager
def tenant_scope(
    registry: DimensionRegistry,
    entity_type: type,
    tenant: Any,
    *,
    restore_outer: bool = False,
    probe: TenantScopingProbe | None = None,
) -> Iterator[Any]:
    """Make ``tenant`` current for ``entity_type``'s dimension inside the block.

    Args:
        registry: Registry the entity type was registered with
        entity_type: A type registered with ``register_scoped``
        tenant: Tenant entity or identifier
        restore_outer: On exit, restore the value that was active on entry
            instead of clearing the slot
        probe: Domain probe for scope events

    Yields:
        The tenant that was made current

    Raises:
        UnscopedEntityTypeError: If ``entity_type`` is not registered
    """
    probe = probe or DefaultTenantScopingProbe()
    dimension = registry.dimension_for(entity_type)
    outer = registry.current_tenant(entity_type)

    registry.set_current_tenant(entity_type, tenant)
    probe.tenant_scope_entered(dimension.key, repr(tenant))
    try:
        yield tenant
    except BaseException as e:
        probe.tenant_scope_failed(dimension.key, e)
        raise
    finally:
        restored = outer if restore_outer else None
        registry.set_current_tenant(entity_type, restored)
        probe.tenant_scope_exited(
            dimension.key, None if restored is None else repr(restored)
        )


def with_tenant(
    registry: DimensionRegistry,
    entity_type: type,
    tenant: Any,
    body: Callable[[], T],
    *,
    restore_outer: bool = False,
    probe: TenantScopingProbe | None = None,
) -> T:
    """Run ``body`` with ``tenant`` current and return its result."""
    with tenant_scope(
        registry, entity_type, tenant, restore_outer=restore_outer, probe=probe
    ):
        return body()
