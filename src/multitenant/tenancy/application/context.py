"""Execution-context-local storage for the current tenant of each dimension.

All slots live in a single ``ContextVar`` holding an immutable mapping.
Every write replaces the mapping instead of mutating it, so a value set in
one thread or asyncio task is never visible to another one.
"""

from __future__ import annotations

from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, Mapping

from tenancy.domain.value_objects import Dimension

_EMPTY: Mapping[Dimension, Any] = MappingProxyType({})

_current_tenants: ContextVar[Mapping[Dimension, Any]] = ContextVar(
    "multitenant_current_tenants", default=_EMPTY
)


class TenantContext:
    """Per-dimension current-tenant slots for the calling execution context.

    Instances carry no state of their own; they are a typed view over the
    context variable.
    """

    def get(self, dimension: Dimension) -> Any | None:
        """Return the tenant set for ``dimension``, or None if empty."""
        return _current_tenants.get().get(dimension)

    def set(self, dimension: Dimension, tenant: Any | None) -> None:
        """Overwrite the slot for ``dimension``; ``None`` empties it."""
        tenants = dict(_current_tenants.get())
        if tenant is None:
            tenants.pop(dimension, None)
        else:
            tenants[dimension] = tenant
        _current_tenants.set(MappingProxyType(tenants))

    def snapshot(self) -> dict[Dimension, Any]:
        """Return a copy of every non-empty slot."""
        return dict(_current_tenants.get())

    def clear(self) -> None:
        """Empty every slot in the calling execution context."""
        _current_tenants.set(_EMPTY)
