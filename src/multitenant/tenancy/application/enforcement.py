"""Read filtering and foreign-key auto-population for scoped associations.

Both callbacks are built once per scoped association, with the association
metadata resolved up front. They read the current tenant every time they
are invoked and never cache it.
"""

from __future__ import annotations

from typing import Any

from tenancy.application.context import TenantContext
from tenancy.domain.value_objects import ScopedAssociation, TenantFilter
from tenancy.observability import DefaultTenantScopingProbe, TenantScopingProbe
from tenancy.ports.exceptions import UnidentifiedTenantError
from tenancy.ports.mapping import DataMapper


class TenantIdentifier:
    """Turns a tenant reference into the value stored in the foreign key.

    Instances of the target type resolve to their primary-key identity;
    anything else is taken to already be an identifier. An instance with no
    identity yet raises ``UnidentifiedTenantError``.
    """

    def __init__(self, target_type: type, mapper: DataMapper):
        self._target_type = target_type
        self._mapper = mapper

    def __call__(self, tenant: Any) -> Any:
        if not isinstance(tenant, self._target_type):
            return tenant
        identity = self._mapper.identity_of(tenant)
        if identity is None or (
            isinstance(identity, tuple) and any(part is None for part in identity)
        ):
            raise UnidentifiedTenantError(tenant)
        return identity


class TenantReadFilter:
    """Default read predicate for one scoped association.

    Returns None while the association's dimension is empty, which leaves
    every row visible.
    """

    def __init__(
        self,
        association: ScopedAssociation,
        context: TenantContext,
        identify: TenantIdentifier,
    ):
        self._association = association
        self._context = context
        self._identify = identify

    @property
    def association(self) -> ScopedAssociation:
        return self._association

    def __call__(self) -> TenantFilter | None:
        tenant = self._context.get(self._association.dimension)
        if tenant is None:
            return None
        return TenantFilter(
            foreign_key=self._association.foreign_key,
            tenant_id=self._identify(tenant),
        )


class TenantAutoPopulator:
    """Pre-insert hook filling an unset tenant foreign key.

    A foreign key that is already set is left untouched, and nothing happens
    while the association's dimension is empty.
    """

    def __init__(
        self,
        association: ScopedAssociation,
        context: TenantContext,
        identify: TenantIdentifier,
        probe: TenantScopingProbe | None = None,
    ):
        self._association = association
        self._context = context
        self._identify = identify
        self._probe = probe or DefaultTenantScopingProbe()

    @property
    def association(self) -> ScopedAssociation:
        return self._association

    def __call__(self, entity: Any) -> None:
        foreign_key = self._association.foreign_key
        if getattr(entity, foreign_key, None) is not None:
            return

        tenant = self._context.get(self._association.dimension)
        if tenant is None:
            return

        tenant_id = self._identify(tenant)
        setattr(entity, foreign_key, tenant_id)
        self._probe.tenant_auto_populated(
            type(entity).__name__, foreign_key, str(tenant_id)
        )
