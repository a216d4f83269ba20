"""Tenant scoping service.

Wires the dimension registry, the scoped-execution helpers and the
per-association callbacks to a ``DataMapper`` adapter. This is the surface
application code talks to.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Callable, TypeVar

from tenancy.application.context import TenantContext
from tenancy.application.enforcement import (
    TenantAutoPopulator,
    TenantIdentifier,
    TenantReadFilter,
)
from tenancy.application.registry import DimensionRegistry
from tenancy.application.scoped_execution import tenant_scope, with_tenant
from tenancy.domain.value_objects import Dimension, ScopedAssociation
from tenancy.observability import DefaultTenantScopingProbe, TenantScopingProbe
from tenancy.ports.exceptions import ConfigurationError
from tenancy.ports.mapping import DataMapper

T = TypeVar("T")

DEFAULT_ASSOCIATION = "tenant"


class TenantScoping:
    """Application service for row-level tenant scoping.

    Example:
        scoping = TenantScoping(mapper=SQLAlchemyDataMapper())
        scoping.register_scoped(Company)
        scoping.belongs_to_tenant(User, "company")

        with scoping.tenant_scope(Company, acme):
            ...
    """

    def __init__(
        self,
        mapper: DataMapper,
        registry: DimensionRegistry | None = None,
        probe: TenantScopingProbe | None = None,
        default_association: str = DEFAULT_ASSOCIATION,
        restore_outer_tenant: bool = False,
    ):
        self._mapper = mapper
        self._probe = probe or DefaultTenantScopingProbe()
        self._registry = registry or DimensionRegistry(probe=self._probe)
        self._default_association = default_association
        self._restore_outer_tenant = restore_outer_tenant

    @property
    def registry(self) -> DimensionRegistry:
        return self._registry

    @property
    def context(self) -> TenantContext:
        return self._registry.context

    def register_scoped(self, entity_type: type, **options: Any) -> Dimension:
        """Register ``entity_type`` as a tenant dimension owner.

        See ``DimensionRegistry.register_scoped``.
        """
        return self._registry.register_scoped(entity_type, **options)

    def belongs_to_tenant(
        self, entity_type: type, association_name: str | None = None
    ) -> ScopedAssociation:
        """Scope ``entity_type`` by the tenant behind one of its associations.

        Installs a default read filter restricting reads to rows whose
        foreign key equals the current tenant of the association's target,
        and a pre-insert hook filling that foreign key on new records.
        Declaring several associations on one entity type ANDs their
        filters together.

        Args:
            entity_type: The entity type holding the tenant foreign key
            association_name: Many-to-one association to a registered tenant
                type; defaults to the configured default association name

        Returns:
            The recorded scoped association

        Raises:
            AssociationNotFoundError: If the association is not declared
            ConfigurationError: If the association's target type is not
                registered, or the association cannot carry a tenant key
        """
        name = association_name or self._default_association
        try:
            reflection = self._mapper.reflect_association(entity_type, name)
        except ConfigurationError as e:
            self._probe.configuration_rejected(entity_type.__name__, str(e))
            raise

        if not self._registry.is_scoped(reflection.target_type):
            reason = (
                f"association {name!r} targets {reflection.target_type.__name__}, "
                "which is not registered with register_scoped"
            )
            self._probe.configuration_rejected(entity_type.__name__, reason)
            raise ConfigurationError(f"{entity_type.__name__}: {reason}")

        association = ScopedAssociation(
            entity_type=entity_type,
            name=name,
            foreign_key=reflection.foreign_key,
            target_type=reflection.target_type,
            dimension=self._registry.dimension_for(reflection.target_type),
        )
        if not self._registry.add_association(association):
            return association

        identify = TenantIdentifier(association.target_type, self._mapper)
        self._mapper.install_default_read_filter(
            entity_type, TenantReadFilter(association, self.context, identify)
        )
        self._mapper.install_pre_persist_hook(
            entity_type,
            TenantAutoPopulator(association, self.context, identify, self._probe),
        )
        self._probe.association_scoped(
            entity_type.__name__,
            name,
            association.foreign_key,
            association.dimension.key,
        )
        return association

    def current_tenant(self, entity_type: type) -> Any | None:
        """Return the tenant currently active for ``entity_type``."""
        return self._registry.current_tenant(entity_type)

    def set_current_tenant(self, entity_type: type, tenant: Any | None) -> None:
        """Set the tenant for ``entity_type`` in the calling execution context."""
        self._registry.set_current_tenant(entity_type, tenant)

    def tenant_scope(
        self, entity_type: type, tenant: Any
    ) -> AbstractContextManager[Any]:
        """Context manager making ``tenant`` current for the enclosed block."""
        return tenant_scope(
            self._registry,
            entity_type,
            tenant,
            restore_outer=self._restore_outer_tenant,
            probe=self._probe,
        )

    def with_tenant(self, entity_type: type, tenant: Any, body: Callable[[], T]) -> T:
        """Run ``body`` with ``tenant`` current and return its result."""
        return with_tenant(
            self._registry,
            entity_type,
            tenant,
            body,
            restore_outer=self._restore_outer_tenant,
            probe=self._probe,
        )
