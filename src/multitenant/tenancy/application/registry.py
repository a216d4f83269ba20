"""Process-wide registration table for tenant-scoped entity types.

Registrations are written once while the application starts and are only
read afterwards, so lookups need no synchronization.
"""

from __future__ import annotations

from typing import Any

from tenancy.application.context import TenantContext
from tenancy.domain.value_objects import (
    Dimension,
    ScopedAssociation,
    ScopedEntityType,
)
from tenancy.observability import DefaultTenantScopingProbe, TenantScopingProbe
from tenancy.ports.exceptions import ConfigurationError, UnscopedEntityTypeError

REGISTRATION_OPTIONS = frozenset({"dimension_key"})


class DimensionRegistry:
    """Binds entity types to the tenant dimension they own.

    Also records which associations of which entity types are scoped by a
    dimension, and exposes the current-tenant accessors keyed by entity type.
    """

    def __init__(
        self,
        context: TenantContext | None = None,
        probe: TenantScopingProbe | None = None,
    ):
        self._context = context or TenantContext()
        self._probe = probe or DefaultTenantScopingProbe()
        self._scoped: dict[type, ScopedEntityType] = {}
        self._associations: dict[type, dict[str, ScopedAssociation]] = {}

    @property
    def context(self) -> TenantContext:
        return self._context

    def register_scoped(self, entity_type: type, **options: Any) -> Dimension:
        """Register ``entity_type`` as the owner of a tenant dimension.

        Args:
            entity_type: The tenant entity type, e.g. ``Company``
            **options: Only ``dimension_key`` is accepted; it overrides the
                dimension derived from the type name

        Returns:
            The dimension bound to ``entity_type``

        Raises:
            ConfigurationError: On unknown options, an empty dimension key,
                or a re-registration with a different dimension
        """
        if not isinstance(entity_type, type):
            raise self._reject(entity_type, "entity type must be a class")

        for key, value in options.items():
            if key not in REGISTRATION_OPTIONS:
                raise self._reject(
                    entity_type,
                    f"unknown option for register_scoped: {key!r} => {value!r}",
                )

        dimension = self._resolve_dimension(entity_type, options.get("dimension_key"))

        existing = self._scoped.get(entity_type)
        if existing is not None:
            if existing.dimension != dimension:
                raise self._reject(
                    entity_type,
                    f"already registered with dimension {existing.dimension.key!r}, "
                    f"cannot re-register with {dimension.key!r}",
                )
            return dimension

        self._scoped[entity_type] = ScopedEntityType(entity_type, dimension)
        self._probe.entity_type_registered(entity_type.__name__, dimension.key)

        sharing = [
            scoped.entity_type.__name__
            for scoped in self._scoped.values()
            if scoped.dimension == dimension
        ]
        if len(sharing) > 1:
            self._probe.dimension_shared(dimension.key, sharing)

        return dimension

    def is_scoped(self, entity_type: type) -> bool:
        return entity_type in self._scoped

    def dimension_for(self, entity_type: type) -> Dimension:
        """Return the dimension owned by ``entity_type``.

        Raises:
            UnscopedEntityTypeError: If ``entity_type`` was never registered
        """
        try:
            return self._scoped[entity_type].dimension
        except KeyError:
            raise UnscopedEntityTypeError(entity_type) from None

    def add_association(self, association: ScopedAssociation) -> bool:
        """Record a scoped association.

        Returns:
            True if the association is new, False if the identical
            association was already recorded

        Raises:
            ConfigurationError: If the association name is already recorded
                for the entity type with different metadata
        """
        by_name = self._associations.setdefault(association.entity_type, {})
        existing = by_name.get(association.name)
        if existing is None:
            by_name[association.name] = association
            return True
        if existing != association:
            raise self._reject(
                association.entity_type,
                f"association {association.name!r} is already scoped by "
                f"{existing.target_type.__name__}.{existing.foreign_key}",
            )
        return False

    def associations_for(self, entity_type: type) -> tuple[ScopedAssociation, ...]:
        return tuple(self._associations.get(entity_type, {}).values())

    def current_tenant(self, entity_type: type) -> Any | None:
        """Return the tenant active for ``entity_type``'s dimension."""
        return self._context.get(self.dimension_for(entity_type))

    def set_current_tenant(self, entity_type: type, tenant: Any | None) -> None:
        """Set the tenant for ``entity_type``'s dimension in this execution context."""
        self._context.set(self.dimension_for(entity_type), tenant)

    def _resolve_dimension(self, entity_type: type, dimension_key: Any) -> Dimension:
        if dimension_key is None:
            return Dimension.for_entity_type(entity_type)
        if isinstance(dimension_key, Dimension):
            return dimension_key
        if isinstance(dimension_key, str) and dimension_key:
            return Dimension(dimension_key)
        raise self._reject(
            entity_type,
            f"dimension_key must be a non-empty string, got {dimension_key!r}",
        )

    def _reject(self, entity_type: Any, reason: str) -> ConfigurationError:
        name = getattr(entity_type, "__name__", repr(entity_type))
        self._probe.configuration_rejected(name, reason)
        return ConfigurationError(f"{name}: {reason}")
