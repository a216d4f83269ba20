"""Data-mapping port for the tenancy bounded context.

The tenancy core does not build queries or write rows itself. It relies on
the underlying ORM to expose association metadata, a per-type default read
predicate and a before-insert hook. Adapters implement ``DataMapper`` for a
concrete ORM.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

from tenancy.domain.value_objects import TenantFilter

ReadFilter = Callable[[], "TenantFilter | None"]
"""Zero-argument predicate evaluated for every query; ``None`` means no filter."""

PrePersistHook = Callable[[Any], None]
"""Callback invoked with a new entity right before it is inserted."""


@dataclass(frozen=True)
class AssociationReflection:
    """Association metadata reflected from the data-mapping layer.

    Attributes:
        target_type: The entity type the association points at.
        foreign_key: Name of the local foreign-key attribute.
    """

    target_type: type
    foreign_key: str


@runtime_checkable
class DataMapper(Protocol):
    """Contract required from the external data-mapping layer."""

    def reflect_association(
        self, entity_type: type, name: str
    ) -> AssociationReflection:
        """Look up a declared association.

        Args:
            entity_type: The entity type declaring the association
            name: The association attribute name

        Returns:
            The association's target type and foreign-key attribute name

        Raises:
            AssociationNotFoundError: If the association is not declared
            ConfigurationError: If the association cannot carry a tenant key
        """
        ...

    def install_default_read_filter(
        self, entity_type: type, predicate: ReadFilter
    ) -> None:
        """Install a predicate re-evaluated for every read of ``entity_type``.

        Multiple predicates installed for the same entity type must be
        combined with logical AND.
        """
        ...

    def install_pre_persist_hook(
        self, entity_type: type, hook: PrePersistHook
    ) -> None:
        """Install a hook run for new ``entity_type`` records only, before insert."""
        ...

    def identity_of(self, entity: Any) -> Any:
        """Return the primary-key identity of a mapped entity."""
        ...
