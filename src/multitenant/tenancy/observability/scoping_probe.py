"""Domain probe for tenant scoping.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to tenant registration, scoped
execution and foreign-key auto-population.

Per-query filter evaluation is deliberately not instrumented; it runs on
every ORM SELECT.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import Protocol

import structlog


class TenantScopingProbe(Protocol):
    """Domain probe for tenant scoping operations."""

    def entity_type_registered(self, entity_type: str, dimension: str) -> None:
        """Record that an entity type was registered as a dimension owner."""
        ...

    def dimension_shared(self, dimension: str, entity_types: list[str]) -> None:
        """Record that several entity types share one dimension slot."""
        ...

    def association_scoped(
        self,
        entity_type: str,
        association: str,
        foreign_key: str,
        dimension: str,
    ) -> None:
        """Record that an association now drives read filtering and auto-population."""
        ...

    def configuration_rejected(self, entity_type: str, reason: str) -> None:
        """Record that a registration was rejected."""
        ...

    def tenant_scope_entered(self, dimension: str, tenant: str) -> None:
        """Record that a unit of work entered a tenant scope."""
        ...

    def tenant_scope_exited(self, dimension: str, restored: str | None) -> None:
        """Record that a tenant scope ended and the slot was restored."""
        ...

    def tenant_scope_failed(self, dimension: str, error: BaseException) -> None:
        """Record that the body of a tenant scope raised."""
        ...

    def tenant_auto_populated(
        self, entity_type: str, foreign_key: str, tenant_id: str
    ) -> None:
        """Record that a new record's tenant foreign key was filled in."""
        ...


class DefaultTenantScopingProbe:
    """Default implementation of TenantScopingProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def entity_type_registered(self, entity_type: str, dimension: str) -> None:
        """Record that an entity type was registered as a dimension owner."""
        self._logger.info(
            "tenant_entity_type_registered",
            entity_type=entity_type,
            dimension=dimension,
        )

    def dimension_shared(self, dimension: str, entity_types: list[str]) -> None:
        """Record that several entity types share one dimension slot."""
        self._logger.warning(
            "tenant_dimension_shared",
            dimension=dimension,
            entity_types=entity_types,
        )

    def association_scoped(
        self,
        entity_type: str,
        association: str,
        foreign_key: str,
        dimension: str,
    ) -> None:
        """Record that an association now drives read filtering and auto-population."""
        self._logger.info(
            "tenant_association_scoped",
            entity_type=entity_type,
            association=association,
            foreign_key=foreign_key,
            dimension=dimension,
        )

    def configuration_rejected(self, entity_type: str, reason: str) -> None:
        """Record that a registration was rejected."""
        self._logger.error(
            "tenant_configuration_rejected",
            entity_type=entity_type,
            reason=reason,
        )

    def tenant_scope_entered(self, dimension: str, tenant: str) -> None:
        """Record that a unit of work entered a tenant scope."""
        self._logger.debug(
            "tenant_scope_entered",
            dimension=dimension,
            tenant=tenant,
        )

    def tenant_scope_exited(self, dimension: str, restored: str | None) -> None:
        """Record that a tenant scope ended and the slot was restored."""
        self._logger.debug(
            "tenant_scope_exited",
            dimension=dimension,
            restored=restored,
        )

    def tenant_scope_failed(self, dimension: str, error: BaseException) -> None:
        """Record that the body of a tenant scope raised."""
        self._logger.warning(
            "tenant_scope_failed",
            dimension=dimension,
            error=str(error),
            error_type=type(error).__name__,
        )

    def tenant_auto_populated(
        self, entity_type: str, foreign_key: str, tenant_id: str
    ) -> None:
        """Record that a new record's tenant foreign key was filled in."""
        self._logger.debug(
            "tenant_auto_populated",
            entity_type=entity_type,
            foreign_key=foreign_key,
            tenant_id=tenant_id,
        )
