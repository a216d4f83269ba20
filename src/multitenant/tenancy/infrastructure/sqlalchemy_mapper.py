"""SQLAlchemy ORM adapter for the tenancy data-mapping port.

Read filters are applied from a ``do_orm_execute`` listener as
``with_loader_criteria`` options, so they reach every ORM SELECT issued
through the session target, including relationship loads. Pre-persist hooks
run from the mapper-level ``before_insert`` event, which only fires for new
rows.

Reads that never reach ``do_orm_execute`` are not filtered: Core
statements executed on a ``Connection`` and ``Session.get`` hits served
from the identity map.
"""

from __future__ import annotations

from typing import Any, Callable

from sqlalchemy import and_, event
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import (
    ORMExecuteState,
    RelationshipDirection,
    Session,
    with_loader_criteria,
)

from tenancy.ports.exceptions import AssociationNotFoundError, ConfigurationError
from tenancy.ports.mapping import AssociationReflection, PrePersistHook, ReadFilter


class SQLAlchemyDataMapper:
    """``DataMapper`` implementation backed by SQLAlchemy 2.x ORM events.

    Args:
        session_target: Where the ``do_orm_execute`` listener is attached.
            Any valid Session event target: the ``Session`` class (default,
            every session in the process), a ``sessionmaker`` or a
            ``scoped_session``.
    """

    def __init__(self, session_target: Any = Session):
        self._session_target = session_target
        self._read_filters: dict[type, list[ReadFilter]] = {}
        self._insert_listeners: list[tuple[type, Callable[..., None]]] = []
        self._listening = False

    def reflect_association(
        self, entity_type: type, name: str
    ) -> AssociationReflection:
        """Reflect a many-to-one relationship and its single foreign-key column."""
        mapper = sa_inspect(entity_type, raiseerr=False)
        if mapper is None:
            raise ConfigurationError(f"{entity_type!r} is not a mapped class")

        if name not in mapper.relationships:
            raise AssociationNotFoundError(entity_type, name)
        relationship = mapper.relationships[name]

        if relationship.direction is not RelationshipDirection.MANYTOONE:
            raise ConfigurationError(
                f"{entity_type.__name__}.{name} must be a many-to-one "
                f"relationship, got {relationship.direction.name}"
            )

        columns = list(relationship.local_columns)
        if len(columns) != 1:
            raise ConfigurationError(
                f"{entity_type.__name__}.{name} must use a single foreign-key "
                f"column, got {len(columns)}"
            )

        foreign_key = mapper.get_property_by_column(columns[0]).key
        return AssociationReflection(
            target_type=relationship.mapper.class_,
            foreign_key=foreign_key,
        )

    def install_default_read_filter(
        self, entity_type: type, predicate: ReadFilter
    ) -> None:
        self._read_filters.setdefault(entity_type, []).append(predicate)
        if not self._listening:
            event.listen(
                self._session_target, "do_orm_execute", self._apply_read_filters
            )
            self._listening = True

    def install_pre_persist_hook(
        self, entity_type: type, hook: PrePersistHook
    ) -> None:
        def before_insert(mapper: Any, connection: Any, target: Any) -> None:
            hook(target)

        event.listen(entity_type, "before_insert", before_insert, propagate=True)
        self._insert_listeners.append((entity_type, before_insert))

    def identity_of(self, entity: Any) -> Any:
        """Primary-key identity of ``entity``, None when it has none yet.

        Persistent and detached instances answer from their identity key,
        which never triggers a refresh of expired attributes.
        """
        state = sa_inspect(entity)
        if state.key is not None:
            identity = state.key[1]
        else:
            identity = state.mapper.primary_key_from_instance(entity)
        if len(identity) == 1:
            return identity[0]
        return tuple(identity)

    def detach(self) -> None:
        """Remove every listener this adapter installed."""
        if self._listening:
            event.remove(
                self._session_target, "do_orm_execute", self._apply_read_filters
            )
            self._listening = False
        for entity_type, listener in self._insert_listeners:
            event.remove(entity_type, "before_insert", listener)
        self._insert_listeners.clear()
        self._read_filters.clear()

    def _apply_read_filters(self, orm_execute_state: ORMExecuteState) -> None:
        if not orm_execute_state.is_select or orm_execute_state.is_column_load:
            return

        options = []
        for entity_type, predicates in self._read_filters.items():
            criteria = []
            for predicate in predicates:
                tenant_filter = predicate()
                if tenant_filter is not None:
                    column = getattr(entity_type, tenant_filter.foreign_key)
                    criteria.append(column == tenant_filter.tenant_id)
            if criteria:
                options.append(
                    with_loader_criteria(
                        entity_type, and_(*criteria), include_aliases=True
                    )
                )

        if options:
            orm_execute_state.statement = orm_execute_state.statement.options(
                *options
            )
