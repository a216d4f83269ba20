"""Value objects for the tenancy domain.

Value objects are immutable descriptors for the registrations made at
application startup and for the filters produced at query time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def underscore(name: str) -> str:
    """Convert a CamelCase type name to lower snake case.

    ``BookKeeper`` becomes ``book_keeper`` and ``HTTPClient`` becomes
    ``http_client``.
    """
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


@dataclass(frozen=True)
class Dimension:
    """An independent axis of tenancy, used as the key of a context slot.

    Attributes:
        key: Stable name of the dimension, e.g. ``"company"``.
    """

    key: str

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Dimension key must be a non-empty string")

    def __str__(self) -> str:
        """Return string representation."""
        return self.key

    @classmethod
    def for_entity_type(cls, entity_type: type) -> Dimension:
        """Derive the default dimension from an entity type's own name."""
        return cls(key=underscore(entity_type.__name__))


@dataclass(frozen=True)
class ScopedEntityType:
    """Registration of an entity type as the owner of a tenant dimension."""

    entity_type: type
    dimension: Dimension


@dataclass(frozen=True)
class ScopedAssociation:
    """A many-to-one association whose target owns a tenant dimension.

    Drives both read filtering and foreign-key auto-population for
    ``entity_type``.

    Attributes:
        entity_type: The entity type holding the foreign key.
        name: Association attribute name, e.g. ``"company"``.
        foreign_key: Foreign-key attribute name, e.g. ``"company_id"``.
        target_type: The tenant entity type the association points at.
        dimension: The dimension owned by ``target_type``.
    """

    entity_type: type
    name: str
    foreign_key: str
    target_type: type
    dimension: Dimension


@dataclass(frozen=True)
class TenantFilter:
    """Constraint produced for a single read: ``foreign_key == tenant_id``."""

    foreign_key: str
    tenant_id: Any
