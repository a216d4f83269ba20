"""Exceptions for the tenancy bounded context.

Configuration errors are raised synchronously while entity types are being
registered at startup. They are never raised while serving a request and
are never recovered internally.
"""


class TenancyError(Exception):
    """Base exception for tenancy operations."""

    pass


class ConfigurationError(TenancyError):
    """Raised when a tenant-scoping registration is invalid.

    Covers unknown registration options, conflicting dimension
    registrations and associations that cannot drive tenant scoping.
    """

    pass


class AssociationNotFoundError(ConfigurationError):
    """Raised when an entity type does not declare the named association."""

    def __init__(self, entity_type: type, association_name: str):
        super().__init__(
            f"{entity_type.__name__} has no association named "
            f"{association_name!r}"
        )
        self.entity_type = entity_type
        self.association_name = association_name


class UnscopedEntityTypeError(TenancyError, LookupError):
    """Raised when reading or writing the current tenant of an unregistered type.

    This is a programming error: the entity type was never passed to
    ``register_scoped``.
    """

    def __init__(self, entity_type: type):
        super().__init__(
            f"{entity_type.__name__} is not registered as tenant-scoped"
        )
        self.entity_type = entity_type


class UnidentifiedTenantError(TenancyError, ValueError):
    """Raised when the current tenant is an entity without a primary key.

    Happens when a transient tenant is made current before it was flushed.
    Filtering or stamping with its missing identity would match rows whose
    foreign key is NULL.
    """

    def __init__(self, tenant: object):
        super().__init__(
            f"{type(tenant).__name__} tenant has no primary key; flush it "
            "before making it current"
        )
        self.tenant = tenant
