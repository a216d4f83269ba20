"""Integration test fixtures for tenant scoping.

Runs the real SQLAlchemy adapter against an in-memory SQLite database.
Each test gets a fresh schema.
"""

from collections.abc import Generator

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from infrastructure.database import (
    Base,
    create_engine_from_settings,
    create_session_factory,
)
from infrastructure.settings import DatabaseSettings
from tenancy.application.context import TenantContext

import tests.integration.models  # noqa: F401  registers the scoped models


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(autouse=True)
def empty_tenant_context():
    """Start and finish every test with no current tenant in any dimension."""
    context = TenantContext()
    context.clear()
    yield context
    context.clear()


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Provide an in-memory SQLite engine with the model schema created."""
    engine = create_engine_from_settings(
        DatabaseSettings(url="sqlite+pysqlite:///:memory:")
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    """Provide a session bound to the test engine."""
    factory = create_session_factory(engine)
    with factory() as session:
        yield session
