"""Unit test fixtures with mocked dependencies."""

from unittest.mock import Mock

import pytest

from tenancy.application.context import TenantContext
from tenancy.application.registry import DimensionRegistry
from tenancy.observability import TenantScopingProbe
from tenancy.ports.mapping import DataMapper


@pytest.fixture(autouse=True)
def empty_tenant_context():
    """Start and finish every test with no current tenant in any dimension."""
    context = TenantContext()
    context.clear()
    yield context
    context.clear()


@pytest.fixture
def mock_probe():
    """Mock TenantScopingProbe."""
    return Mock(spec=TenantScopingProbe)


@pytest.fixture
def mock_mapper():
    """Mock DataMapper port."""
    return Mock(spec=DataMapper)


@pytest.fixture
def registry(mock_probe):
    """Empty DimensionRegistry reporting to the mock probe."""
    return DimensionRegistry(probe=mock_probe)
