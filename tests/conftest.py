"""Pytest configuration and fixtures for Railway MCP tests."""

import pytest

from tests.helpers import FakeRepositorySet, make_template


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "fast: mark test as fast running")
    config.addinivalue_line("markers", "unit: mark test as a fully mocked unit test")


@pytest.fixture
def postgres_template():
    """The single-service Postgres template used across provisioning tests."""
    return make_template(
        "pg-1",
        category="SQL Databases",
        services={
            "db": {
                "source": {"image": "postgres:15"},
                "variables": {"PGUSER": {"defaultValue": "u"}},
                "networking": {"tcpProxies": {"p": {"port": 5432}}},
                "volumeMounts": {"v": {"mountPath": "/data"}},
            }
        },
    )


@pytest.fixture
def repositories(postgres_template):
    """Fake repositories whose catalog holds the Postgres template."""
    return FakeRepositorySet(templates=[postgres_template])
