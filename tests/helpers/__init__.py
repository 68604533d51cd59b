"""Test helpers for Railway MCP tests."""

from .fakes import (
    FakeGateway,
    FakeRepositorySet,
    FakeServiceRepository,
    FakeTcpProxyRepository,
    FakeTemplateRepository,
    FakeVolumeRepository,
    make_template,
)

__all__ = [
    "FakeGateway",
    "FakeRepositorySet",
    "FakeServiceRepository",
    "FakeTcpProxyRepository",
    "FakeTemplateRepository",
    "FakeVolumeRepository",
    "make_template",
]
