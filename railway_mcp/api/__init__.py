"""Railway API gateway and resource repositories."""

from .client import RailwayApiClient
from .repositories import (
    RepositorySet,
    ServiceRepository,
    TcpProxyRepository,
    TemplateRepository,
    VariableRepository,
    VolumeRepository,
)

__all__ = [
    "RailwayApiClient",
    "RepositorySet",
    "ServiceRepository",
    "TcpProxyRepository",
    "TemplateRepository",
    "VariableRepository",
    "VolumeRepository",
]
