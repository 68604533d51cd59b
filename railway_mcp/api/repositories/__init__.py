"""Typed Railway operations grouped by resource kind."""

from .repository_set import RepositorySet
from .service_repo import ServiceRepository
from .tcp_proxy_repo import TcpProxyRepository
from .template_repo import TemplateRepository
from .variable_repo import VariableRepository
from .volume_repo import VolumeRepository

__all__ = [
    "RepositorySet",
    "ServiceRepository",
    "TcpProxyRepository",
    "TemplateRepository",
    "VariableRepository",
    "VolumeRepository",
]
