"""All repositories bound to one API client."""

from ..client import RailwayApiClient
from .service_repo import ServiceRepository
from .tcp_proxy_repo import TcpProxyRepository
from .template_repo import TemplateRepository
from .variable_repo import VariableRepository
from .volume_repo import VolumeRepository


class RepositorySet:
    """Repositories sharing a single, explicitly constructed API client."""

    def __init__(self, client: RailwayApiClient, variable_batch_size: int = 10):
        self.client = client
        self.services = ServiceRepository(client)
        self.tcp_proxies = TcpProxyRepository(client)
        self.templates = TemplateRepository(client)
        self.variables = VariableRepository(client, batch_size=variable_batch_size)
        self.volumes = VolumeRepository(client)
