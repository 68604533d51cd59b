"""TCP proxy operations."""

from typing import Optional

from ...models import TcpProxy
from .payloads import parse_payload

CREATE_TCP_PROXY_MUTATION = """
mutation tcpProxyCreate($input: TCPProxyCreateInput!) {
  tcpProxyCreate(input: $input) {
    id
    applicationPort
    domain
    environmentId
    proxyPort
    serviceId
  }
}
"""


class TcpProxyRepository:
    def __init__(self, client):
        self.client = client

    async def create_tcp_proxy(
        self, environment_id: str, service_id: str, application_port: int
    ) -> Optional[TcpProxy]:
        """Expose ``application_port``; returns None when nothing was created."""
        data = await self.client.request(
            CREATE_TCP_PROXY_MUTATION,
            {
                "input": {
                    "environmentId": environment_id,
                    "serviceId": service_id,
                    "applicationPort": application_port,
                }
            },
        )
        return parse_payload(TcpProxy, data, "tcpProxyCreate", required=False)
