"""Volume operations."""

from typing import Optional

from ...models import Volume
from .payloads import parse_payload

CREATE_VOLUME_MUTATION = """
mutation volumeCreate($input: VolumeCreateInput!) {
  volumeCreate(input: $input) {
    createdAt
    id
    name
    projectId
  }
}
"""


class VolumeRepository:
    def __init__(self, client):
        self.client = client

    async def create_volume(
        self, project_id: str, environment_id: str, service_id: str, mount_path: str
    ) -> Optional[Volume]:
        """Attach a volume at ``mount_path``; returns None when nothing was created."""
        data = await self.client.request(
            CREATE_VOLUME_MUTATION,
            {
                "input": {
                    "projectId": project_id,
                    "environmentId": environment_id,
                    "serviceId": service_id,
                    "mountPath": mount_path,
                }
            },
        )
        return parse_payload(Volume, data, "volumeCreate", required=False)
