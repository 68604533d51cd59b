"""Service and service instance operations."""

from typing import Any, Optional

from ...models import MutationResult, Service, ServiceInstance
from .payloads import parse_payload

CREATE_SERVICE_MUTATION = """
mutation serviceCreate($projectId: String!, $name: String, $source: ServiceSourceInput) {
  serviceCreate(input: {projectId: $projectId, name: $name, source: $source}) {
    id
    name
    projectId
    createdAt
    updatedAt
    deletedAt
    icon
    templateServiceId
  }
}
"""

SERVICE_INSTANCE_QUERY = """
query serviceInstance($serviceId: String!, $environmentId: String!) {
  serviceInstance(serviceId: $serviceId, environmentId: $environmentId) {
    id
    serviceId
    serviceName
    environmentId
    buildCommand
    startCommand
    rootDirectory
    region
    healthcheckPath
    sleepApplication
    numReplicas
  }
}
"""

UPDATE_SERVICE_INSTANCE_MUTATION = """
mutation serviceInstanceUpdate(
  $serviceId: String!,
  $environmentId: String!,
  $input: ServiceInstanceUpdateInput!
) {
  serviceInstanceUpdate(serviceId: $serviceId, environmentId: $environmentId, input: $input)
}
"""

# Fields serviceInstanceUpdate accepts, keyed by their Python name
UPDATABLE_INSTANCE_FIELDS = {
    "build_command": "buildCommand",
    "start_command": "startCommand",
    "root_directory": "rootDirectory",
    "healthcheck_path": "healthcheckPath",
    "num_replicas": "numReplicas",
    "sleep_application": "sleepApplication",
    "region": "region",
}


class ServiceRepository:
    def __init__(self, client):
        self.client = client

    async def create_service(
        self, project_id: str, source: dict[str, str], name: Optional[str] = None
    ) -> Service:
        data = await self.client.request(
            CREATE_SERVICE_MUTATION,
            {"projectId": project_id, "name": name, "source": source or None},
        )
        return parse_payload(Service, data, "serviceCreate")

    async def get_service_instance(
        self, service_id: str, environment_id: str
    ) -> Optional[ServiceInstance]:
        """Return the instance, or None when Railway has not created it yet."""
        data = await self.client.request(
            SERVICE_INSTANCE_QUERY,
            {"serviceId": service_id, "environmentId": environment_id},
        )
        return parse_payload(ServiceInstance, data, "serviceInstance", required=False)

    async def update_service_instance(
        self, service_id: str, environment_id: str, **fields: Any
    ) -> MutationResult:
        """Apply a partial update; only the given fields are sent."""
        unknown = set(fields) - set(UPDATABLE_INSTANCE_FIELDS)
        if unknown:
            raise ValueError(
                f"Unsupported service instance fields: {', '.join(sorted(unknown))}"
            )
        update_input = {
            UPDATABLE_INSTANCE_FIELDS[key]: value
            for key, value in fields.items()
            if value is not None
        }
        data = await self.client.request(
            UPDATE_SERVICE_INSTANCE_MUTATION,
            {
                "serviceId": service_id,
                "environmentId": environment_id,
                "input": update_input,
            },
        )
        if data.get("serviceInstanceUpdate"):
            return MutationResult.succeeded()
        return MutationResult.failed(
            f"serviceInstanceUpdate returned false for service {service_id} "
            f"in environment {environment_id}"
        )
