"""Unit tests for the provisioning orchestrator.

Tests run the full workflow against in-memory repositories and check the
order of remote calls and the behaviour at each failure point.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from railway_mcp.api.repositories import TcpProxyRepository, VolumeRepository
from railway_mcp.errors import (
    ApplicationError,
    InstanceNotFound,
    InvalidRegion,
    InvalidTemplate,
    PlacementUpdateFailed,
    ProxyCreationFailed,
    TemplateNotFound,
    TransportError,
    UnsupportedDatabaseType,
    VariableBatchFailed,
    VariableUpsertFailed,
    VolumeCreationFailed,
)
from railway_mcp.models import MutationResult
from railway_mcp.provisioning import ProvisioningOrchestrator, RegionCode
from tests.helpers import FakeRepositorySet, make_template

FULL_SEQUENCE = [
    "list_templates",
    "create_service",
    "upsert_variable",
    "get_service_instance",
    "update_service_instance",
    "create_tcp_proxy",
    "create_volume",
]


async def _provision(repositories, **overrides):
    kwargs = {
        "project_id": "p1",
        "template_id": "pg-1",
        "environment_id": "e1",
        "region": "us-west1",
    }
    kwargs.update(overrides)
    orchestrator = ProvisioningOrchestrator(repositories)
    return await orchestrator.provision_from_template(**kwargs)


@pytest.mark.fast
class TestTemplateProvisioning:
    """Test the templated provisioning path end to end."""

    @pytest.mark.asyncio
    async def test_postgres_template_end_to_end(self, repositories):
        result = await _provision(repositories)

        assert repositories.operations == FULL_SEQUENCE
        assert repositories.calls("create_service") == [
            {"project_id": "p1", "source": {"image": "postgres:15"}, "name": "Template"}
        ]
        upsert = repositories.calls("upsert_variable")
        assert upsert == [
            {
                "projectId": "p1",
                "environmentId": "e1",
                "serviceId": "svc-1",
                "name": "PGUSER",
                "value": "u",
            }
        ]
        assert repositories.calls("update_service_instance") == [
            {"service_id": "svc-1", "environment_id": "e1", "region": "us-west1"}
        ]
        assert repositories.calls("create_tcp_proxy") == [
            {"environment_id": "e1", "service_id": "svc-1", "application_port": 5432}
        ]
        assert repositories.calls("create_volume") == [
            {
                "project_id": "p1",
                "environment_id": "e1",
                "service_id": "svc-1",
                "mount_path": "/data",
            }
        ]

        assert result.service.id == "svc-1"
        assert result.region == "us-west1"
        assert result.variables == ["PGUSER"]
        assert result.tcp_proxy.application_port == 5432
        assert result.volume.id == "vol-1"
        assert "postgres:15" in result.summary

    @pytest.mark.asyncio
    async def test_override_name_is_used(self, repositories):
        result = await _provision(repositories, name="orders-db")

        assert repositories.calls("create_service")[0]["name"] == "orders-db"
        assert result.service.name == "orders-db"

    @pytest.mark.asyncio
    async def test_region_enum_is_accepted(self, repositories):
        result = await _provision(repositories, region=RegionCode.EUROPE_WEST4)

        assert result.region == "europe-west4"
        assert repositories.calls("update_service_instance")[0]["region"] == "europe-west4"

    @pytest.mark.asyncio
    async def test_template_without_variables_skips_upsert(self):
        repositories = FakeRepositorySet(
            templates=[
                make_template(
                    "redis-1",
                    category="Databases",
                    services={"cache": {"source": {"image": "redis:7"}}},
                )
            ]
        )

        result = await _provision(repositories, template_id="redis-1")

        assert "upsert_variable" not in repositories.operations
        assert result.variables == []
        # Templated deploys always expose a port
        assert repositories.calls("create_tcp_proxy")[0]["application_port"] == 5432

    @pytest.mark.asyncio
    async def test_many_variables_complete_before_placement(self):
        variables = {f"VAR_{i:02d}": {"defaultValue": str(i)} for i in range(25)}
        repositories = FakeRepositorySet(
            templates=[
                make_template(
                    "pg-1",
                    category="SQL Databases",
                    services={"db": {"source": {"image": "postgres:15"}, "variables": variables}},
                )
            ]
        )

        await _provision(repositories)

        operations = repositories.operations
        assert operations.count("upsert_variable") == 25
        last_upsert = max(i for i, op in enumerate(operations) if op == "upsert_variable")
        assert last_upsert < operations.index("get_service_instance")
        assert repositories.gateway.max_in_flight == 10


@pytest.mark.fast
class TestValidationFailures:
    """Failures before the service exists leave nothing behind."""

    @pytest.mark.asyncio
    async def test_unknown_template(self, repositories):
        with pytest.raises(TemplateNotFound):
            await _provision(repositories, template_id="nonexistent")

        assert repositories.operations == ["list_templates"]

    @pytest.mark.asyncio
    async def test_template_with_no_services(self):
        repositories = FakeRepositorySet(
            templates=[make_template("empty-1", category="Databases", services={})]
        )

        with pytest.raises(InvalidTemplate):
            await _provision(repositories, template_id="empty-1")

        assert repositories.operations == ["list_templates"]

    @pytest.mark.asyncio
    async def test_template_without_image(self):
        repositories = FakeRepositorySet(
            templates=[
                make_template(
                    "repo-1",
                    category="Databases",
                    services={"db": {"source": {"repo": "org/db"}}},
                )
            ]
        )

        with pytest.raises(InvalidTemplate):
            await _provision(repositories, template_id="repo-1")

        assert repositories.operations == ["list_templates"]

    @pytest.mark.parametrize("region", ["mars-north1", "", None, "US-WEST1"])
    @pytest.mark.asyncio
    async def test_unsupported_region(self, repositories, region):
        with pytest.raises(InvalidRegion):
            await _provision(repositories, region=region)

        assert repositories.operations == []

    @pytest.mark.asyncio
    async def test_service_creation_error_propagates(self, repositories):
        repositories.services.create_error = ApplicationError("Project not found")

        with pytest.raises(ApplicationError):
            await _provision(repositories)

        assert repositories.operations == ["list_templates", "create_service"]


@pytest.mark.fast
class TestStepFailures:
    """Failures after the service exists name the step and the created resources."""

    @pytest.mark.asyncio
    async def test_variable_upsert_failure(self, postgres_template):
        repositories = FakeRepositorySet(
            templates=[postgres_template], fail_variable="PGUSER"
        )

        with pytest.raises(VariableUpsertFailed) as exc_info:
            await _provision(repositories)

        error = exc_info.value
        assert error.service_id == "svc-1"
        assert error.environment_id == "e1"
        assert isinstance(error.__cause__, ApplicationError)
        assert "get_service_instance" not in repositories.operations

    @pytest.mark.asyncio
    async def test_variable_failure_reports_applied_names(self):
        variables = {
            name: {"defaultValue": "x"}
            for name in ("PGUSER", "PGPASSWORD", "PGDATABASE")
        }
        repositories = FakeRepositorySet(
            templates=[
                make_template(
                    "pg-1",
                    category="SQL Databases",
                    services={"db": {"source": {"image": "postgres:15"}, "variables": variables}},
                )
            ],
            fail_variable="PGPASSWORD",
        )

        with pytest.raises(VariableUpsertFailed) as exc_info:
            await _provision(repositories)

        error = exc_info.value
        assert isinstance(error.__cause__, VariableBatchFailed)
        assert error.__cause__.failed == ["PGPASSWORD"]
        assert error.context()["created_resources"] == {
            "service_id": "svc-1",
            "variables": ["PGUSER", "PGDATABASE"],
        }
        # The rest of the chunk settled before the failure surfaced
        assert [d["name"] for d in repositories.calls("upsert_variable")] == [
            "PGUSER",
            "PGDATABASE",
        ]
        assert repositories.gateway.in_flight == 0

    @pytest.mark.asyncio
    async def test_missing_instance(self, repositories):
        repositories.services.instance_exists = False

        with pytest.raises(InstanceNotFound) as exc_info:
            await _provision(repositories)

        assert exc_info.value.context()["failed_step"] == "update_placement"
        assert "update_service_instance" not in repositories.operations
        assert "create_tcp_proxy" not in repositories.operations

    @pytest.mark.asyncio
    async def test_placement_update_returning_false(self, repositories):
        repositories.services.update_result = MutationResult.failed("rejected")

        with pytest.raises(PlacementUpdateFailed) as exc_info:
            await _provision(repositories)

        assert exc_info.value.created == {"service_id": "svc-1"}
        assert "create_tcp_proxy" not in repositories.operations
        assert "create_volume" not in repositories.operations

    @pytest.mark.asyncio
    async def test_proxy_returning_none(self, repositories):
        repositories.tcp_proxies.returns_none = True

        with pytest.raises(ProxyCreationFailed) as exc_info:
            await _provision(repositories)

        assert exc_info.value.service_id == "svc-1"
        assert "create_volume" not in repositories.operations

    @pytest.mark.asyncio
    async def test_proxy_transport_error(self, repositories):
        repositories.tcp_proxies.error = TransportError("connection reset")

        with pytest.raises(ProxyCreationFailed) as exc_info:
            await _provision(repositories)

        assert isinstance(exc_info.value.__cause__, TransportError)
        assert "create_volume" not in repositories.operations

    @pytest.mark.asyncio
    async def test_malformed_proxy_payload(self, repositories):
        client = Mock()
        client.request = AsyncMock(
            return_value={"tcpProxyCreate": {"id": "x", "applicationPort": None}}
        )
        repositories.tcp_proxies = TcpProxyRepository(client)

        with pytest.raises(ProxyCreationFailed) as exc_info:
            await _provision(repositories)

        error = exc_info.value
        assert error.service_id == "svc-1"
        assert error.created == {"service_id": "svc-1"}
        assert isinstance(error.__cause__, ApplicationError)
        assert "create_volume" not in repositories.operations

    @pytest.mark.asyncio
    async def test_malformed_volume_payload(self, repositories):
        client = Mock()
        client.request = AsyncMock(return_value={"volumeCreate": {"name": "data"}})
        repositories.volumes = VolumeRepository(client)

        with pytest.raises(VolumeCreationFailed) as exc_info:
            await _provision(repositories)

        assert exc_info.value.context()["created_resources"] == {
            "service_id": "svc-1",
            "tcp_proxy_id": "proxy-1",
        }
        assert isinstance(exc_info.value.__cause__, ApplicationError)

    @pytest.mark.asyncio
    async def test_volume_returning_none(self, repositories):
        repositories.volumes.returns_none = True

        with pytest.raises(VolumeCreationFailed) as exc_info:
            await _provision(repositories)

        context = exc_info.value.context()
        assert context["failed_step"] == "create_volume"
        assert context["created_resources"] == {
            "service_id": "svc-1",
            "tcp_proxy_id": "proxy-1",
        }

    @pytest.mark.asyncio
    async def test_no_cleanup_after_failure(self, repositories):
        repositories.volumes.returns_none = True

        with pytest.raises(VolumeCreationFailed):
            await _provision(repositories)

        assert repositories.operations == FULL_SEQUENCE


@pytest.mark.fast
class TestBuiltinDatabaseProvisioning:
    """Test the built-in catalog path."""

    @pytest.mark.asyncio
    async def test_postgres(self):
        repositories = FakeRepositorySet()
        orchestrator = ProvisioningOrchestrator(repositories)

        result = await orchestrator.provision_database("p1", "postgres", "e1", "us-east4")

        assert repositories.operations[0] == "create_service"
        assert "list_templates" not in repositories.operations
        assert repositories.calls("create_service")[0]["source"] == {
            "image": "railwayapp-templates/postgres-ssl:15"
        }
        assert repositories.operations.count("upsert_variable") == 4
        assert repositories.calls("create_tcp_proxy")[0]["application_port"] == 5432
        assert repositories.calls("create_volume")[0]["mount_path"] == "/var/lib/postgresql/data"
        assert result.service.name == "PostgreSQL"

    @pytest.mark.asyncio
    async def test_type_without_port_skips_proxy(self):
        repositories = FakeRepositorySet()
        orchestrator = ProvisioningOrchestrator(repositories)

        result = await orchestrator.provision_database("p1", "sqlite3", "e1", "us-west1")

        assert "create_tcp_proxy" not in repositories.operations
        assert result.tcp_proxy is None
        assert repositories.calls("create_volume")[0]["mount_path"] == "/data"
        assert repositories.operations.index("update_service_instance") < (
            repositories.operations.index("create_volume")
        )

    @pytest.mark.asyncio
    async def test_unsupported_type(self):
        repositories = FakeRepositorySet()
        orchestrator = ProvisioningOrchestrator(repositories)

        with pytest.raises(UnsupportedDatabaseType):
            await orchestrator.provision_database("p1", "oracle", "e1", "us-west1")

        assert repositories.operations == []
