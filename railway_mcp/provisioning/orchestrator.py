"""Provisioning workflow: stand up a reachable, persistent service on Railway.

A run is a fixed sequence of remote calls, each awaited before the next:

    resolve -> create service -> set variables -> update placement
            -> create TCP proxy -> create volume

Placement comes before the proxy and the volume because Railway derives proxy
allocation and volume affinity from the instance's region at creation time.
Railway offers no transaction across these calls and nothing is rolled back
here: when a step after service creation fails, the raised
:class:`OrchestrationError` names the step and lists the resources that
already exist.
"""

from enum import Enum
from typing import Any, Optional, Union

from ..core_utils import LoggingUtility
from ..errors import (
    InstanceNotFound,
    OrchestrationError,
    PlacementUpdateFailed,
    ProxyCreationFailed,
    RailwayMCPError,
    VariableBatchFailed,
    VariableUpsertFailed,
    VolumeCreationFailed,
)
from ..models import (
    ProvisionedResourceSet,
    ProvisioningPlan,
    ResolvedService,
    Service,
    TcpProxy,
    VariableUpsertInput,
    Volume,
)
from .database_catalog import DatabaseType, resolve_database
from .regions import RegionCode, select_region
from .template_resolver import TemplateResolver


class ProvisioningStep(str, Enum):
    RESOLVE = "resolve"
    CREATE_SERVICE = "create_service"
    SET_VARIABLES = "set_variables"
    UPDATE_PLACEMENT = "update_placement"
    CREATE_NETWORK_PROXY = "create_network_proxy"
    CREATE_VOLUME = "create_volume"


class ProvisioningOrchestrator:
    """Runs provisioning plans against an injected set of repositories.

    ``repositories`` needs ``services``, ``variables``, ``tcp_proxies``,
    ``volumes`` and ``templates`` attributes (see ``RepositorySet``). The
    orchestrator keeps no state between runs, so independent runs may share it.
    """

    def __init__(self, repositories):
        self.repositories = repositories
        self.resolver = TemplateResolver(repositories.templates)
        self.logger = LoggingUtility()

    async def provision_from_template(
        self,
        project_id: str,
        template_id: str,
        environment_id: str,
        region: Union[RegionCode, str],
        name: Optional[str] = None,
    ) -> ProvisionedResourceSet:
        """Provision the first service of a database or storage template."""
        region_code = select_region(region)
        self._log_step(ProvisioningStep.RESOLVE, f"template {template_id}")
        resolved = await self.resolver.resolve(template_id)
        return await self.execute(
            self._plan(project_id, environment_id, region_code, resolved, name)
        )

    async def provision_database(
        self,
        project_id: str,
        database_type: Union[DatabaseType, str],
        environment_id: str,
        region: Union[RegionCode, str],
        name: Optional[str] = None,
    ) -> ProvisionedResourceSet:
        """Provision a database from the built-in image catalog."""
        region_code = select_region(region)
        self._log_step(ProvisioningStep.RESOLVE, f"database type {database_type}")
        resolved = resolve_database(database_type)
        return await self.execute(
            self._plan(project_id, environment_id, region_code, resolved, name)
        )

    async def execute(self, plan: ProvisioningPlan) -> ProvisionedResourceSet:
        """Run every remote step of ``plan`` in order."""
        service = await self._create_service(plan)
        created: dict[str, Any] = {"service_id": service.id}

        variable_names = await self._set_variables(plan, service, created)
        await self._update_placement(plan, service, created)

        tcp_proxy = None
        if plan.service.application_port is not None:
            tcp_proxy = await self._create_network_proxy(plan, service, created)
            created["tcp_proxy_id"] = tcp_proxy.id

        volume = await self._create_volume(plan, service, created)
        created["volume_id"] = volume.id

        self.logger.log_info(
            "provision",
            f"Service {service.id} provisioned in {plan.environment_id} ({plan.region})",
        )
        return ProvisionedResourceSet(
            service=service,
            environment_id=plan.environment_id,
            region=plan.region,
            variables=variable_names,
            tcp_proxy=tcp_proxy,
            volume=volume,
            summary=_summarize(plan, service, tcp_proxy, volume),
        )

    # =================================================================
    # STEPS
    # =================================================================

    async def _create_service(self, plan: ProvisioningPlan) -> Service:
        self._log_step(
            ProvisioningStep.CREATE_SERVICE,
            f"'{plan.service_name}' from image {plan.service.image}",
        )
        return await self.repositories.services.create_service(
            plan.project_id, {"image": plan.service.image}, name=plan.service_name
        )

    async def _set_variables(
        self, plan: ProvisioningPlan, service: Service, created: dict[str, Any]
    ) -> list[str]:
        if not plan.service.variables:
            return []
        entries = [
            VariableUpsertInput(
                project_id=plan.project_id,
                environment_id=plan.environment_id,
                service_id=service.id,
                name=name,
                value=value,
            )
            for name, value in plan.service.variables.items()
        ]
        self._log_step(
            ProvisioningStep.SET_VARIABLES, f"{len(entries)} variables on {service.id}"
        )
        try:
            await self.repositories.variables.upsert_variables(entries)
        except RailwayMCPError as e:
            if isinstance(e, VariableBatchFailed):
                created["variables"] = e.applied
            raise self._step_failure(
                VariableUpsertFailed, f"Failed to set variables: {e}", plan, service, created
            ) from e
        return [entry.name for entry in entries]

    async def _update_placement(
        self, plan: ProvisioningPlan, service: Service, created: dict[str, Any]
    ) -> None:
        self._log_step(
            ProvisioningStep.UPDATE_PLACEMENT, f"{service.id} -> {plan.region}"
        )
        try:
            instance = await self.repositories.services.get_service_instance(
                service.id, plan.environment_id
            )
            if instance is None:
                raise self._step_failure(
                    InstanceNotFound,
                    f"Service instance not found for service {service.id} "
                    f"in environment {plan.environment_id}",
                    plan,
                    service,
                    created,
                )
            result = await self.repositories.services.update_service_instance(
                service.id, plan.environment_id, region=plan.region
            )
        except OrchestrationError:
            raise
        except RailwayMCPError as e:
            raise self._step_failure(
                PlacementUpdateFailed,
                f"Failed to update service region: {e}",
                plan,
                service,
                created,
            ) from e

        if not result.ok:
            raise self._step_failure(
                PlacementUpdateFailed,
                f"Failed to update service region: {result.reason}",
                plan,
                service,
                created,
            )

    async def _create_network_proxy(
        self, plan: ProvisioningPlan, service: Service, created: dict[str, Any]
    ) -> TcpProxy:
        port = plan.service.application_port
        self._log_step(ProvisioningStep.CREATE_NETWORK_PROXY, f"port {port}")
        try:
            proxy = await self.repositories.tcp_proxies.create_tcp_proxy(
                plan.environment_id, service.id, port
            )
        except RailwayMCPError as e:
            raise self._step_failure(
                ProxyCreationFailed, f"Failed to create TCP proxy: {e}", plan, service, created
            ) from e
        if not proxy:
            raise self._step_failure(
                ProxyCreationFailed,
                f"Failed to create TCP proxy on port {port} for service {service.id}",
                plan,
                service,
                created,
            )
        return proxy

    async def _create_volume(
        self, plan: ProvisioningPlan, service: Service, created: dict[str, Any]
    ) -> Volume:
        self._log_step(ProvisioningStep.CREATE_VOLUME, f"mounted at {plan.service.mount_path}")
        try:
            volume = await self.repositories.volumes.create_volume(
                plan.project_id, plan.environment_id, service.id, plan.service.mount_path
            )
        except RailwayMCPError as e:
            raise self._step_failure(
                VolumeCreationFailed, f"Failed to create volume: {e}", plan, service, created
            ) from e
        if not volume:
            raise self._step_failure(
                VolumeCreationFailed,
                f"Failed to create volume for service {service.id} "
                f"in environment {plan.environment_id}",
                plan,
                service,
                created,
            )
        return volume

    # =================================================================
    # HELPERS
    # =================================================================

    @staticmethod
    def _plan(
        project_id: str,
        environment_id: str,
        region: RegionCode,
        resolved: ResolvedService,
        name: Optional[str],
    ) -> ProvisioningPlan:
        return ProvisioningPlan(
            project_id=project_id,
            environment_id=environment_id,
            region=region.value,
            service=resolved,
            name=name or None,
        )

    def _step_failure(
        self,
        error_class: type[OrchestrationError],
        message: str,
        plan: ProvisioningPlan,
        service: Service,
        created: dict[str, Any],
    ) -> OrchestrationError:
        error = error_class(message, service.id, plan.environment_id, created)
        self.logger.log_error(error.step, error)
        return error

    def _log_step(self, step: ProvisioningStep, message: str) -> None:
        self.logger.log_info(f"provision.{step.value}", message)


def _summarize(
    plan: ProvisioningPlan,
    service: Service,
    tcp_proxy: Optional[TcpProxy],
    volume: Volume,
) -> str:
    lines = [
        f'Created service "{service.name}" (ID: {service.id}) in region {plan.region}',
        f"Using image: {plan.service.image}",
    ]
    if plan.service.variables:
        lines.append(f"Variables set: {', '.join(plan.service.variables)}")
    if tcp_proxy is not None:
        endpoint = (
            f"{tcp_proxy.domain}:{tcp_proxy.proxy_port}"
            if tcp_proxy.domain
            else "pending"
        )
        lines.append(
            f"TCP proxy: application port {tcp_proxy.application_port} -> {endpoint}"
        )
    lines.append(f"Volume {volume.id} mounted at {plan.service.mount_path}")
    return "\n".join(lines)
