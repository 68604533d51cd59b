"""Database provisioning requests for Railway MCP."""

from typing import Any, Optional

from ..api import RailwayApiClient, RepositorySet
from ..config import Config
from ..core_utils import LoggingUtility, error_response, handle_error, success_response
from ..errors import RailwayMCPError
from ..provisioning import ProvisioningOrchestrator, TemplateResolver, list_database_types

OPERATIONS = {
    "configure": "configure Railway API",
    "database_list_types": "list database types",
    "database_list_templates": "list database templates",
    "database_deploy": "deploy database",
    "database_deploy_from_template": "deploy database from template",
}


class DatabaseManager:
    """Routes tool calls to the provisioning workflow."""

    def __init__(self, client: RailwayApiClient, variable_batch_size: int = 10):
        self.logger = LoggingUtility()
        self.client = client
        self.repositories = RepositorySet(client, variable_batch_size=variable_batch_size)
        self.orchestrator = ProvisioningOrchestrator(self.repositories)
        self.resolver = TemplateResolver(self.repositories.templates)

    @classmethod
    def from_config(cls, config: Config) -> "DatabaseManager":
        return cls(
            RailwayApiClient.from_config(config),
            variable_batch_size=config.variable_batch_size,
        )

    async def execute_request(
        self, name: str, arguments: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Execute a tool call by name.

        Args:
            name: Tool name from ``get_railway_tools``
            arguments: Tool arguments as sent by the MCP client
        """
        arguments = arguments or {}
        try:
            if name == "configure":
                return await self._configure(arguments.get("token"))
            elif name == "database_list_types":
                return self._list_database_types()
            elif name == "database_list_templates":
                return await self._list_database_templates()
            elif name == "database_deploy":
                missing = _missing(arguments, "projectId", "type", "environmentId", "region")
                if missing:
                    return error_response(f"{', '.join(missing)} required")
                return await self._deploy_database(arguments)
            elif name == "database_deploy_from_template":
                missing = _missing(
                    arguments, "projectId", "templateId", "environmentId", "region"
                )
                if missing:
                    return error_response(f"{', '.join(missing)} required")
                return await self._deploy_from_template(arguments)
            else:
                return error_response(f"Unknown tool: {name}")

        except RailwayMCPError as e:
            return handle_error(self.logger, OPERATIONS.get(name, name), e)

    async def close(self) -> None:
        await self.client.close()

    # =================================================================
    # INTERNAL IMPLEMENTATION
    # =================================================================

    async def _configure(self, token: Optional[str]) -> dict[str, Any]:
        if not token:
            return error_response("token required")
        await self.client.set_token(token)
        return success_response(message="Successfully connected to Railway API")

    def _list_database_types(self) -> dict[str, Any]:
        categories = list_database_types()
        return success_response(
            categories=categories,
            database_count=sum(len(entries) for entries in categories.values()),
        )

    async def _list_database_templates(self) -> dict[str, Any]:
        templates = await self.resolver.list_database_templates()
        categorized: dict[str, list[dict[str, Any]]] = {}
        for template in sorted(templates, key=lambda t: t.projects, reverse=True):
            categorized.setdefault(template.category, []).append(
                {
                    "id": template.id,
                    "name": template.name,
                    "description": template.description,
                    "projects": template.projects,
                    "services": list(template.serialized_config.services),
                }
            )
        return success_response(categories=categorized, template_count=len(templates))

    async def _deploy_database(self, arguments: dict[str, Any]) -> dict[str, Any]:
        result = await self.orchestrator.provision_database(
            arguments["projectId"],
            arguments["type"],
            arguments["environmentId"],
            arguments["region"],
            name=arguments.get("name"),
        )
        return success_response(
            message=result.summary, **result.model_dump(exclude={"summary"})
        )

    async def _deploy_from_template(self, arguments: dict[str, Any]) -> dict[str, Any]:
        result = await self.orchestrator.provision_from_template(
            arguments["projectId"],
            arguments["templateId"],
            arguments["environmentId"],
            arguments["region"],
            name=arguments.get("name"),
        )
        return success_response(
            message=result.summary, **result.model_dump(exclude={"summary"})
        )


def _missing(arguments: dict[str, Any], *names: str) -> list[str]:
    return [name for name in names if not arguments.get(name)]
