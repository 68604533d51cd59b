"""Tool definitions for the Railway MCP server."""

from mcp.types import Tool

from .provisioning import SUPPORTED_REGIONS, DatabaseType

DATABASE_TYPES = [database_type.value for database_type in DatabaseType]


def get_railway_tools() -> list[Tool]:
    """Database provisioning tools exposed to the agent."""
    return [
        Tool(
            name="configure",
            description="Configure the Railway API connection (only needed if RAILWAY_API_TOKEN is not set in the environment)",
            inputSchema={
                "type": "object",
                "properties": {
                    "token": {"type": "string", "description": "Railway API token"}
                },
                "required": ["token"],
            },
        ),
        Tool(
            name="database_list_types",
            description="List the database types that can be deployed from the built-in image catalog, grouped by category",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="database_list_templates",
            description="List Railway templates in database and storage categories. Use a template id with database_deploy_from_template.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="database_deploy",
            description="Deploy a database from the built-in image catalog: creates the service, sets its default variables, pins its region, exposes its port through a TCP proxy and attaches a volume.",
            inputSchema={
                "type": "object",
                "properties": {
                    "projectId": {
                        "type": "string",
                        "description": "ID of the project where the database will be deployed",
                    },
                    "type": {
                        "type": "string",
                        "enum": DATABASE_TYPES,
                        "description": "Type of database to deploy",
                    },
                    "environmentId": {
                        "type": "string",
                        "description": "Environment ID where the database will be deployed (usually obtained from project_info)",
                    },
                    "region": {
                        "type": "string",
                        "enum": SUPPORTED_REGIONS,
                        "description": "Region where the database should be deployed",
                    },
                    "name": {
                        "type": "string",
                        "description": "Optional custom name for the database service",
                    },
                },
                "required": ["projectId", "type", "environmentId", "region"],
            },
        ),
        Tool(
            name="database_deploy_from_template",
            description="Deploy a database or storage service from a Railway template: creates the service from the template image, sets the template variables, pins the region, then creates a TCP proxy and a volume.",
            inputSchema={
                "type": "object",
                "properties": {
                    "projectId": {
                        "type": "string",
                        "description": "ID of the project where the service will be deployed",
                    },
                    "templateId": {
                        "type": "string",
                        "description": "ID of the template (see database_list_templates)",
                    },
                    "environmentId": {
                        "type": "string",
                        "description": "Environment ID where the service will be deployed",
                    },
                    "region": {
                        "type": "string",
                        "enum": SUPPORTED_REGIONS,
                        "description": "Region where the service should be deployed",
                    },
                    "name": {
                        "type": "string",
                        "description": "Optional custom name for the service. Defaults to the template's service name",
                    },
                },
                "required": ["projectId", "templateId", "environmentId", "region"],
            },
        ),
    ]
