"""Railway MCP Server - database provisioning tools over stdio."""

import asyncio
import json
import logging
import sys
from typing import Optional

from mcp import stdio_server
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.types import ServerCapabilities, TextContent, Tool

from . import __version__
from .config import Config
from .core_utils import LoggingUtility, error_response
from .errors import ConfigurationError
from .managers import DatabaseManager
from .tools import get_railway_tools

server = Server("railway-mcp")

# Built in main() from the environment; tests install their own
database_manager: Optional[DatabaseManager] = None

# Configure logging (stdout carries the MCP stream)
logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


def get_database_manager() -> DatabaseManager:
    global database_manager
    if database_manager is None:
        database_manager = DatabaseManager.from_config(Config.from_env())
    return database_manager


@server.list_tools()
async def list_tools() -> list[Tool]:
    """Return the database provisioning tools."""
    return get_railway_tools()


@server.call_tool()
async def call_tool(name: str, arguments: Optional[dict] = None) -> list[TextContent]:
    """Route a tool call to the database manager and return JSON text."""
    try:
        result = await get_database_manager().execute_request(name, arguments)
    except Exception as e:
        LoggingUtility.log_error("call_tool", e)
        result = error_response(str(e))
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


async def main(token: Optional[str] = None):
    """Run the Railway MCP server."""
    global database_manager
    config = Config.from_env()
    if token:
        config.api_token = token
    database_manager = DatabaseManager.from_config(config)

    if config.api_token:
        try:
            await database_manager.client.validate_token()
            LoggingUtility.log_info("server", "Running with Railway API token")
        except ConfigurationError as e:
            LoggingUtility.log_error("server", e)
    else:
        LoggingUtility.log_warning(
            "server",
            "Running without API token - use the 'configure' tool to set one",
        )

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name="railway-mcp",
                    server_version=__version__,
                    capabilities=ServerCapabilities(),
                ),
            )
    finally:
        await database_manager.close()


def run_server():
    """Entry point for the Railway MCP server.

    An API token may be passed as the first command line argument; it takes
    precedence over RAILWAY_API_TOKEN.
    """
    token = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        asyncio.run(main(token))
    except KeyboardInterrupt:
        LoggingUtility.log_info("server", "Server stopped by user")
    except Exception as e:
        LoggingUtility.log_error("server", e)
        sys.exit(1)


if __name__ == "__main__":
    run_server()
