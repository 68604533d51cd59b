"""Railway MCP Server - Model Context Protocol server for the Railway platform.

This package provides a Model Context Protocol (MCP) server that enables LLM agents
to provision databases and storage services on Railway. The server exposes tools
that drive the Railway GraphQL API through a multi-step provisioning workflow.

Key Features:
    - Template Provisioning: Deploy a database or storage service from a catalog template
    - Built-in Catalog: Deploy common databases from a fixed image catalog
    - Placement: Pin the new service to an explicit region before exposing it

The provisioning workflow creates the service, sets its variables, updates its
region, then attaches a TCP proxy and a volume. Each step is awaited before the
next one starts, and a failure at any step is reported with the identifiers of
the resources already created.

Environment Variables:
    - RAILWAY_API_TOKEN: API token used as the bearer credential
    - RAILWAY_API_URL: GraphQL endpoint override
    - DEBUG: "railway:*" or "railway:api" logs GraphQL traffic
"""

# Get version dynamically from package metadata
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("railway-mcp")
except PackageNotFoundError:
    # Fallback when package not installed (e.g., development mode)
    __version__ = "dev"

__author__ = "railway-mcp authors"
__email__ = "railway-mcp@example.com"
