"""Railway MCP managers package."""

from .database_manager import DatabaseManager

__all__ = [
    "DatabaseManager",
]
