"""Railway MCP configuration for the API gateway and provisioning."""

from dataclasses import dataclass
import os
from typing import Optional

DEFAULT_API_URL = "https://backboard.railway.app/graphql/v2"


def _debug_enabled(value: Optional[str]) -> bool:
    """Check whether DEBUG asks for GraphQL request logging."""
    if not value:
        return False
    return value == "railway:*" or "railway:api" in value


def _float_from_env(name: str, default: float) -> float:
    """Read a positive number from the environment, falling back to default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _int_from_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass
class Config:
    """Configuration for the Railway API client."""

    # API settings
    api_token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0

    # Provisioning settings
    variable_batch_size: int = 10

    debug: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            api_token=os.getenv("RAILWAY_API_TOKEN") or None,
            api_url=os.getenv("RAILWAY_API_URL", DEFAULT_API_URL),
            request_timeout=_float_from_env("RAILWAY_API_TIMEOUT", 30.0),
            variable_batch_size=_int_from_env("RAILWAY_VARIABLE_BATCH_SIZE", 10),
            debug=_debug_enabled(os.getenv("DEBUG")),
        )
