"""Railway GraphQL API client."""

import asyncio
import json
from typing import Any, Optional

import aiohttp

from ..config import DEFAULT_API_URL, Config
from ..core_utils import LoggingUtility
from ..errors import ApplicationError, ConfigurationError, TransportError

MISSING_TOKEN_MESSAGE = (
    "API token not set. Please either:\n"
    "1. Add RAILWAY_API_TOKEN to your environment variables, or\n"
    "2. Use the configure tool to set the token manually."
)

VALIDATE_TOKEN_QUERY = """
query {
  projects {
    edges {
      node {
        id
      }
    }
  }
}
"""


class RailwayApiClient:
    """Async HTTP client for the Railway GraphQL API.

    Every call carries the bearer token, posts a ``{"query", "variables"}``
    payload and unwraps the GraphQL envelope. HTTP and network failures are
    raised as :class:`TransportError`; an ``errors`` list in the envelope is
    raised as :class:`ApplicationError`.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        debug: bool = False,
    ):
        self.api_url = api_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.debug = debug
        self.logger = LoggingUtility()
        self._token = token
        self._session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def from_config(cls, config: Config) -> "RailwayApiClient":
        return cls(
            token=config.api_token,
            api_url=config.api_url,
            timeout=config.request_timeout,
            debug=config.debug,
        )

    async def __aenter__(self):
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def has_token(self) -> bool:
        return bool(self._token)

    async def set_token(self, token: Optional[str]) -> None:
        """Replace the API token, validating it when one is given."""
        self._token = token or None
        if self._token:
            await self.validate_token()

    async def validate_token(self) -> None:
        """Check the current token with a cheap query."""
        try:
            await self.request(VALIDATE_TOKEN_QUERY)
        except (TransportError, ApplicationError) as e:
            self._token = None
            raise ConfigurationError(
                "Invalid API token. Please check your token and try again."
            ) from e

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def request(
        self, query: str, variables: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Run one GraphQL operation and return its ``data`` object."""
        if not self._token:
            raise ConfigurationError(MISSING_TOKEN_MESSAGE)

        if self.debug:
            self.logger.log_debug("graphql_request", query)
            self.logger.log_debug(
                "graphql_variables", json.dumps(variables or {}, indent=2)
            )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._token}",
        }
        payload = {"query": query, "variables": variables or {}}

        session = self._get_session()
        try:
            async with session.post(
                self.api_url, json=payload, headers=headers
            ) as response:
                result = await self._handle_response(response)
        except asyncio.TimeoutError as e:
            raise TransportError("request timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(str(e)) from e

        if self.debug:
            self.logger.log_debug("graphql_response", json.dumps(result, indent=2))

        errors = result.get("errors")
        if errors:
            raise ApplicationError(_first_error_message(errors), errors)

        return result.get("data") or {}

    async def _handle_response(
        self, response: aiohttp.ClientResponse
    ) -> dict[str, Any]:
        """Decode the response body, raising on HTTP level failures."""
        try:
            data = await response.json(content_type=None)
        except (aiohttp.ContentTypeError, json.JSONDecodeError, ValueError):
            text = await response.text()
            data = {"message": text}

        if not isinstance(data, dict):
            data = {"message": str(data)}

        if response.status == 200:
            return data
        # GraphQL servers may send error envelopes with a 4xx status
        if data.get("errors"):
            raise ApplicationError(
                _first_error_message(data["errors"]), data["errors"]
            )
        if response.status in (401, 403):
            raise TransportError("Not authorized", response.status)
        if response.status >= 500:
            raise TransportError("Internal server error", response.status)
        raise TransportError(
            data.get("message") or f"HTTP {response.status}", response.status
        )


def _first_error_message(errors: list[Any]) -> str:
    first = errors[0]
    if isinstance(first, dict):
        return first.get("message") or "Unknown API error"
    return str(first)
