"""
HTTP client for the collaborator functions.

Question generation, answer evaluation and summarization are served as
named functions under one base URL; each call is a JSON POST.
"""

import logging
from typing import Any

import httpx

from timed_interview.config import get_settings

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Exception raised when a collaborator call fails."""

    def __init__(self, message: str, function: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.function = function
        self.status_code = status_code


class FunctionsClient:
    """
    Thin async wrapper over ``httpx.AsyncClient``.

    Transport failures, error status codes and non-JSON bodies are all
    reported as ``ServiceError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL of the functions (uses config if not provided).
            api_key: Bearer token (uses config if not provided).
            timeout: Request timeout in seconds (uses config if not provided).
            transport: Optional httpx transport, mainly for tests.
        """
        settings = get_settings()
        self._base_url = base_url or settings.functions_base_url
        self._api_key = api_key or settings.functions_api_key
        self._timeout = timeout or settings.functions_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def invoke(self, function: str, payload: dict[str, Any]) -> Any:
        """
        Call a function with a JSON body.

        Args:
            function: Function name, appended to the base URL.
            payload: JSON-serializable request body.

        Returns:
            Decoded JSON response body.

        Raises:
            ServiceError: On transport errors, error statuses or invalid JSON.
        """
        client = await self._get_client()
        logger.debug(f"Invoking collaborator function: {function}")

        try:
            response = await client.post(f"/{function}", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(f"{function} returned HTTP {status_code}")
            raise ServiceError(
                f"{function} returned HTTP {status_code}",
                function=function,
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"{function} request failed: {e}")
            raise ServiceError(f"{function} request failed: {e}", function=function) from e

        try:
            return response.json()
        except ValueError as e:
            raise ServiceError(f"{function} returned a non-JSON body", function=function) from e
