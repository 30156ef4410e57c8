"""HTTP client for the task service."""

from typing import Any, Optional

import httpx

from todoboard.config import ConfigManager, get_config_manager
from todoboard.utils.logger import get_logger


class APIClient:
    """Async HTTP client bound to the configured task service endpoint.

    Requests are sent once: there is no retry and no timeout beyond what
    ``api.timeout`` (or httpx itself) imposes.
    """

    def __init__(
        self,
        profile: str = "default",
        *,
        config_manager: Optional[ConfigManager] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config_manager = config_manager or get_config_manager(profile)
        self.config = self.config_manager.config
        self.base_url = (base_url or self.config.api.endpoint).rstrip("/")
        self.timeout = self.config.api.timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            kwargs: dict[str, Any] = {}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._get_headers(),
                follow_redirects=True,
                transport=self._transport,
                **kwargs,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        check_status: bool = True,
    ) -> httpx.Response:
        """Make an HTTP request to the service.

        Raises:
            httpx.RequestError: the request never got a response
            httpx.HTTPStatusError: non-2xx response and ``check_status`` is set
        """
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        get_logger("api").debug("%s %s%s", method, self.base_url, url)
        response = await client.request(
            method=method,
            url=url,
            json=json,
            params=params,
        )
        if check_status:
            response.raise_for_status()
        return response

    async def get(
        self, path: str, *, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, *, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def put(
        self, path: str, *, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str, *, check_status: bool = True) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path, check_status=check_status)


def get_client(profile: str = "default") -> APIClient:
    """Get an API client instance."""
    return APIClient(profile)
