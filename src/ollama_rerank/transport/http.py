"""HTTP 传输层：基于 httpx 的异步 JSON 客户端，用于访问 Ollama 服务。

HTTP transport using httpx for async requests to an Ollama server.

Provides:
- JSON request/response helpers
- Configurable timeouts
- Proxy support
- Automatic header management
- Mapping of failures to the package error hierarchy
"""

from __future__ import annotations

import os
from contextlib import suppress
from typing import Any

import httpx

from ollama_rerank.errors import HttpStatusError, NetworkError, SchemaError
from ollama_rerank.transport.auth import OllamaCredentials, get_auth_header, normalize_base_url

_DEFAULT_CONNECT_TIMEOUT = 10.0


_UA_VERSION: str | None = None


def _trust_env_enabled() -> bool:
    """Use env proxy settings only when explicitly enabled."""
    return os.getenv("OLLAMA_HTTP_TRUST_ENV", "0") == "1"


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        try:
            from importlib.metadata import version

            _UA_VERSION = version("ollama-rerank")
        except Exception:
            _UA_VERSION = "0.1.0"
    return _UA_VERSION


def _resolve_timeout(timeout: float | None) -> float | None:
    if timeout is not None:
        return timeout
    env_timeout = os.getenv("OLLAMA_RERANK_TIMEOUT_SECS")
    if env_timeout:
        with suppress(ValueError):
            return float(env_timeout)
    # An unanswered request waits indefinitely
    return None


class HttpTransport:
    """HTTP transport for the Ollama API.

    One transport owns one ``httpx.AsyncClient``; use it as an async context
    manager so the client is closed when the operation completes.

    Example:
        >>> async with HttpTransport("http://localhost:11434") as transport:
        ...     tags = await transport.get_json("/api/tags")
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        api_key: str | None = None,
        timeout: float | None = None,
        proxy: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP transport.

        Args:
            base_url: Ollama server URL (defaults to http://localhost:11434)
            api_key: Bearer token sent as Authorization header
            timeout: Read timeout in seconds; None waits indefinitely
            proxy: Proxy URL
            transport: Custom httpx transport (used by hosts and tests)
        """
        self._base_url = normalize_base_url(base_url)
        self._timeout = _resolve_timeout(timeout)

        if proxy is not None:
            self._proxy = proxy
        elif _trust_env_enabled():
            self._proxy = os.getenv("OLLAMA_PROXY_URL")
        else:
            self._proxy = None

        self._auth_headers = get_auth_header(api_key)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_credentials(
        cls,
        credentials: OllamaCredentials,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HttpTransport:
        """Create a transport from host-supplied credentials."""
        return cls(
            credentials.base_url,
            api_key=credentials.api_key,
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            timeout = httpx.Timeout(self._timeout, connect=_DEFAULT_CONNECT_TIMEOUT)
            kwargs: dict[str, Any] = {
                "base_url": self._base_url,
                "timeout": timeout,
                "trust_env": _trust_env_enabled(),
            }
            if self._transport is not None:
                kwargs["transport"] = self._transport
            elif self._proxy:
                kwargs["proxy"] = self._proxy
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_headers(self, extra_headers: dict[str, str] | None = None) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"ollama-rerank/{_get_ua_version()}",
        }
        headers.update(self._auth_headers)
        if extra_headers:
            headers.update(extra_headers)
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        action: str = "call Ollama",
    ) -> httpx.Response:
        """Make an HTTP request.

        Args:
            method: HTTP method
            path: Request path (relative to base URL)
            json: JSON body
            headers: Additional headers
            action: Short description used in error messages

        Returns:
            HTTP response with a 2xx status

        Raises:
            NetworkError: On connection errors or timeouts
            HttpStatusError: On non-2xx responses
        """
        client = self._get_client()
        url = f"{self._base_url}{path}"

        try:
            response = await client.request(
                method=method,
                url=path,
                json=json,
                headers=self._build_headers(headers),
            )
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request to Ollama at {self._base_url} timed out: {e}",
                url=url,
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Network error connecting to Ollama at {self._base_url}: {e}",
                url=url,
                cause=e,
            ) from e

        if not response.is_success:
            body: Any = None
            with suppress(ValueError):
                body = response.json()
            if body is None:
                body = response.text
            raise HttpStatusError(
                f"Failed to {action} ({response.status_code} {response.reason_phrase}) "
                f"from {self._base_url}",
                url=url,
                status_code=response.status_code,
                reason=response.reason_phrase,
                body=body,
            )

        return response

    async def get_json(self, path: str, *, action: str = "call Ollama") -> Any:
        """GET a path and decode the JSON body."""
        response = await self.request("GET", path, action=action)
        return _decode_json(response)

    async def post_json(
        self,
        path: str,
        json: dict[str, Any],
        *,
        action: str = "call Ollama",
    ) -> Any:
        """POST a JSON body and decode the JSON reply."""
        response = await self.request("POST", path, json=json, action=action)
        return _decode_json(response)

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise SchemaError(
            f"Expected a JSON body from {response.request.url}, got: {response.text[:200]!r}",
        ) from e
