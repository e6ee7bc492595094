"""httpx client wrappers raising structured errors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from ..config import ClientSettings
from ..errors import (
    DEADLINE_EXCEEDED,
    INTERNAL,
    UNAVAILABLE,
    Error,
    new_error,
    with_data,
    with_err,
    with_op,
    with_resp,
    with_textf,
)


def _response_text(response: httpx.Response) -> str:
    """Return response text without raising secondary decode errors."""
    try:
        return response.text
    except (UnicodeDecodeError, LookupError):
        return ""


def _transport_error(op: str, method: str, url: str, exc: httpx.RequestError) -> Error:
    try:
        request: httpx.Request | None = exc.request
    except RuntimeError:
        # Raised by httpx when the error was not tied to a request.
        request = None
    request_method = request.method if request is not None else method.upper()
    request_url = str(request.url) if request is not None else url
    kind = DEADLINE_EXCEEDED if isinstance(exc, httpx.TimeoutException) else UNAVAILABLE
    return new_error(
        with_op(op),
        kind,
        with_textf("[%s] %s", request_method, request_url),
        with_err(exc),
    )


def _json_error(op: str, response: httpx.Response, exc: ValueError) -> Error:
    return new_error(
        with_op(op),
        INTERNAL,
        with_textf("invalid JSON response for [%s] %s", response.request.method, response.request.url),
        with_data(_response_text(response)),
        with_err(exc),
    )


class HttpClient:
    """Thin synchronous wrapper over ``httpx.Client``."""

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        follow_redirects: bool = False,
        transport: httpx.BaseTransport | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Create a new HTTP client wrapper."""
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            follow_redirects=follow_redirects,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        headers: Mapping[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> HttpClient:
        """Build a client from ``http.client`` settings."""
        return cls(
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            follow_redirects=settings.follow_redirects,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        """Close underlying transport resources when owned."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def request(
        self,
        method: str,
        url: str,
        *,
        raise_for_status: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue one request, raising ``Error`` for transport and status failures."""
        op = "HttpClient.request"
        try:
            response = self._client.request(method=method, url=url, **kwargs)
        except httpx.RequestError as exc:
            raise _transport_error(op, method, url, exc) from exc

        if raise_for_status and response.is_error:
            raise new_error(with_op(op), with_resp(response))
        return response

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return self.request("DELETE", url, **kwargs)

    def request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Issue one request and decode JSON from a successful response."""
        response = self.request(method, url, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise _json_error("HttpClient.request_json", response, exc) from exc

    def get_json(self, url: str, **kwargs: Any) -> Any:
        return self.request_json("GET", url, **kwargs)

    def post_json(self, url: str, *, json: Any, **kwargs: Any) -> Any:
        """Issue one POST request with a JSON body and decode the JSON response."""
        return self.request_json("POST", url, json=json, **kwargs)


class AsyncHttpClient:
    """Thin asynchronous wrapper over ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        headers: Mapping[str, str] | None = None,
        follow_redirects: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Create a new asynchronous HTTP client wrapper."""
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=dict(headers or {}),
            follow_redirects=follow_redirects,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        *,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AsyncHttpClient:
        """Build a client from ``http.client`` settings."""
        return cls(
            base_url=settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            follow_redirects=settings.follow_redirects,
            headers=headers,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close underlying transport resources when owned."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        raise_for_status: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        """Issue one request, raising ``Error`` for transport and status failures."""
        op = "AsyncHttpClient.request"
        try:
            response = await self._client.request(method=method, url=url, **kwargs)
        except httpx.RequestError as exc:
            raise _transport_error(op, method, url, exc) from exc

        if raise_for_status and response.is_error:
            raise new_error(with_op(op), with_resp(response))
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Issue one request and decode JSON from a successful response."""
        response = await self.request(method, url, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise _json_error("AsyncHttpClient.request_json", response, exc) from exc

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        return await self.request_json("GET", url, **kwargs)

    async def post_json(self, url: str, *, json: Any, **kwargs: Any) -> Any:
        """Issue one POST request with a JSON body and decode the JSON response."""
        return await self.request_json("POST", url, json=json, **kwargs)
