"""Shared HTTP adapter used by every upstream provider."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/json, text/plain;q=0.9, */*;q=0.8"


class UpstreamError(Exception):
    """An upstream call failed.

    ``status`` is None when the request never produced a response
    (DNS, connect, timeout), so callers can tell local failures from 4xx/5xx.
    """

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.body = body


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a soft fetch: either a value or an absence marker."""

    value: Any = None
    error: Optional[str] = None

    @property
    def present(self) -> bool:
        return self.error is None and self.value is not None and self.value != ""

    @classmethod
    def absent(cls, error: str) -> "FetchResult":
        return cls(value=None, error=error)


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_url(base_url: str, path: str, query: Optional[Mapping[str, Any]] = None) -> httpx.URL:
    """Join base address, path and query parameters into a request URL.

    Lists repeat the key once per element, mappings are sent as compact JSON,
    and None or empty-string values are left out entirely.
    """
    base = base_url[:-1] if base_url.endswith("/") else base_url
    normalized_path = path if path.startswith("/") else f"/{path}"

    params: List[Tuple[str, str]] = []
    for key, value in (query or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, (list, tuple)):
            params.extend((key, _stringify(item)) for item in value)
        elif isinstance(value, Mapping):
            params.append((key, json.dumps(value, separators=(",", ":"))))
        else:
            params.append((key, _stringify(value)))

    url = httpx.URL(f"{base}{normalized_path}")
    if params:
        url = url.copy_merge_params(params)
    return url


def parse_body(text: str, content_type: str) -> Any:
    """Decode JSON when the response looks like JSON, otherwise return the raw text."""
    if "json" in (content_type or "").lower() or text.startswith("{") or text.startswith("["):
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text


class HttpProvider:
    """Base class for upstream services reached over HTTP.

    One short-lived ``httpx.AsyncClient`` is opened per call; providers hold
    only immutable configuration so concurrent tool calls share nothing.
    """

    name: str = "http"

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout_s = timeout_s
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)

    async def _send(self, method: str, url: httpx.URL, body: Any = None) -> Any:
        headers: Dict[str, str] = {
            "Accept": ACCEPT_HEADER,
            "Content-Type": "application/json",
        }
        content = json.dumps(body) if body is not None else None

        try:
            async with self._client() as client:
                response = await client.request(method, url, content=content, headers=headers)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"{self.name} request to {url} failed: {exc}") from exc

        parsed = parse_body(response.text, response.headers.get("content-type", ""))

        if not response.is_success:
            detail = {
                "status": response.status_code,
                "statusText": response.reason_phrase,
                "body": parsed,
            }
            raise UpstreamError(
                f"HTTP {response.status_code} {response.reason_phrase}: {json.dumps(detail, default=str)}",
                status=response.status_code,
                status_text=response.reason_phrase,
                body=parsed,
            )

        return parsed

    async def fetch(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        """GET ``path`` relative to the provider base URL."""
        return await self._send("GET", build_url(self.base_url, path, query))

    async def fetch_with_body(self, path: str, method: str, body: Any) -> Any:
        """Send a JSON body with ``method`` to ``path``."""
        return await self._send(method.upper(), build_url(self.base_url, path), body)

    async def try_fetch(self, path: str, query: Optional[Mapping[str, Any]] = None) -> FetchResult:
        """GET that never raises; failures come back as an absent result."""
        try:
            value = await self.fetch(path, query)
        except UpstreamError as exc:
            logger.debug(
                "soft_fetch_miss",
                extra={"provider": self.name, "path": path, "error": str(exc)},
            )
            return FetchResult.absent(str(exc))
        return FetchResult(value=value)
