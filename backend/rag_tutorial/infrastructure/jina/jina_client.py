"""Shared httpx plumbing for the Jina AI service adapters.

Each adapter either uses an injected ``httpx.AsyncClient`` (tests, shared
connection pools) or opens a short-lived client per call.
"""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from rag_tutorial.domain.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class JinaServiceClient:
    """Base class for adapters talking to a Jina AI HTTP endpoint."""

    service_name = "jina"

    def __init__(
        self,
        api_key: str = "",
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._timeout = timeout
        self._http_client = http_client

    def _get_headers(self, accept: str = "application/json") -> dict[str, str]:
        headers = {"Accept": accept}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the injected client or a fresh one that is closed afterwards."""
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            yield client

    async def _post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON payload and return the decoded JSON body."""
        async with self._client() as client:
            try:
                response = await client.post(url, headers=self._get_headers(), json=payload)
            except httpx.HTTPError as exc:
                raise self._transport_error(exc) from exc

        if response.status_code != 200:
            self._raise_service_error(response)

        try:
            data = response.json()
        except json.JSONDecodeError as exc:
            raise ExternalServiceError(
                service=self.service_name,
                status_code=response.status_code,
                message=f"Invalid JSON response: {exc}",
            ) from exc

        if not isinstance(data, dict):
            raise ExternalServiceError(
                service=self.service_name,
                status_code=response.status_code,
                message=f"Expected a JSON object, got {type(data).__name__}",
            )
        return data

    def _transport_error(self, exc: httpx.HTTPError) -> ExternalServiceError:
        logger.error("%s request failed: %s", self.service_name, exc)
        return ExternalServiceError(
            service=self.service_name,
            status_code=0,
            message=str(exc) or type(exc).__name__,
        )

    def _raise_service_error(self, response: httpx.Response) -> None:
        """Raise ExternalServiceError from a non-200 httpx Response."""
        try:
            data = response.json()
            detail = data.get("detail") or data.get("message") or response.text
        except (json.JSONDecodeError, AttributeError):
            detail = response.text

        logger.error(
            "%s returned %d: %s", self.service_name, response.status_code, str(detail)[:500]
        )
        raise ExternalServiceError(
            service=self.service_name,
            status_code=response.status_code,
            message=str(detail),
        )
