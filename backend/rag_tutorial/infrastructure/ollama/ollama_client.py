"""Ollama client: implements the ChatProvider interface for a local runtime.

Talks to ``POST /api/generate`` with ``stream: true``. Ollama answers with
newline-delimited JSON objects, each carrying a ``response`` text piece; the
last one has ``done: true``.
"""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from rag_tutorial.application.interfaces.chat_provider import ChatProvider
from rag_tutorial.domain.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class OllamaClient(ChatProvider):
    """Infrastructure adapter: streams completions from an Ollama server."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.2",
        *,
        timeout: float = 120.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._http_client = http_client

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def model(self) -> str:
        return self._model

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        """Yield text pieces as Ollama generates them."""
        payload: dict[str, Any] = {
            "model": self._model,
            "prompt": prompt,
            "stream": True,
        }
        url = f"{self._base_url}/api/generate"

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            async with client.stream("POST", url, json=payload) as response:
                if response.status_code != 200:
                    body = await response.aread()
                    self._raise_provider_error_from_bytes(response.status_code, body)

                async for line in response.aiter_lines():
                    if not line.strip():
                        continue

                    data = self._parse_line(line)
                    if "error" in data:
                        raise ExternalServiceError(
                            service=self.provider_name,
                            status_code=500,
                            message=str(data["error"]),
                        )

                    piece = data.get("response", "")
                    if piece:
                        yield piece

                    if data.get("done"):
                        logger.info(
                            "Ollama stream finished (model=%s, eval_count=%s)",
                            data.get("model", self._model),
                            data.get("eval_count"),
                        )
                        break

        except httpx.HTTPError as exc:
            logger.error("Ollama request failed: %s", exc)
            raise ExternalServiceError(
                service=self.provider_name,
                status_code=0,
                message=str(exc) or type(exc).__name__,
            ) from exc
        finally:
            if should_close:
                await client.aclose()

    def _parse_line(self, line: str) -> dict[str, Any]:
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ExternalServiceError(
                service=self.provider_name,
                status_code=500,
                message=f"Malformed stream line: {line[:200]}",
            ) from exc
        if not isinstance(data, dict):
            raise ExternalServiceError(
                service=self.provider_name,
                status_code=500,
                message=f"Unexpected stream payload: {line[:200]}",
            )
        return data

    def _raise_provider_error_from_bytes(
        self, status_code: int, body: bytes
    ) -> None:
        """Raise ExternalServiceError from raw response bytes."""
        try:
            data = json.loads(body)
            message = data.get("error", body.decode())
        except (json.JSONDecodeError, AttributeError, UnicodeDecodeError):
            message = body.decode(errors="replace")

        raise ExternalServiceError(
            service=self.provider_name,
            status_code=status_code,
            message=str(message),
        )
