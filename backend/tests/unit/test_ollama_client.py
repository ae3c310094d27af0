"""Unit tests for the OllamaClient streaming adapter."""

import json

import httpx
import pytest

from rag_tutorial.domain.exceptions import ExternalServiceError
from rag_tutorial.infrastructure.ollama import OllamaClient


def _ndjson_transport(
    objects: list[dict | str], seen: list[httpx.Request] | None = None
) -> httpx.MockTransport:
    """Create a mock transport that returns newline-delimited JSON."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        lines = [o if isinstance(o, str) else json.dumps(o) for o in objects]
        return httpx.Response(200, content=("\n".join(lines) + "\n").encode())

    return httpx.MockTransport(handler)


async def _drain(client: OllamaClient, prompt: str = "Hello, world!") -> list[str]:
    return [chunk async for chunk in client.stream(prompt)]


@pytest.mark.asyncio
async def test_stream_yields_response_pieces_in_order():
    seen: list[httpx.Request] = []
    transport = _ndjson_transport(
        [
            {"model": "llama3.2", "response": "Hel", "done": False},
            {"model": "llama3.2", "response": "lo", "done": False},
            {"model": "llama3.2", "response": "!", "done": False},
            {"model": "llama3.2", "response": "", "done": True, "eval_count": 3},
        ],
        seen,
    )
    client = OllamaClient(http_client=httpx.AsyncClient(transport=transport))

    chunks = await _drain(client)

    assert chunks == ["Hel", "lo", "!"]
    assert str(seen[0].url) == "http://localhost:11434/api/generate"
    payload = json.loads(seen[0].content)
    assert payload == {"model": "llama3.2", "prompt": "Hello, world!", "stream": True}


@pytest.mark.asyncio
async def test_stream_skips_blank_lines_and_stops_at_done():
    transport = _ndjson_transport(
        [
            {"response": "a", "done": False},
            "",
            {"response": "b", "done": True},
            {"response": "ignored", "done": False},
        ]
    )
    client = OllamaClient(http_client=httpx.AsyncClient(transport=transport))

    assert await _drain(client) == ["a", "b"]


@pytest.mark.asyncio
async def test_error_line_raises_after_earlier_chunks():
    transport = _ndjson_transport(
        [{"response": "partial", "done": False}, {"error": "model crashed"}]
    )
    client = OllamaClient(http_client=httpx.AsyncClient(transport=transport))
    received: list[str] = []

    with pytest.raises(ExternalServiceError) as exc_info:
        async for chunk in client.stream("hi"):
            received.append(chunk)

    assert received == ["partial"]
    assert "model crashed" in exc_info.value.message


@pytest.mark.asyncio
async def test_malformed_line_raises():
    transport = _ndjson_transport(["{not json"])
    client = OllamaClient(http_client=httpx.AsyncClient(transport=transport))

    with pytest.raises(ExternalServiceError):
        await _drain(client)


@pytest.mark.asyncio
async def test_non_200_raises_with_ollama_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "model 'llama3.2' not found"})

    client = OllamaClient(http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    with pytest.raises(ExternalServiceError) as exc_info:
        await _drain(client)

    assert exc_info.value.status_code == 404
    assert exc_info.value.service == "ollama"
    assert "not found" in exc_info.value.message


@pytest.mark.asyncio
async def test_unreachable_server_has_status_zero():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = OllamaClient(http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    with pytest.raises(ExternalServiceError) as exc_info:
        await _drain(client)

    assert exc_info.value.status_code == 0


def test_model_and_provider_name():
    client = OllamaClient(base_url="http://gpu-box:11434/", model="mistral")

    assert client.model == "mistral"
    assert client.provider_name == "ollama"
