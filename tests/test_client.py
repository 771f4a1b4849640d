"""Transport tests against an in-process httpx.MockTransport."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import pytest

from ddginstant.client import (
    build_search_url,
    fetch_payload,
    instant_answer,
    search,
)
from ddginstant.config import Config
from ddginstant.enums import ResultKind
from ddginstant.errors import APIError, ConfigurationError, RateLimitError

if TYPE_CHECKING:
    from collections.abc import Callable

pytestmark = pytest.mark.unit

def _client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


# =============================================================================
# URL construction
# =============================================================================


def test_build_search_url_encodes_query_and_flags() -> None:
    url = httpx.URL(build_search_url("!imdb rushmore", Config()))

    assert url.host == "api.duckduckgo.com"
    assert url.params["q"] == "!imdb rushmore"
    assert url.params["format"] == "json"
    assert url.params["no_redirect"] == "1"
    assert "no_html" not in url.params
    assert "skip_disambig" not in url.params


def test_build_search_url_honors_optional_flags() -> None:
    cfg = Config(no_redirect=False, no_html=True, skip_disambig=True)
    url = httpx.URL(build_search_url("apple", cfg))

    assert "no_redirect" not in url.params
    assert url.params["no_html"] == "1"
    assert url.params["skip_disambig"] == "1"


def test_build_search_url_keeps_existing_base_params() -> None:
    cfg = Config(base_url="https://proxy.example/ddg?t=myapp")
    url = httpx.URL(build_search_url("apple", cfg))

    assert url.params["t"] == "myapp"
    assert url.params["q"] == "apple"


@pytest.mark.parametrize("query", ["", "   "])
def test_build_search_url_rejects_empty_query(query: str) -> None:
    with pytest.raises(ConfigurationError, match="query"):
        build_search_url(query, Config())


# =============================================================================
# Fetching
# =============================================================================


@pytest.mark.asyncio
async def test_search_decodes_response() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"Type": "E", "Answer": "4", "AnswerType": "calc"},
            headers={"Content-Type": "application/x-javascript"},
        )

    async with _client(handler) as client:
        result = await search("2+2", config=Config(), client=client)

    assert result.kind is ResultKind.E
    assert result.instant_information() == "[CALC] 4"
    assert seen[0].headers["User-Agent"].startswith("ddginstant/")
    assert seen[0].url.params["q"] == "2+2"


@pytest.mark.asyncio
async def test_instant_answer_uses_config_priorities() -> None:
    payload: dict[str, Any] = {
        "Answer": "4",
        "AnswerType": "calc",
        "Redirect": "https://example.com",
    }

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    cfg = Config(priorities=("redirect",))
    async with _client(handler) as client:
        assert await instant_answer("x", config=cfg, client=client) == (
            "https://example.com"
        )
        assert (
            await instant_answer("x", config=cfg, priorities=["answer"], client=client)
            == "[CALC] 4"
        )


@pytest.mark.asyncio
async def test_server_error_is_flagged_retryable_after_one_request() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503)

    async with _client(handler) as client:
        with pytest.raises(APIError) as exc:
            await fetch_payload("!g x", config=Config(), client=client)

    assert exc.value.status_code == 503
    assert exc.value.retryable is True
    assert exc.value.phase == "request"
    assert calls == 1


@pytest.mark.asyncio
async def test_rate_limit_maps_to_rate_limit_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, headers={"Retry-After": "7"})

    async with _client(handler) as client:
        with pytest.raises(RateLimitError) as exc:
            await fetch_payload("x", config=Config(), client=client)

    assert exc.value.status_code == 429
    assert exc.value.retry_after_s == 7.0
    assert exc.value.retryable is True
    assert isinstance(exc.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_client_error_is_not_retryable() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(404)

    async with _client(handler) as client:
        with pytest.raises(APIError) as exc:
            await fetch_payload("x", config=Config(), client=client)

    assert exc.value.status_code == 404
    assert exc.value.retryable is False
    assert calls == 1


@pytest.mark.asyncio
async def test_transport_failure_maps_to_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(APIError, match="request failed") as exc:
            await fetch_payload("x", config=Config(), client=client)

    assert exc.value.retryable is True
    assert exc.value.hint is not None


@pytest.mark.asyncio
async def test_non_json_body_maps_to_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>nope</html>")

    async with _client(handler) as client:
        with pytest.raises(APIError, match="not JSON") as exc:
            await fetch_payload("x", config=Config(), client=client)

    assert exc.value.phase == "parse"


@pytest.mark.asyncio
async def test_owned_client_is_created_when_none_given(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"Type": "A"})

    real_client = httpx.AsyncClient

    def patched(*args: Any, **kwargs: Any) -> httpx.AsyncClient:
        return real_client(transport=httpx.MockTransport(handler))

    monkeypatch.setattr("ddginstant.client.httpx.AsyncClient", patched)

    result = await search("x", config=Config())

    assert result.kind is ResultKind.A
