"""Async transport for the DuckDuckGo instant answer API.

Builds the endpoint URL, fetches the JSON document with ``httpx`` and hands it
to the decoder. One GET per call; HTTP failures are mapped to
:class:`APIError` carrying the status code and any ``Retry-After`` delay.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from ddginstant._http import RETRYABLE_STATUS_CODES
from ddginstant.config import Config
from ddginstant.decode import decode_search_result
from ddginstant.errors import APIError, ConfigurationError, RateLimitError
from ddginstant.resolve import instant_information

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ddginstant.models import SearchResult

log = logging.getLogger(__name__)


def build_search_url(query: str, config: Config) -> str:
    """Return the full API URL for *query*.

    Raises:
        ConfigurationError: If the query is empty or whitespace-only.
    """
    if not isinstance(query, str) or not query.strip():
        raise ConfigurationError(
            "query is empty or whitespace-only",
            hint="Pass a search phrase, e.g. search('valley forge').",
        )

    params: dict[str, str] = {"q": query, "format": "json"}
    if config.no_redirect:
        params["no_redirect"] = "1"
    if config.no_html:
        params["no_html"] = "1"
    if config.skip_disambig:
        params["skip_disambig"] = "1"
    return str(httpx.URL(config.base_url).copy_merge_params(params))


def _retry_after_s(response: httpx.Response) -> float | None:
    raw = response.headers.get("Retry-After")
    if not raw or not raw.strip():
        return None
    try:
        seconds = float(raw)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def _status_error(exc: httpx.HTTPStatusError) -> APIError:
    status = exc.response.status_code
    error_cls = RateLimitError if status == 429 else APIError
    return error_cls(
        f"Instant answer API returned HTTP {status}",
        hint="Slow down requests." if status == 429 else None,
        retryable=status in RETRYABLE_STATUS_CODES,
        status_code=status,
        retry_after_s=_retry_after_s(exc.response),
        phase="request",
    )


async def _get_json(client: httpx.AsyncClient, url: str, config: Config) -> Any:
    try:
        response = await client.get(
            url,
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout_s,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise _status_error(exc) from exc
    except httpx.RequestError as exc:
        raise APIError(
            f"Instant answer request failed: {exc}",
            hint="Check network connectivity and DDG_BASE_URL.",
            retryable=True,
            phase="request",
        ) from exc

    try:
        return response.json()
    except ValueError as exc:
        raise APIError(
            "Instant answer API returned a body that is not JSON",
            status_code=response.status_code,
            retryable=False,
            phase="parse",
        ) from exc


async def fetch_payload(
    query: str,
    *,
    config: Config | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """Fetch the raw JSON document for *query*.

    Args:
        query: Search phrase; bang commands such as ``!imdb rushmore`` work.
        config: Transport settings. Defaults to ``Config()``.
        client: Optional caller-owned client; it is not closed here.

    Returns:
        The parsed JSON document, untouched.

    Raises:
        APIError: On HTTP errors, transport failures or a non-JSON body.
    """
    config = config or Config()
    url = build_search_url(query, config)
    log.debug("Fetching instant answer: %s", url)

    if client is not None:
        return await _get_json(client, url, config)

    async with httpx.AsyncClient() as owned:
        return await _get_json(owned, url, config)


async def search(
    query: str,
    *,
    config: Config | None = None,
    client: httpx.AsyncClient | None = None,
) -> SearchResult:
    """Search and decode the instant answer for *query*.

    Example:
        result = await search("apple")
        print(result.instant_information())
    """
    payload = await fetch_payload(query, config=config, client=client)
    return decode_search_result(payload)


async def instant_answer(
    query: str,
    *,
    config: Config | None = None,
    priorities: Sequence[str] | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Search and return the single best answer string for *query*.

    *priorities* falls back to ``config.priorities``.
    """
    config = config or Config()
    result = await search(query, config=config, client=client)
    return instant_information(result, priorities or config.priorities)
