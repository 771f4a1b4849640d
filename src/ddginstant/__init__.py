"""ddginstant: typed DuckDuckGo instant answers.

Public API:
    - decode(): Raw JSON document -> SearchResult
    - instant_information(): SearchResult -> best single answer string
    - search() / instant_answer(): Async fetch + decode (+ resolve)
    - Config: Transport configuration dataclass
"""

from __future__ import annotations

import logging

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("ddginstant")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

from ddginstant.client import fetch_payload, instant_answer, search
from ddginstant.config import Config
from ddginstant.decode import decode_search_result
from ddginstant.enums import AnswerKind, ResultKind, lookup_by_name
from ddginstant.errors import (
    APIError,
    ConfigurationError,
    DDGInstantError,
    InvalidIndex,
    InvalidIndexError,
    RateLimitError,
)
from ddginstant.models import (
    Abstract,
    Answer,
    Definition,
    Icon,
    Redirect,
    ResultItem,
    SearchResult,
    SearchResultBuilder,
)
from ddginstant.resolve import DEFAULT_PRIORITIES, NO_RESULTS, instant_information

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("ddginstant").addHandler(logging.NullHandler())

# The decoder under its short public name.
decode = decode_search_result

__all__ = [
    "DEFAULT_PRIORITIES",
    "NO_RESULTS",
    "APIError",
    "Abstract",
    "Answer",
    "AnswerKind",
    "Config",
    "ConfigurationError",
    "DDGInstantError",
    "Definition",
    "Icon",
    "InvalidIndex",
    "InvalidIndexError",
    "RateLimitError",
    "Redirect",
    "ResultItem",
    "ResultKind",
    "SearchResult",
    "SearchResultBuilder",
    "decode",
    "decode_search_result",
    "fetch_payload",
    "instant_answer",
    "instant_information",
    "lookup_by_name",
    "search",
]
