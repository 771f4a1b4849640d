"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, sample payloads, and
automatic API test skipping.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os
from typing import Any

import pytest

# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_ddg_env(request, monkeypatch):
    """Clear DDG_* env vars so configuration defaults are deterministic.

    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith("DDG_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Sample Payloads
# =============================================================================


@pytest.fixture
def empty_payload() -> dict[str, Any]:
    """A response where every field is present but empty."""
    return {
        "Type": "",
        "Heading": "",
        "Abstract": "",
        "AbstractText": "",
        "AbstractSource": "",
        "AbstractURL": "",
        "Image": "",
        "Answer": "",
        "AnswerType": "",
        "Definition": "",
        "DefinitionSource": "",
        "DefinitionURL": "",
        "RelatedTopics": [],
        "Results": [],
        "Redirect": "",
    }


@pytest.fixture
def disambiguation_payload() -> dict[str, Any]:
    """A trimmed real-world ``apple`` response with grouped related topics."""
    return {
        "Type": "D",
        "Heading": "Apple",
        "AbstractURL": "https://en.wikipedia.org/wiki/Apple_(disambiguation)",
        "AbstractSource": "Wikipedia",
        "RelatedTopics": [
            {
                "FirstURL": "https://duckduckgo.com/Apple",
                "Icon": {"URL": "/i/a5e4a93a.jpg", "Height": "", "Width": ""},
                "Result": "<a href=\"https://duckduckgo.com/Apple\">Apple</a>",
                "Text": "Apple An edible fruit produced by an apple tree.",
            },
            {
                "Name": "Companies",
                "Topics": [
                    {
                        "FirstURL": "https://duckduckgo.com/Apple_Inc.",
                        "Icon": {"URL": "", "Height": 16, "Width": 16},
                        "Result": "<a>Apple Inc.</a>",
                        "Text": "Apple Inc. An American technology company.",
                    },
                    {
                        "FirstURL": "https://duckduckgo.com/Apple_Corps",
                        "Result": "<a>Apple Corps</a>",
                        "Text": "Apple Corps A multimedia corporation.",
                    },
                ],
            },
            {
                "Name": "Music",
                "Topics": [
                    {
                        "FirstURL": "https://duckduckgo.com/Apple_(album)",
                        "Icon": {"URL": "", "Height": "", "Width": ""},
                        "Result": "<a>Apple (album)</a>",
                        "Text": "Apple (album) A 1990 album.",
                    },
                ],
            },
        ],
        "Results": [
            {
                "FirstURL": "https://www.apple.com/",
                "Icon": {"URL": "/i/apple.com.ico", "Height": 16, "Width": 16},
                "Result": "<a href=\"https://www.apple.com/\">Official site</a>",
                "Text": "Official site",
            }
        ],
    }


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)
