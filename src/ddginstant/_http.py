"""Small HTTP-related constants shared across ddginstant.

This module is intentionally tiny to avoid circular imports and drift.
"""

from __future__ import annotations

from typing import Final

DEFAULT_BASE_URL: Final[str] = "https://api.duckduckgo.com/"

# Status codes worth retrying; marks APIError.retryable.
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})
