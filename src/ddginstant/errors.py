"""Exception hierarchy for ddginstant."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class DDGInstantError(Exception):
    """Base exception for all ddginstant errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(DDGInstantError):
    """Configuration validation or resolution failed."""


class InvalidIndexError(DDGInstantError, ValueError):
    """A priority path carried a negative list index.

    Raised for the whole resolve call, never per specifier: a caller that
    passes user-controlled priority paths should validate or catch this.
    """

    def __init__(self, literal: str) -> None:
        super().__init__(
            f"Invalid index in priority path: {literal!r}",
            hint="List indices must be non-negative integers, e.g. 'related.0'.",
        )
        self.literal = literal


# Name used by callers that think of this as the "InvalidIndex" failure.
InvalidIndex = InvalidIndexError


class APIError(DDGInstantError):
    """The instant answer API call failed.

    The transport attaches the HTTP status and ``Retry-After`` delay so
    callers can tell transient failures from permanent ones.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        retryable: bool | None = None,
        status_code: int | None = None,
        retry_after_s: float | None = None,
        phase: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.retryable = retryable
        self.status_code = status_code
        self.retry_after_s = retry_after_s
        self.phase = phase


class RateLimitError(APIError):
    """Rate limit exceeded (HTTP 429)."""


def _walk_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and its ``__cause__``/``__context__`` chain, with cycle protection."""
    seen: set[int] = set()
    stack: list[BaseException] = [exc]
    while stack:
        cur = stack.pop()
        if id(cur) in seen:
            continue
        seen.add(id(cur))
        yield cur

        cause = cur.__cause__
        if isinstance(cause, BaseException):
            stack.append(cause)
        context = cur.__context__
        if isinstance(context, BaseException):
            stack.append(context)
