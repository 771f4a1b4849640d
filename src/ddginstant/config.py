"""Configuration: frozen Config for the instant answer transport."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from urllib.parse import urlparse

from dotenv import load_dotenv

from ddginstant._http import DEFAULT_BASE_URL
from ddginstant.errors import ConfigurationError, InvalidIndexError
from ddginstant.resolve import DEFAULT_PRIORITIES, FIELDS, parse_path

load_dotenv()

_BASE_URL_ENV_VAR = "DDG_BASE_URL"
_TIMEOUT_ENV_VAR = "DDG_TIMEOUT_S"


def _default_base_url() -> str:
    return os.environ.get(_BASE_URL_ENV_VAR) or DEFAULT_BASE_URL


def _default_timeout_s() -> float:
    raw = os.environ.get(_TIMEOUT_ENV_VAR)
    if not raw:
        return 10.0
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(
            f"{_TIMEOUT_ENV_VAR} must be a number, got {raw!r}",
            hint="Use seconds, e.g. DDG_TIMEOUT_S=5.",
        ) from None


def _default_user_agent() -> str:
    from ddginstant import __version__

    return f"ddginstant/{__version__}"


@dataclass(frozen=True)
class Config:
    """Immutable configuration for instant answer lookups.

    Every field has a working default, so ``Config()`` is enough for the
    public endpoint. ``base_url`` and ``timeout_s`` can also come from the
    ``DDG_BASE_URL`` and ``DDG_TIMEOUT_S`` environment variables (or a
    ``.env`` file).

    Example:
        config = Config(priorities=("abstract", "related.0"), timeout_s=5)
    """

    base_url: str = field(default_factory=_default_base_url)
    #: Ask the API not to follow bang redirects, so ``Redirect`` is filled.
    no_redirect: bool = True
    #: Strip HTML from text fields server-side.
    no_html: bool = False
    #: Skip disambiguation results server-side.
    skip_disambig: bool = False
    timeout_s: float = field(default_factory=_default_timeout_s)
    #: Default priority path for ``instant_answer()``.
    priorities: tuple[str, ...] = DEFAULT_PRIORITIES
    user_agent: str = field(default_factory=_default_user_agent)

    def __post_init__(self) -> None:
        """Validate configuration eagerly for clear errors."""
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"base_url must be an http(s) URL, got {self.base_url!r}",
                hint=f"Set {_BASE_URL_ENV_VAR} or pass Config(base_url=...).",
            )

        if self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="This is the per-request HTTP timeout in seconds.",
            )

        # Accept any sequence but store a tuple so the config stays hashable.
        object.__setattr__(self, "priorities", tuple(self.priorities))
        if not self.priorities:
            raise ConfigurationError(
                "priorities must not be empty",
                hint=f"The default is {', '.join(DEFAULT_PRIORITIES)}.",
            )
        for spec in self.priorities:
            try:
                path = parse_path(spec)
            except InvalidIndexError as exc:
                raise ConfigurationError(str(exc), hint=exc.hint) from exc
            if path.field not in FIELDS:
                raise ConfigurationError(
                    f"Unknown priority field {path.field!r} in {spec!r}",
                    hint=f"Supported fields: {', '.join(sorted(FIELDS))}.",
                )

    def __str__(self) -> str:
        """Return a compact, developer-friendly representation."""
        return (
            f"Config(base_url={self.base_url!r}, timeout_s={self.timeout_s}, "
            f"priorities={list(self.priorities)!r})"
        )

    __repr__ = __str__
