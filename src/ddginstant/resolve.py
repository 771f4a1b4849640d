"""Priority-path resolver for the instant information string.

A priority path is an ordered list of specifiers of the form ``field`` or
``field.index``, where ``field`` is one of ``answer``, ``abstract``,
``definition``, ``related``, ``result`` or ``redirect``. The first specifier
that yields text wins:

    instant_information(result, ["answer", "related.0"])  # "[CALC] 4"

Each entity has its own pure formatter; a formatter returns ``None`` when the
entity has nothing to show, which moves evaluation on to the next specifier.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import TYPE_CHECKING, Final

from ddginstant.errors import InvalidIndexError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ddginstant.models import (
        Abstract,
        Answer,
        Definition,
        Icon,
        Redirect,
        ResultItem,
        SearchResult,
    )

log = logging.getLogger(__name__)

#: Direct answer, then abstract, then first related topic, then definition,
#: then bang redirect.
DEFAULT_PRIORITIES: Final[tuple[str, ...]] = (
    "answer",
    "abstract",
    "related.0",
    "definition",
    "redirect",
)
NO_RESULTS: Final[str] = "Sorry, no results."
UNKNOWN_SOURCE: Final[str] = "unknown source"

FIELDS: Final[frozenset[str]] = frozenset(
    {"answer", "abstract", "definition", "related", "result", "redirect"}
)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class PathSpec:
    """A parsed priority specifier."""

    field: str
    #: ``None`` when no index was given or it was not a number.
    index: int | None = None


def parse_path(spec: str) -> PathSpec:
    """Parse ``field`` or ``field.index``.

    A non-numeric index is dropped silently. A negative index raises
    :class:`InvalidIndexError`.
    """
    field, sep, raw_index = spec.partition(".")
    if not sep or not _INTEGER_RE.fullmatch(raw_index):
        return PathSpec(field)
    index = int(raw_index)
    if index < 0:
        raise InvalidIndexError(raw_index)
    return PathSpec(field, index)


# --- Formatters -------------------------------------------------------------


def format_answer(answer: Answer) -> str | None:
    if not answer.has_text:
        return None
    return f"[{answer.kind.label}] {answer.text}"


def format_abstract(abstract: Abstract) -> str | None:
    if not abstract.has_text:
        return None
    prefix = f"{abstract.heading} - " if abstract.has_heading else ""
    source = abstract.url if abstract.has_url else UNKNOWN_SOURCE
    return f"{prefix}{abstract.text} ({source})"


def format_definition(definition: Definition) -> str | None:
    if not definition.has_text:
        return None
    if definition.has_source:
        source = definition.source
    elif definition.has_url:
        source = definition.url
    else:
        source = UNKNOWN_SOURCE
    return f"{definition.text} ({source})"


def format_result_item(item: ResultItem) -> str | None:
    if not item.has_text:
        return None
    source = item.url if item.has_url else UNKNOWN_SOURCE
    text = f"{item.text} ({source})"
    if item.has_disambiguation_name:
        text += f" {{{item.disambiguation_name}}}"
    return text


def format_redirect(redirect: Redirect) -> str | None:
    return redirect.url if redirect.has_url else None


def format_icon(icon: Icon) -> str | None:
    return icon.url if icon.has_url else None


# --- Field dispatch ---------------------------------------------------------


def _item_at(items: Sequence[ResultItem], index: int | None) -> str | None:
    if index is None or index >= len(items):
        return None
    return format_result_item(items[index])


def _answer(result: SearchResult, _index: int | None) -> str | None:
    return None if result.answer is None else format_answer(result.answer)


def _abstract(result: SearchResult, _index: int | None) -> str | None:
    return None if result.abstract is None else format_abstract(result.abstract)


def _definition(result: SearchResult, _index: int | None) -> str | None:
    if result.definition is None:
        return None
    return format_definition(result.definition)


def _related(result: SearchResult, index: int | None) -> str | None:
    return _item_at(result.related_topics, index)


def _result(result: SearchResult, index: int | None) -> str | None:
    return _item_at(result.results, index)


def _redirect(result: SearchResult, _index: int | None) -> str | None:
    return None if result.redirect is None else format_redirect(result.redirect)


_EXTRACTORS: Final[dict[str, Callable[[SearchResult, int | None], str | None]]] = {
    "answer": _answer,
    "abstract": _abstract,
    "definition": _definition,
    "related": _related,
    "result": _result,
    "redirect": _redirect,
}


def extract(result: SearchResult, spec: PathSpec) -> str | None:
    """Format the field *spec* selects, or ``None`` when it has nothing."""
    extractor = _EXTRACTORS.get(spec.field)
    if extractor is None:
        log.debug("Ignoring unknown priority field %r", spec.field)
        return None
    return extractor(result, spec.index)


def instant_information(
    result: SearchResult, priorities: Sequence[str] | None = None
) -> str:
    """Return the first non-empty formatted field named by *priorities*.

    Args:
        result: Decoded search result. It is only read.
        priorities: Specifiers to try in order. ``None`` or empty uses
            :data:`DEFAULT_PRIORITIES`.

    Returns:
        The formatted text, or :data:`NO_RESULTS` when nothing matched.

    Raises:
        InvalidIndexError: A specifier evaluated before the first match had a
            negative index. No partial result is returned.
    """
    for raw in priorities or DEFAULT_PRIORITIES:
        spec = parse_path(raw)
        text = extract(result, spec)
        if text is not None:
            log.debug("Priority %r matched", raw)
            return text
    return NO_RESULTS
