"""Entity model: typed value objects and the SearchResult aggregate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ddginstant.enums import AnswerKind, ResultKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def _normalize_text(obj: object, *names: str) -> None:
    """Replace ``None`` string fields with ``""`` on a frozen dataclass."""
    for name in names:
        if getattr(obj, name) is None:
            object.__setattr__(obj, name, "")


@dataclass(frozen=True, slots=True)
class Abstract:
    """Summary of a topic."""

    heading: str = ""
    #: Abstract text, may contain HTML.
    html: str = ""
    text: str = ""
    #: Name of the abstract's source, e.g. ``Wikipedia``.
    source: str = ""
    url: str = ""
    image: str = ""

    def __post_init__(self) -> None:
        _normalize_text(self, "heading", "html", "text", "source", "url", "image")

    @property
    def has_heading(self) -> bool:
        return self.heading != ""

    @property
    def has_html(self) -> bool:
        return self.html != ""

    @property
    def has_text(self) -> bool:
        return self.text != ""

    @property
    def has_source(self) -> bool:
        return self.source != ""

    @property
    def has_url(self) -> bool:
        return self.url != ""

    @property
    def has_image(self) -> bool:
        return self.image != ""


@dataclass(frozen=True, slots=True)
class Answer:
    """Direct answer to a question."""

    #: Answer text, may contain HTML.
    text: str = ""
    kind: AnswerKind = AnswerKind.ANSWER

    def __post_init__(self) -> None:
        _normalize_text(self, "text")
        if self.kind is None:
            object.__setattr__(self, "kind", AnswerKind.ANSWER)

    @property
    def has_text(self) -> bool:
        return self.text != ""


@dataclass(frozen=True, slots=True)
class Definition:
    """Dictionary-style definition."""

    text: str = ""
    source: str = ""
    url: str = ""

    def __post_init__(self) -> None:
        _normalize_text(self, "text", "source", "url")

    @property
    def has_text(self) -> bool:
        return self.text != ""

    @property
    def has_source(self) -> bool:
        return self.source != ""

    @property
    def has_url(self) -> bool:
        return self.url != ""


@dataclass(frozen=True, slots=True)
class Icon:
    """Icon attached to a result item.

    ``height`` and ``width`` use ``-1`` for "unset"; only positive values
    count as present.
    """

    url: str = ""
    height: int = -1
    width: int = -1

    def __post_init__(self) -> None:
        _normalize_text(self, "url")
        for name in ("height", "width"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, -1)

    @property
    def has_url(self) -> bool:
        return self.url != ""

    @property
    def has_height(self) -> bool:
        return self.height > 0

    @property
    def has_width(self) -> bool:
        return self.width > 0


@dataclass(frozen=True, slots=True)
class Redirect:
    """Target of a bang command such as ``!imdb``."""

    url: str = ""

    def __post_init__(self) -> None:
        _normalize_text(self, "url")

    @property
    def has_url(self) -> bool:
        return self.url != ""


@dataclass(frozen=True, slots=True)
class ResultItem:
    """One entry of a related-topics or results list."""

    url: str = ""
    icon: Icon | None = None
    #: Entry rendered as HTML.
    html: str = ""
    text: str = ""
    #: Category label; only set on items built with one explicitly.
    #: Not part of equality.
    disambiguation_name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        _normalize_text(self, "url", "html", "text", "disambiguation_name")

    @property
    def has_url(self) -> bool:
        return self.url != ""

    @property
    def has_icon(self) -> bool:
        return self.icon is not None

    @property
    def has_html(self) -> bool:
        return self.html != ""

    @property
    def has_text(self) -> bool:
        return self.text != ""

    @property
    def has_disambiguation_name(self) -> bool:
        return self.disambiguation_name != ""


class SearchResult:
    """Decoded instant answer response.

    ``kind`` is fixed at construction. Everything else is mutable during
    assembly; once handed to the resolver it should be treated as read-only.
    There is no internal locking.
    """

    def __init__(
        self,
        kind: ResultKind = ResultKind.NULL,
        *,
        abstract: Abstract | None = None,
        answer: Answer | None = None,
        definition: Definition | None = None,
        redirect: Redirect | None = None,
        related_topics: Iterable[ResultItem] = (),
        results: Iterable[ResultItem] = (),
    ) -> None:
        self._kind = kind
        self.abstract = abstract
        self.answer = answer
        self.definition = definition
        self.redirect = redirect
        self.related_topics: list[ResultItem] = list(related_topics)
        self.results: list[ResultItem] = list(results)

    @property
    def kind(self) -> ResultKind:
        return self._kind

    def add_related_topic(self, item: ResultItem) -> None:
        self.related_topics.append(item)

    def add_related_topics(self, items: Iterable[ResultItem]) -> None:
        self.related_topics.extend(items)

    def replace_related_topics(self, items: Iterable[ResultItem]) -> None:
        self.related_topics[:] = list(items)

    def add_result(self, item: ResultItem) -> None:
        self.results.append(item)

    def add_results(self, items: Iterable[ResultItem]) -> None:
        self.results.extend(items)

    def replace_results(self, items: Iterable[ResultItem]) -> None:
        self.results[:] = list(items)

    def instant_information(self, priorities: Sequence[str] | None = None) -> str:
        """Resolve the best single answer, see :mod:`ddginstant.resolve`."""
        from ddginstant.resolve import instant_information

        return instant_information(self, priorities)

    @staticmethod
    def builder(kind: ResultKind = ResultKind.NULL) -> SearchResultBuilder:
        return SearchResultBuilder(kind)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return (
            self._kind is other._kind
            and self.abstract == other.abstract
            and self.answer == other.answer
            and self.definition == other.definition
            and self.redirect == other.redirect
            and self.related_topics == other.related_topics
            and self.results == other.results
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"SearchResult(kind={self._kind.name}, abstract={self.abstract!r}, "
            f"answer={self.answer!r}, definition={self.definition!r}, "
            f"redirect={self.redirect!r}, related_topics={len(self.related_topics)}, "
            f"results={len(self.results)})"
        )


class SearchResultBuilder:
    """Fluent builder that accumulates entities into one SearchResult.

    Example:
        result = (
            SearchResult.builder(ResultKind.A)
            .answer(Answer("4", AnswerKind.CALC))
            .related_topic(ResultItem(url="https://x", text="hello"))
            .build()
        )
    """

    def __init__(self, kind: ResultKind = ResultKind.NULL) -> None:
        self._result = SearchResult(kind)

    def abstract(self, abstract: Abstract | None) -> SearchResultBuilder:
        self._result.abstract = abstract
        return self

    def answer(self, answer: Answer | None) -> SearchResultBuilder:
        self._result.answer = answer
        return self

    def definition(self, definition: Definition | None) -> SearchResultBuilder:
        self._result.definition = definition
        return self

    def redirect(self, redirect: Redirect | None) -> SearchResultBuilder:
        self._result.redirect = redirect
        return self

    def related_topic(self, item: ResultItem) -> SearchResultBuilder:
        self._result.add_related_topic(item)
        return self

    def related_topics(
        self, items: Iterable[ResultItem], *, overwrite: bool = False
    ) -> SearchResultBuilder:
        if overwrite:
            self._result.replace_related_topics(items)
        else:
            self._result.add_related_topics(items)
        return self

    def result(self, item: ResultItem) -> SearchResultBuilder:
        self._result.add_result(item)
        return self

    def results(
        self, items: Iterable[ResultItem], *, overwrite: bool = False
    ) -> SearchResultBuilder:
        if overwrite:
            self._result.replace_results(items)
        else:
            self._result.add_results(items)
        return self

    def build(self) -> SearchResult:
        return self._result
