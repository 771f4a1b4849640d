"""Closed enumerations of the instant answer schema and their name lookup."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

EnumT = TypeVar("EnumT", bound=Enum)


def lookup_by_name(enum_cls: type[EnumT], name: str | None, default: EnumT) -> EnumT:
    """Return the member of *enum_cls* named *name*, or *default*.

    Matching ignores case and underscores: ``"ip_loc"``, ``"IPLOC"`` and
    ``"ipLoc"`` all resolve to the same member. Empty, ``None`` and unknown
    names never raise; they fall back to *default*.
    """
    if not name:
        return default
    normalized = name.replace("_", "").upper().strip()
    member = enum_cls.__members__.get(normalized)
    return default if member is None else member


class ResultKind(Enum):
    """Overall classification of a search result (the wire ``Type`` field)."""

    A = "Article"
    D = "Disambiguation"
    C = "Category"
    N = "Name"
    E = "Exclusive"
    #: No classification.
    NULL = None

    @property
    def label(self) -> str | None:
        """Human-readable meaning; ``None`` for the sentinel."""
        return self.value

    @property
    def is_null(self) -> bool:
        return self is ResultKind.NULL

    @classmethod
    def from_name(cls, name: str | None) -> ResultKind:
        return lookup_by_name(cls, name, cls.NULL)


class AnswerKind(Enum):
    """Kind of direct answer (the wire ``AnswerType`` field)."""

    CALC = "calc"
    COLOR = "color"
    DIGEST = "digest"
    INFO = "info"
    IP = "ip"
    IPLOC = "iploc"
    PHONE = "phone"
    PW = "pw"
    RAND = "rand"
    REGEXP = "regexp"
    UNICODE = "unicode"
    UPC = "upc"
    ZIP = "zip"
    #: Unrecognized or generic answer type.
    ANSWER = "answer"

    @property
    def label(self) -> str:
        """Label shown in formatted answers, e.g. ``CALC``."""
        return self.name

    @classmethod
    def from_name(cls, name: str | None) -> AnswerKind:
        return lookup_by_name(cls, name, cls.ANSWER)
