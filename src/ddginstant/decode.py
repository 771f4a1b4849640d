"""Tolerant decoder: raw instant answer JSON into the entity model.

The upstream schema is loose: any field may be missing, ``null``, or of an
unexpected type. Decoding never fails on such input; strings fall back to
``""`` and icon dimensions to ``-1``. Parsing the HTTP body itself is the
transport's concern (see ``ddginstant.client``).
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import math
from typing import Any

from ddginstant.enums import AnswerKind, ResultKind
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

_UNSET_DIMENSION = -1


def _text(node: Mapping[str, Any], key: str) -> str:
    """Read *key* as text, ``""`` when absent, ``null`` or a container."""
    value = node.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _int(node: Mapping[str, Any], key: str) -> int:
    """Read *key* as an int, ``-1`` when absent, ``null`` or unparseable.

    The API sends icon sizes either as numbers or as strings (often ``""``).
    """
    value = node.get(key)
    if value is None:
        return _UNSET_DIMENSION
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else _UNSET_DIMENSION
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return _UNSET_DIMENSION
    return _UNSET_DIMENSION


def decode_icon(node: Any) -> Icon:
    """Decode an ``Icon`` node; anything but an object yields an unset Icon."""
    if not isinstance(node, Mapping):
        return Icon()
    return Icon(
        url=_text(node, "URL"),
        height=_int(node, "Height"),
        width=_int(node, "Width"),
    )


def decode_result_item(node: Mapping[str, Any]) -> ResultItem:
    """Decode one leaf entry of ``RelatedTopics`` or ``Results``.

    An Icon is always attached, with sentinel values when the node has none.
    """
    return ResultItem(
        url=_text(node, "FirstURL"),
        icon=decode_icon(node.get("Icon")),
        html=_text(node, "Result"),
        text=_text(node, "Text"),
    )


def _is_group(node: Mapping[str, Any]) -> bool:
    return "Name" in node and isinstance(node.get("Topics"), list)


def decode_result_items(node: Any, *, flatten: bool = True) -> list[ResultItem]:
    """Decode a result list.

    With *flatten*, disambiguation groups (``{"Name": ..., "Topics": [...]}``)
    contribute their nested leaves, not themselves, one level deep. The
    group's ``Name`` is not copied onto the leaves. An entry whose ``Topics``
    is not an array decodes as a leaf.
    """
    if not isinstance(node, list):
        return []

    items: list[ResultItem] = []
    for entry in node:
        if not isinstance(entry, Mapping):
            log.debug("Skipping non-object result entry: %r", type(entry).__name__)
            continue
        if flatten and _is_group(entry):
            items.extend(
                decode_result_item(topic)
                for topic in entry["Topics"]
                if isinstance(topic, Mapping)
            )
        else:
            items.append(decode_result_item(entry))
    return items


def decode_search_result(payload: Any) -> SearchResult:
    """Decode a parsed instant answer document into a SearchResult.

    Abstract, Answer, Definition and Redirect are always populated, possibly
    with empty fields; callers decide relevance through their ``has_*``
    properties.

    Example:
        result = decode_search_result({"Answer": "4", "AnswerType": "calc"})
        assert result.answer.kind is AnswerKind.CALC
    """
    if not isinstance(payload, Mapping):
        log.debug("Payload is %s, not an object", type(payload).__name__)
        payload = {}

    return (
        SearchResult.builder(ResultKind.from_name(_text(payload, "Type")))
        .abstract(
            Abstract(
                heading=_text(payload, "Heading"),
                html=_text(payload, "Abstract"),
                text=_text(payload, "AbstractText"),
                source=_text(payload, "AbstractSource"),
                url=_text(payload, "AbstractURL"),
                image=_text(payload, "Image"),
            )
        )
        .answer(
            Answer(
                text=_text(payload, "Answer"),
                kind=AnswerKind.from_name(_text(payload, "AnswerType")),
            )
        )
        .definition(
            Definition(
                text=_text(payload, "Definition"),
                source=_text(payload, "DefinitionSource"),
                url=_text(payload, "DefinitionURL"),
            )
        )
        .related_topics(decode_result_items(payload.get("RelatedTopics")))
        .results(decode_result_items(payload.get("Results"), flatten=False))
        .redirect(Redirect(url=_text(payload, "Redirect")))
        .build()
    )
