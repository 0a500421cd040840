"""Comment strategies for object entries written by the formatter."""

from __future__ import annotations

from typing import Annotated, Callable, Literal, Union

from pydantic import BaseModel, Field

from .nodes import PlistDictionary, PlistNumber, PlistString, PlistValue
from .utils import format_number

LABEL_KEYS = ("path", "name", "isa")
DEFAULT_LABEL = "Object"

LabelFunction = Callable[[PlistDictionary], str]


def _label_text(value: PlistValue | None) -> str | None:
    if isinstance(value, PlistString) and value.value:
        return value.value
    if isinstance(value, PlistNumber):
        return format_number(value.value)
    return None


def label_for(record: PlistValue) -> str:
    """Human label for an object record: its ``path``, ``name`` or ``isa``, else ``Object``."""
    if not isinstance(record, PlistDictionary):
        return DEFAULT_LABEL
    for key in LABEL_KEYS:
        text = _label_text(record.get(key))
        if text is not None:
            return text
    return DEFAULT_LABEL


class StripComments(BaseModel):
    kind: Literal["strip"] = "strip"


class PreserveComments(BaseModel):
    # Source comments are dropped by the lexer, so there is nothing to write back.
    kind: Literal["preserve"] = "preserve"


class GenerateComments(BaseModel):
    kind: Literal["generate"] = "generate"


class CustomComments(BaseModel):
    kind: Literal["custom"] = "custom"
    label_for: LabelFunction


CommentStrategy = Annotated[
    Union[StripComments, PreserveComments, GenerateComments, CustomComments],
    Field(discriminator="kind"),
]

NAMED_STRATEGIES = {
    "strip": StripComments,
    "preserve": PreserveComments,
    "generate": GenerateComments,
}


def coerce_strategy(value):
    """Accept a strategy name or a label callable where a strategy model is expected."""
    if isinstance(value, str):
        if value not in NAMED_STRATEGIES:
            raise ValueError(f"Unknown comment strategy '{value}', expected one of {sorted(NAMED_STRATEGIES)}")
        return NAMED_STRATEGIES[value]()
    if callable(value) and not isinstance(value, type):
        return CustomComments(label_for=value)
    return value


def comment_text(label: str) -> str:
    # a label must not close the comment it sits in
    return f" /* {str(label).replace('*/', '* /')} */"


def comment_for(strategy, record: PlistValue) -> str:
    match strategy:
        case StripComments() | PreserveComments():
            return ""
        case GenerateComments():
            return comment_text(label_for(record))
        case CustomComments(label_for=label_function):
            return comment_text(label_function(record))
    raise TypeError(f"Unknown comment strategy: {strategy!r}")


__all__ = [
    "label_for",
    "CommentStrategy",
    "StripComments",
    "PreserveComments",
    "GenerateComments",
    "CustomComments",
    "coerce_strategy",
    "comment_for",
]
