"""Formatter that renders plist documents back to text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .comments import CommentStrategy, PreserveComments, coerce_strategy, comment_for
from .document import ARCHIVE_VERSION, CLASSES, OBJECT_VERSION, OBJECTS, ROOT_OBJECT, PlistDocument
from .errors import DepthExceeded
from .logger import Logger
from .nodes import PlistArray, PlistDictionary, PlistNull, PlistNumber, PlistString, PlistValue
from .utils import BARE_STRING_RE, DEFAULT_MAX_DEPTH, format_number


class SerializeOptions(BaseModel):
    comment_strategy: CommentStrategy = Field(
        default_factory=PreserveComments,
        validation_alias=AliasChoices("comment_strategy", "commentStrategy"),
    )
    indent: str = "  "
    wrap_root: bool = False
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)

    @field_validator("comment_strategy", mode="before")
    @classmethod
    def _coerce_comment_strategy(cls, value: Any) -> Any:
        return coerce_strategy(value)


def quote_string(text: str) -> str:
    if BARE_STRING_RE.fullmatch(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass
class PlistFormatter:
    options: SerializeOptions = field(default_factory=SerializeOptions)
    enable_logger: bool = True

    def __post_init__(self) -> None:
        self.logger = Logger(config={"name": "pbxplist.formatter", "is_enabled": self.enable_logger}).logger

    def format_document(self, document: PlistDocument) -> str:
        try:
            lines = self._document_lines(document)
        except RecursionError:
            # the interpreter stack ran out before max_depth did
            raise DepthExceeded(self.options.max_depth) from None
        self.logger.info(f"Formatted document with {len(document.objects.entries)} object(s)")
        return "\n".join(lines)

    def _document_lines(self, document: PlistDocument) -> list[str]:
        base = 1 if self.options.wrap_root else 0
        lines: list[str] = ["{"] if self.options.wrap_root else []
        lines.append(self._assignment(ARCHIVE_VERSION, document.archive_version, base))
        lines.append(self._assignment(OBJECT_VERSION, document.object_version, base))
        lines.extend(self.format_objects(document.objects, base))
        lines.append(self._assignment(ROOT_OBJECT, document.root_object, base))
        if document.classes.entries:
            lines.append(self._assignment(CLASSES, document.classes, base))
        for key, value in document.extra.items():
            lines.append(self._assignment(key, value, base))
        if self.options.wrap_root:
            lines.append("}")
        return lines

    def format_objects(self, objects: PlistDictionary, level: int) -> list[str]:
        lines = [f"{self._indent(level)}{OBJECTS} = {{"]
        for identifier, record in objects.entries.items():
            key = quote_string(identifier)
            if not isinstance(record, PlistDictionary):
                self.logger.debug(f"Object '{identifier}' is a {record.kind}, writing it without a comment")
                lines.append(self._assignment(identifier, record, level + 1, depth=2))
                continue
            self._check_depth(2)
            comment = comment_for(self.options.comment_strategy, record)
            lines.append(f"{self._indent(level + 1)}{key}{comment} = {{")
            for name, value in record.entries.items():
                lines.append(self._assignment(name, value, level + 2, depth=3))
            lines.append(f"{self._indent(level + 1)}}};")
        lines.append(f"{self._indent(level)}}};")
        return lines

    def format_value(self, value: PlistValue | None, level: int = 0, depth: int = 1) -> str:
        match value:
            case None | PlistNull():
                return "null"
            case PlistNumber(value=number):
                return format_number(number)
            case PlistString(value=text):
                return quote_string(text)
            case PlistArray(items=items):
                return self._format_array(items, level, depth)
            case PlistDictionary(entries=entries):
                return self._format_dictionary(entries, level, depth)
        raise TypeError(f"Not a plist value: {value!r}")

    def _format_array(self, items: list[PlistValue], level: int, depth: int) -> str:
        if not items:
            return "()"
        self._check_depth(depth)
        rendered = [self.format_value(item, level + 1, depth + 1) for item in items]
        if self._can_inline_list(items) and all("\n" not in item for item in rendered):
            return f"({', '.join(rendered)})"
        inner = self._indent(level + 1)
        body = ",\n".join(f"{inner}{item}" for item in rendered)
        return f"(\n{body}\n{self._indent(level)})"

    def _format_dictionary(self, entries: dict[str, PlistValue], level: int, depth: int) -> str:
        if not entries:
            return "{}"
        self._check_depth(depth)
        body = "\n".join(self._assignment(key, value, level + 1, depth + 1) for key, value in entries.items())
        return f"{{\n{body}\n{self._indent(level)}}}"

    def _assignment(self, key: str, value: PlistValue, level: int, depth: int = 1) -> str:
        return f"{self._indent(level)}{quote_string(key)} = {self.format_value(value, level, depth)};"

    def _can_inline_list(self, items: list[PlistValue]) -> bool:
        # scalars only; a nested array may ride along if it holds at most one inlineable item
        for item in items:
            if isinstance(item, PlistArray):
                if len(item.items) > 1 or not self._can_inline_list(item.items):
                    return False
            elif not isinstance(item, (PlistNull, PlistNumber, PlistString)):
                return False
        return True

    def _check_depth(self, depth: int) -> None:
        if depth > self.options.max_depth:
            raise DepthExceeded(self.options.max_depth)

    def _indent(self, level: int) -> str:
        return "" if level <= 0 else self.options.indent * level


def serialize(document: PlistDocument | Mapping[str, Any], options: SerializeOptions | Mapping[str, Any] | None = None) -> str:
    if not isinstance(options, SerializeOptions):
        options = SerializeOptions.model_validate(options or {})
    if not isinstance(document, PlistDocument):
        try:
            document = PlistDocument.from_python(document)
        except RecursionError:
            raise DepthExceeded(options.max_depth) from None
    return PlistFormatter(options=options).format_document(document)


stringify = serialize
# older callers still import this name
build = serialize


__all__ = ["PlistFormatter", "SerializeOptions", "quote_string", "serialize", "stringify", "build"]
