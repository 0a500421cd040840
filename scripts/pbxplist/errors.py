"""Exceptions raised while reading or writing plist text."""

from __future__ import annotations


class PlistError(Exception):
    """Base class for every error raised by pbxplist."""


class PlistSyntaxError(PlistError):
    """The input violates the grammar.

    ``offset`` is a character offset into the source text; ``char`` is the offending
    character (empty at end of input) and ``key`` the dictionary key being parsed, if any.
    """

    def __init__(
        self,
        message: str,
        offset: int,
        line: int,
        column: int,
        char: str | None = None,
        key: str | None = None,
    ):
        super().__init__(f"{message} at line {line}, column {column} (offset {offset})")
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        self.char = char
        self.key = key


class DepthExceeded(PlistError):
    def __init__(self, max_depth: int, offset: int | None = None):
        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"Maximum nesting depth of {max_depth} exceeded{where}")
        self.max_depth = max_depth
        self.offset = offset
