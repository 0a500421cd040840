"""Pull-based lexer for ASCII plist text."""

from __future__ import annotations

from .errors import PlistSyntaxError
from .utils import DIGITS, is_bareword_char

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"'}


class PlistLexer:
    """Cursor over an immutable text.

    The lexer never looks further ahead than ``peek`` is asked to and never backtracks;
    the parser decides what to read from the next character alone.
    """

    def __init__(self, text: str):
        self.text = text
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= len(self.text)

    def peek(self, count: int = 1) -> str:
        return self.text[self._pos : self._pos + count]

    def advance(self, count: int = 1) -> None:
        self._pos = min(self._pos + count, len(self.text))

    def skip_insignificant(self) -> None:
        while not self.at_end():
            start = self._pos
            self._consume_whitespace()
            self._consume_comment()
            if self._pos == start:
                break

    def read_string(self) -> str:
        char = self.peek()
        if char == '"':
            return self.read_quoted_string()
        if is_bareword_char(char):
            return self.read_unquoted_string()
        raise self.error(f"Unexpected character {char!r}" if char else "Unexpected end of input", char=char)

    def read_quoted_string(self) -> str:
        if self.peek() != '"':
            raise self.error("Expected '\"'", char=self.peek())
        self._pos += 1
        buffer: list[str] = []
        while not self.at_end():
            char = self.text[self._pos]
            if char == '"':
                self._pos += 1
                return "".join(buffer)
            if char == "\\":
                self._pos += 1
                if self.at_end():
                    break
                escaped = self.text[self._pos]
                buffer.append(ESCAPES.get(escaped, escaped))
            else:
                buffer.append(char)
            self._pos += 1
        # unterminated: hand back what was decoded
        return "".join(buffer)

    def read_unquoted_string(self) -> str:
        start = self._pos
        while not self.at_end() and is_bareword_char(self.text[self._pos]):
            self._pos += 1
        return self.text[start : self._pos]

    def read_bareword_number(self) -> float:
        start = self._pos
        if self.peek() == "-":
            self._pos += 1
        digits_start = self._pos
        self._consume_digits()
        if self._pos == digits_start:
            self._pos = start
            raise self.error("Expected a digit", char=self.peek())
        if self.peek() == ".":
            self._pos += 1
            self._consume_digits()
        return float(self.text[start : self._pos])

    def location(self, offset: int | None = None) -> tuple[int, int]:
        """1-based (line, column) of ``offset``, defaulting to the cursor."""
        offset = self._pos if offset is None else offset
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return line, column

    def error(self, message: str, char: str | None = None, key: str | None = None) -> PlistSyntaxError:
        line, column = self.location()
        return PlistSyntaxError(message, offset=self._pos, line=line, column=column, char=char, key=key)

    # Helpers -----------------------------------------------------------------
    def _consume_whitespace(self) -> None:
        while not self.at_end() and self.text[self._pos].isspace():
            self._pos += 1

    def _consume_comment(self) -> None:
        opener = self.peek(2)
        if opener == "/*":
            end = self.text.find("*/", self._pos + 2)
            self._pos = len(self.text) if end == -1 else end + 2
        elif opener == "//":
            end = self.text.find("\n", self._pos + 2)
            self._pos = len(self.text) if end == -1 else end

    def _consume_digits(self) -> None:
        while not self.at_end() and self.text[self._pos] in DIGITS:
            self._pos += 1


__all__ = ["PlistLexer"]
