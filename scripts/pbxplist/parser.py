from typing import NotRequired, Optional, TypedDict
import logging
import math
from scripts.pbxplist.document import PlistDocument, normalize_document
from scripts.pbxplist.errors import DepthExceeded, PlistError
from scripts.pbxplist.lexer import PlistLexer
from scripts.pbxplist.logger import Logger
from scripts.pbxplist.nodes import (
    PlistArray,
    PlistDictionary,
    PlistNull,
    PlistNumber,
    PlistString,
    PlistValue,
)
from scripts.pbxplist.utils import DEFAULT_MAX_DEPTH, DIGITS, NUMBER_RE, is_bareword_char, resolve_config


class ParserConfig(TypedDict):
    enable_logger: NotRequired[bool]
    log_level: NotRequired[int]
    max_depth: NotRequired[int]


class ParserConfigRequired(TypedDict):
    enable_logger: bool
    log_level: int
    max_depth: int


DEFAULT_CONFIG: ParserConfigRequired = {
    "enable_logger": True,
    "log_level": logging.WARNING,
    "max_depth": DEFAULT_MAX_DEPTH,
}


def disambiguate_scalar(word: str) -> PlistNumber | PlistString:
    """Barewords that look numeric become numbers; everything else stays a string."""
    if NUMBER_RE.fullmatch(word):
        number = float(word)
        # digit runs too long for a float keep their text
        if math.isfinite(number):
            return PlistNumber(value=number)
    return PlistString(value=word)


class PlistParser:
    def __init__(self, text: str, config: Optional[ParserConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger(
            config={
                "name": "pbxplist.parser",
                "is_enabled": self.config["enable_logger"],
                "level": self.config["log_level"],
            }
        ).logger
        self.lexer = PlistLexer(text)
        self.depth = 0

    def parse_document(self) -> PlistDocument:
        try:
            fields = self.parse_fields()
        except RecursionError:
            # the interpreter stack ran out before max_depth did
            error = DepthExceeded(self.config["max_depth"], self.lexer.position)
            self.logger.debug(error)
            raise error from None
        except PlistError as e:
            self.logger.debug(e)
            raise
        document = normalize_document(fields)
        self.logger.info(
            f"Parsed document with {len(document.objects.entries)} object(s) and {len(fields.entries)} top-level field(s)"
        )
        return document

    def parse_fields(self) -> PlistDictionary:
        """Parse the raw top-level field set: one braced dictionary or bare assignments."""
        self.lexer.skip_insignificant()
        if self.lexer.peek() == "{":
            fields = self.parse_dictionary()
            self.lexer.skip_insignificant()
            if not self.lexer.at_end():
                raise self.lexer.error("Unexpected content after root dictionary", char=self.lexer.peek())
            return fields

        entries: dict[str, PlistValue] = {}
        while True:
            self.lexer.skip_insignificant()
            if self.lexer.at_end():
                break
            self._parse_assignment(entries)
        return PlistDictionary(entries=entries)

    def parse_value(self) -> PlistValue:
        self.lexer.skip_insignificant()
        if self.lexer.at_end():
            return PlistNull()

        char = self.lexer.peek()
        if char == "{":
            return self.parse_dictionary()
        if char == "(":
            return self.parse_array()
        if char == '"':
            return PlistString(value=self.lexer.read_quoted_string())
        if is_bareword_char(char):
            return disambiguate_scalar(self.lexer.read_unquoted_string())
        if char in DIGITS or char == "-":
            return PlistNumber(value=self.lexer.read_bareword_number())
        raise self.lexer.error(f"Unexpected character {char!r}", char=char)

    def parse_dictionary(self) -> PlistDictionary:
        self.lexer.skip_insignificant()
        if self.lexer.peek() != "{":
            raise self.lexer.error("Expected '{'", char=self.lexer.peek())
        start = self.lexer.position
        self.lexer.advance()
        self._enter(start)
        self.logger.debug(f"Parsing dictionary at offset {start}")

        entries: dict[str, PlistValue] = {}
        while True:
            self.lexer.skip_insignificant()
            if self.lexer.at_end():
                raise self.lexer.error("Unexpected end of input while parsing dictionary", char="")
            if self.lexer.peek() == "}":
                self.lexer.advance()
                break
            self._parse_assignment(entries)

        self.depth -= 1
        return PlistDictionary(entries=entries)

    def parse_array(self) -> PlistArray:
        self.lexer.skip_insignificant()
        if self.lexer.peek() != "(":
            raise self.lexer.error("Expected '('", char=self.lexer.peek())
        start = self.lexer.position
        self.lexer.advance()
        self._enter(start)
        self.logger.debug(f"Parsing array at offset {start}")

        items: list[PlistValue] = []
        while True:
            self.lexer.skip_insignificant()
            if self.lexer.at_end():
                raise self.lexer.error("Unexpected end of input while parsing array", char="")
            if self.lexer.peek() == ")":
                self.lexer.advance()
                break
            items.append(self.parse_value())
            self.lexer.skip_insignificant()
            if self.lexer.peek() == ",":
                self.lexer.advance()

        self.depth -= 1
        return PlistArray(items=items)

    def _parse_assignment(self, entries: dict[str, PlistValue]) -> None:
        key = self.lexer.read_string()
        self.lexer.skip_insignificant()
        if self.lexer.peek() != "=":
            raise self.lexer.error(f"Expected '=' after key '{key}'", char=self.lexer.peek(), key=key)
        self.lexer.advance()

        # last write wins
        entries[key] = self.parse_value()
        self.lexer.skip_insignificant()
        if self.lexer.peek() == ";":
            self.lexer.advance()

    def _enter(self, offset: int) -> None:
        self.depth += 1
        if self.depth > self.config["max_depth"]:
            raise DepthExceeded(self.config["max_depth"], offset)


def parse(text: str, config: Optional[ParserConfig] = None) -> PlistDocument:
    return PlistParser(text, config=config).parse_document()


__all__ = ["PlistParser", "ParserConfig", "DEFAULT_CONFIG", "disambiguate_scalar", "parse"]
