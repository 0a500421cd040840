"""Reader and writer for ASCII property-list (.pbxproj) documents."""

from .nodes import (
    PlistArray,
    PlistDictionary,
    PlistNull,
    PlistNumber,
    PlistString,
    PlistValue,
    from_python,
    to_python,
)
from .errors import DepthExceeded, PlistError, PlistSyntaxError
from .lexer import PlistLexer
from .document import PlistDocument, normalize_document
from .parser import ParserConfig, PlistParser, parse
from .comments import (
    CustomComments,
    GenerateComments,
    PreserveComments,
    StripComments,
    label_for,
)
from .formatter import PlistFormatter, SerializeOptions, build, serialize, stringify

__all__ = [
    "PlistArray",
    "PlistDictionary",
    "PlistNull",
    "PlistNumber",
    "PlistString",
    "PlistValue",
    "from_python",
    "to_python",
    "DepthExceeded",
    "PlistError",
    "PlistSyntaxError",
    "PlistLexer",
    "PlistDocument",
    "normalize_document",
    "ParserConfig",
    "PlistParser",
    "parse",
    "CustomComments",
    "GenerateComments",
    "PreserveComments",
    "StripComments",
    "label_for",
    "PlistFormatter",
    "SerializeOptions",
    "build",
    "serialize",
    "stringify",
]
