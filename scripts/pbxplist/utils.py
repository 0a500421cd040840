import re
from decimal import Decimal
from typing import Mapping, TypeVar, TypedDict

U = TypeVar("U", bound=TypedDict("U", {}))

# Characters the lexer accepts inside an unquoted string. The formatter's quoting rule
# must stay a subset of this set or round-tripping breaks.
BAREWORD_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_.$/-")
BARE_STRING_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.$/-]*$")
NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
DIGITS = frozenset("0123456789")

DEFAULT_MAX_DEPTH = 128


def resolve_config(config: Mapping | None, default_config: U) -> U:
    """Overlay ``config`` on a copy of ``default_config``; unknown keys are ignored."""
    _config = default_config.copy()
    if config:
        for key in _config:
            if key in config:
                _config[key] = config[key]
    return _config


def is_bareword_char(char: str) -> bool:
    return char != "" and char in BAREWORD_CHARS


def format_number(value: float) -> str:
    """Render a number the way the grammar can read it back: no ``.0``, no exponent."""
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text
