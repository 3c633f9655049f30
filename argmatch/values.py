"""
Built-in value kinds.

A value kind is any callable taking the raw value token (a string) and returning the
typed value, raising ValueParseError with a short diagnostic when the text is not
acceptable. Kinds are pure: they never look at other arguments.

Kinds
- boolean:  exactly "true" or "false" (case-sensitive).
- integer:  optional sign followed by ASCII digits, within the native index range
            (-sys.maxsize - 1 .. sys.maxsize).
- floating: decimal or exponential notation ("1", "-2.5", ".5", "3e-4").
- string:   the token unchanged, never fails.
- choice(*options): a kind accepting exactly one of the given strings.

The diagnostic is folded into the final message by the registry, e.g.
"Could not parse value for argument -a. Expected 'true' or 'false', got 'maybe'".
"""
import re
import sys

from .faults import ConfigurationError, ValueParseError
from .utils import rename

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOATING = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def boolean(text, /):
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueParseError("Expected 'true' or 'false'")


def integer(text, /):
    if not _INTEGER.fullmatch(text):
        raise ValueParseError("Expected an integer number")
    # longer digit runs cannot be in range, and int() refuses huge digit strings
    if len(text.lstrip("+-").lstrip("0")) <= len(str(sys.maxsize)):
        value = int(text)
        if -sys.maxsize - 1 <= value <= sys.maxsize:
            return value
    raise ValueParseError("Expected an integer number between %d and %d" % (-sys.maxsize - 1, sys.maxsize))


def floating(text, /):
    if not _FLOATING.fullmatch(text):
        raise ValueParseError("Expected a floating point number")
    return float(text)


def string(text, /):
    return text


def choice(*options):
    """
    Build a value kind accepting exactly one of `options`.

    >>> level = choice("debug", "info")
    >>> level("info")
    'info'
    """
    if not options:
        raise ConfigurationError("choice() requires at least one option")
    for option in options:
        if not isinstance(option, str):
            raise ConfigurationError("choice() options must be strings")
    if len(set(options)) != len(options):
        raise ConfigurationError("choice() options cannot contain duplicates")

    @rename("choice")
    def parse(text, /):
        if text not in options:
            raise ValueParseError("Expected one of %s" % ", ".join(map(repr, options)))
        return text

    parse.options = options
    return parse


__all__ = (
    "boolean",
    "integer",
    "floating",
    "string",
    "choice",
)
