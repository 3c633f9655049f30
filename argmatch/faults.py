"""
Argmatch faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing failure.
  Codes are grouped by domain so logs and searches stay predictable.
- ArgumentsFault: base type carrying message + options that knows how to render itself
  through rich in a short, actionable way (header, one-sentence body, a single hint).
- The taxonomy:
  • definition time: ConfigurationError, DuplicateFormError
  • matching time:   ArgumentError and its kinds (unknown argument, missing value,
                     unparsable value, missing non-optional arguments)
  • query time:      UnmatchedArgumentError
- trigger(): central entry point to surface a fault (raise it, or print it and exit when
  running as a shell tool).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The registry raises faults directly; nothing here prints unless trigger() is asked to
  run in shell mode.
- Host applications may customize output through optional mappings on __main__:
  __prog__, __styles__, __codes__ and __docs__.
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - definition (210xx)
      • MALFORMED_DESCRIPTOR, DUPLICATE_FORM
    - matching (220xx)
      • UNKNOWN_ARGUMENT, MISSING_VALUE, UNPARSABLE_VALUE, MISSING_REQUIRED
    - querying (230xx)
      • UNMATCHED_ARGUMENT

    codes are normalized to a string via normalize() so hosts can remap them.
    """
    # --- definition errors (21xxx) ---
    MALFORMED_DESCRIPTOR        = 21001
    DUPLICATE_FORM              = 21002

    # --- matching errors (22xxx) ---
    UNKNOWN_ARGUMENT            = 22001
    MISSING_VALUE               = 22002
    UNPARSABLE_VALUE            = 22003
    MISSING_REQUIRED            = 22004

    # --- query errors (23xxx) ---
    UNMATCHED_ARGUMENT          = 23001

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to override
        numeric ids with friendlier labels; otherwise the numeric value is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentsFault(Exception):
    """
    Base class of every argmatch error.

    A fault carries a human-readable message plus a read-only bag of options describing
    it (code, title, hint and whatever context the raiser knows, e.g. token or form).
    str(fault) is the bare message.
    """
    __code__ = Unset
    __title__ = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", self.__code__)

    @property
    def title(self):
        return self.options.get("title", self.__title__)

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        return self.message if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "argmatch")
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"
        title = self.title if isinstance(self.title, str) else type(self).__name__

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " - ",
            text(code, "code"),
            " | ",
            text(title.title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")
        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self
        console.print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class ConfigurationError(ArgumentsFault):
    """A descriptor was malformed at construction time (a programmer error)."""
    __code__ = FaultCode.MALFORMED_DESCRIPTOR
    __title__ = "malformed argument definition"


class DuplicateFormError(ConfigurationError):
    """A registered descriptor already uses one of the new descriptor's forms."""
    __code__ = FaultCode.DUPLICATE_FORM
    __title__ = "duplicate argument form"


class ArgumentError(ArgumentsFault):
    """Base of every failure raised while matching tokens."""


class UnknownArgumentError(ArgumentError):
    __code__ = FaultCode.UNKNOWN_ARGUMENT
    __title__ = "unknown argument"


class MissingValueError(ArgumentError):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"


class ValueParseError(ArgumentError, ValueError):
    """
    A value token could not be converted.

    Value kinds raise it with a short diagnostic; the matcher re-raises it with the
    argument's form and the offending text folded into the message.
    """
    __code__ = FaultCode.UNPARSABLE_VALUE
    __title__ = "unparsable value"


class MissingRequiredArgumentsError(ArgumentError):
    __code__ = FaultCode.MISSING_REQUIRED
    __title__ = "missing non-optional arguments"


class UnmatchedArgumentError(ArgumentsFault, LookupError):
    """A parse result was queried for the value of an argument it never matched."""
    __code__ = FaultCode.UNMATCHED_ARGUMENT
    __title__ = "unmatched argument"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentsFault).
    - options are merged into the fault via copy.replace before triggering.
    - in shell mode the fault is printed to stderr and the process exits with status 1
      (unless deferred); otherwise the fault is raised.

    typical options
    - shell, fancy, colorful, deferred, hint, docs.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys are
    FaultCode instances and values are short documentation strings. returns None when
    no entry exists.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ArgumentsFault",
    "ConfigurationError",
    "DuplicateFormError",
    "ArgumentError",
    "UnknownArgumentError",
    "MissingValueError",
    "ValueParseError",
    "MissingRequiredArgumentsError",
    "UnmatchedArgumentError",
    "trigger",
    "getdoc",
)
