r"""
Argmatch argument descriptors and decorators.

Overview
- Descriptors
  • Flag: presence-only argument with one or more forms, e.g. -v/--verbose.
  • Value[_T]: value-bearing argument; the token following one of its forms is
    converted by its `parse` function, e.g. -i/--input <path>.
  Both share the same fields (forms, help, optional). Value additionally carries the
  value label shown in help and the parse function. They are two distinct sealed
  variants, not a class hierarchy, so one can never be mistaken for the other.

- Decorators
  • @flag(...): build a Flag and bind the decorated function as its match callback.
  • @value(...): build a Value and bind the decorated function as its match callback.
  Calling a descriptor forwards to its callback (Flag with no arguments, Value with
  the typed value) and is a no-op when no callback is bound.

- Introspection & representation
  • DescriptorType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Identity
- Descriptors compare and hash by identity. Two descriptors with the same forms and
  help are still two different arguments; parse results are queried with the very
  object that was registered.

Validation (raises ConfigurationError)
- at least one form; every form a non-empty string without whitespace; no form
  repeated within the descriptor.
- help must be a string; label must be given (may be empty) and be a string.
- parse must be given and be callable.

Quick example:
    >>> from argmatch import Flag, Value, integer
    >>> verbose = Flag("-v", "--verbose", help="Log verbosely.", optional=True)
    >>> jobs = Value("-j", "--jobs", parse=integer, label="<count>", help="Worker count.")
    ...
    >>> @flag("-w", "--watch", help="Watch for changes.", optional=True)
    >>> def on_watch(): ...

Public API
- Classes: Flag, Value
- Decorators: flag, value
"""
import functools
import operator
import re

from .faults import ConfigurationError
from .utils import *


class DescriptorType(type):
    """
    Metaclass shared by the descriptor variants.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property mirroring
      the private "_{name}" field.
    - Provide __repr__/__rich_repr__ for diagnostics.
    - Seal the variants against subclassing: new value kinds are added through parse
      functions, not through new classes.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens) and
      used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag(forms=('-v', '--verbose'), help='Log verbosely.', optional=True)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the fields shared by Flag and Value.

    - forms: at least one; each a non-empty string without whitespace, no duplicates.
      Kept as a tuple in declaration order (the first form is the primary one used in
      messages).
    - help: a string; may be empty and may contain line breaks.
    - optional: coerced to bool.
    - callback: Unset or a callable, run by ParseResult.dispatch() once per match.

    The dict is mutated in place.
    """
    forms = []
    if not metadata["forms"]:
        raise ConfigurationError(f"{cls.__typename__} must have at least one form")

    for form in metadata["forms"]:
        if not isinstance(form, str):
            raise ConfigurationError(f"{cls.__typename__} forms must be strings, got {form!r}", form=form)
        elif not form:
            raise ConfigurationError(f"{cls.__typename__} forms cannot be empty-strings", form=form)
        elif re.search(r"\s", form):
            raise ConfigurationError(f"{cls.__typename__} form {form!r} cannot contain whitespace", form=form)
        elif form in forms:
            raise ConfigurationError(f"{cls.__typename__} forms cannot contain duplicates, got {form!r} twice", form=form)
        forms.append(form)
    metadata["forms"] = tuple(forms)

    if not isinstance(metadata["help"], str):
        raise ConfigurationError(f"{cls.__typename__} 'help' must be a string")

    metadata["optional"] = bool(metadata["optional"])

    if metadata["callback"] is not Unset and not callable(metadata["callback"]):
        raise ConfigurationError(f"{cls.__typename__} 'callback' must be callable")


def _sanitize_parametric_metadata(cls, metadata, /):
    """
    Internal: validate the fields only Value carries.

    - label: required (Unset is rejected), must be a string, may be empty.
    - parse: required, must be callable. Its contract (string in, typed value out or
      ValueParseError) is trusted, not checked.
    """
    if metadata["label"] is Unset:
        raise ConfigurationError(f"{cls.__typename__} requires a 'label' (use \"\" for none)")
    elif not isinstance(metadata["label"], str):
        raise ConfigurationError(f"{cls.__typename__} 'label' must be a string")

    if metadata["parse"] is Unset:
        raise ConfigurationError(f"{cls.__typename__} requires a 'parse' function")
    elif not callable(metadata["parse"]):
        raise ConfigurationError(f"{cls.__typename__} 'parse' must be callable")


class Flag(metaclass=DescriptorType):
    """
    Presence-only argument descriptor.

    A Flag matches a token equal to one of its forms and consumes only that token.
    It carries no value; a parse result only records that (and how often) it matched.

    Properties
    - forms: tuple[str, ...], in declaration order.
    - help: str, may contain line breaks (used verbatim by the help renderer).
    - optional: bool; a non-optional flag must be matched at least once.

    The optional callback is fixed at construction (see @flag) and called with no
    arguments when the descriptor itself is called.
    """

    __introspectable__ = (
        "forms",
        "help",
        "optional",
    )

    def __init__(self, *forms, help="", optional=False, callback=Unset):
        metadata = {
            "forms": forms,
            "help": help,
            "optional": optional,
            "callback": callback,
        }
        _sanitize_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def primary(self):
        return self._forms[0]

    def __call__(self):
        if self._callback is Unset:
            return
        return self._callback()


class Value[_T](metaclass=DescriptorType):
    """
    Value-bearing argument descriptor.

    A Value matches a token equal to one of its forms and consumes the following token
    as its value, converting it with `parse`.

    Properties
    - forms: tuple[str, ...], in declaration order.
    - label: str shown after each form in help, e.g. "<path>"; may be empty.
    - parse: Callable[[str], _T]; raises ValueParseError (or ValueError/TypeError) on
      text it does not accept.
    - help: str, may contain line breaks.
    - optional: bool; a non-optional value must be matched at least once.

    The optional callback is fixed at construction (see @value) and receives the
    typed value.
    """

    __introspectable__ = (
        "forms",
        "label",
        "parse",
        "help",
        "optional",
    )

    def __init__(self, *forms, parse=Unset, label=Unset, help="", optional=False, callback=Unset):
        metadata = {
            "forms": forms,
            "label": label,
            "parse": parse,
            "help": help,
            "optional": optional,
            "callback": callback,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_parametric_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def primary(self):
        return self._forms[0]

    def __call__(self, value, /):
        if self._callback is Unset:
            return
        return self._callback(value)


type Descriptor = Flag | Value
"""Any registrable argument descriptor."""


def flag(*forms, **options):
    """
    Decorator/factory for defining a flag with a match callback.

    Usage
        @flag("-v", "--verbose", help="Log verbosely.", optional=True)
        def on_verbose(): ...

    The declaration is validated right away. The decorator returns a new Flag built
    with the decorated function as its callback, ready to be registered. The callback
    runs once per match when the parse result is dispatched.
    """
    Flag(*forms, **options)
    bound = False

    @rename("flag")
    def wrapper(callback, /):
        nonlocal bound
        if not callable(callback):
            raise TypeError("@flag() must be applied to a callable")
        if bound:
            raise TypeError("@flag() must be applied only once")
        bound = True
        return Flag(*forms, callback=callback, **options)

    return wrapper


def value(*forms, **options):
    """
    Decorator/factory for defining a value-bearing argument with a match callback.

    Usage
        @value("-j", "--jobs", parse=integer, label="<count>", help="Worker count.")
        def on_jobs(jobs): ...

    The callback receives the typed value, once per match, when the parse result is
    dispatched.
    """
    Value(*forms, **options)
    bound = False

    @rename("value")
    def wrapper(callback, /):
        nonlocal bound
        if not callable(callback):
            raise TypeError("@value() must be applied to a callable")
        if bound:
            raise TypeError("@value() must be applied only once")
        bound = True
        return Value(*forms, callback=callback, **options)

    return wrapper


__all__ = (
    # Classes (descriptors)
    "Flag",
    "Value",

    # Type aliases
    "Descriptor",

    # Decorators
    "flag",
    "value",
)

# Not part of the public API.
del DescriptorType
