"""
Argmatch registry: register descriptors, match tokens, query results.

What this module provides
- Registry: an insertion-ordered collection of Flag/Value descriptors.
  • add(descriptor): rejects any form already used by a registered descriptor
    (DuplicateFormError) and returns the descriptor so callers keep a typed handle.
  • parse(tokens): single-pass, greedy, left-to-right match of the tokens against the
    registered forms, returning a ParseResult or raising an ArgumentError.
  • help(): the aligned help listing (see argmatch.help.render).
- ParseResult: the read-only outcome of one parse call, queried with the descriptor
  objects themselves (identity, never content equality).
- Match: one (descriptor, value) entry of a ParseResult; value is None for flags.

Matching rules
- A token matches a descriptor only when it equals one of its forms exactly: no prefixes,
  no abbreviations, no case folding, no "--name=value" fusion.
- A Value consumes the next token as its value, whatever it looks like; when there is no
  next token the parse fails with MissingValueError.
- An unknown token fails the whole parse immediately (UnknownArgumentError).
- A descriptor may match several times; every occurrence is kept, in order.
- After the last token, every non-optional descriptor must have matched at least once,
  otherwise MissingRequiredArgumentsError lists their primary forms in registration order.
- Failures are atomic: nothing of a failed parse is returned.

Concurrency
- add() must not race with anything. Once registration is complete, parse() and
  help() only read the registry and can run from several threads.
"""
import shlex
from collections.abc import Iterable
from typing import NamedTuple

from .descriptors import Descriptor, Flag, Value
from .faults import *
from .help import render


class Match(NamedTuple):
    descriptor: Descriptor
    value: object = None


class ParseResult:
    """
    Matches recorded by one Registry.parse call, in token order.

    Queries
    - has(descriptor) / descriptor in result: whether it matched at least once.
    - count(descriptor): how many times it matched.
    - value(descriptor, which="last"): the typed value of a Value descriptor.
      which="first" returns the first match, which="all" a tuple of every value.
    - matches: every Match entry; iteration and len() walk the same entries.
    - dispatch(): run the bound callbacks of every match, in order.
    """

    def __init__(self, matches, /):
        self._matches = tuple(matches)

    @property
    def matches(self):
        return self._matches

    def __iter__(self):
        return iter(self._matches)

    def __len__(self):
        return len(self._matches)

    def __contains__(self, descriptor):
        return self.has(descriptor)

    def __repr__(self):
        return "parse-result(%s)" % ", ".join(
            "%s=%r" % (match.descriptor.primary, match.value) if isinstance(match.descriptor, Value)
            else match.descriptor.primary
            for match in self._matches
        )

    def has(self, descriptor, /):
        return any(match.descriptor is descriptor for match in self._matches)

    def count(self, descriptor, /):
        return sum(match.descriptor is descriptor for match in self._matches)

    def value(self, descriptor, /, which="last"):
        if not isinstance(descriptor, Value):
            raise TypeError("value() argument must be a value descriptor, got %r" % type(descriptor).__name__)
        if which not in ("first", "last", "all"):
            raise ValueError("value() 'which' must be one of 'first', 'last' or 'all'")

        values = tuple(match.value for match in self._matches if match.descriptor is descriptor)
        if not values:
            raise UnmatchedArgumentError(
                "The argument %s was not matched." % descriptor.primary,
                form=descriptor.primary,
                hint="check has() before asking for the value of an optional argument",
            )

        match which:
            case "first":
                return values[0]
            case "last":
                return values[-1]
            case "all":
                return values

    def dispatch(self):
        """
        Invoke each matched descriptor's callback, in match order.

        Flags are called without arguments, values with their typed value. Descriptors
        without a bound callback are skipped silently. Exceptions from callbacks propagate.
        """
        for match in self._matches:
            if isinstance(match.descriptor, Value):
                match.descriptor(match.value)
            else:
                match.descriptor()


class Registry:
    """
    Insertion-ordered collection of argument descriptors.

    Registration order drives help rendering; matching is driven by token order.
    Descriptors are never removed.
    """

    def __init__(self):
        self._descriptors = []

    @property
    def descriptors(self):
        return tuple(self._descriptors)

    def __iter__(self):
        return iter(tuple(self._descriptors))

    def __len__(self):
        return len(self._descriptors)

    def __contains__(self, descriptor):
        return any(other is descriptor for other in self._descriptors)

    def __repr__(self):
        return "registry(%s)" % ", ".join(descriptor.primary for descriptor in self._descriptors)

    def add(self, descriptor, /):
        """
        Register a descriptor and return it.

        Raises
        - TypeError: when descriptor is neither a Flag nor a Value.
        - DuplicateFormError: when any of its forms is already used by a registered
          descriptor (including the very same object registered twice). The registry is
          left unchanged.
        """
        if not isinstance(descriptor, Flag | Value):
            raise TypeError("add() argument must be a flag or a value descriptor, got %r" % type(descriptor).__name__)

        for other in self._descriptors:
            for form in other.forms:
                if form in descriptor.forms:
                    raise DuplicateFormError(
                        "An argument with form %s has already been added." % form,
                        form=form,
                        hint="give every argument its own forms",
                    )

        self._descriptors.append(descriptor)
        return descriptor

    def _lookup(self, token):
        for descriptor in self._descriptors:
            if token in descriptor.forms:
                return descriptor
        return None

    def parse(self, tokens, /):
        """
        Match tokens against the registered descriptors.

        tokens is a sequence of strings (typically sys.argv[1:]) or a single shell-like
        string, which is split with shlex.split first.

        Returns a ParseResult; raises UnknownArgumentError, MissingValueError,
        ValueParseError or MissingRequiredArgumentsError.
        """
        if isinstance(tokens, str):
            tokens = shlex.split(tokens)
        if not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        tokens = list(tokens)
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("parse() tokens must be strings, got %r" % type(token).__name__)

        # dict keeps registration order for the final message
        pending = dict.fromkeys(descriptor for descriptor in self._descriptors if not descriptor.optional)
        matches = []

        index = 0
        while index < len(tokens):
            token = tokens[index]
            index += 1

            descriptor = self._lookup(token)
            if descriptor is None:
                raise UnknownArgumentError(
                    "Unknown argument %s" % token,
                    token=token,
                    index=index,
                    hint="check the spelling; forms must match exactly",
                )

            if isinstance(descriptor, Value):
                if index >= len(tokens):
                    raise MissingValueError(
                        "Expected value for argument %s, but no value was given." % token,
                        token=token,
                        form=token,
                        index=index,
                        hint="pass a value after it, for example: %s %s" % (token, descriptor.label or "<value>"),
                    )
                text = tokens[index]
                index += 1
                try:
                    value = descriptor.parse(text)
                except (ValueParseError, ValueError, TypeError) as exception:
                    diagnostic = str(exception).rstrip(".")
                    raise ValueParseError(
                        "Could not parse value for argument %s. %s, got '%s'" % (
                            descriptor.primary,
                            diagnostic[:1].upper() + diagnostic[1:] if diagnostic else "Unexpected value",
                            text,
                        ),
                        token=token,
                        form=descriptor.primary,
                        text=text,
                        index=index,
                        hint="check the value given to %s" % token,
                    ) from exception
                matches.append(Match(descriptor, value))
            else:
                matches.append(Match(descriptor))

            pending.pop(descriptor, None)

        if pending:
            forms = tuple(descriptor.primary for descriptor in pending)
            raise MissingRequiredArgumentsError(
                "Expected the following non-optional arguments: %s." % ", ".join(forms),
                forms=forms,
                hint="pass every non-optional argument",
            )

        return ParseResult(matches)

    def help(self, /, **options):
        """Return the aligned help listing; options are forwarded to argmatch.help.render."""
        return render(self, **options)


__all__ = (
    "Match",
    "ParseResult",
    "Registry",
)
