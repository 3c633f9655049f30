"""
Command-line entry point helper.

invoke() is the thin layer between a Registry and a running program: it reads the
process arguments, parses them, dispatches callbacks and, when parsing fails, shows
the fault and the help listing on stderr and exits with status 1. The registry itself
never prints and never exits.

    registry = Registry()
    verbose = registry.add(Flag("-v", "--verbose", help="Log verbosely.", optional=True))
    source = registry.add(Value("-i", "--input", parse=string, label="<path>", help="Input file."))

    if __name__ == "__main__":
        result = invoke(registry)
        ...
"""
import sys

from .faults import ArgumentError, trigger
from .help import show
from .registry import Registry
from .utils import Unset


def invoke(registry, tokens=Unset, /, *, shell=True, fancy=False, colorful=True, dispatch=True):
    """
    Parse `tokens` (sys.argv[1:] by default) against `registry`.

    Parameters
    - tokens: sequence of strings or a shell-like string; defaults to sys.argv[1:].
    - shell: when True a matching failure is printed (help listing, then the fault) to
      stderr and the process exits with status 1; when False the fault is raised.
    - fancy/colorful: presentation of the printed fault.
    - dispatch: run the matched descriptors' callbacks before returning.

    Returns
    - the ParseResult of a successful parse.
    """
    if not isinstance(registry, Registry):
        raise TypeError("invoke() first argument must be a registry")
    if tokens is Unset:
        tokens = sys.argv[1:]

    try:
        result = registry.parse(tokens)
    except ArgumentError as fault:
        if shell:
            show(registry, file=sys.stderr, colorful=colorful)
        trigger(fault, shell=shell, fancy=fancy, colorful=colorful)
        raise

    if dispatch:
        result.dispatch()
    return result


__all__ = (
    "invoke",
)
