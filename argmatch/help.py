"""
Argmatch help listing.

Layout, per descriptor in registration order
- Every form becomes a "form text": the form, plus " " and the value label for value
  descriptors, right-padded with spaces to the column width (18 by default). A form
  text longer than the column is kept whole, never truncated.
- Stacked layout, when any form text is longer than the column: each form text on its
  own line, then each help line on its own line behind a blank column.
- Compact layout otherwise: form texts and help lines are paired line by line. Extra
  help lines go behind a blank column; extra form texts stand alone.
- One empty line closes every descriptor's block.

Help text is never re-wrapped; callers break long help with "\n" themselves. Trailing
empty lines of a help text are dropped: an empty help text counts as one empty line,
a help text made only of line breaks has no lines at all.

    -v                Log things verbosely. Optional.
    --verbose

    -i <path>         This is a help text that is way
    --input <path>    to long. So we stretch it out to multiple
                      lines. Hopefully this is readable.

Functions
- render(registry): the listing as plain text.
- styled(registry): the same listing as rich Text, forms and labels highlighted.
- show(registry): write the listing to a console (stdout by default).
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .descriptors import Value

COLUMN = 18


def _lines(help):
    if not help:
        return [""]
    lines = help.split("\n")
    while lines and not lines[-1]:
        lines.pop()
    return lines


def _layout(registry, column):
    """
    Yield the listing line by line, each line a list of (fragment, style) pairs.

    Style keys are "flag-name", "value-name", "label", "help" or "" (padding).
    """
    if not isinstance(column, int) or column < 0:
        raise ValueError("column must be a non-negative integer")

    blank = (" " * column, "")

    for descriptor in registry:
        parametric = isinstance(descriptor, Value)
        style = "value-name" if parametric else "flag-name"

        texts = []
        stacked = False
        for form in descriptor.forms:
            text = [(form, style)]
            length = len(form)
            if parametric:
                text += [(" ", ""), (descriptor.label, "label")]
                length += 1 + len(descriptor.label)
            if length > column:
                stacked = True
            else:
                text.append((" " * (column - length), ""))
            texts.append(text)

        lines = _lines(descriptor.help)

        if stacked:
            yield from texts
            for line in lines:
                yield [blank, (line, "help")]
        else:
            for index in range(max(len(texts), len(lines))):
                fragments = []
                if index < len(texts):
                    fragments += texts[index]
                else:
                    fragments.append(blank)
                if index < len(lines):
                    fragments.append((lines[index], "help"))
                yield fragments

        yield []


def render(registry, /, *, column=COLUMN):
    """
    Return the help listing of `registry` as plain text.

    Pure and idempotent: the registry is only read, and the same registry content always
    yields the same text.
    """
    return "".join(
        "".join(fragment for fragment, _ in fragments) + "\n"
        for fragments in _layout(registry, column)
    )


def styled(registry, /, *, column=COLUMN, colorful=True):
    """
    Return the help listing as rich Text.

    The plain text of the result equals render(registry, column=column). With colorful
    set, forms, labels and help lines carry styles from the palette below; a mapping
    named __styles__ in __main__ overrides any entry.
    """
    styles = defaultdict(str, {
        "flag-name": "bold #22C55E",  # GREEN for flags
        "value-name": "bold #00E6FF",  # CYAN for value-bearing arguments
        "label": "bold #FFD600",  # AMBER for value labels
        "help": "#9CA3AF",  # Muted gray
    } | getattr(__import__("__main__"), "__styles__", {}))

    listing = Text()
    for fragments in _layout(registry, column):
        for fragment, style in fragments:
            listing.append(fragment, styles[style] if colorful and style else None)
        listing.append("\n")
    return listing


def show(registry, /, *, file=None, colorful=False, column=COLUMN):
    """
    Write the help listing to `file` (stdout when None) through a rich Console.

    Lines are never wrapped and help text is never read as console markup.
    """
    console = Console(file=file, soft_wrap=True, highlight=False)
    if colorful:
        console.print(styled(registry, column=column), end="")
    else:
        console.out(render(registry, column=column), end="", highlight=False)


__all__ = (
    "COLUMN",
    "render",
    "styled",
    "show",
)
