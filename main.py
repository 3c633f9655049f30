from rich.pretty import pprint

from argmatch import *

__prog__ = "main.py"

registry = Registry()

verbose = registry.add(Flag("-v", "--verbose", help="Log things verbosely. Optional.", optional=True))
source = registry.add(Value(
    "-i", "--input",
    parse=string,
    label="<path>",
    help="File to read. This help text is\nbroken over two lines on purpose.",
))
jobs = registry.add(Value("-j", "--jobs", parse=integer, label="<count>", help="Worker count.", optional=True))


if __name__ == '__main__':
    result = invoke(registry)
    pprint(result)
    pprint(registry)
