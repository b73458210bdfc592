import sys

from rich.pretty import pprint

from flagpole import *

parser = Parser(
    [
        {"name": "input", "description": "Files to read.", "type": "string", "multi": True, "required": True},
        {"name": "threads", "description": "Worker threads.", "type": "int", "default": 4},
        {"name": "ratio", "description": "Sampling ratio.", "type": "float", "default": 1.0},
        {"name": "debug", "description": "Print the parsed options.", "short": "-d"},
    ],
    title="flagpole demo",
    description="Parses its own arguments and prints them.",
    prog="demo",
)


if __name__ == '__main__':
    try:
        options = parser.parse(sys.argv[1:])
    except ParseError as fault:
        report(fault)
        sys.exit(2)
    if options["help"]:
        parser.print_help()
        sys.exit(0)
    pprint(options)
