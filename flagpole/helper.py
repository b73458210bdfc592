"""
Flagpole help rendering.

HelpPrinter turns a parser's declarations into rich renderables:

    <title>

    About:
    <description>
    <copyright>

    Options:
    --output, -o
      Target file.
      Note: This is a required option.

    --count, -c
      Repetitions.
      Default: 0
      Note: This option accepts multiple values of type 'int'.

Flags are listed by long form length, longest first; ties keep their
declaration order.

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- colorful=False drops every style; fancy=True wraps the output in a panel titled
  with the program name (__prog__ in __main__ wins over the parser's prog).
"""
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .coercion import FlagType

__all__ = (
    "HelpPrinter",
)


class HelpPrinter:
    def __init__(self, parser, /, *, colorful=True, fancy=False):
        self._parser = parser
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            "title": "bold #FF4D94",  # magenta-pink brand pop
            "section-label": "bold #FFFFFF",  # pure white headers
            "description": "italic #A3A3A3",  # neutral gray
            "copyright": "#737373",  # dim footer gray
            "long-name": "bold #00E6FF",  # cyan long forms
            "short-name": "bold #22C55E",  # green short forms
            "flag-description": "#9CA3AF",  # muted gray
            "default": "bold #FFD600",  # amber values
            "note": "#D1D5DB",
            "panel-title": "bold #FF4D94",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style):
            return Text(str(fragment), styles[style] if self._colorful else "")

        renders = []

        if self._parser.title is not None:
            renders.extend((text(self._parser.title, "title"), Text("")))

        if self._parser.description is not None or self._parser.copyright is not None:
            renders.append(text("About:", "section-label"))
            if self._parser.description is not None:
                renders.append(text(self._parser.description, "description"))
            if self._parser.copyright is not None:
                renders.append(text(self._parser.copyright, "copyright"))
            renders.append(Text(""))

        renders.append(text("Options:", "section-label"))
        for flag in sorted(self._parser.registry, key=lambda flag: -len(flag.long)):
            renders.append(Text.assemble(text(flag.long, "long-name"), ", ", text(flag.short, "short-name")))
            if flag.description:
                renders.append(Text.assemble("  ", text(flag.description, "flag-description")))
            if not flag.required:
                default = flag.type.format(flag.default)
                if flag.type is FlagType.STRING and not default:
                    default = '""'
                renders.append(Text.assemble("  ", text("Default: ", "note"), text(default, "default")))
            else:
                renders.append(Text.assemble("  ", text("Note: This is a required option.", "note")))
            if flag.multi:
                renders.append(Text.assemble(
                    "  ",
                    text("Note: This option accepts multiple values of type %r." % str(flag.type), "note")
                ))
            renders.append(Text(""))

        if self._fancy:
            prog = getattr(main, "__prog__", self._parser.prog)
            return Panel(Group(*renders), title=text(prog, "panel-title"), title_align="left")

        return Group(*renders)
