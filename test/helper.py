"""
Helper module behavioral tests (help layout, ordering, notes, styling switches).

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured from a rich Console writing into a StringIO.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from flagpole import Parser, HelpPrinter


def capture(parser, **options):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    parser.print_help(console, colorful=False, **options)
    return console.file.getvalue()


class TestHelpPrinter(TestCase):
    """Behavioral tests for the rendered help message."""

    def setUp(self):
        self.parser = Parser(
            [
                {"name": "output", "description": "Target file.", "type": "string", "required": True},
                {"name": "count", "description": "Repetitions.", "type": "int", "multi": True},
                {"name": "name", "description": "Display name.", "type": "string"},
                {"name": "verbose", "description": "Talk more."},
            ],
            title="Tool 1.0",
            description="Does things.",
            copyright="(c) nobody",
            prog="tool",
        )

    def testSections(self):
        output = capture(self.parser)
        lines = output.splitlines()
        self.assertEqual(lines[0], "Tool 1.0")
        self.assertIn("About:", lines)
        self.assertIn("Does things.", lines)
        self.assertIn("(c) nobody", lines)
        self.assertIn("Options:", lines)

    def testLongestLongFormFirst(self):
        output = capture(self.parser)
        order = [line.split(",")[0] for line in output.splitlines() if line.startswith("--")]
        self.assertEqual(order, ["--verbose", "--output", "--count", "--help", "--name"])

    def testEntries(self):
        output = capture(self.parser)
        self.assertIn("--count, -c", output)
        self.assertIn("  Repetitions.", output)
        self.assertIn("  Default: 0", output)
        self.assertIn("  Note: This option accepts multiple values of type 'int'.", output)
        self.assertIn("  Note: This is a required option.", output)
        self.assertIn('  Default: ""', output)
        self.assertIn("  Default: false", output)
        self.assertIn("  Displays the help message.", output)

    def testRequiredHasNoDefault(self):
        lines = capture(self.parser).splitlines()
        start = lines.index("--output, -o")
        self.assertEqual(lines[start + 1], "  Target file.")
        self.assertEqual(lines[start + 2], "  Note: This is a required option.")

    def testWithoutMetadata(self):
        output = capture(Parser())
        self.assertTrue(output.startswith("Options:"))
        self.assertNotIn("About:", output)

    def testFancyPanelUsesProg(self):
        output = capture(self.parser, fancy=True)
        self.assertIn("tool", output.splitlines()[0])
        self.assertIn("╭", output)

    def testRichProtocol(self):
        printer = HelpPrinter(self.parser, colorful=False)
        console = Console(file=io.StringIO(), width=120, color_system=None)
        console.print(printer)
        self.assertIn("--output, -o", console.file.getvalue())


if __name__ == '__main__':
    unittest.main()
