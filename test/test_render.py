"""
Render module behavioral tests (help and version layouts).

Scope
- Validate the plain help layout: metadata, sorted usage lines, commands.
- Validate the version line variants.
- Validate printing through a console and style suppression.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from rich.console import Console

from flagparse import Schema, Kind, helptext, versiontext, helprender, printhelp, printversion


def quiet():
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestHelp(TestCase):
    """Behavioral tests for the help layout."""

    def testFullLayout(self):
        schema = Schema(
            "demo",
            author="Jane Doe",
            version="1.0.0",
            description="A simple demonstration",
            console=quiet(),
        )
        schema.argument("verbose", "v", "verbose", "Enable verbose output", Kind.BOOL)
        schema.argument("config", "c", "config", "Path to config file")
        schema.argument("retry-count", long="retry", kind=Kind.INT)
        schema.argument("labels", "L", descr="Labels", kind=Kind.STRINGLIST)
        schema.command("build", "Build the project")
        schema.command("clean")

        self.assertEqual(helptext(schema), "\n".join([
            "demo",
            "Author: Jane Doe",
            "Version: 1.0.0",
            "A simple demonstration",
            "Usage:",
            "    -c, --config: Path to config file",
            "    -L: Labels",
            "    --retry:",
            "    -v, --verbose: Enable verbose output",
            "",
            "Commands:",
            "    build: Build the project",
            "    clean:",
        ]))

    def testMinimalLayout(self):
        schema = Schema(console=quiet())
        schema.argument("force", "f", kind=Kind.BOOL)
        self.assertEqual(helptext(schema), "Usage:\n    -f:")

    def testSubcommandArgumentsAreNotListed(self):
        schema = Schema(console=quiet())
        schema.command("build").argument("input", "i", "input", "Input file")
        self.assertNotIn("--input", helptext(schema))

    def testPrintHelpUsesSchemaConsole(self):
        schema = Schema("demo", console=quiet())
        printhelp(schema)
        self.assertEqual(schema.console.file.getvalue(), "demo\nUsage:\n")

    def testPrintHelpToGivenConsole(self):
        schema = Schema("demo", console=quiet())
        console = quiet()
        printhelp(schema, console)
        self.assertEqual(schema.console.file.getvalue(), "")
        self.assertIn("Usage:", console.file.getvalue())

    def testStylesFollowColorful(self):
        plain = helprender(Schema("demo", colorful=False, console=quiet()))
        styled = helprender(Schema("demo", console=quiet()))
        self.assertFalse(any(span.style for span in plain.spans))
        self.assertTrue(any(span.style for span in styled.spans))


class TestVersion(TestCase):
    """Behavioral tests for the version line."""

    def testNameAndVersion(self):
        self.assertEqual(versiontext(Schema("demo", version="1.0.0", console=quiet())), "demo Version: 1.0.0")

    def testVersionWithoutName(self):
        self.assertEqual(versiontext(Schema(version="2.1", console=quiet())), "Version: 2.1")

    def testNoVersion(self):
        self.assertEqual(
            versiontext(Schema("demo", console=quiet())),
            "No version information provided by program.",
        )

    def testPrintVersion(self):
        schema = Schema("demo", version="1.0.0", console=quiet())
        printversion(schema)
        self.assertEqual(schema.console.file.getvalue(), "demo Version: 1.0.0\n")


if __name__ == "__main__":
    unittest.main()
