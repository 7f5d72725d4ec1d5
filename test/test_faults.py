"""
Faults module behavioral tests (codes, options, trigger, rendering).

Scope
- Validate fault codes, kinds, titles and read-only options.
- Validate __replace__ merging and trigger() raise/exit behavior.
- Validate rich rendering (plain and fancy) and host overrides via __main__.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase
from unittest.mock import patch

from rich.console import Console
from rich.panel import Panel

from flagparse import Schema
from flagparse.faults import (
    ParseError,
    UnknownArgumentError,
    UnknownSubcommandTokensError,
    MissingValueError,
    TypeMismatchError,
    UnknownKindError,
    MissingRequiredError,
    MutuallyExclusiveError,
    MissingOneOfError,
    FaultCode,
    trigger,
    getdoc,
)


def quiet():
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestFaultCodes(TestCase):
    """Behavioral tests for codes and kinds."""

    def testEveryFaultHasItsCode(self):
        cases = {
            UnknownArgumentError: FaultCode.UNKNOWN_ARGUMENT,
            UnknownSubcommandTokensError: FaultCode.UNKNOWN_SUBCOMMAND_TOKENS,
            MissingValueError: FaultCode.MISSING_VALUE,
            TypeMismatchError: FaultCode.TYPE_MISMATCH,
            UnknownKindError: FaultCode.UNKNOWN_KIND,
            MissingRequiredError: FaultCode.MISSING_REQUIRED,
            MutuallyExclusiveError: FaultCode.MUTUALLY_EXCLUSIVE,
            MissingOneOfError: FaultCode.MISSING_ONE_OF,
        }
        for kind, code in cases.items():
            with self.subTest(kind=kind.__name__):
                fault = kind("boom")
                self.assertIsInstance(fault, ParseError)
                self.assertEqual(fault.code, code)

    def testCodesAreDistinct(self):
        self.assertEqual(len({int(code) for code in FaultCode}), len(FaultCode))

    def testKindName(self):
        self.assertEqual(MissingValueError("x").kind, "MissingValue")
        self.assertEqual(UnknownSubcommandTokensError("x").kind, "UnknownSubcommandTokens")

    def testCodeOverride(self):
        fault = ParseError("x", code=FaultCode.UNKNOWN_KIND)
        self.assertEqual(fault.code, FaultCode.UNKNOWN_KIND)

    def testNormalize(self):
        self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "11111")

    def testNormalizeUsesHostCodes(self):
        main = __import__("__main__")
        with patch.object(main, "__codes__", {FaultCode.MISSING_VALUE: "E-VALUE"}, create=True):
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-VALUE")
            self.assertEqual(FaultCode.MISSING_ONE_OF.normalize(), "11133")


class TestParseError(TestCase):
    """Behavioral tests for the ParseError surface."""

    def testMessageAndOptions(self):
        fault = MissingValueError("no value", token="-c", index=1)
        self.assertEqual(str(fault), "no value")
        self.assertEqual(fault.options["token"], "-c")
        with self.assertRaises(TypeError):
            fault.options["token"] = "-x"

    def testEmptyMessage(self):
        self.assertEqual(str(ParseError()), "")

    def testReplaceMerges(self):
        fault = MissingValueError("no value", token="-c")
        replaced = fault.__replace__(shell=True, token="-x")
        self.assertIsInstance(replaced, MissingValueError)
        self.assertIsNot(replaced, fault)
        self.assertEqual(replaced.options["token"], "-x")
        self.assertTrue(replaced.options["shell"])
        self.assertEqual(fault.options["token"], "-c")
        self.assertEqual(str(replaced), "no value")

    def testUnknownKindIsTypeError(self):
        self.assertIsInstance(UnknownKindError("x"), TypeError)

    def testSubcommandTokensIsUnknownArgument(self):
        self.assertIsInstance(UnknownSubcommandTokensError("x"), UnknownArgumentError)


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesOutsideShell(self):
        with self.assertRaises(MissingRequiredError) as context:
            trigger(MissingRequiredError("missing"), shell=False, hint="pass --input <value>")
        self.assertEqual(context.exception.options["hint"], "pass --input <value>")

    def testPrintsAndExitsInShell(self):
        console = quiet()
        fault = MissingRequiredError("missing required argument 'input'", hint="pass --input <value>")
        with self.assertRaises(SystemExit) as context:
            trigger(fault, shell=True, console=console, schema=Schema("demo", console=quiet()))
        self.assertEqual(context.exception.code, 1)
        text = console.file.getvalue()
        self.assertIn("[ demo — 11131 | Missing Required Argument ]", text)
        self.assertIn("missing required argument 'input'", text)
        self.assertIn("→ pass --input <value>", text)

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("x"))


class TestRendering(TestCase):
    """Behavioral tests for __rich__ rendering."""

    def testFancyUsesPanel(self):
        self.assertIsInstance(ParseError("x", fancy=True).__rich__(), Panel)

    def testProgramFallback(self):
        console = quiet()
        console.print(MissingValueError("no value", colorful=False))
        self.assertIn("[ flagparse — 11111 | Missing Value ]", console.file.getvalue())

    def testHostProgramName(self):
        main = __import__("__main__")
        console = quiet()
        with patch.object(main, "__prog__", "tool", create=True):
            console.print(MissingValueError("no value"))
        self.assertIn("[ tool — 11111 | Missing Value ]", console.file.getvalue())

    def testTitleOverride(self):
        console = quiet()
        console.print(ParseError("x", title="custom title"))
        self.assertIn("| Custom Title ]", console.file.getvalue())


class TestGetDoc(TestCase):
    """Behavioral tests for getdoc()."""

    def testMissingDocIsNone(self):
        self.assertIsNone(getdoc(FaultCode.MISSING_VALUE))

    def testHostDocs(self):
        main = __import__("__main__")
        with patch.object(main, "__docs__", {FaultCode.MISSING_VALUE: "pass a value"}, create=True):
            self.assertEqual(getdoc(FaultCode.MISSING_VALUE), "pass a value")

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(11111)


if __name__ == "__main__":
    unittest.main()
