"""
Coercion module behavioral tests (typed values from raw captures).

Scope
- Validate per-kind coercion of raw captures.
- Validate integer text rules and type-mismatch faults.
- Validate that a capture set is coerced with the argument behind each capture.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest import TestCase

from flagparse import Argument, Kind
from flagparse.coercion import coerce, coerce_all
from flagparse.faults import TypeMismatchError, UnknownKindError, FaultCode
from flagparse.results import Value
from flagparse.tokens import Capture


class TestCoerce(TestCase):
    """Behavioral tests for coerce()."""

    def testBool(self):
        self.assertIs(coerce(Argument("v", "v", kind="bool"), True), True)

    def testInt(self):
        retry = Argument("retry", "r", kind="int")
        self.assertEqual(coerce(retry, ("42",)), 42)
        self.assertEqual(coerce(retry, ("+7",)), 7)
        self.assertEqual(coerce(retry, ("007",)), 7)

    def testIntRejectsNonDecimalText(self):
        retry = Argument("retry", "r", kind="int")
        for text in ("abc", "1.5", "0x10", "", " 3", "1_000", "３"):
            with self.subTest(text=text):
                with self.assertRaises(TypeMismatchError) as context:
                    coerce(retry, (text,))
                self.assertEqual(context.exception.code, FaultCode.TYPE_MISMATCH)
                self.assertEqual(context.exception.options["token"], text)

    def testIntMismatchMessage(self):
        with self.assertRaises(TypeMismatchError) as context:
            coerce(Argument("retry-count", "r", kind="int"), ("abc",))
        self.assertEqual(str(context.exception), "invalid value 'abc' for argument 'retry-count': expected an integer")

    def testStringIsVerbatim(self):
        self.assertEqual(coerce(Argument("c", "c"), ("  spaced  ",)), "  spaced  ")

    def testStringListKeepsOrderAndDuplicates(self):
        labels = Argument("labels", "L", kind="[]string")
        self.assertEqual(coerce(labels, ("b", "a", "b")), ["b", "a", "b"])

    def testUnknownKindFallback(self):
        # kinds are closed at build time, so only a foreign argument object gets here
        foreign = SimpleNamespace(name="ratio", kind="float")
        with self.assertRaises(UnknownKindError) as context:
            coerce(foreign, ("1.5",))
        fault = context.exception
        self.assertEqual(str(fault), "unknown data type 'float' for argument 'ratio'")
        self.assertEqual(fault.code, FaultCode.UNKNOWN_KIND)
        self.assertEqual(fault.options["argument"], "ratio")
        self.assertIsInstance(fault, TypeError)


class TestCoerceAll(TestCase):
    """Behavioral tests for coerce_all()."""

    def testValuesAreTaggedInCaptureOrder(self):
        verbose = Argument("verbose", "v", kind="bool")
        retry = Argument("retry", "r", kind="int")
        values = coerce_all({"retry": Capture(retry, ("3",)), "verbose": Capture(verbose, True)})
        self.assertEqual(values, {"retry": Value(Kind.INT, 3), "verbose": Value(Kind.BOOL, True)})
        self.assertEqual(list(values), ["retry", "verbose"])

    def testEmptyCaptures(self):
        self.assertEqual(coerce_all({}), {})

    def testCapturingArgumentDecidesKind(self):
        text = Argument("x", "x", kind="string")
        count = Argument("x", long="ex", kind="int")
        self.assertEqual(coerce_all({"x": Capture(text, ("12",))}), {"x": Value(Kind.STRING, "12")})
        self.assertEqual(coerce_all({"x": Capture(count, ("12",))}), {"x": Value(Kind.INT, 12)})

    def testListPayloadIsAList(self):
        labels = Argument("labels", "L", kind="[]string")
        value = coerce_all({"labels": Capture(labels, ("a", "b"))})["labels"]
        self.assertEqual(value, Value(Kind.STRINGLIST, ["a", "b"]))
        self.assertIsInstance(value.payload, list)


if __name__ == "__main__":
    unittest.main()
