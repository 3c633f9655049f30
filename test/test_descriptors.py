# python
"""
Descriptors module behavioral tests.

Scope
- Validate Flag and Value construction, normalization and read-only fields.
- Validate configuration errors (forms, label, parse, help).
- Validate identity semantics, sealing and representation.
- Validate the flag/value decorators and callback forwarding.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argmatch import Descriptor, Flag, Value, flag, value, integer, string
from argmatch.faults import ConfigurationError, FaultCode


class TestFlag(TestCase):
    """Behavioral tests for presence-only descriptors."""

    def testFormsKeepOrder(self):
        f = Flag("-v", "--verbose", help="Log verbosely.")
        self.assertEqual(f.forms, ("-v", "--verbose"))
        self.assertEqual(f.primary, "-v")

    def testDefaults(self):
        f = Flag("-v")
        self.assertEqual(f.help, "")
        self.assertFalse(f.optional)

    def testOptionalIsCoerced(self):
        self.assertIs(Flag("-v", optional=1).optional, True)

    def testRequiresAtLeastOneForm(self):
        with self.assertRaises(ConfigurationError) as context:
            Flag()
        self.assertEqual(context.exception.code, FaultCode.MALFORMED_DESCRIPTOR)

    def testRejectsEmptyForm(self):
        with self.assertRaises(ConfigurationError):
            Flag("")

    def testRejectsWhitespaceInForm(self):
        with self.assertRaises(ConfigurationError):
            Flag("-v ")

    def testRejectsNonStringForm(self):
        with self.assertRaises(ConfigurationError):
            Flag("-v", 3)

    def testRejectsDuplicateForms(self):
        with self.assertRaises(ConfigurationError):
            Flag("-v", "-v")

    def testRejectsNonStringHelp(self):
        with self.assertRaises(ConfigurationError):
            Flag("-v", help=None)

    def testFieldsAreReadOnly(self):
        f = Flag("-v")
        with self.assertRaises(AttributeError):
            f.forms = ("-w",)
        with self.assertRaises(AttributeError):
            f.optional = True

    def testIdentityNotContent(self):
        a = Flag("-v", help="same")
        b = Flag("-v", help="same")
        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b}), 2)

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Custom", (Flag,), {})

    def testRepr(self):
        self.assertEqual(
            repr(Flag("-v", "--verbose", help="Log.", optional=True)),
            "flag(forms=('-v', '--verbose'), help='Log.', optional=True)"
        )

    def testCallWithoutCallbackIsNoop(self):
        self.assertIsNone(Flag("-v")())


class TestValue(TestCase):
    """Behavioral tests for value-bearing descriptors."""

    def testFields(self):
        v = Value("-i", "--input", parse=string, label="<path>", help="Input.", optional=True)
        self.assertEqual(v.forms, ("-i", "--input"))
        self.assertEqual(v.label, "<path>")
        self.assertIs(v.parse, string)
        self.assertEqual(v.help, "Input.")
        self.assertTrue(v.optional)

    def testEmptyLabelAllowed(self):
        self.assertEqual(Value("-n", parse=integer, label="").label, "")

    def testLabelRequired(self):
        with self.assertRaises(ConfigurationError):
            Value("-n", parse=integer)

    def testLabelMustBeString(self):
        with self.assertRaises(ConfigurationError):
            Value("-n", parse=integer, label=5)

    def testParseRequired(self):
        with self.assertRaises(ConfigurationError):
            Value("-n", label="<n>")

    def testParseMustBeCallable(self):
        with self.assertRaises(ConfigurationError):
            Value("-n", parse="int", label="<n>")

    def testRequiresAtLeastOneForm(self):
        with self.assertRaises(ConfigurationError):
            Value(parse=integer, label="<n>")

    def testAcceptsPlainConverters(self):
        self.assertIs(Value("-n", parse=int, label="<n>").parse, int)

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Custom", (Value,), {})

    def testCallWithoutCallbackIsNoop(self):
        self.assertIsNone(Value("-n", parse=integer, label="<n>")(3))


class TestDecorators(TestCase):
    """Behavioral tests for the flag/value decorators."""

    def testFlagBindsCallback(self):
        called = []

        @flag("-w", "--watch", optional=True)
        def onWatch():
            called.append(True)

        self.assertIsInstance(onWatch, Flag)
        self.assertEqual(onWatch.forms, ("-w", "--watch"))
        onWatch()
        self.assertEqual(called, [True])

    def testValueBindsCallback(self):
        received = []

        @value("-j", "--jobs", parse=integer, label="<count>")
        def onJobs(jobs):
            received.append(jobs)

        self.assertIsInstance(onJobs, Value)
        onJobs(4)
        self.assertEqual(received, [4])

    def testDecoratorSingleAssignmentGuard(self):
        dec = flag("--once")

        @dec
        def first():
            pass

        with self.assertRaises(TypeError):
            @dec
            def second():
                pass

    def testDecoratorRequiresCallable(self):
        with self.assertRaises(TypeError):
            value("-n", parse=integer, label="<n>")(42)

    def testDecoratorValidatesEagerly(self):
        with self.assertRaises(ConfigurationError):
            value("-n", parse=integer)

    def testCallbackGivenToConstructor(self):
        received = []
        jobs = Value("-j", parse=integer, label="<n>", callback=received.append)
        jobs(2)
        self.assertEqual(received, [2])
        self.assertEqual(Flag("-q", callback=lambda: "quiet")(), "quiet")

    def testCallbackMustBeCallable(self):
        with self.assertRaises(ConfigurationError):
            Flag("-q", callback="not callable")
        with self.assertRaises(ConfigurationError):
            Value("-n", parse=integer, label="<n>", callback=42)

    def testCallbackStaysOutOfFields(self):
        @flag("-w")
        def onWatch():
            pass

        self.assertNotIn("callback", Flag.__introspectable__)
        self.assertEqual(repr(onWatch), "flag(forms=('-w',), help='', optional=False)")

    def testDescriptorAlias(self):
        self.assertEqual(Descriptor.__value__, Flag | Value)


if __name__ == "__main__":
    unittest.main()
