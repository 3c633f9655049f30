# python
"""
Faults module behavioral tests.

Scope
- Validate messages, options, codes and titles carried by faults.
- Validate copy.replace merging, trigger() raising/printing, getdoc().
- Validate rich rendering (plain and fancy).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import contextlib
import copy
import io
import unittest
from unittest import TestCase

from rich.console import Console

from argmatch.faults import (
    ArgumentsFault,
    ConfigurationError,
    DuplicateFormError,
    FaultCode,
    MissingValueError,
    UnknownArgumentError,
    ValueParseError,
    getdoc,
    trigger,
)


def _render(fault):
    console = Console(color_system=None, force_terminal=False, width=120)
    with console.capture() as capture:
        console.print(fault)
    return capture.get()


class TestFault(TestCase):

    def testMessageAndOptions(self):
        fault = UnknownArgumentError("Unknown argument -a", token="-a")
        self.assertEqual(str(fault), "Unknown argument -a")
        self.assertEqual(fault.message, "Unknown argument -a")
        self.assertEqual(fault.options["token"], "-a")
        with self.assertRaises(TypeError):
            fault.options["token"] = "-b"

    def testDefaultCodeAndTitle(self):
        fault = MissingValueError("missing")
        self.assertEqual(fault.code, FaultCode.MISSING_VALUE)
        self.assertEqual(fault.title, "missing value")

    def testOptionsOverrideCodeAndTitle(self):
        fault = UnknownArgumentError("x", title="custom", code=FaultCode.MISSING_VALUE)
        self.assertEqual(fault.title, "custom")
        self.assertEqual(fault.code, FaultCode.MISSING_VALUE)

    def testHierarchy(self):
        self.assertTrue(issubclass(DuplicateFormError, ConfigurationError))
        self.assertTrue(issubclass(ValueParseError, ValueError))
        self.assertTrue(issubclass(ConfigurationError, ArgumentsFault))

    def testReplaceMergesOptions(self):
        fault = UnknownArgumentError("Unknown argument -a", token="-a")
        replaced = copy.replace(fault, hint="try again")
        self.assertIsInstance(replaced, UnknownArgumentError)
        self.assertEqual(str(replaced), "Unknown argument -a")
        self.assertEqual(replaced.options["token"], "-a")
        self.assertEqual(replaced.hint, "try again")
        self.assertIsNone(fault.hint)

    def testNormalize(self):
        self.assertEqual(FaultCode.UNKNOWN_ARGUMENT.normalize(), "22001")


class TestTrigger(TestCase):

    def testRaisesOutsideShell(self):
        with self.assertRaises(UnknownArgumentError) as context:
            trigger(UnknownArgumentError("Unknown argument -a"), shell=False)
        self.assertEqual(str(context.exception), "Unknown argument -a")

    def testShellPrintsAndExits(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            trigger(UnknownArgumentError("Unknown argument -a"), shell=True)
        self.assertEqual(context.exception.code, 1)
        self.assertIn("Unknown argument -a", stderr.getvalue())

    def testShellDeferredDoesNotExit(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            trigger(UnknownArgumentError("Unknown argument -a"), shell=True, deferred=True)
        self.assertIn("Unknown argument -a", stderr.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestRendering(TestCase):

    def testPlainRendering(self):
        output = _render(UnknownArgumentError("Unknown argument -a", hint="check the spelling"))
        self.assertIn("22001", output)
        self.assertIn("Unknown Argument", output)
        self.assertIn("Unknown argument -a", output)
        self.assertIn("check the spelling", output)

    def testFancyRendering(self):
        output = _render(UnknownArgumentError("Unknown argument -a", fancy=True))
        self.assertIn("Unknown argument -a", output)
        self.assertIn("╭", output)


class TestGetdoc(TestCase):

    def testMissingDocs(self):
        self.assertIsNone(getdoc(FaultCode.DUPLICATE_FORM))

    def testRejectsNonCodes(self):
        with self.assertRaises(TypeError):
            getdoc(21002)


if __name__ == "__main__":
    unittest.main()
