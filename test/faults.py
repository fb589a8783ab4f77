"""
Faults module behavioral tests.

Scope
- Validate fault codes, default titles and payload accessors.
- Validate trigger(): raise/warn outside shell mode, render with rich inside it.
- Validate copy.replace() support (options merged, message kept).

Conventions
- Test method names follow CamelCase per project convention.
- Rendering is captured on an uncolored rich console writing to a StringIO.
"""

import copy
import io
import unittest
from unittest import TestCase

from rich.console import Console

from plaincommands.faults import (
    FaultCode,
    CommandException,
    NotACommandError,
    ParameterBindingError,
    DuplicateCommandError,
    UnknownCommandError,
    UsageError,
    CommandWarning,
    DeprecatedCommandWarning,
    trigger,
)


def capture():
    return Console(file=io.StringIO(), width=120, color_system=None)


class TestCodes(TestCase):
    """Stable numeric identifiers."""

    def testValues(self):
        self.assertEqual(FaultCode.UNKNOWN_COMMAND, 11101)
        self.assertEqual(FaultCode.USAGE, 11102)
        self.assertEqual(FaultCode.NOT_A_COMMAND, 11201)
        self.assertEqual(FaultCode.PARAMETER_BINDING, 11202)
        self.assertEqual(FaultCode.DUPLICATE_COMMAND, 11203)
        self.assertEqual(FaultCode.DEPRECATED_COMMAND, 12101)

    def testNormalizeDefaultsToTheNumber(self):
        self.assertEqual(FaultCode.USAGE.normalize(), "11102")

    def testEveryFaultCarriesItsCode(self):
        self.assertEqual(NotACommandError().code, FaultCode.NOT_A_COMMAND)
        self.assertEqual(ParameterBindingError().code, FaultCode.PARAMETER_BINDING)
        self.assertEqual(DuplicateCommandError().code, FaultCode.DUPLICATE_COMMAND)
        self.assertEqual(UnknownCommandError().code, FaultCode.UNKNOWN_COMMAND)
        self.assertEqual(UsageError().code, FaultCode.USAGE)

    def testHierarchy(self):
        self.assertTrue(issubclass(UsageError, CommandException))
        self.assertTrue(issubclass(DeprecatedCommandWarning, CommandWarning))
        self.assertTrue(issubclass(DeprecatedCommandWarning, Warning))


class TestPayload(TestCase):
    """Message and options."""

    def testMessageFallsBackToTitle(self):
        self.assertEqual(str(UsageError()), "invalid usage")
        self.assertEqual(str(UsageError("boom")), "boom")

    def testStatusDefaultsToTwo(self):
        self.assertEqual(UsageError().status, 2)
        self.assertEqual(UsageError(status=64).status, 64)

    def testParameterAccessor(self):
        self.assertEqual(ParameterBindingError("x", parameter="extra").parameter, "extra")

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            UsageError("boom").options["hint"] = "x"  # type: ignore[index]

    def testReplaceMergesOptions(self):
        fault = UsageError("boom", hint="first", status=3)
        replaced = copy.replace(fault, hint="second")
        self.assertIsNot(replaced, fault)
        self.assertEqual(replaced.message, "boom")
        self.assertEqual(replaced.options["hint"], "second")
        self.assertEqual(replaced.status, 3)


class TestTrigger(TestCase):
    """trigger() outside and inside shell mode."""

    def testErrorIsRaisedOutsideShell(self):
        with self.assertRaises(UsageError) as caught:
            trigger(UsageError("boom"), hint="try again")
        self.assertEqual(caught.exception.options["hint"], "try again")

    def testWarningIsWarnedOutsideShell(self):
        with self.assertWarns(DeprecatedCommandWarning):
            trigger(DeprecatedCommandWarning("old"))

    def testErrorIsRenderedInShell(self):
        console = capture()
        trigger(UsageError("boom", hint="try again"), shell=True, console=console, prog="tool")
        output = console.file.getvalue()
        self.assertIn("boom", output)
        self.assertIn("try again", output)
        self.assertIn("11102", output)
        self.assertIn("Invalid Usage", output)

    def testPlainLayoutWithoutPanel(self):
        console = capture()
        trigger(UnknownCommandError("no such command"), shell=True, fancy=False, console=console, prog="tool")
        lines = console.file.getvalue().splitlines()
        self.assertEqual(lines[0], "[ tool — 11101 | Unknown Command ]")
        self.assertEqual(lines[1], "no such command")

    def testWarningIsRenderedInShell(self):
        console = capture()
        trigger(DeprecatedCommandWarning("old"), shell=True, fancy=False, console=console, prog="tool")
        self.assertIn("12101 | Deprecated Command", console.file.getvalue())

    def testRejectsNonFaults(self):
        with self.assertRaises(TypeError):
            trigger(object())


if __name__ == "__main__":
    unittest.main()
