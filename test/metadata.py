"""
Command and option metadata tests (plaincommands.annotations).

Scope
- Validate Command/Option field sanitization and error types.
- Validate the @command decorator forms and metadata attachment.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from plaincommands import Command, Option, annotate, command, option, read_annotations


class TestCommand(TestCase):
    """Command metadata fields."""

    def testDefaults(self):
        metadata = Command()
        self.assertIsNone(metadata.value)
        self.assertEqual(metadata.shortcuts, ())
        self.assertFalse(metadata.hidden)
        self.assertFalse(metadata.deprecated)

    def testBlankValueMeansDerived(self):
        self.assertIsNone(Command("   ").value)
        self.assertIsNone(Command(None).value)

    def testValueIsStripped(self):
        self.assertEqual(Command("  make ").value, "make")

    def testValueRejectsWhitespaceAndNonStrings(self):
        with self.assertRaises(ValueError):
            Command("make it")
        with self.assertRaises(TypeError):
            Command(42)

    def testShortcutsKeepOrder(self):
        self.assertEqual(Command("x", ["b", "a"]).shortcuts, ("b", "a"))

    def testShortcutsValidation(self):
        with self.assertRaises(TypeError):
            Command("x", "cu")
        with self.assertRaises(TypeError):
            Command("x", [1])
        with self.assertRaises(ValueError):
            Command("x", ["cu", "cu"])
        with self.assertRaises(ValueError):
            Command("x", ["1x"])

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            Command().hidden = True

    def testRepr(self):
        self.assertEqual(
            repr(Command("x", ["y"], hidden=True)),
            "command(value='x', shortcuts=('y',), hidden=True, deprecated=False)",
        )


class TestOption(TestCase):
    """Option metadata fields."""

    def testDefaults(self):
        metadata = option()
        self.assertIsInstance(metadata, Option)
        self.assertIsNone(metadata.value)
        self.assertIsNone(metadata.descr)

    def testShortcutsAreSingleLetters(self):
        self.assertEqual(option(shortcuts=["v", "V"]).shortcuts, ("v", "V"))
        with self.assertRaises(ValueError):
            option(shortcuts=["vv"])
        with self.assertRaises(ValueError):
            option(shortcuts=["1"])

    def testDescription(self):
        self.assertEqual(option(descr=" talk more ").descr, "talk more")
        with self.assertRaises(ValueError):
            option(descr="  ")
        with self.assertRaises(TypeError):
            option(descr=3)


class TestDecorator(TestCase):
    """@command forms and metadata storage."""

    def testBareDecorator(self):
        @command
        def sync(self):
            pass

        metadata = read_annotations(sync)[Command]
        self.assertIsNone(metadata.value)

    def testCalledDecorator(self):
        @command()
        def sync(self):
            pass

        self.assertIn(Command, read_annotations(sync))

    def testExplicitNameAndShortcuts(self):
        @command("grab", shortcuts=["g"], hidden=True, deprecated=True)
        def fetch(self):
            pass

        metadata = read_annotations(fetch)[Command]
        self.assertEqual(metadata.value, "grab")
        self.assertEqual(metadata.shortcuts, ("g",))
        self.assertTrue(metadata.hidden)
        self.assertTrue(metadata.deprecated)

    def testNoneNameWithShortcuts(self):
        @command(None, ["cu"])
        def createUser(self):
            pass

        metadata = read_annotations(createUser)[Command]
        self.assertIsNone(metadata.value)
        self.assertEqual(metadata.shortcuts, ("cu",))

    def testDecoratorReturnsTheFunction(self):
        def sync(self):
            return "synced"

        self.assertIs(command(sync), sync)
        self.assertEqual(sync(None), "synced")

    def testDoubleAnnotationIsRejected(self):
        with self.assertRaises(TypeError):
            @command
            @command("other")
            def sync(self):
                pass

    def testDecoratorRejectsNonCallables(self):
        with self.assertRaises(TypeError):
            command("x")(42)
        with self.assertRaises(TypeError):
            annotate(42, Command())

    def testUndecoratedFunctionHasNoMetadata(self):
        def plain():
            pass

        self.assertEqual(read_annotations(plain), {})


if __name__ == "__main__":
    unittest.main()
