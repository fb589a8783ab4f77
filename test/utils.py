"""
Utils module behavioral tests.

Scope
- Validate the Unset sentinel and coalesce().
- Validate dasherize() name derivation and mirror() read-only views.
- Validate module globbing with mglob().
- Validate IntrospectableType generated properties and representations.

Conventions
- Test method names follow CamelCase per project convention.
"""

import pickle
import unittest
from types import MappingProxyType
from unittest import TestCase

from plaincommands.utils import (
    IntrospectableType,
    Unset,
    UnsetType,
    coalesce,
    dasherize,
    mglob,
    mirror,
    rename,
)


class Sample(metaclass=IntrospectableType):
    __introspectable__ = ("items", "labels", "flags", "title")
    __displayable__ = ("title",)

    def __init__(self):
        self._items = ["a", ["b"]]
        self._labels = {"x": ["y"]}
        self._flags = {"on"}
        self._title = "sample"


class TestUnset(TestCase):
    """The Unset sentinel and coalesce()."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalseyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testNotSubclassable(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testCoalesceReplacesOnlyUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)
        self.assertIsNone(coalesce(Unset))


class TestNames(TestCase):
    """dasherize() and rename()."""

    def testCamelCase(self):
        self.assertEqual(dasherize("loadFromGitHub"), "load-from-git-hub")
        self.assertEqual(dasherize("createUser"), "create-user")

    def testSnakeCase(self):
        self.assertEqual(dasherize("load_from_git_hub"), "load-from-git-hub")

    def testSeparatorsCollapse(self):
        self.assertEqual(dasherize("_private__name_"), "private-name")
        self.assertEqual(dasherize("already-dashed"), "already-dashed")

    def testCapitalizedClassName(self):
        self.assertEqual(dasherize("CommandDescriptor"), "command-descriptor")

    def testDasherizeRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            dasherize(42)

    def testRenameForms(self):
        function = rename(lambda: None, "named")
        self.assertEqual(function.__name__, "named")

        @rename("decorated")
        def other():
            pass

        self.assertEqual(other.__qualname__, "decorated")

        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):
    """mirror() and IntrospectableType properties."""

    def testContainersAreFrozen(self):
        sample = Sample()
        self.assertEqual(sample.items, ("a", ("b",)))
        self.assertIsInstance(sample.labels, MappingProxyType)
        self.assertEqual(sample.labels["x"], ("y",))
        self.assertEqual(sample.flags, frozenset({"on"}))

    def testPropertiesAreReadOnly(self):
        with self.assertRaises(AttributeError):
            Sample().title = "other"

    def testTypenameIsDasherized(self):
        self.assertEqual(Sample.__typename__, "sample")

    def testReprUsesDisplayableFields(self):
        self.assertEqual(repr(Sample()), "sample(title='sample')")
        self.assertEqual(list(Sample().__rich_repr__()), [("title", "sample")])

    def testMirrorRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestModuleGlob(TestCase):
    """mglob() expansion."""

    def testConcreteNameIsReturnedUnchanged(self):
        self.assertEqual(mglob("plaincommands.utils"), ["plaincommands.utils"])

    def testDirectChildren(self):
        modules = mglob("plaincommands.*")
        self.assertIn("plaincommands.utils", modules)
        self.assertIn("plaincommands.application", modules)
        self.assertEqual(modules, sorted(modules))

    def testSingleCharacterWildcard(self):
        self.assertEqual(mglob("plaincommands.s?ts"), ["plaincommands.sets"])

    def testUnimportablePrefixGivesNothing(self):
        self.assertEqual(mglob("surely_not_a_real_package.*"), [])

    def testWildcardOnlyPrefixIsRejected(self):
        with self.assertRaises(ValueError):
            mglob("*.cli")
        with self.assertRaises(ValueError):
            mglob("   ")


if __name__ == "__main__":
    unittest.main()
