"""
Utils module tests (Unset sentinel, coalesce, alias specifications).

Scope
- Unset behaves as a falsey, printable, copy/pickle-stable singleton.
- coalesce only replaces Unset; other falsey values are preserved.
- aliases splits whitespace-separated specifications and rejects invalid ones.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from argstream.utils import UnsetType, Unset, coalesce, aliases


class UnsetTest(TestCase):
    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTrip(self) -> None:
        """
        Pickling resolves back to the module-level singleton.
        """
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testSubclassingIsRejected(self) -> None:
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testUnionWithType(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class CoalesceTest(TestCase):
    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testPreservesFalseyValues(self) -> None:
        for value in (None, 0, "", [], False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class AliasesTest(TestCase):
    def testSplitsOnWhitespace(self) -> None:
        self.assertEqual(aliases("verbose v"), ("verbose", "v"))
        self.assertEqual(aliases("  a\tb\n c "), ("a", "b", "c"))

    def testDropsDuplicatesInOrder(self) -> None:
        self.assertEqual(aliases("x y x"), ("x", "y"))

    def testEmptySpecificationRaises(self) -> None:
        for spec in ("", "   "):
            with self.subTest(spec=spec), self.assertRaises(ValueError):
                aliases(spec)

    def testNonStringRaises(self) -> None:
        with self.assertRaises(TypeError):
            aliases(["a", "b"])


if __name__ == "__main__":
    unittest.main()
