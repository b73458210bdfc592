"""
Tests for the internal helpers (Unset, coalesce, mirror).

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from unittest import TestCase

from flagpole.utils import *


class UnsetTest(TestCase):
    """Semantic guarantees of the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self):
        self.assertTrue(isinstance("x", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testFinal(self):
        with self.assertRaises(TypeError):
            type("Sub", (UnsetType,), {})


class CoalesceTest(TestCase):
    def testUnsetReplaced(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyPreserved(self):
        for value in (None, 0, "", False, []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class MirrorTest(TestCase):
    class Holder:
        items = mirror("items")

        def __init__(self):
            self._items = {"a": [1, 2], "b": {3}}

    def testReadOnlyCopy(self):
        holder = self.Holder()
        holder.items["a"].append(3)
        holder.items["b"].add(4)
        self.assertEqual(holder.items, {"a": [1, 2], "b": {3}})
        with self.assertRaises(AttributeError):
            holder.items = {}

    def testGetterCarriesPublicName(self):
        getter = self.Holder.items.fget
        self.assertEqual((getter.__name__, getter.__qualname__), ("items", "items"))

    def testNameMustBeAString(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == '__main__':
    unittest.main()
