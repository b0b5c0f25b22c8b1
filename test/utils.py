"""
Tests for the internal utilities.

This module verifies semantic guarantees of:
- the Unset sentinel (singleton identity, falsiness, finality, unions),
- rename() in both function and decorator forms,
- mirror() read-only properties.
"""
import copy
import unittest
from unittest import TestCase

from argser.utils import *


class TestUnset(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(Unset, UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testNotEqualToNoneOrFalse(self) -> None:
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testCopyPreservesSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testUnionWithTypes(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | None | Unset)
        self.assertNotIsInstance(1, str | Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})


class TestRename(TestCase):

    def testFunctionForm(self):
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testDecoratorForm(self):
        @rename("identity")
        def f(value):
            return value

        self.assertEqual(f.__name__, "identity")
        self.assertEqual(f(1), 1)

    def testRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(lambda: None, 1)
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):

    def testReadOnlyMirror(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = (1, 2)

        holder = Holder()
        self.assertIs(holder.items, holder._items)
        self.assertEqual(type(holder).items.fget.__name__, "items")
        with self.assertRaises(AttributeError):
            holder.items = ()

    def testRejectsNonStringName(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
