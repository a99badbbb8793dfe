"""
Tests for the Unset singleton and the small helpers of helmsman.utils.

This module verifies the guarantees the binder relies on:
- Singleton identity (single instance per interpreter process).
- Falsy semantics without equality to None/False (None is a bindable value).
- Copying, deep copying, pickling and thread safety preserve identity.
- Finality (type cannot be subclassed).
- coalesce/rename/mirror behavior.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from helmsman.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def setUp(self) -> None:
        self.unset: UnsetType = UnsetType()

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(self.unset, UnsetType())
        self.assertIs(Unset, self.unset)

    def testRepr(self) -> None:
        self.assertEqual(repr(self.unset), "Unset")

    def testFalsely(self) -> None:
        self.assertFalse(bool(self.unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(self.unset, None)
        self.assertNotEqual(self.unset, False)  # noqa: E712

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(self.unset), self.unset)
        self.assertIs(copy.deepcopy(self.unset), self.unset)
        self.assertIs(copy.deepcopy([self.unset])[0], self.unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(self.unset)), self.unset)

    def testThreadSafetySingleton(self) -> None:
        """
        Concurrent constructions return the same instance.
        """
        results: list[UnsetType] = []
        lock: Lock = Lock()

        def worker():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for instance in results:
            self.assertIs(instance, self.unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testUnionAnnotation(self) -> None:
        self.assertEqual(str | self.unset, str | UnsetType)


class HelpersTest(TestCase):
    """
    coalesce, rename and mirror.
    """

    def testCoalesceReplacesOnlyUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIs(coalesce(False, True), False)
        self.assertEqual(coalesce(0, 1), 0)

    def testRenameFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "doWork"), f)
        self.assertEqual(f.__name__, "doWork")
        self.assertEqual(f.__qualname__, "doWork")

    def testRenameDecoratorForm(self) -> None:
        @rename("doWork")
        def f():
            pass

        self.assertEqual(f.__name__, "doWork")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorIsReadOnlyAndFreezesSequences(self) -> None:
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = ["a", "b"]

        holder = Holder()
        self.assertEqual(holder.items, ("a", "b"))
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == '__main__':
    unittest.main()
