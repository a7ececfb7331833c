"""
Arguments module behavioral tests.

Scope
- Validate the argument kinds (Flag, Value): extraction from the token cursor
  and handler forwarding.
- Validate decorator/factory helpers (flag/value): single assignment.
- Validate metadata constraints (callback, descr, metavar) and extensibility
  through subclassing.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from collections import deque
from unittest import TestCase

from argdispatch import Argument, Flag, Value, flag, value


class TestFlag(TestCase):
    """Behavioral tests for Flag (presence-only) arguments."""

    def testExtractYieldsTrueWithoutConsuming(self):
        tokens = deque(["next"])
        self.assertIs(Flag().extract(tokens), True)
        self.assertEqual(list(tokens), ["next"])

    def testHandleForwardsToCallback(self):
        received = []
        Flag(received.append).handle(True)
        self.assertEqual(received, [True])

    def testHandleWithoutCallbackIsNoop(self):
        self.assertIsNone(Flag().handle(True))

    def testDescrDefaultsToNone(self):
        self.assertIsNone(Flag().descr)

    def testDescrIsTrimmed(self):
        self.assertEqual(Flag(descr="  verbose output ").descr, "verbose output")

    def testDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            Flag(descr="  ")

    def testDescrExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            Flag(descr=None)

    def testCallbackMustBeCallable(self):
        with self.assertRaises(TypeError):
            Flag("not callable")

    def testReprUsesTypename(self):
        self.assertTrue(repr(Flag(descr="x")).startswith("flag("))

    def testSubclassOverridesHandle(self):
        received = []

        class Verbose(Flag):
            def handle(self, value, /):
                received.append(("verbose", value))

        Verbose().handle(True)
        self.assertEqual(received, [("verbose", True)])


class TestValue(TestCase):
    """Behavioral tests for Value (string-valued) arguments."""

    def testExtractConsumesExactlyOneToken(self):
        tokens = deque(["hello", "world"])
        self.assertEqual(Value().extract(tokens), "hello")
        self.assertEqual(list(tokens), ["world"])

    def testExtractOnExhaustedCursorYieldsNone(self):
        self.assertIsNone(Value().extract(deque()))

    def testHandleForwardsValue(self):
        received = []
        Value(received.append).handle("hello")
        self.assertEqual(received, ["hello"])

    def testMetavarExposed(self):
        self.assertEqual(Value(metavar="TEXT").metavar, "TEXT")

    def testMetavarEmptyRejected(self):
        with self.assertRaises(ValueError):
            Value(metavar="")

    def testReprListsMetadata(self):
        text = repr(Value(metavar="TEXT"))
        self.assertTrue(text.startswith("value("))
        self.assertIn("metavar='TEXT'", text)


class TestArgument(TestCase):
    """Behavioral tests for the shared Argument capability."""

    def testAbstractBaseCannotBeInstantiated(self):
        with self.assertRaises(TypeError):
            Argument()

    def testCustomKind(self):
        class Pair(Argument):
            def extract(self, tokens, /):
                return tuple(tokens.popleft() for _ in range(min(2, len(tokens))))

        received = []
        pair = Pair(received.append)
        tokens = deque(["a", "b", "c"])
        pair.handle(pair.extract(tokens))
        self.assertEqual(received, [("a", "b")])
        self.assertEqual(list(tokens), ["c"])


class TestDecorators(TestCase):
    """Behavioral tests for the flag/value decorator factories."""

    def testFlagDecoratorReturnsFlag(self):
        @flag(descr="print more")
        def onVerbose(present):
            pass

        self.assertIsInstance(onVerbose, Flag)
        self.assertEqual(onVerbose.callback.__name__, "onVerbose")
        self.assertEqual(onVerbose.descr, "print more")

    def testValueDecoratorReturnsValue(self):
        received = []

        @value(metavar="TEXT")
        def onMessage(text):
            received.append(text)

        self.assertIsInstance(onMessage, Value)
        onMessage.handle("hi")
        self.assertEqual(received, ["hi"])

    def testDecoratorSingleAssignmentGuard(self):
        dec = value()

        @dec
        def first(text):
            pass

        with self.assertRaises(TypeError):
            @dec
            def second(text):
                pass

    def testDecoratorRequiresCallable(self):
        with self.assertRaises(TypeError):
            flag()("not callable")


if __name__ == "__main__":
    unittest.main()
