"""
Invoker behavioral tests (call forwarding and failure isolation).

Scope
- Validate that bound values reach the callback positionally, in order.
- Validate that callback failures become InvocationError values carrying the
  inner category and message, distinct from binding faults.
- Validate that interpreter-exit signals are not swallowed.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import (
    Binding,
    Command,
    Parameter,
    bind,
    invoke,
    CommandException,
    FaultCode,
    InvocationError,
)


class TestInvoke(TestCase):
    """invoke(command, binding)."""

    def setUp(self):
        self.received = []
        self.command = Command(
            lambda name, count: self.received.append((name, count)),
            (Parameter("name"), Parameter("count", int, default=1)),
            name="Record",
        )

    def testForwardsValuesInDeclarationOrder(self):
        binding = bind(self.command.parameters, ["x", "-count", "3"])
        self.assertIs(invoke(self.command, binding), True)
        self.assertEqual(self.received, [("x", 3)])

    def testReturnValueIsDropped(self):
        command = Command(lambda: 42, name="Answer")
        self.assertIs(invoke(command, bind((), [])), True)

    def testFailureIsCapturedAsValue(self):
        def explode(name):
            raise RuntimeError("boom: " + name)

        command = Command(explode, (Parameter("name"),), name="Explode")
        fault = invoke(command, bind(command.parameters, ["now"]))
        self.assertIsInstance(fault, InvocationError)
        self.assertIsInstance(fault, CommandException)
        self.assertEqual(fault.category, "RuntimeError")
        self.assertEqual(fault.message, "RuntimeError: boom: now")
        self.assertIsInstance(fault.exception, RuntimeError)
        self.assertIs(fault.command, command)
        self.assertEqual(fault.options["code"], FaultCode.INVOCATION_FAILURE)

    def testKeyboardInterruptPropagates(self):
        def interrupt():
            raise KeyboardInterrupt

        with self.assertRaises(KeyboardInterrupt):
            invoke(Command(interrupt, name="Interrupt"), bind((), []))

    def testArgumentValidation(self):
        with self.assertRaises(TypeError):
            invoke(lambda: None, bind((), []))
        with self.assertRaises(TypeError):
            invoke(self.command, ("x", 1))

    def testCalledExactlyOnce(self):
        binding = Binding(self.command.parameters, ("y", 2))
        invoke(self.command, binding)
        self.assertEqual(len(self.received), 1)


if __name__ == "__main__":
    unittest.main()
