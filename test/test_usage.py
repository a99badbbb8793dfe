"""
Usage rendering tests (signatures, listing lines and the usage screen).

Conventions
- Test method names follow CamelCase per project convention.
- Rich renderables are printed into a recording console with a fixed width.
"""

from __future__ import annotations

import io
import pathlib
import unittest
from enum import Enum
from unittest import TestCase

from rich.console import Console

from helmsman import Command, CommandRegistry, Parameter
import helmsman.usage
from helmsman.usage import describe, enumerations, label, line, signature, usage


class Color(Enum):
    Red = 1
    Green = 2
    Blue = 3


class Shape(Enum):
    Circle = 1
    Square = 2


def rendered(renderable):
    console = Console(file=io.StringIO(), width=200, record=True)
    console.print(renderable)
    return "\n".join(line.rstrip() for line in console.export_text().splitlines())


class TestSignature(TestCase):
    """signature() and describe()."""

    def testLabelForms(self):
        self.assertEqual(label(Parameter("name")), "<String:name>")
        self.assertEqual(label(Parameter("level", int, default=3)), "[Int32:level = 3]")
        self.assertEqual(label(Parameter("cache", bool | None, default=None)), "[Nullable<Boolean>:cache]")

    def testStubShipsBesideModule(self):
        self.assertTrue(pathlib.Path(helmsman.usage.__file__).with_suffix(".pyi").is_file())

    def testRequiredAndOptionalForms(self):
        command = Command(
            lambda name, verbose, label: None,
            (
                Parameter("name"),
                Parameter("verbose", bool, default=False),
                Parameter("label", str, default=None),
            ),
            name="Greet",
        )
        self.assertEqual(signature(command), "<String:name> [Boolean:verbose = False] [String:label]")

    def testEnumerationDefaultShowsMemberName(self):
        command = Command(lambda color: None, (Parameter("color", Color, default=Color.Green),), name="Paint")
        self.assertEqual(signature(command), "[Color:color = Green]")

    def testDescribeWithAliasAndDoc(self):
        command = Command(lambda name: None, (Parameter("name"),), name="Greet", alias="g", doc="Say hello")
        self.assertEqual(describe(command), "    Greet (g): <String:name> - Say hello")

    def testDescribeWithoutAliasOrDoc(self):
        command = Command(lambda level: None, (Parameter("level", int),), name="Set")
        self.assertEqual(describe(command), "    Set: <Int32:level> - [No inline documentation]")

    def testLineMatchesDescribe(self):
        command = Command(lambda name: None, (Parameter("name"),), name="Greet", alias="g", doc="Say hello")
        self.assertEqual(line(command).plain, describe(command))
        self.assertEqual(line(command, colorful=True).plain, describe(command))


class TestEnumerations(TestCase):
    """One line per distinct enumeration type, first-use order."""

    def testDistinctInFirstUseOrder(self):
        commands = (
            Command(lambda shape: None, (Parameter("shape", Shape),), name="Draw"),
            Command(lambda color, shape: None, (Parameter("color", Color), Parameter("shape", Shape)), name="Fill"),
            Command(lambda: None, name="Clear"),
        )
        self.assertEqual(enumerations(commands), (
            "Valid Shape are Circle, Square",
            "Valid Color are Red, Green, Blue",
        ))

    def testNoEnumerations(self):
        self.assertEqual(enumerations((Command(lambda: None, name="Clear"),)), ())


class TestUsageScreen(TestCase):
    """usage(commands, name)."""

    def setUp(self):
        self.registry = CommandRegistry(
            Command(lambda verbose: None, (Parameter("verbose", bool, default=False),), name="Toggle"),
            Command(lambda name: None, (Parameter("name"),), name="Greet", alias="g", doc="Say hello"),
            Command(lambda color: None, (Parameter("color", Color, default=Color.Red),), name="Paint"),
        )

    def testLayout(self):
        lines = rendered(usage(self.registry, "demo")).splitlines()
        self.assertEqual(lines, [
            "demo",
            "General usage: demo <command> [parameters]",
            "You can either specify the full command name or the alias (shown in parentheses)",
            "Command listing:",
            "    Greet (g): <String:name> - Say hello",
            "    Paint: [Color:color = Red] - [No inline documentation]",
            "    Toggle: [Boolean:verbose = False] - [No inline documentation]",
            "Valid Color are Red, Green, Blue",
        ])

    def testFancyPanelKeepsContent(self):
        text = rendered(usage(self.registry, "demo", fancy=True, colorful=True))
        self.assertIn("demo", text)
        self.assertIn("Greet (g): <String:name> - Say hello", text)
        self.assertIn("Valid Color are Red, Green, Blue", text)


if __name__ == "__main__":
    unittest.main()
