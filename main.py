from enum import Enum

from helmsman import *

__prog__ = "helmsman-demo"


class Color(Enum):
    Red = 1
    Green = 2
    Blue = 3


@command(Parameter("name"), alias="g", doc="Say hello to someone")
def Greet(name):
    print("hello", name)


@command(Parameter("verbose", bool, default=False), doc="Show the verbosity switch")
def Toggle(verbose):
    print("verbose:", verbose)


@command(Parameter("color", Color, default=Color.Red), Parameter("times", int, default=1))
def Paint(color, times):
    for _ in range(times):
        print("painting", color.name)


tool = CommandLineTool(Greet, Toggle, Paint, name=__prog__, colorful=True, echo=True)


if __name__ == '__main__':
    run(tool)
