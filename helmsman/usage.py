"""
Helmsman usage rendering.

Plain forms
- label(parameter): "<String:name>", "[Boolean:verbose = False]"
- signature(command): "<String:name> [Boolean:verbose = False]"
    • required → <type:name>
    • optional with a None default → [type:name]
    • optional otherwise → [type:name = default]
- describe(command): "    Greet (g): <String:name> - Say hello"
- enumerations(commands): one "Valid Color are Red, Green, Blue" line per
  distinct enumeration type, in first-use order.

Rich form
- usage(commands, name, fancy=..., colorful=...): the whole usage screen:
    <name>
    General usage: <name> <command> [parameters]
    You can either specify the full command name or the alias (shown in parentheses)
    Command listing:
        <one describe() line per command>
    <one enumerations() line per enumeration>

Palette keys (override through a __styles__ mapping in __main__)
- program-name, usage-label, usage-section, listing-label
- command-name, command-alias, required-parameter, optional-parameter
- separator, documentation, missing-documentation, enumeration
- panel-title
"""
from collections import defaultdict

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .parameters import members, render, typename

MISSING_DOCUMENTATION = "[No inline documentation]"


def label(parameter, /):
    """
    Return the usage label of one parameter, e.g. "<String:name>" or
    "[Boolean:verbose = False]".
    """
    if not parameter.optional:
        return "<%s:%s>" % (typename(parameter), parameter.name)
    if parameter.default is None:
        return "[%s:%s]" % (typename(parameter), parameter.name)
    return "[%s:%s = %s]" % (typename(parameter), parameter.name, render(parameter.default))


def signature(command, /):
    return " ".join(map(label, command.parameters))


def describe(command, /):
    alias = " (%s)" % command.alias if command.alias else ""
    return "    %s%s: %s - %s" % (command.name, alias, signature(command), command.doc or MISSING_DOCUMENTATION)


def enumerations(commands, /):
    """
    Return the "Valid <Enum> are ..." lines for every enumeration type used by
    `commands`, each type once, in first-use order.
    """
    seen = []
    for command in commands:
        for parameter in command.parameters:
            if parameter.kind == "enumeration" and parameter.type not in seen:
                seen.append(parameter.type)
    return tuple(map(members, seen))


def _palette(colorful):
    styles = defaultdict(str, {
        # === Head sections ===
        "program-name": "bold #FF4D94",
        "usage-label": "bold #00E6FF",
        "usage-section": "bold #36C5F0",
        "listing-label": "bold #FFFFFF",

        # === Command lines ===
        "command-name": "bold #00E6FF",
        "command-alias": "bold #22C55E",
        "required-parameter": "bold #FFD600",
        "optional-parameter": "#FFD600",
        "separator": "#737373",
        "documentation": "#9CA3AF",
        "missing-documentation": "italic #737373",

        # === Enumerations ===
        "enumeration": "#D1D5DB",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def line(command, /, *, colorful=False):
    """
    Rich rendition of describe(command).
    """
    styler = _palette(colorful)
    parameters = Text(" ").join(
        Text(label(parameter), styler("optional-parameter" if parameter.optional else "required-parameter"))
        for parameter in command.parameters
    )
    return Text.assemble(
        "    ",
        (command.name, styler("command-name")),
        *((" (", (command.alias, styler("command-alias")), ")") if command.alias else ()),
        ": ",
        parameters,
        (" - ", styler("separator")),
        (command.doc, styler("documentation")) if command.doc else
        (MISSING_DOCUMENTATION, styler("missing-documentation")),
    )


def usage(commands, /, name, *, fancy=False, colorful=False):
    """
    Build the usage screen for `commands` (already in display order).
    """
    styler = _palette(colorful)
    commands = tuple(commands)

    renders = [
        Text(name, styler("program-name")),
        Text.assemble(("General usage: ", styler("usage-label")), (f"{name} <command> [parameters]", styler("usage-section"))),
        Text("You can either specify the full command name or the alias (shown in parentheses)"),
        Text("Command listing:", styler("listing-label")),
    ]
    renders.extend(line(command, colorful=colorful) for command in commands)
    renders.extend(Text(enumeration, styler("enumeration")) for enumeration in enumerations(commands))

    if fancy:
        return Panel(Group(*renders[1:]), title=Text(name, styler("panel-title")), title_align="left")
    return Group(*renders)


__all__ = (
    "label",
    "signature",
    "describe",
    "enumerations",
    "line",
    "usage",
)
