"""
Helmsman faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised while resolving, binding or invoking a command.
- CommandException: base type carrying a message + options; it knows how to
  render itself (rich) and how to surface itself (print or raise).
- PreconditionViolation: host misuse (null/empty token vector). It is NOT a
  fault: it is never reported, only raised.
- trigger(): central entry point to surface any fault.
- getdoc(): optional description lookup for a code from the host application.

Faults as values
- The registry, the binder and the invoker *return* fault instances instead of
  raising them. The host decides what to do with them through trigger():
  in shell mode they are printed to stderr, otherwise they are raised.

Integration
- Hosts may define, in __main__:
  • __prog__: program name shown in fault headers.
  • __styles__: palette overrides (see CommandException.__rich__).
  • __codes__: mapping FaultCode -> label, replacing numeric ids in headers.
  • __docs__: mapping FaultCode -> short documentation string.
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text
from rich.traceback import Traceback

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by phase)
    - resolution (2110x)
      • UNKNOWN_COMMAND
    - binding, specifiers (2111x)
      • MISSING_REQUIRED_PARAMETER, UNMATCHED_SPECIFIER, AMBIGUOUS_SPECIFIER,
        MISSING_SPECIFIER_VALUE
    - binding, values (2112x)
      • COERCION_FAILURE
    - invocation (2113x)
      • INVOCATION_FAILURE
    """
    # --- resolution errors ---
    UNKNOWN_COMMAND             = 21101

    # --- specifier errors ---
    MISSING_REQUIRED_PARAMETER  = 21111
    UNMATCHED_SPECIFIER         = 21112
    AMBIGUOUS_SPECIFIER         = 21113
    MISSING_SPECIFIER_VALUE     = 21114

    # --- value errors ---
    COERCION_FAILURE            = 21121

    # --- invocation errors ---
    INVOCATION_FAILURE          = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class PreconditionViolation(ValueError):
    """
    the token vector handed to the dispatcher is null or empty.

    this signals a programming error at the call site, so it is raised and
    never converted into a reported failure.
    """


class CommandException(Exception):
    """
    base class of every reportable fault.

    options (read-only mapping)
    - title, code, hint: presentation data set where the fault is created.
    - tool: the CommandLineTool reporting the fault (optional).
    - shell, fancy, colorful: runtime flags merged in by the reporter.
    - any phase specific context (token, parameter, candidates, command, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        # expose phase context (token, parameter, ...) as attributes
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        tool = self.options.get("tool")
        prog = text(getattr(main, "__prog__", getattr(tool, "name", "helmsman")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        renders = [text(self.message, styler("error-message"))]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(CommandException): ...
class MissingRequiredParameterError(CommandException): ...
class UnmatchedSpecifierError(CommandException): ...
class AmbiguousSpecifierError(CommandException): ...
class MissingSpecifierValueError(CommandException): ...
class CoercionError(CommandException): ...


class InvocationError(CommandException):
    """
    the invoked command itself failed.

    carries the inner exception (option 'exception') so the report can show its
    category, message and traceback; raising it chains the inner exception.
    """

    @property
    def category(self):
        return type(self.options["exception"]).__name__

    def __rich__(self):
        render = super().__rich__()
        exception = self.options["exception"]
        if exception.__traceback__ is None:
            return render
        return Group(render, Traceback.from_exception(type(exception), exception, exception.__traceback__))

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from self.options["exception"]
        console.print(self)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode the fault is printed to stderr via rich; otherwise it is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "PreconditionViolation",
    "CommandException",
    "UnknownCommandError",
    "MissingRequiredParameterError",
    "UnmatchedSpecifierError",
    "AmbiguousSpecifierError",
    "MissingSpecifierValueError",
    "CoercionError",
    "InvocationError",
    "trigger",
    "getdoc",
)
