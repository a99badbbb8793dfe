"""
Helmsman command layer: declare the operations a host tool exposes.

What this module provides
- Command: an immutable descriptor pairing a handler (callback) with its
  ordered parameter list, a unique name, an optional short alias and a one-line
  documentation text.
- command(...): build a Command directly or as a decorator.

Declaring commands
    from enum import Enum
    from helmsman import command, Parameter

    class Color(Enum):
        Red = 1
        Green = 2
        Blue = 3

    @command(Parameter("name"), alias="g", doc="Say hello")
    def Greet(name):
        print("hello", name)

    @command(Parameter("color", Color))
    def Pick(color):
        ...

Design notes
- The parameter list is declared explicitly; nothing is inferred from the
  handler's signature. The handler receives the bound values positionally, in
  declaration order.
- Name and alias are matched case-insensitively by the registry; both must be
  single shell words that do not start with "-".
- The command's documentation defaults to the first line of the handler's
  docstring.
"""
import functools
import inspect
import operator
import re

from .parameters import Parameter
from .utils import *


class CommandType(type):
    """
    Metaclass exposing introspectable fields read-only and giving commands a
    stable representation (mirrors how parameters are presented).
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            yield "name", self.name
            yield "alias", self.alias
            yield "parameters", self.parameters
            yield "doc", self.doc
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_word(cls, field, word):
    # Shared rules for 'name' and 'alias'
    if not isinstance(word, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif not (word := word.strip()):
        raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
    elif word.startswith("-") or re.search(r"\s", word):
        raise ValueError(f"{cls.__typename__} {field!r} must be a single word that does not start with '-'")
    return word


class Command(metaclass=CommandType):
    """
    Named, invocable operation with an ordered parameter list.

    Parameters
    - callback: Callable (positional-only)
      Handler receiving the bound values positionally, in declaration order.
    - parameters: Iterable[Parameter] (positional-only)
      Ordered parameter descriptors; names must be unique (case-insensitively).
    - name: str
      Command name. Defaults to callback.__name__.
    - alias: Unset | str
      Optional short alias (e.g., "g" for "Greet").
    - doc: Unset | str
      One-line documentation shown in usage. Defaults to the first line of the
      callback's docstring, or None.

    Lifecycle
    - Built once when the host assembles its registry; never mutated.
    """

    __introspectable__ = (
        "name",
        "alias",
        "parameters",
        "callback",
        "doc",
    )

    def __init__(self, callback, parameters=(), /, name=Unset, alias=Unset, doc=Unset):
        if not callable(callback):
            raise TypeError(f"{self.__typename__} callback must be callable")

        self._callback = callback
        self._name = _sanitize_word(type(self), "name", coalesce(name, getattr(callback, "__name__", "")))
        self._alias = None if alias is Unset else _sanitize_word(type(self), "alias", alias)

        if doc is Unset:
            # First docstring line, if any
            doc = next(iter((inspect.getdoc(callback) or "").splitlines()), "").strip() or None
        elif not isinstance(doc, str):
            raise TypeError(f"{self.__typename__} 'doc' must be a string")
        self._doc = doc

        names = set()
        sanitized = []
        for parameter in parameters:
            if not isinstance(parameter, Parameter):
                raise TypeError(f"{self.__typename__} parameters must be Parameter instances")
            if (folded := parameter.name.casefold()) in names:
                raise ValueError(f"{self.__typename__} {self._name!r} declares parameter {parameter.name!r} twice")
            names.add(folded)
            sanitized.append(parameter)
        self._parameters = tuple(sanitized)

    def matches(self, token, /):
        """
        Return True when `token` is this command's name or alias (case-insensitive).
        """
        folded = token.casefold()
        return folded == self._name.casefold() or (self._alias is not None and folded == self._alias.casefold())

    def __call__(self, *arguments):
        return self._callback(*arguments)


def command(*parameters, **options):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct:
        cmd = command(func, Parameter("name"), alias="g")
    - Decorator:
        @command(Parameter("name"), alias="g")
        def Greet(name): ...

    Parameters
    - *parameters: an optional leading callback followed by Parameter instances.
    - **options: name, alias and doc, forwarded to Command.

    Returns
    - Command | Callable[[Callable], Command]
    """
    @rename("command")
    def wrapper(callback, /):
        if not callable(callback) or isinstance(callback, Command):
            raise TypeError("@command() must be applied to a callable")
        return Command(callback, parameters, **options)

    if parameters and callable(parameters[0]) and not isinstance(parameters[0], Parameter):
        callback, *parameters = parameters
        parameters = tuple(parameters)
        return wrapper(callback)
    return wrapper


__all__ = (
    "Command",
    "command",
)

del CommandType
