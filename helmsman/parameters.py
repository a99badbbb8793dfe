r"""
Helmsman parameter descriptors and value coercion.

Overview
- Parameter: one typed input slot of a command. Required when declared without
  a default, optional otherwise. Declaration order is the positional-fill order.
- coerce(parameter, token): turn a raw token into the parameter's value.
- isboolean(token): whether a token is a boolean literal (switch heuristic).
- typename(parameter): the label used by the usage renderer.

Supported value types
- str               identity
- bool              case-insensitive "true"/"false"
- bool | None       nullable boolean (also Optional[bool]); None stays None
- int               base-10, optional sign, signed 32-bit range
- enum.Enum         case-insensitive member name, canonicalized to the member

Validation highlights
- Names must be identifiers (r"[^\W\d]\w*").
- Unsupported types are rejected with TypeError on construction.
- Defaults are checked against the declared type (None allowed only for the
  nullable boolean and str).

Quick example:
    >>> from helmsman.parameters import Parameter, coerce
    >>> level = Parameter("level", int, default=0)
    >>> coerce(level, "-5")
    -5
"""
import builtins
import enum
import functools
import operator
import re
import types
import typing

from .utils import *

# signed 32-bit bounds
_INT_MIN = -2 ** 31
_INT_MAX = 2 ** 31 - 1


def _kind(type, /):
    """
    Classify a declared value type into one of the supported kinds.

    Returns one of "string", "boolean", "nullable-boolean", "integer",
    "enumeration", or None when the type is not supported.
    """
    if type is str:
        return "string"
    if type is bool:
        return "boolean"
    if type is int:
        return "integer"
    if isinstance(type, builtins.type) and issubclass(type, enum.Enum):
        return "enumeration"
    if isinstance(type, types.UnionType) or typing.get_origin(type) is typing.Union:
        if set(typing.get_args(type)) == {bool, types.NoneType}:
            return "nullable-boolean"
    return None


class ParameterType(type):
    """
    Metaclass that turns Parameter into a sealed, introspectable descriptor.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_<name>" field (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations.
    - Seal the class against subclassing so binding semantics stay predictable.
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
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if bases:
            raise TypeError(f"type {bases[0].__name__!r} is not an acceptable base type")

        return self


class Parameter(metaclass=ParameterType):
    """
    Typed input slot of a command.

    Parameters
    - name: str (positional-only)
      Identifier of the slot; named specifiers ("-na") match it by prefix.
    - type: str | bool | bool | None | int | Enum subclass
      Declared value type (see module docs).
    - default: Any
      When provided the parameter is optional and this value is bound when the
      slot receives nothing. When omitted the parameter is required.

    Properties
    - name, type, default, optional, kind (read-only).
    """

    __introspectable__ = (
        "name",
        "type",
        "default",
        "optional",
    )

    def __init__(self, name, /, type=str, default=Unset):
        if not isinstance(name, str):
            raise TypeError(f"{self.__typename__} 'name' must be a string")
        elif not (name := name.strip()):
            raise ValueError(f"{self.__typename__} 'name' cannot be empty")
        elif not re.fullmatch(r"[^\W\d]\w*", name):
            raise ValueError(f"{self.__typename__} 'name' must be a valid identifier")

        if (kind := _kind(type)) is None:
            raise TypeError(f"{self.__typename__} 'type' must be str, bool, bool | None, int or an enumeration")

        if default is not Unset and not _accepts(kind, type, default):
            raise TypeError(f"{self.__typename__} 'default' does not match its declared type {typename(type)!r}")

        self._name = name
        self._type = type
        self._kind = kind
        self._default = default
        self._optional = default is not Unset

    @property
    def kind(self):
        return self._kind

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return (self.name, self.type, self.optional, self.default) == (other.name, other.type, other.optional, other.default)

    def __hash__(self):
        return hash((self.name, self.optional))


def _accepts(kind, type, default):
    match kind:
        case "string":
            return default is None or isinstance(default, str)
        case "boolean":
            return isinstance(default, bool)
        case "nullable-boolean":
            return default is None or isinstance(default, bool)
        case "integer":
            return isinstance(default, int) and not isinstance(default, bool)
        case "enumeration":
            return isinstance(default, type)
    return False


def isboolean(token, /):
    """
    Return True when `token` is a boolean literal ("true"/"false", any case).
    """
    return isinstance(token, str) and token.strip().lower() in ("true", "false")


def _boolean(token):
    if not isboolean(token):
        raise ValueError(f"{token!r} is not a valid boolean, use 'true' or 'false'")
    return token.strip().lower() == "true"


def _integer(token):
    if not re.fullmatch(r"\s*[+-]?[0-9]+\s*", token):
        raise ValueError(f"{token!r} is not a valid integer")
    if not _INT_MIN <= (value := int(token)) <= _INT_MAX:
        raise ValueError(f"{token!r} is out of the integer range [{_INT_MIN}, {_INT_MAX}]")
    return value


def members(type, /):
    """
    Return the line listing every valid member of an enumeration type.

    Example: "Valid Color are Red, Green, Blue"
    """
    return "Valid %s are %s" % (type.__name__, ", ".join(type.__members__))


def _enumeration(type, token):
    folded = token.strip().casefold()
    for name, member in type.__members__.items():
        if name.casefold() == folded:
            return member
    raise ValueError(f"{token!r} is not valid.  {members(type)}")


def coerce(parameter, token, /):
    """
    Convert a raw token into `parameter`'s declared value type.

    Raises
    - ValueError: the token does not denote a value of the declared type; the
      message is user-facing (for enumerations it lists every valid member).
    """
    if token is None:
        if parameter.kind == "nullable-boolean":
            return None
        raise ValueError(f"parameter {parameter.name!r} requires a value")

    match parameter.kind:
        case "string":
            return token
        case "boolean" | "nullable-boolean":
            return _boolean(token)
        case "integer":
            return _integer(token)
        case "enumeration":
            return _enumeration(parameter.type, token)

    raise AssertionError(f"unexpected parameter kind {parameter.kind!r}")


def typename(x, /):
    """
    Return the label of a parameter (or of a declared type) for usage text.

    str → "String", bool → "Boolean", bool | None → "Nullable<Boolean>",
    int → "Int32", enumerations → their class name.
    """
    type = x.type if isinstance(x, Parameter) else x
    return {
        "string": "String",
        "boolean": "Boolean",
        "nullable-boolean": "Nullable<Boolean>",
        "integer": "Int32",
    }.get(_kind(type)) or getattr(type, "__name__", repr(type))


def render(object, /):
    """
    Render a bound or default value the way usage and echo lines show it.
    """
    if isinstance(object, enum.Enum):
        return object.name
    return str(object)


__all__ = (
    "Parameter",
    "coerce",
    "isboolean",
    "members",
    "typename",
    "render",
)

del ParameterType
