"""
Helmsman argument binder: map leftover tokens onto a command's parameters.

bind(parameters, tokens) -> Binding | fault

Phases (over a working copy of `tokens`)
1. required fill
   • walk the parameters in declaration order; every required parameter pops
     the next token from the front and coerces it.
   • running out of tokens → MissingRequiredParameterError.
   • required parameters are filled positionally only; a "-name" token met here
     is taken as a plain value.
2. distribution (single left-to-right pass)
   • "-prefix" tokens name an *optional* parameter by case-insensitive prefix:
     none → UnmatchedSpecifierError, several → AmbiguousSpecifierError.
   • a boolean target that is last, or not followed by a boolean literal, is a
     bare switch: it becomes True and every later token is ignored.
   • any other target takes the next token as its value; when there is none
     → MissingSpecifierValueError.
   • other tokens fill the first parameter still unset; surplus tokens are
     discarded.
3. defaults
   • every optional parameter still unset receives its declared default.

Ignored and discarded tokens are kept on Binding.ignored; they never fault.

Faults are returned, not raised, and carry the offending token, its 1-based
position among the arguments (the command token excluded) and a hint.
"""
import functools
from types import MappingProxyType

from .faults import *
from .parameters import coerce, isboolean, typename
from .usage import label
from .utils import *


@functools.cache
def _ordinal(number):
    """
    Return a human-friendly ordinal label for a 1-based position.
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    # 11th, 12th, 13th (and 111th, 112th, 113th, …)
    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


class Binding:
    """
    Parameter → value mapping produced by a successful bind().

    Properties
    - parameters: the bound parameters, in declaration order.
    - values: the bound values, in declaration order (the call arguments).
    - mapping: read-only name → value view.
    - ignored: tokens accepted but not bound (after a bare switch, or surplus
      positionals), in input order.
    """

    def __init__(self, parameters, values, ignored=()):
        if len(parameters) != len(values):
            raise ValueError("binding requires one value per parameter")
        if any(value is Unset for value in values):
            raise ValueError("binding values cannot be unset")
        self._parameters = tuple(parameters)
        self._values = tuple(values)
        self._ignored = tuple(ignored)

    parameters = mirror("parameters")
    values = mirror("values")
    ignored = mirror("ignored")

    @property
    def mapping(self):
        return MappingProxyType(dict(zip((parameter.name for parameter in self._parameters), self._values)))

    def __getitem__(self, name):
        return self.mapping[name]

    def __iter__(self):
        return zip(self._parameters, self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other):
        if not isinstance(other, Binding):
            return NotImplemented
        return (self._parameters, self._values, self._ignored) == (other._parameters, other._values, other._ignored)

    def __hash__(self):
        return hash(tuple(parameter.name for parameter in self._parameters))

    def __rich_repr__(self):
        for parameter, value in self:
            yield parameter.name, value
        if self._ignored:
            yield "ignored", self._ignored

    def __repr__(self):
        return "binding(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


def _coerce(parameter, token, position):
    """
    Coerce `token` for `parameter`, turning converter failures into a fault value.
    """
    try:
        return coerce(parameter, token)
    except ValueError as exception:
        return CoercionError(
            "%s (for parameter %r from %s position)" % (exception, parameter.name, _ordinal(position)),
            title="invalid value",
            code=FaultCode.COERCION_FAILURE,
            token=token,
            position=position,
            parameter=parameter,
            hint="%s expects a %s value" % (label(parameter), typename(parameter)),
            docs=getdoc(FaultCode.COERCION_FAILURE),
            exception=exception,
        )


def bind(parameters, tokens, /):
    """
    Bind `tokens` to `parameters` (see module docs for the three phases).

    Parameters
    - parameters: Iterable[Parameter], in declaration order.
    - tokens: Iterable[str], the arguments left after the command token.

    Returns
    - Binding on success.
    - MissingRequiredParameterError | UnmatchedSpecifierError |
      AmbiguousSpecifierError | MissingSpecifierValueError | CoercionError
      (not raised) on failure.
    """
    parameters = tuple(parameters)
    tokens = list(tokens)
    slots = [Unset] * len(parameters)
    ignored = []

    # phase 1: required parameters, positionally, from the front
    consumed = 0
    for index, parameter in enumerate(parameters):
        if parameter.optional:
            continue
        if not tokens:
            return MissingRequiredParameterError(
                "missing required parameter %r" % parameter.name,
                title="missing parameter",
                code=FaultCode.MISSING_REQUIRED_PARAMETER,
                parameter=parameter,
                position=consumed + 1,
                hint="supply %s as the %s argument" % (label(parameter), _ordinal(consumed + 1)),
                docs=getdoc(FaultCode.MISSING_REQUIRED_PARAMETER),
            )
        token = tokens.pop(0)
        consumed += 1
        if isinstance(value := _coerce(parameter, token, consumed), CoercionError):
            return value
        slots[index] = value

    # phase 2: named specifiers and positional leftovers
    index = 0
    while index < len(tokens):
        token = tokens[index]
        position = consumed + index + 1

        if not token.startswith("-"):
            target = next((slot for slot, value in enumerate(slots) if value is Unset), None)
            if target is None:
                ignored.append(token)
            elif isinstance(value := _coerce(parameters[target], token, position), CoercionError):
                return value
            else:
                slots[target] = value
            index += 1
            continue

        prefix = token[1:].casefold()
        candidates = [
            slot for slot, parameter in enumerate(parameters)
            if parameter.optional and parameter.name.casefold().startswith(prefix)
        ]

        if not candidates:
            options = [parameter.name for parameter in parameters if parameter.optional]
            return UnmatchedSpecifierError(
                "argument specifier %r from %s position doesn't match any optional parameter" % (
                    token, _ordinal(position)
                ),
                title="unmatched specifier",
                code=FaultCode.UNMATCHED_SPECIFIER,
                token=token,
                position=position,
                hint="use one of: %s" % " · ".join("-" + name for name in options) if options else
                     "this command takes no optional parameters",
                docs=getdoc(FaultCode.UNMATCHED_SPECIFIER),
            )

        if len(candidates) > 1:
            names = tuple(parameters[slot].name for slot in candidates)
            return AmbiguousSpecifierError(
                "argument specifier %r from %s position is too ambiguous, it matches %s" % (
                    token, _ordinal(position), ", ".join(names)
                ),
                title="ambiguous specifier",
                code=FaultCode.AMBIGUOUS_SPECIFIER,
                token=token,
                position=position,
                candidates=names,
                hint="type more of the name: %s" % " · ".join("-" + name for name in names),
                docs=getdoc(FaultCode.AMBIGUOUS_SPECIFIER),
            )

        target, = candidates
        parameter = parameters[target]
        last = index == len(tokens) - 1

        if parameter.kind == "boolean" and (last or not isboolean(tokens[index + 1])):
            # bare switch: implies True and stops the pass
            slots[target] = True
            ignored.extend(tokens[index + 1:])
            break

        if last:
            return MissingSpecifierValueError(
                "argument specifier %r from %s position is missing a value" % (token, _ordinal(position)),
                title="missing value",
                code=FaultCode.MISSING_SPECIFIER_VALUE,
                token=token,
                position=position,
                parameter=parameter,
                hint="follow %r with a %s value" % (token, typename(parameter)),
                docs=getdoc(FaultCode.MISSING_SPECIFIER_VALUE),
            )

        if isinstance(value := _coerce(parameter, tokens[index + 1], position + 1), CoercionError):
            return value
        slots[target] = value
        index += 2

    # phase 3: defaults
    for slot, parameter in enumerate(parameters):
        if slots[slot] is Unset:
            slots[slot] = parameter.default

    return Binding(parameters, slots, ignored)


__all__ = (
    "Binding",
    "bind",
)
