"""
Helmsman command invoker.

invoke(command, binding) -> True | InvocationError

The command's callback receives the bound values positionally, in declaration
order. Anything the callback raises (an Exception subclass) is captured into an
InvocationError carrying the inner exception, its category (type name) and its
message; it is never conflated with a binding fault and never escapes raw.
KeyboardInterrupt and SystemExit are not captured.
"""
from .binder import Binding
from .commands import Command
from .faults import *


def invoke(command, binding, /):
    """
    Call `command` with `binding`'s values exactly once.

    Returns
    - True when the callback returns normally (its return value is dropped).
    - InvocationError (not raised) when the callback raises.
    """
    if not isinstance(command, Command):
        raise TypeError("invoke() first argument must be a command")
    if not isinstance(binding, Binding):
        raise TypeError("invoke() second argument must be a binding")

    try:
        command(*binding.values)
    except Exception as exception:
        return InvocationError(
            "%s: %s" % (type(exception).__name__, exception),
            title="command failed",
            code=FaultCode.INVOCATION_FAILURE,
            command=command,
            exception=exception,
            hint="the %r command raised while running; see the traceback below" % command.name,
            docs=getdoc(FaultCode.INVOCATION_FAILURE),
        )
    return True


__all__ = (
    "invoke",
)
