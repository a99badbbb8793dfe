"""
Helmsman command registry: the explicit command table of a host tool.

Contract
- CommandRegistry(*commands) validates, once, that no two commands share a name
  or alias (case-insensitively) and raises ValueError naming the clash.
- resolve(token) returns the single Command whose name or alias equals `token`
  case-insensitively, or an UnknownCommandError fault value. Never a prefix or
  fuzzy match.
- Iteration yields commands sorted by name (usage order).

The registry is read-only after construction, so independent dispatches may
query it concurrently.
"""
from types import MappingProxyType

from .commands import Command
from .faults import *


class CommandRegistry:
    """
    Case-insensitive name/alias → Command table.
    """

    def __init__(self, *commands):
        table = {}
        for command in commands:
            if not isinstance(command, Command):
                raise TypeError("command-registry entries must be Command instances")
            if command.name.casefold() in table:
                raise ValueError(
                    f"command name {command.name!r} is already in use by {table[command.name.casefold()].name!r}"
                )
            for field, word in (("name", command.name), ("alias", command.alias)):
                if word is None:
                    continue
                # setdefault claims the slot only when it is free
                if (owner := table.setdefault(word.casefold(), command)) is not command:
                    raise ValueError(
                        f"command {field} {word!r} of {command.name!r} is already in use by {owner.name!r}"
                    )
        self._table = MappingProxyType(table)
        self._commands = tuple(sorted(commands, key=lambda command: command.name.casefold()))

    @property
    def commands(self):
        return self._commands

    def resolve(self, token, /):
        """
        Resolve a command token to exactly one Command.

        Returns
        - Command when `token` equals a name or alias (case-insensitive).
        - UnknownCommandError (not raised) otherwise.
        """
        try:
            return self._table[token.casefold()]
        except KeyError:
            return UnknownCommandError(
                "no command named %r" % token,
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                token=token,
                hint="use one of the commands listed below (full name or alias)",
                docs=getdoc(FaultCode.UNKNOWN_COMMAND),
            )

    def __contains__(self, token):
        return isinstance(token, str) and any(command.matches(token) for command in self._commands)

    def __iter__(self):
        return iter(self._commands)

    def __len__(self):
        return len(self._commands)

    def __rich_repr__(self):
        yield from self._commands


__all__ = (
    "CommandRegistry",
)
