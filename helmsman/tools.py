"""
Helmsman command line tool: the host facade over registry, binder and invoker.

Flow per dispatch (one shot, no retry)
    Idle → Resolved → Bound → Invoked
    any fault short-circuits to Reported and the dispatch returns False.

Quick start
    from helmsman import CommandLineTool, Parameter, command, run

    @command(Parameter("name"), alias="g", doc="Say hello")
    def Greet(name):
        print("hello", name)

    tool = CommandLineTool(Greet, name="greeter", colorful=True)

    if __name__ == "__main__":
        run(tool)                 # exits with 0 on success, 1 otherwise

Runtime flags
- shell (default True): faults are printed to stderr and the dispatch returns
  False. With shell=False faults are raised instead (embedding, tests).
- fancy: render faults and usage inside rich panels.
- colorful: enable the palettes (see faults/usage for the keys).
- echo: print "Parameters: ..." before invoking and "(done)" once the
  dispatch is over, whatever its outcome.
"""
import copy
import os.path
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .binder import bind
from .faults import *
from .invoker import invoke
from .parameters import render
from .registry import CommandRegistry
from .usage import line, usage
from .utils import *


class CommandLineTool:
    """
    A named set of commands plus the runtime flags used to report on them.

    Parameters
    - *commands: Command
      The commands the tool exposes (names and aliases must be unique).
    - name: Unset | str
      Program name for usage and fault headers. Defaults to the basename of
      sys.argv[0]. A __prog__ attribute in __main__ overrides it in headers.
    - shell, fancy, colorful, echo: bool (keyword-only), see module docs.
    """

    def __init__(self, *commands, name=Unset, shell=True, fancy=False, colorful=False, echo=False):
        self._registry = CommandRegistry(*commands)
        if not isinstance(name := coalesce(name, os.path.basename(sys.argv[0]) or "helmsman"), str):
            raise TypeError("command-line-tool 'name' must be a string")
        self._name = name
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)
        self._echo = bool(echo)

    @property
    def registry(self):
        return self._registry

    name = mirror("name")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    echo = mirror("echo")

    def usage(self, *, stderr=False):
        """
        Print the usage screen (to stderr when reporting a fault).
        """
        Console(stderr=stderr).print(usage(self._registry, self._name, fancy=self._fancy, colorful=self._colorful))

    def trigger(self, fault, /, **options):
        """
        Surface `fault` with this tool's runtime flags merged in.
        """
        trigger(fault, **options, tool=self, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def dispatch(self, tokens, /):
        """
        Resolve, bind and invoke the command named by tokens[0].

        Returns
        - True when the command ran to completion, False when a fault was
          reported (shell mode).

        Raises
        - PreconditionViolation: `tokens` is None or empty.
        - TypeError: a token is not a string.
        - CommandException: any fault, when shell is False.
        """
        if tokens is None:
            raise PreconditionViolation("dispatch() requires a token vector, got None")
        if not (tokens := list(tokens)):
            raise PreconditionViolation("dispatch() requires a non-empty token vector")
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("dispatch() tokens must be strings")

        token, *remaining = tokens
        try:
            return self._dispatch(token, remaining)
        finally:
            if self._echo:
                Console().print("(done)", markup=False, highlight=False)

    def _dispatch(self, token, remaining):
        if isinstance(command := self._registry.resolve(token), CommandException):
            self.trigger(command)
            self.usage(stderr=True)
            return False

        if isinstance(binding := bind(command.parameters, remaining), CommandException):
            self.trigger(binding, command=command)
            Console(stderr=True).print(line(command, colorful=self._colorful))
            return False

        if self._echo:
            Console().print("Parameters: " + ", ".join(
                "%s: %s" % (parameter.name, render(value)) for parameter, value in binding
            ), markup=False, highlight=False)

        outcome = invoke(command, binding)

        if outcome is not True:
            self.trigger(outcome)
            return False
        return True

    def main(self, argv=Unset, /):
        """
        Host entry point: run one command and return the process exit code.

        Parameters
        - argv:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string, split via shlex.split.
          • Iterable[str]: pre-tokenized arguments.

        Behavior
        - No tokens → print usage, return 1.
        - Every token has \\" unescaped to " (one extra quoting level, as in
          tool.exe "/a:\\"foo bar\\" /b").
        - 0 when the command ran, 1 on any fault. With shell=False the
          fault dispatch() raises is reported here before returning 1.
        """
        if argv is Unset:
            tokens = sys.argv[1:]
        elif isinstance(argv, str):
            tokens = shlex.split(argv)
        elif isinstance(argv, Iterable):
            tokens = list(argv)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("main() argument must be a string or an iterable of strings")
        else:
            raise TypeError("main() argument must be a string or an iterable of strings")

        if not tokens:
            self.usage()
            return 1

        tokens = [token.replace('\\"', '"') for token in tokens]
        try:
            return 0 if self.dispatch(tokens) else 1
        except CommandException as fault:
            copy.replace(fault, shell=True).__trigger__()
            return 1

    def __rich_repr__(self):
        yield "name", self._name
        yield "commands", self._registry.commands
        yield "shell", self._shell
        yield "fancy", self._fancy
        yield "colorful", self._colorful
        yield "echo", self._echo


def run(tool, prompt=Unset, /):
    """
    Convenience runner: execute `tool` and exit the process with its code.

    Parameters
    - tool: CommandLineTool
    - prompt: forwarded to CommandLineTool.main (Unset reads sys.argv[1:]).
    """
    if not isinstance(tool, CommandLineTool):
        raise TypeError("run() first argument must be a command-line tool")
    sys.exit(tool.main(prompt))


__all__ = (
    "CommandLineTool",
    "run",
)
