## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
from typing import Callable

from .types import AgentState
from .tokens import Token
from .nodes import Program
from .errors import WalleError, WalleParseErrors, WalleSemanticError
from .lexer import tokenize
from .parser import parse
from .canvas import Canvas, DEFAULT_SIZE, check_size
from .builtins import Registry, load_builtins_registry
from .interpreter import Interpreter


def default_canvas_size() -> int:
    raw = os.environ.get("WALLE_CANVAS_SIZE", "").strip()
    if not raw: return DEFAULT_SIZE
    try:
        size = int(raw)
    except ValueError:
        raise WalleSemanticError(f"WALLE_CANVAS_SIZE must be an integer, got `{raw}`.") from None
    return check_size(size)


class Runtime:
    """Minimal runtime facade: tokenize, parse and execute source against a canvas."""

    def __init__(self, canvas: Canvas | None = None, registry: Registry | None = None, strict_variables: bool = True):
        self.canvas = canvas or Canvas(default_canvas_size())
        self.registry = registry or load_builtins_registry()
        self.interpreter = Interpreter(self.canvas, self.registry, strict_variables=strict_variables)

    # Pipeline ────────────────────────────────────────────────────────────────────────────────
    def tokenize(self, source: str) -> list[Token]:
        return tokenize(source)

    def parse(self, source: str) -> Program:
        """Parse source, raising every recovered diagnostic together if there were any."""
        program = parse(tokenize(source))
        if program.diagnostics:
            raise WalleParseErrors(program.diagnostics)
        return program

    def execute(self, program: Program, canvas: Canvas | None = None,
                verbosity: int = 0, stats: dict | None = None) -> AgentState:
        self.interpreter.verbosity = verbosity
        return self.interpreter.execute(program, canvas or self.canvas, stats=stats)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str, canvas: Canvas | None = None,
            verbosity: int = 0, stats: dict | None = None) -> AgentState:
        return self.execute(self.parse(source), canvas, verbosity=verbosity, stats=stats)

    def try_run(self, source: str, canvas: Canvas | None = None) -> tuple[AgentState | None, list[tuple]]:
        """Entry point for a hosting shell: final agent state or `(kind, line, message, context)` tuples."""
        try:
            return self.run(source, canvas), []
        except WalleParseErrors as exc:
            return None, [e.as_tuple() for e in exc.errors]
        except WalleError as exc:
            return None, [exc.as_tuple()]

    @property
    def state(self) -> AgentState:
        return self.interpreter.state

    @property
    def warnings(self) -> list[str]:
        return list(self.interpreter.warnings)

    @property
    def strict_variables(self) -> bool:
        return self.interpreter.strict_variables

    @strict_variables.setter
    def strict_variables(self, value: bool) -> None:
        self.interpreter.strict_variables = value

    # Canvas ──────────────────────────────────────────────────────────────────────────────────
    def resize(self, size: int) -> None:
        self.canvas.resize(size)

    def clear(self) -> None:
        self.canvas.clear()

    # Registration ────────────────────────────────────────────────────────────────────────────
    def register_function(self, name: str, func: Callable) -> None:
        self.registry.add_function(name, func)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def list_commands(self) -> list[str]:
        return sorted(self.registry.commands)

    def list_functions(self) -> list[str]:
        return sorted(self.registry.functions)
