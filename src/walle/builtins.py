## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from typing import Callable
from dataclasses import dataclass, field

from . import commands
from .tokens import TokenKind, COMMANDS, FUNCTIONS
from .validating import get_signature


def get_python_name(name: str, prefix: str) -> str:
    """Map a language name to its Python handler, e.g. `DrawLine` to `cmd_draw_line`."""
    return prefix + re.sub(r'(?<!^)([A-Z])', r'_\1', name).lower()


@dataclass
class Registry:
    commands: dict[str, Callable] = field(default_factory=dict)
    functions: dict[str, Callable] = field(default_factory=dict)

    def add_command(self, name: str, fn: Callable) -> None:
        get_signature(fn, name)
        self.commands[name] = fn

    def add_function(self, name: str, fn: Callable) -> None:
        get_signature(fn, name)
        self.functions[name] = fn


def load_builtins_registry() -> Registry:
    registry = Registry()
    # GoTo is a keyword command in the grammar, but parses into a jump.
    for kind in sorted(COMMANDS - {TokenKind.GOTO}, key=lambda k: k.value):
        registry.add_command(kind.value, getattr(commands, get_python_name(kind.value, 'cmd_')))
    for kind in sorted(FUNCTIONS, key=lambda k: k.value):
        registry.add_function(kind.value, getattr(commands, get_python_name(kind.value, 'fn_')))
    return registry
