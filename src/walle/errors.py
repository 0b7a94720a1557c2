## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class WalleError(Exception):
    """Base class for all errors raised while lexing, parsing or executing a program."""
    kind = "error"

    def __init__(self, message: str = "", *, line: int | None = None, context: str = ""):
        super().__init__(message)
        self.message: str = message
        self.line: int | None = line
        self.context: str = context

    def __str__(self):
        header = f"[line {self.line}] " if self.line is not None and self.line > 0 else ""
        footer = f"\ncontext: {self.context}" if self.context else ""
        return f"{header}{self.message}{footer}"

    def as_tuple(self) -> tuple[str, int | None, str, str]:
        return (self.kind, self.line, self.message, self.context)


class WalleSyntaxError(WalleError, SyntaxError):
    """Malformed token stream or grammar violation."""
    kind = "syntax"

class WalleSemanticError(WalleError, ValueError):
    """Well-formed program that is meaningless at this point, e.g. undefined label or unknown color."""
    kind = "semantic"

class WalleExecutionError(WalleError, RuntimeError):
    """Runtime condition violated while a correct program runs."""
    kind = "execution"


class WalleParseErrors(WalleSyntaxError):
    def __init__(self, errors: list[WalleError]):
        assert len(errors) > 0
        first = errors[0]
        super().__init__(f"{len(errors)} error(s) found while parsing, first: {first.message}",
                         line=first.line, context=first.context)
        self.errors = list(errors)


class WalleTypeMissing(WalleError, TypeError):
    """Host-side problem registering a Python handler, e.g. missing annotations."""
    kind = "host"
