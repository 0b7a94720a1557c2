## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum
from dataclasses import dataclass


class TokenKind(Enum):
    # Structural
    LPAREN = '('
    RPAREN = ')'
    LBRACKET = '['
    RBRACKET = ']'
    COMMA = ','
    NEWLINE = 'newline'
    EOF = 'end of input'
    # Literals
    NUMBER = 'number'
    STRING = 'string'
    IDENTIFIER = 'identifier'
    # Commands
    SPAWN = 'Spawn'
    COLOR = 'Color'
    SIZE = 'Size'
    DRAWLINE = 'DrawLine'
    DRAWCIRCLE = 'DrawCircle'
    DRAWRECTANGLE = 'DrawRectangle'
    FILL = 'Fill'
    GOTO = 'GoTo'
    # Query functions
    GETACTUALX = 'GetActualX'
    GETACTUALY = 'GetActualY'
    GETCANVASSIZE = 'GetCanvasSize'
    GETCOLORCOUNT = 'GetColorCount'
    ISBRUSHCOLOR = 'IsBrushColor'
    ISBRUSHSIZE = 'IsBrushSize'
    ISCANVASCOLOR = 'IsCanvasColor'
    # Operators
    AND = '&&'
    OR = '||'
    ASSIGN = '<-'
    PLUS = '+'
    MINUS = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    POWER = '**'
    MODULO = '%'
    EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    def __repr__(self):
        return f"TokenKind.{self.name}"


COMMANDS = frozenset({
    TokenKind.SPAWN, TokenKind.COLOR, TokenKind.SIZE, TokenKind.DRAWLINE,
    TokenKind.DRAWCIRCLE, TokenKind.DRAWRECTANGLE, TokenKind.FILL, TokenKind.GOTO,
})

FUNCTIONS = frozenset({
    TokenKind.GETACTUALX, TokenKind.GETACTUALY, TokenKind.GETCANVASSIZE, TokenKind.GETCOLORCOUNT,
    TokenKind.ISBRUSHCOLOR, TokenKind.ISBRUSHSIZE, TokenKind.ISCANVASCOLOR,
})

# Reserved words, looked up after case-folding the identifier.
KEYWORDS: dict[str, TokenKind] = {k.value.lower(): k for k in COMMANDS | FUNCTIONS}
KEYWORDS.update({'and': TokenKind.AND, 'or': TokenKind.OR})


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    literal: int | str | None = None
    line: int = 1

    def __repr__(self):
        suffix = f" {self.literal!r}" if self.literal is not None else ""
        return f"{self.kind.name} {self.lexeme!r}{suffix} @{self.line}"

    def describe(self) -> str:
        """Human-readable token summary for diagnostics, e.g. `'foo' (identifier)`."""
        if self.kind in (TokenKind.NEWLINE, TokenKind.EOF):
            return self.kind.value
        return f"'{self.lexeme}' ({self.kind.value})"
