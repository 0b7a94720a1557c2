## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass, field

from .tokens import TokenKind


@dataclass(kw_only=True)
class Node:
    line: int = 0                 # 1-based source line, for diagnostics only


## EXPRESSIONS
@dataclass
class Literal(Node):
    value: int | str

@dataclass
class Variable(Node):
    name: str

@dataclass
class Binary(Node):
    left: 'Expression'
    operator: TokenKind
    right: 'Expression'

@dataclass
class Call(Node):
    name: str
    args: list['Expression'] = field(default_factory=list)


Expression = Literal | Variable | Binary | Call


## STATEMENTS
@dataclass
class Command(Node):
    name: str                     # Canonical spelling, e.g. `DrawLine`.
    args: list[Expression] = field(default_factory=list)

@dataclass
class Assignment(Node):
    variable: str
    expr: Expression

@dataclass
class Label(Node):
    name: str

@dataclass
class Jump(Node):
    label: str
    condition: Expression


Statement = Command | Assignment | Label | Jump


@dataclass
class Program:
    statements: list[Statement] = field(default_factory=list)
    diagnostics: list = field(default_factory=list)   # Errors recovered from while parsing.

    def __len__(self):
        return len(self.statements)
