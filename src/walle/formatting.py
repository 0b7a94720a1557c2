## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys

from .nodes import Statement, Expression, Command, Assignment, Label, Jump, Literal, Variable, Binary, Call
from .tokens import TokenKind
from .types import AgentState, Value
from .palette import color_name


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_value(value: Value) -> str:
    if isinstance(value, bool): return str(value).lower()
    if isinstance(value, str): return '"' + value + '"'
    return str(value)

def format_expression(expr: Expression) -> str:
    match expr:
        case Literal(value=value): return format_value(value)
        case Variable(name=name): return name
        case Binary(left=Literal(value=0), operator=TokenKind.MINUS, right=right):
            return f"-{format_expression(right)}"
        case Binary(left=left, operator=op, right=right):
            return f"({format_expression(left)} {op.value} {format_expression(right)})"
        case Call(name=name, args=args):
            return f"{name}({', '.join(format_expression(a) for a in args)})"
    return repr(expr)

def format_statement(stmt: Statement) -> str:
    match stmt:
        case Command(name=name, args=args):
            return f"{name}({', '.join(format_expression(a) for a in args)})"
        case Assignment(variable=name, expr=expr):
            return f"{name} <- {format_expression(expr)}"
        case Label(name=name):
            return name
        case Jump(label=label, condition=condition):
            return f"GoTo[{label}]({format_expression(condition)})"
    return repr(stmt)

def format_agent(state: AgentState) -> str:
    x, y = state.position
    return f"({x}, {y}) {color_name(state.color)} size={state.brush_size}"


def show_statement_and_agent(step: int, stmt: Statement, state: AgentState, width=48, file=None):
    stmt_str = format_statement(stmt)
    if len(stmt_str) > width:
        stmt_str = stmt_str[:width-2] + ' …'
    print(f"\033[90m{step:>4} :\033[0m \033[90mL{stmt.line:<4}\033[0m {stmt_str:<{width}}"
          f" \033[36m <=> \033[0m {format_agent(state)}", file=file or sys.stdout)


def show_canvas(canvas, width=64, file=None):
    """Print a downsampled preview of the canvas using 24-bit ANSI background colors."""
    step = max(1, -(-canvas.size // width))
    for y in range(0, canvas.size, step * 2):
        row = []
        for x in range(0, canvas.size, step):
            top = canvas.color_at(x, y)
            bottom = canvas.color_at(x, min(y + step, canvas.size - 1))
            r0, g0, b0 = (255, 255, 255) if top[3] == 0 else top[:3]
            r1, g1, b1 = (255, 255, 255) if bottom[3] == 0 else bottom[:3]
            row.append(f"\033[38;2;{r0};{g0};{b0}m\033[48;2;{r1};{g1};{b1}m▀")
        print(''.join(row) + '\033[0m', file=file or sys.stdout)
