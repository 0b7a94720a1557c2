## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .nodes import Program, Statement, Expression, Command, Assignment, Label, Jump, Literal, Variable, Binary, Call
from .types import Value, Point, AgentState, is_value, type_name
from .canvas import Canvas
from .palette import TRANSPARENT
from .errors import WalleError, WalleSyntaxError, WalleSemanticError, WalleExecutionError
from .builtins import Registry, load_builtins_registry
from .operators import apply_binary
from .validating import get_signature, check_arguments
from .formatting import show_statement_and_agent


class Interpreter:
    """Tree-walking evaluator over a flat statement list, with labels and conditional jumps.

    State is reset at the start of every `execute()`, so one instance runs one program at a time
    and nothing leaks between runs.  The canvas is borrowed for the duration of the call.
    """

    def __init__(self, canvas: Canvas | None = None, registry: Registry | None = None,
                 strict_variables: bool = True, verbosity: int = 0):
        self.canvas = canvas
        self.registry = registry or load_builtins_registry()
        self.strict_variables = strict_variables
        self.verbosity = verbosity
        self.reset()

    def reset(self) -> None:
        self.position = Point(0, 0)
        self.color = TRANSPARENT
        self.brush_size = 1
        self.spawned = False
        self.variables: dict[str, Value] = {}
        self.labels: dict[str, int] = {}
        self.program_counter = 0
        self.warnings: list[str] = []

    @property
    def state(self) -> AgentState:
        return AgentState(self.position, self.color, self.brush_size, self.spawned)

    def require_in_bounds(self, point: Point) -> None:
        if not self.canvas.is_in_bounds(point.x, point.y):
            raise WalleExecutionError(f"Position ({point.x}, {point.y}) is outside the canvas.",
                                      context=f"canvas size is {self.canvas.size}")

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def collect_labels(self, program: Program) -> dict[str, int]:
        labels = {}
        for index, stmt in enumerate(program.statements):
            if not isinstance(stmt, Label): continue
            if stmt.name in labels:
                raise WalleSemanticError(f"Duplicate label `{stmt.name}`.", line=stmt.line,
                                         context=f"first declared on line {program.statements[labels[stmt.name]].line}")
            labels[stmt.name] = index
        return labels

    def execute(self, program: Program, canvas: Canvas | None = None, stats: dict | None = None) -> AgentState:
        if canvas is not None:
            self.canvas = canvas
        if self.canvas is None:
            raise WalleSemanticError("Interpreter needs a canvas to draw on.")

        self.reset()
        self.labels = self.collect_labels(program)
        statements = program.statements

        step = 0
        while self.program_counter < len(statements):
            stmt = statements[self.program_counter]
            if self.verbosity == 2 or (self.verbosity == 1 and isinstance(stmt, (Command, Jump))):
                show_statement_and_agent(step, stmt, self.state)
            step += 1
            try:
                self.program_counter = self.execute_statement(stmt, self.program_counter)
            except WalleError as exc:
                if exc.line is None: exc.line = stmt.line
                raise
            except RecursionError:
                raise WalleExecutionError("Expression nested too deeply.", line=stmt.line) from None

        if stats is not None:
            stats['steps'] = stats.get('steps', 0) + step
        return self.state

    def execute_statement(self, stmt: Statement, pc: int) -> int:
        """Run one statement and return the next value of the program counter."""
        match stmt:
            case Label():
                return pc + 1
            case Jump(label=label, condition=condition):
                if not is_value(taken := self.evaluate(condition), bool):
                    raise WalleExecutionError(f"Jump condition must be Bool, got {type_name(taken)}.",
                                              context=f"GoTo[{label}]")
                if not taken:
                    return pc + 1
                if label not in self.labels:
                    raise WalleSemanticError(f"Undefined label `{label}`.", line=stmt.line)
                return self.labels[label]
            case Assignment(variable=name, expr=expr):
                self.variables[name] = self.evaluate(expr)
                return pc + 1
            case Command():
                self.execute_command(stmt)
                return pc + 1
        raise WalleSemanticError(f"Unrecognized statement `{type(stmt).__name__}`.", line=getattr(stmt, 'line', None))

    def execute_command(self, cmd: Command) -> None:
        if (handler := self.registry.commands.get(cmd.name)) is None:
            raise WalleSyntaxError(f"Unknown command `{cmd.name}`.", line=cmd.line)
        meta = get_signature(handler, cmd.name)
        if len(cmd.args) != meta['arity']:
            raise WalleSyntaxError(f"{cmd.name} expects {meta['arity']} argument(s), got {len(cmd.args)}.",
                                   line=cmd.line, context=f"command {cmd.name}")
        args = [self.evaluate(arg) for arg in cmd.args]
        if (check := check_arguments(meta, args)) and not check[0]:
            raise WalleExecutionError(check[1], line=cmd.line, context=f"command {cmd.name}")
        handler(self, *args)

    # Evaluation ──────────────────────────────────────────────────────────────────────────────
    def evaluate(self, expr: Expression) -> Value:
        match expr:
            case Literal(value=value):
                return value
            case Variable():
                return self.lookup(expr)
            case Binary(left=left, operator=op, right=right):
                lhs, rhs = self.evaluate(left), self.evaluate(right)
                try:
                    return apply_binary(op, lhs, rhs)
                except WalleError as exc:
                    if exc.line is None: exc.line = expr.line
                    raise
            case Call():
                return self.call(expr)
        raise WalleSyntaxError(f"Unsupported expression `{type(expr).__name__}`.", line=getattr(expr, 'line', None))

    def lookup(self, var: Variable) -> Value:
        if var.name in self.variables:
            return self.variables[var.name]
        if self.strict_variables:
            raise WalleSemanticError(f"Undefined variable `{var.name}`.", line=var.line)
        self.warnings.append(f"[line {var.line}] Variable `{var.name}` used before assignment, defaulting to 0.")
        self.variables[var.name] = 0
        return 0

    def call(self, call: Call) -> Value:
        if (fn := self.registry.functions.get(call.name)) is None:
            raise WalleSemanticError(f"Unknown function `{call.name}`.", line=call.line)
        meta = get_signature(fn, call.name)
        if len(call.args) != meta['arity']:
            raise WalleSemanticError(f"{call.name} expects {meta['arity']} argument(s), got {len(call.args)}.",
                                     line=call.line, context=f"function {call.name}")
        args = [self.evaluate(arg) for arg in call.args]
        if (check := check_arguments(meta, args)) and not check[0]:
            raise WalleExecutionError(check[1], line=call.line, context=f"function {call.name}")
        return fn(self, *args)
