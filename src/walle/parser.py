## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .tokens import Token, TokenKind, COMMANDS, FUNCTIONS
from .nodes import Program, Statement, Expression, Command, Assignment, Label, Jump, Literal, Variable, Binary, Call
from .errors import WalleError, WalleSyntaxError, WalleSemanticError


MAX_ERRORS = 50

# Binary operator levels, from lowest to highest precedence.
PRECEDENCE = (
    (TokenKind.OR,),
    (TokenKind.AND,),
    (TokenKind.EQUAL,),
    (TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL),
    (TokenKind.PLUS, TokenKind.MINUS),
    (TokenKind.MULTIPLY, TokenKind.DIVIDE, TokenKind.MODULO),
    (TokenKind.POWER,),
)

GOTO_SHAPE = "GoTo[label](condition)"


class Parser:
    """Recursive-descent parser with one token of lookahead, two where statements need it."""

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            line = tokens[-1].line if tokens else 1
            tokens = [*tokens, Token(TokenKind.EOF, "", None, line)]
        self.tokens = tokens
        self.current = 0

    # Helpers ─────────────────────────────────────────────────────────────────────────────────
    def peek(self, offset: int = 0) -> Token:
        return self.tokens[min(self.current + offset, len(self.tokens) - 1)]

    def previous(self) -> Token:
        return self.tokens[max(self.current - 1, 0)]

    def at_end(self) -> bool:
        return self.peek().kind is TokenKind.EOF

    def check(self, *kinds: TokenKind) -> bool:
        return self.peek().kind in kinds

    def advance(self) -> Token:
        tok = self.peek()
        if not self.at_end(): self.current += 1
        return tok

    def match(self, *kinds: TokenKind) -> bool:
        if not self.check(*kinds): return False
        self.advance()
        return True

    def consume(self, kind: TokenKind, message: str, line: int | None = None) -> Token:
        if self.check(kind): return self.advance()
        tok = self.peek()
        context = f"got {tok.describe()}"
        if tok.kind is TokenKind.ASSIGN:
            context += ", `<-` always assigns; write `a < -5` to compare against a negative number"
        raise WalleSyntaxError(message, line=line or tok.line, context=context)

    def synchronize(self) -> None:
        while not self.check(TokenKind.NEWLINE, TokenKind.EOF):
            self.advance()
        self.match(TokenKind.NEWLINE)

    # Program ─────────────────────────────────────────────────────────────────────────────────
    def parse(self) -> Program:
        program = Program()
        while not self.at_end() and len(program.diagnostics) < MAX_ERRORS:
            if self.match(TokenKind.NEWLINE): continue
            start = self.peek()
            try:
                statement = self.statement()
                if not self.match(TokenKind.NEWLINE) and not self.at_end():
                    tok = self.peek()
                    raise WalleSyntaxError("Expected end of line after statement.", line=tok.line,
                                           context=f"got {tok.describe()}")
                program.statements.append(statement)
            except (WalleSyntaxError, WalleSemanticError) as exc:
                program.diagnostics.append(exc)
                self.synchronize()
            except RecursionError:
                program.diagnostics.append(WalleSyntaxError("Expression nested too deeply.", line=start.line))
                self.synchronize()
        return program

    def statement(self) -> Statement:
        tok = self.peek()
        if tok.kind is TokenKind.IDENTIFIER and self.peek(1).kind is TokenKind.ASSIGN:
            return self.assignment()
        if tok.kind is TokenKind.GOTO:
            return self.jump()
        if tok.kind in COMMANDS:
            return self.command()
        if tok.kind is TokenKind.IDENTIFIER and self.peek(1).kind in (TokenKind.NEWLINE, TokenKind.EOF):
            return self.label()
        raise WalleSyntaxError("No valid instruction.", line=tok.line, context=f"unexpected token {tok.describe()}")

    def assignment(self) -> Assignment:
        name = self.consume(TokenKind.IDENTIFIER, "Expected variable name.")
        self.consume(TokenKind.ASSIGN, "Expected `<-` after variable name.", name.line)
        return Assignment(name.lexeme, self.expression(), line=name.line)

    def label(self) -> Label:
        name = self.consume(TokenKind.IDENTIFIER, "Expected label name.")
        return Label(name.lexeme, line=name.line)

    def jump(self) -> Jump:
        goto = self.advance()
        try:
            self.consume(TokenKind.LBRACKET, "Expected `[` after GoTo.", goto.line)
            label = self.consume(TokenKind.IDENTIFIER, "Expected label name.", goto.line)
            self.consume(TokenKind.RBRACKET, "Expected `]` after label name.", goto.line)
            self.consume(TokenKind.LPAREN, "Expected `(` before jump condition.", goto.line)
            condition = self.expression()
            self.consume(TokenKind.RPAREN, "Expected `)` after jump condition.", goto.line)
        except WalleError as exc:
            raise WalleSyntaxError(f"Malformed GoTo: {exc.message}", line=exc.line,
                                   context=f"expected {GOTO_SHAPE}; {exc.context}") from exc
        return Jump(label.lexeme, condition, line=goto.line)

    def command(self) -> Command:
        tok = self.advance()
        name = tok.kind.value
        try:
            self.consume(TokenKind.LPAREN, f"Expected `(` after {name}.", tok.line)
            args = self.arguments()
            self.consume(TokenKind.RPAREN, f"Expected `)` after arguments of {name}.", tok.line)
        except WalleError as exc:
            raise WalleSyntaxError(exc.message, line=exc.line, context=f"command {name}; {exc.context}") from exc
        return Command(name, args, line=tok.line)

    def arguments(self) -> list[Expression]:
        args = []
        if self.check(TokenKind.RPAREN): return args
        while True:
            try:
                args.append(self.expression())
            except WalleError as exc:
                raise WalleSyntaxError(f"Invalid argument: {exc.message}", line=exc.line,
                                       context=f"argument {len(args) + 1}; {exc.context}") from exc
            if not self.match(TokenKind.COMMA): return args

    # Expressions ─────────────────────────────────────────────────────────────────────────────
    def expression(self) -> Expression:
        return self.binary(0)

    def binary(self, level: int) -> Expression:
        if level == len(PRECEDENCE):
            return self.unary()
        expr = self.binary(level + 1)
        while self.check(*PRECEDENCE[level]):
            op = self.advance()
            expr = Binary(expr, op.kind, self.binary(level + 1), line=op.line)
        return expr

    def unary(self) -> Expression:
        if self.check(TokenKind.MINUS):
            op = self.advance()
            return Binary(Literal(0, line=op.line), TokenKind.MINUS, self.unary(), line=op.line)
        return self.primary()

    def primary(self) -> Expression:
        tok = self.peek()
        if tok.kind in (TokenKind.NUMBER, TokenKind.STRING):
            self.advance()
            return Literal(tok.literal, line=tok.line)
        if tok.kind is TokenKind.LPAREN:
            self.advance()
            expr = self.expression()
            self.consume(TokenKind.RPAREN, "Expected `)` after expression.")
            return expr
        if tok.kind in FUNCTIONS or (tok.kind is TokenKind.IDENTIFIER and self.peek(1).kind is TokenKind.LPAREN):
            return self.call()
        if tok.kind is TokenKind.IDENTIFIER:
            self.advance()
            return Variable(tok.lexeme, line=tok.line)
        raise WalleSyntaxError("Invalid primary expression.", line=tok.line, context=f"got {tok.describe()}")

    def call(self) -> Call:
        tok = self.advance()
        name = tok.kind.value if tok.kind in FUNCTIONS else tok.lexeme
        try:
            self.consume(TokenKind.LPAREN, f"Expected `(` after function {name}.", tok.line)
            args = []
            if not self.check(TokenKind.RPAREN):
                args.append(self.expression())
                while self.match(TokenKind.COMMA):
                    args.append(self.expression())
            self.consume(TokenKind.RPAREN, f"Expected `)` after arguments of {name}.", tok.line)
        except WalleError as exc:
            raise WalleSemanticError(exc.message, line=exc.line, context=f"function {name}; {exc.context}") from exc
        return Call(name, args, line=tok.line)


def parse(tokens: list[Token]) -> Program:
    """Build a program from tokens, recovering at each newline; failures end up in `Program.diagnostics`."""
    return Parser(tokens).parse()


def format_error_context(source: str, line: int | None, filename: str = '<input>') -> str:
    lines = source.splitlines()
    if line is None or not (1 <= line <= max(len(lines), 1)):
        return f"\033[97m  File \"{filename}\"\033[0m\n"
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]
    for i in range(start_line, end_line):
        content = lines[i]
        if i + 1 == line:
            result.append(f"\033[97m{i+1:>5} |\033[0m \033[48;5;30m\033[1;97m{content}\033[0m")
        else:
            result.append(f"\033[90m{i+1:>5} |\033[0m {content}")
    return '\n' + '\n'.join(result) + '\n'
