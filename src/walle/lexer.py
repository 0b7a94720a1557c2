## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark

from .tokens import Token, TokenKind, KEYWORDS
from .errors import WalleSyntaxError


GRAMMAR = r"""
start: token*
token: NEWLINE | LPAREN | RPAREN | LBRACKET | RBRACKET | COMMA
     | ASSIGN | POWER | MULTIPLY | PLUS | MINUS | DIVIDE | MODULO
     | EQUAL | GREATER_EQUAL | GREATER | LESS_EQUAL | LESS | AND | OR
     | STRING | BAD_IDENTIFIER | NUMBER | IDENTIFIER

// STRUCTURE
NEWLINE: "\n"
LPAREN: "("
RPAREN: ")"
LBRACKET: "["
RBRACKET: "]"
COMMA: ","

// OPERATORS
ASSIGN: "<-" | "-<"
POWER: "**"
MULTIPLY: "*"
PLUS: "+"
MINUS: "-"
DIVIDE: "/"
MODULO: "%"
EQUAL: "=="
GREATER_EQUAL: ">="
GREATER: ">"
LESS_EQUAL: "<="
LESS: "<"
AND: "&&"
OR: "||"

// LITERALS
STRING: /"[^"\n]*"/
BAD_IDENTIFIER.3: /\d+[^\W\d][\w.\-]*/
NUMBER.2: /\d+/
IDENTIFIER.1: /[^\W\d_][\w.\-]*/

// WHITESPACE
WS: /[ \t\r]+/
%ignore WS
"""

_LEXER = lark.Lark(GRAMMAR, parser="lalr", lexer="basic")


def _unexpected_character(exc: lark.exceptions.UnexpectedCharacters, source: str) -> WalleSyntaxError:
    char = exc.char if exc.char is not None else source[exc.pos_in_stream]
    if char == '"':
        return WalleSyntaxError("Unterminated string literal.", line=exc.line, context=f"column {exc.column}")
    if char == '=':
        return WalleSyntaxError("Bare `=` is not an operator, use `==` to compare or `<-` to assign.",
                                line=exc.line, context=f"column {exc.column}")
    return WalleSyntaxError(f"Unexpected character `{char}`.", line=exc.line, context=f"column {exc.column}")


def _convert(tok: lark.Token) -> Token:
    match tok.type:
        case 'NUMBER':
            return Token(TokenKind.NUMBER, tok.value, int(tok.value), tok.line)
        case 'STRING':
            return Token(TokenKind.STRING, tok.value, tok.value[1:-1], tok.line)
        case 'IDENTIFIER':
            # Keyword lookup is case-insensitive, but the lexeme keeps its spelling.
            kind = KEYWORDS.get(tok.value.lower(), TokenKind.IDENTIFIER)
            return Token(kind, tok.value, tok.value if kind is TokenKind.IDENTIFIER else None, tok.line)
        case 'BAD_IDENTIFIER':
            raise WalleSyntaxError(f"Invalid identifier `{tok.value}`, names cannot start with a digit.",
                                   line=tok.line, context=f"column {tok.column}")
        case _:
            return Token(TokenKind[tok.type], tok.value, None, tok.line)


def tokenize(source: str) -> list[Token]:
    """Convert the whole source into a flat token list terminated by `EOF`; fails on the first bad character."""
    tokens, line = [], 1
    try:
        for tok in _LEXER.lex(source):
            tokens.append(_convert(tok))
            line = tok.end_line
    except lark.exceptions.UnexpectedCharacters as exc:
        raise _unexpected_character(exc, source) from None
    tokens.append(Token(TokenKind.EOF, "", None, line))
    return tokens


def untokenize(tokens: list[Token]) -> str:
    out, fresh_line = [], True
    for tok in tokens:
        if tok.kind is TokenKind.EOF: break
        if tok.kind is TokenKind.NEWLINE:
            out.append('\n')
            fresh_line = True
            continue
        if not fresh_line: out.append(' ')
        out.append(tok.lexeme)
        fresh_line = False
    return ''.join(out)
