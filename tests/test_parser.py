## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys

import pytest

from walle.lexer import tokenize
from walle.parser import parse, Parser, MAX_ERRORS
from walle.tokens import TokenKind as K
from walle.nodes import Program, Command, Assignment, Label, Jump, Literal, Variable, Binary, Call
from walle.errors import WalleSyntaxError, WalleSemanticError


def _parse(source: str) -> Program:
    """Helper: parse source and require that no diagnostics were recorded."""
    program = parse(tokenize(source))
    assert program.diagnostics == []
    return program

def _expr(source: str):
    [stmt] = _parse(f"value <- {source}").statements
    return stmt.expr


def test_empty_program_is_valid():
    assert len(_parse("")) == 0
    assert len(_parse("\n\n\n")) == 0


def test_assignment_with_precedence():
    [stmt] = _parse("x <- 1 + 2 * 3").statements
    assert isinstance(stmt, Assignment) and stmt.variable == "x"
    expr = stmt.expr
    assert expr.operator is K.PLUS
    assert expr.left == Literal(1, line=1)
    assert expr.right.operator is K.MULTIPLY


def test_logical_operators_bind_loosest():
    expr = _expr("1 == 1 && 2 < 3 || 0 > 1")
    assert expr.operator is K.OR
    assert expr.left.operator is K.AND
    assert expr.left.left.operator is K.EQUAL
    assert expr.left.right.operator is K.LESS


def test_equality_is_looser_than_comparison():
    expr = _expr("1 < 2 == 3 > 4")
    assert expr.operator is K.EQUAL
    assert expr.left.operator is K.LESS and expr.right.operator is K.GREATER


def test_binary_chains_are_left_associative():
    expr = _expr("10 - 3 - 2")
    assert expr.operator is K.MINUS
    assert expr.left.operator is K.MINUS
    assert expr.right == Literal(2, line=1)

    power = _expr("2 ** 3 ** 2")
    assert power.left.operator is K.POWER
    assert power.right == Literal(2, line=1)


def test_unary_minus_desugars_to_subtraction_from_zero():
    expr = _expr("-5")
    assert isinstance(expr, Binary)
    assert expr.left == Literal(0, line=1)
    assert expr.operator is K.MINUS
    assert expr.right == Literal(5, line=1)


def test_parentheses_override_precedence():
    expr = _expr("(1 + 2) * 3")
    assert expr.operator is K.MULTIPLY
    assert expr.left.operator is K.PLUS


def test_variables_and_strings():
    assert _expr("radio") == Variable("radio", line=1)
    assert _expr('"Blue"') == Literal("Blue", line=1)


def test_command_statement():
    [stmt] = _parse("DrawLine(1, 0, 10)").statements
    assert isinstance(stmt, Command)
    assert stmt.name == "DrawLine"
    assert [a.value for a in stmt.args] == [1, 0, 10]
    assert stmt.line == 1


def test_command_names_are_canonical_regardless_of_case():
    [stmt] = _parse("drawline(1, 0, 1)").statements
    assert stmt.name == "DrawLine"


def test_command_without_arguments():
    [stmt] = _parse("Fill()").statements
    assert stmt == Command("Fill", [], line=1)


def test_jump_statement():
    [stmt] = _parse("GoTo[loop](x > 1)").statements
    assert isinstance(stmt, Jump)
    assert stmt.label == "loop"
    assert stmt.condition.operator is K.GREATER


def test_label_is_a_lone_identifier_on_its_line():
    program = _parse("start\nx <- 1\nend")
    assert program.statements[0] == Label("start", line=1)
    assert program.statements[2] == Label("end", line=3)


def test_query_function_calls():
    assert _expr("GetActualX()") == Call("GetActualX", [], line=1)
    call = _expr('getcolorcount("Red", 0, 0, 9, 9)')
    assert call.name == "GetColorCount"
    assert len(call.args) == 5


def test_unknown_identifier_call_parses_as_call():
    call = _expr("Foo(1)")
    assert isinstance(call, Call) and call.name == "Foo"


def test_statement_lines():
    program = _parse("\n\nSpawn(0, 0)\n\nColor(\"Red\")")
    assert [s.line for s in program.statements] == [3, 5]


def test_error_recovery_collects_one_diagnostic_per_bad_line():
    source = 'Spawn(0, 0\nx <- \nColor("Red")\nfoo bar\n'
    program = parse(tokenize(source))
    assert [s.name for s in program.statements] == ["Color"]
    assert [e.line for e in program.diagnostics] == [1, 2, 4]
    assert all(isinstance(e, WalleSyntaxError) for e in program.diagnostics)


def test_no_valid_instruction_mentions_token():
    program = parse(tokenize("5 + 5"))
    [err] = program.diagnostics
    assert "No valid instruction" in err.message
    assert "'5' (number)" in err.context


def test_command_errors_carry_command_name():
    [err] = parse(tokenize("Spawn 0, 0)")).diagnostics
    assert "command Spawn" in err.context


def test_argument_errors_carry_argument_index():
    [err] = parse(tokenize("DrawLine(1, *, 3)")).diagnostics
    assert "argument 2" in err.context


def test_malformed_goto_reports_expected_shape():
    [err] = parse(tokenize("GoTo loop (1 == 1)")).diagnostics
    assert err.message.startswith("Malformed GoTo")
    assert "GoTo[label](condition)" in err.context


def test_statement_must_end_at_newline():
    program = parse(tokenize("Fill() 5\nFill()"))
    [err] = program.diagnostics
    assert "end of line" in err.message
    assert len(program.statements) == 1


def test_malformed_call_arguments_are_semantic():
    [err] = parse(tokenize("n <- GetActualX(")).diagnostics
    assert isinstance(err, WalleSemanticError)
    assert "function GetActualX" in err.context


def test_invalid_primary_expression():
    [err] = parse(tokenize("x <- )")).diagnostics
    assert "Invalid primary" in err.message


def test_parsing_stops_after_too_many_errors():
    source = "\n".join(["5 5"] * (MAX_ERRORS + 10))
    program = parse(tokenize(source))
    assert len(program.diagnostics) == MAX_ERRORS


def test_parser_accepts_tokens_without_eof():
    tokens = tokenize("Fill()")[:-1]
    program = Parser(tokens).parse()
    assert len(program.statements) == 1


def test_deeply_nested_expression_is_a_diagnostic():
    depth = sys.getrecursionlimit()
    program = parse(tokenize("Fill()\nx <- " + "(" * depth + "1" + ")" * depth + "\nFill()"))
    [err] = program.diagnostics
    assert isinstance(err, WalleSyntaxError)
    assert "nested too deeply" in err.message
    assert err.line == 2
    assert len(program.statements) == 2


def test_assign_inside_condition_hints_at_spacing():
    [err] = parse(tokenize("GoTo[loop](a<-5)")).diagnostics
    assert "a < -5" in err.context
