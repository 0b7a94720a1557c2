## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from pathlib import Path

import pytest

from walle.runtime import Runtime, default_canvas_size
from walle.canvas import Canvas, DEFAULT_SIZE
from walle.types import Point
from walle.errors import WalleError, WalleParseErrors, WalleSyntaxError, WalleSemanticError, WalleExecutionError


def example(name: str) -> str:
    return (Path(__file__).parent / name).read_text()


def test_parse_collects_every_error():
    rt = Runtime(Canvas(20))
    with pytest.raises(WalleParseErrors) as exc:
        rt.parse(example("error-syntax.pw"))
    assert [e.line for e in exc.value.errors] == [2, 3]
    assert exc.value.line == 2
    assert str(exc.value).startswith("[line 2] 2 error(s) found while parsing")


def test_parse_errors_are_syntax_errors():
    assert issubclass(WalleParseErrors, WalleSyntaxError)
    assert issubclass(WalleSyntaxError, SyntaxError)
    assert issubclass(WalleSemanticError, ValueError)
    assert issubclass(WalleExecutionError, RuntimeError)


def test_try_run_success():
    state, errors = Runtime(Canvas(20)).try_run("Spawn(3, 4)")
    assert errors == []
    assert state.position == Point(3, 4)


def test_try_run_reports_parse_errors_as_tuples():
    state, errors = Runtime(Canvas(20)).try_run(example("error-syntax.pw"))
    assert state is None
    assert [(kind, line) for kind, line, _, _ in errors] == [("syntax", 2), ("syntax", 3)]


def test_try_run_reports_semantic_errors():
    _, [(kind, line, message, context)] = Runtime(Canvas(20)).try_run(example("error-semantic.pw"))
    assert (kind, line) == ("semantic", 2)
    assert "Pink" in message
    assert "Red" in context


def test_try_run_reports_execution_errors():
    _, [(kind, line, message, _)] = Runtime(Canvas(20)).try_run(example("error-execution.pw"))
    assert (kind, line, message) == ("execution", 3, "Division by zero.")


def test_try_run_reports_lexer_errors():
    _, [(kind, line, _, _)] = Runtime(Canvas(20)).try_run('Spawn(0, 0)\nColor("Red)')
    assert (kind, line) == ("syntax", 2)


def test_error_string_format():
    err = WalleSemanticError("Unknown color `Pink`.", line=3, context="expected a color")
    assert str(err) == "[line 3] Unknown color `Pink`.\ncontext: expected a color"
    assert str(WalleError("plain")) == "plain"


def test_canvas_size_from_environment(monkeypatch):
    monkeypatch.delenv("WALLE_CANVAS_SIZE", raising=False)
    assert default_canvas_size() == DEFAULT_SIZE
    monkeypatch.setenv("WALLE_CANVAS_SIZE", "64")
    assert Runtime().canvas.size == 64


@pytest.mark.parametrize("value", ["abc", "8", "4096"])
def test_invalid_canvas_size_from_environment(monkeypatch, value):
    monkeypatch.setenv("WALLE_CANVAS_SIZE", value)
    with pytest.raises(WalleSemanticError):
        default_canvas_size()


def test_resize_and_clear():
    rt = Runtime(Canvas(20))
    rt.run('Spawn(0, 0)\nColor("Red")\nDrawLine(1, 0, 5)')
    rt.clear()
    assert rt.canvas.count_color_in_box(rt.canvas.background, (0, 0), (19, 19)) == 400
    rt.resize(32)
    rt.run("x <- GetCanvasSize()")
    assert rt.interpreter.variables['x'] == 32


def test_strict_variables_can_be_toggled():
    rt = Runtime(Canvas(20))
    assert rt.strict_variables
    rt.strict_variables = False
    rt.run("x <- y")
    assert rt.warnings


def test_run_on_other_canvas():
    rt, other = Runtime(Canvas(20)), Canvas(16)
    rt.run('Spawn(0, 0)\nColor("Red")\nDrawLine(1, 0, 15)', canvas=other)
    assert rt.canvas is not other
    assert other.color_at(15, 0) != other.background


def test_introspection():
    rt = Runtime(Canvas(20))
    assert rt.list_commands() == sorted(["Spawn", "Color", "Size", "DrawLine", "DrawCircle", "DrawRectangle", "Fill"])
    assert "GetColorCount" in rt.list_functions()
    assert len(rt.list_functions()) == 7
    assert [t.kind.name for t in rt.tokenize("Fill()")] == ["FILL", "LPAREN", "RPAREN", "EOF"]
