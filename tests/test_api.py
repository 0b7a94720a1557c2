## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import walle.api as W


def test_run_string():
    state = W.run('Spawn(3, 4)\nColor("Blue")\nDrawLine(1, 1, 2)')
    assert state.position == W.Point(5, 6)
    assert state.spawned


def test_state_after_run():
    W.run("Spawn(1, 2)\nSize(5)")
    assert W.state.brush_size == 5


def test_try_run_through_module():
    state, errors = W.try_run('Color("Nope")')
    assert state is None
    assert errors[0][0] == "semantic"


def test_errors_are_exported():
    assert issubclass(W.WalleSemanticError, W.WalleError)


def test_register_function_and_run():
    def fn_twice(it, n: int) -> int: return 2 * n
    W.register_function("Twice", fn_twice)
    W.run("x <- Twice(4)")
    assert W.interpreter.variables['x'] == 8
