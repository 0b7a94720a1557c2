## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from walle.canvas import Canvas, MIN_SIZE, MAX_SIZE, DEFAULT_SIZE
from walle.palette import RED, BLUE, WHITE
from walle.types import Point
from walle.errors import WalleSemanticError


def painted(canvas: Canvas) -> set[tuple[int, int]]:
    return {(x, y) for y in range(canvas.size) for x in range(canvas.size) if canvas.color_at(x, y) != WHITE}


def test_new_canvas_is_white():
    canvas = Canvas()
    assert canvas.size == DEFAULT_SIZE
    assert canvas.count_color_in_box(WHITE, (0, 0), (DEFAULT_SIZE - 1, DEFAULT_SIZE - 1)) == DEFAULT_SIZE ** 2


@pytest.mark.parametrize("size", [MIN_SIZE - 1, MAX_SIZE + 1, 0, -5])
def test_size_is_bounded(size):
    with pytest.raises(WalleSemanticError):
        Canvas(size)


def test_resize_clears_and_checks_bounds():
    canvas = Canvas(16)
    canvas.set_pixel(3, 3, RED)
    canvas.resize(32)
    assert canvas.size == 32
    assert painted(canvas) == set()
    with pytest.raises(WalleSemanticError):
        canvas.resize(15)
    assert canvas.size == 32


def test_thin_diagonal_line():
    canvas = Canvas(16)
    end = canvas.draw_line((0, 0), (3, 3), 1, RED)
    assert end == Point(3, 3)
    assert painted(canvas) == {(0, 0), (1, 1), (2, 2), (3, 3)}


def test_line_can_go_backwards():
    canvas = Canvas(16)
    canvas.draw_line((6, 2), (2, 2), 1, RED)
    assert painted(canvas) == {(x, 2) for x in range(2, 7)}


def test_thick_line_stamps_a_disk_at_every_point():
    canvas = Canvas(20)
    canvas.draw_line((5, 5), (10, 5), 3, RED)
    assert len(painted(canvas)) == 20
    assert (4, 5) in painted(canvas) and (11, 5) in painted(canvas)
    assert (4, 4) not in painted(canvas)


def test_circle_is_symmetric_and_hollow():
    canvas = Canvas(21)
    canvas.draw_circle((10, 10), 5, 1, BLUE)
    pixels = painted(canvas)
    assert {(15, 10), (5, 10), (10, 15), (10, 5)} <= pixels
    assert (10, 10) not in pixels
    for x, y in pixels:
        assert (20 - x, y) in pixels
        assert (x, 20 - y) in pixels
        assert (y, x) in pixels


def test_rectangle_border_is_not_filled():
    canvas = Canvas(16)
    canvas.draw_rectangle_border((5, 5), 4, 2, 1, RED)
    pixels = painted(canvas)
    assert len(pixels) == 12
    assert (5, 5) not in pixels
    assert {(3, 4), (7, 6)} <= pixels


def test_thick_rectangle_border_grows_outwards():
    canvas = Canvas(16)
    canvas.draw_rectangle_border((8, 8), 4, 4, 2, RED)
    pixels = painted(canvas)
    assert (8, 5) in pixels and (8, 6) in pixels
    assert (8, 7) not in pixels


def test_flood_fill_stops_at_other_colors():
    canvas = Canvas(16)
    canvas.draw_line((0, 8), (15, 8), 1, RED)
    assert canvas.flood_fill((0, 0), BLUE) == 16 * 8
    assert canvas.color_at(0, 15) == WHITE
    assert canvas.flood_fill((0, 0), BLUE) == 0
    assert canvas.flood_fill((-1, 0), BLUE) == 0


def test_flood_fill_is_four_connected():
    canvas = Canvas(16)
    canvas.draw_line((0, 3), (3, 0), 1, RED)
    assert canvas.flood_fill((0, 0), BLUE) == 6


def test_drawing_is_clipped_at_the_edges():
    canvas = Canvas(16)
    canvas.set_pixel(-1, 0, RED)
    canvas.set_pixel(16, 16, RED)
    canvas.draw_circle((0, 0), 4, 5, RED)
    canvas.draw_line((15, 15), (15, 0), 7, RED)
    assert canvas.color_at(0, 0) == WHITE
    assert canvas.color_at(15, 0) == RED


def test_count_box_is_clipped_to_canvas():
    canvas = Canvas(16)
    assert canvas.count_color_in_box(WHITE, (-5, -5), (2, 2)) == 9
    assert canvas.count_color_in_box(WHITE, (20, 20), (30, 30)) == 0


def test_listeners_are_notified_on_change():
    canvas = Canvas(16)
    seen = []
    canvas.subscribe(seen.append)
    canvas.draw_line((0, 0), (1, 0), 1, RED)
    canvas.clear()
    assert seen == [canvas, canvas]
    canvas.unsubscribe(seen.append)
    canvas.resize(20)
    assert len(seen) == 2
