## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Point
from .palette import parse_color
from .errors import WalleSemanticError, WalleExecutionError


def clamp_direction(value: int) -> int:
    return max(-1, min(1, value))

def _target(it: "Interpreter", dx: int, dy: int, distance: int) -> Point:
    """Point reached by moving `distance` steps along a direction clamped to the eight neighbors."""
    target = it.position + Point(clamp_direction(dx), clamp_direction(dy)).scaled(distance)
    it.require_in_bounds(target)
    return target


## COMMANDS
def cmd_spawn(it: "Interpreter", x: int, y: int) -> None:
    """Places the agent on the canvas, allowed exactly once per run."""
    if it.spawned:
        raise WalleSemanticError("Spawn can only be called once per run.")
    it.require_in_bounds(Point(x, y))
    it.position, it.spawned = Point(x, y), True

def cmd_color(it: "Interpreter", name: str) -> None:
    it.color = parse_color(name)

def cmd_size(it: "Interpreter", n: int) -> None:
    """Brush thickness is always odd, even sizes round down."""
    if n <= 0:
        raise WalleSemanticError(f"Brush size must be positive, got {n}.")
    it.brush_size = n - 1 if n % 2 == 0 else n

def cmd_draw_line(it: "Interpreter", dx: int, dy: int, length: int) -> None:
    end = _target(it, dx, dy, length)
    it.canvas.draw_line(it.position, end, it.brush_size, it.color)
    it.position = end

def cmd_draw_circle(it: "Interpreter", dx: int, dy: int, radius: int) -> None:
    center = _target(it, dx, dy, radius)
    it.canvas.draw_circle(center, radius, it.brush_size, it.color)
    it.position = center

def cmd_draw_rectangle(it: "Interpreter", dx: int, dy: int, distance: int, width: int, height: int) -> None:
    center = _target(it, dx, dy, distance)
    it.canvas.draw_rectangle_border(center, width, height, it.brush_size, it.color)
    it.position = center

def cmd_fill(it: "Interpreter") -> None:
    if not it.spawned:
        raise WalleSemanticError("Fill requires the agent to be placed with Spawn first.")
    it.canvas.flood_fill(it.position, it.color)


## QUERY FUNCTIONS
def fn_get_actual_x(it: "Interpreter") -> int: return it.position.x
def fn_get_actual_y(it: "Interpreter") -> int: return it.position.y
def fn_get_canvas_size(it: "Interpreter") -> int: return it.canvas.size
def fn_is_brush_size(it: "Interpreter", size: int) -> int: return int(it.brush_size == size)
def fn_is_brush_color(it: "Interpreter", color: str) -> int: return int(it.color == parse_color(color))

def fn_get_color_count(it: "Interpreter", color: str, x1: int, y1: int, x2: int, y2: int) -> int:
    return it.canvas.count_color_in_box(parse_color(color), (x1, y1), (x2, y2))

def fn_is_canvas_color(it: "Interpreter", color: str, vertical: int, horizontal: int) -> int:
    target = it.position + Point(horizontal, vertical)
    if not it.canvas.is_in_bounds(*target):
        raise WalleExecutionError(f"Position ({target.x}, {target.y}) is outside the canvas.")
    return int(it.canvas.color_at(*target) == parse_color(color))
