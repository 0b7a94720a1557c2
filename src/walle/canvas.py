## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# walle — Raster engine driven by the interpreter: a square buffer of RGBA colors.
#

from collections import deque
from typing import Callable

from .types import Color, Point
from .palette import WHITE
from .errors import WalleSemanticError


MIN_SIZE = 16
MAX_SIZE = 1024
DEFAULT_SIZE = 200


def check_size(size: int) -> int:
    if not isinstance(size, int) or isinstance(size, bool) or not (MIN_SIZE <= size <= MAX_SIZE):
        raise WalleSemanticError(f"Canvas size must be between {MIN_SIZE} and {MAX_SIZE}, got {size}.")
    return size


class Canvas:
    """Square grid of colors, indexed as `pixels[y][x]`.

    Bounds are enforced per pixel: drawing operations silently skip pixels that fall outside
    the grid.  Checking that a commanded endpoint or center is valid is the caller's job.
    """

    def __init__(self, size: int = DEFAULT_SIZE, background: Color = WHITE):
        self.size = check_size(size)
        self.background = background
        self.pixels: list[list[Color]] = self._blank(self.size)
        self.listeners: list[Callable[["Canvas"], None]] = []

    def _blank(self, size: int) -> list[list[Color]]:
        return [[self.background] * size for _ in range(size)]

    # Notifications ───────────────────────────────────────────────────────────────────────────
    def subscribe(self, callback: Callable[["Canvas"], None]) -> None:
        self.listeners.append(callback)

    def unsubscribe(self, callback: Callable[["Canvas"], None]) -> None:
        self.listeners.remove(callback)

    def _changed(self) -> None:
        for callback in self.listeners:
            callback(self)

    # Queries ─────────────────────────────────────────────────────────────────────────────────
    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def color_at(self, x: int, y: int) -> Color:
        return self.pixels[y][x]

    def count_color_in_box(self, color: Color, corner1: tuple[int, int], corner2: tuple[int, int]) -> int:
        """Count pixels of `color` in the inclusive box spanned by two corners, in any order."""
        x0, x1 = sorted((corner1[0], corner2[0]))
        y0, y1 = sorted((corner1[1], corner2[1]))
        x0, y0 = max(x0, 0), max(y0, 0)
        x1, y1 = min(x1, self.size - 1), min(y1, self.size - 1)
        return sum(row[x0:x1+1].count(color) for row in self.pixels[y0:y1+1]) if x0 <= x1 else 0

    # Lifetime ────────────────────────────────────────────────────────────────────────────────
    def resize(self, size: int) -> None:
        self.size = check_size(size)
        self.pixels = self._blank(self.size)
        self._changed()

    def clear(self) -> None:
        self.pixels = self._blank(self.size)
        self._changed()

    # Drawing ─────────────────────────────────────────────────────────────────────────────────
    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if self.is_in_bounds(x, y):
            self.pixels[y][x] = color

    def stamp(self, center: tuple[int, int], radius: int, color: Color) -> None:
        """Paint a filled disk of `radius` centered on a point, the brush used by lines and circles."""
        cx, cy = center
        r2 = radius * radius
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if dx * dx + dy * dy <= r2:
                    self.set_pixel(cx + dx, cy + dy, color)

    def draw_line(self, p0: tuple[int, int], p1: tuple[int, int], width: int, color: Color) -> Point:
        (x, y), (x1, y1) = p0, p1
        dx, dy = abs(x1 - x), abs(y1 - y)
        sx = 1 if x < x1 else -1
        sy = 1 if y < y1 else -1
        err, radius = dx - dy, width // 2

        while True:
            self.stamp((x, y), radius, color)
            if x == x1 and y == y1: break
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x += sx
            if e2 < dx:
                err += dx
                y += sy

        self._changed()
        return Point(x1, y1)

    def draw_circle(self, center: tuple[int, int], radius: int, width: int, color: Color) -> None:
        cx, cy = center
        x, y, decision = radius, 0, 1 - radius
        brush = width // 2

        while x >= y:
            for px, py in ((x, y), (-x, y), (x, -y), (-x, -y), (y, x), (-y, x), (y, -x), (-y, -x)):
                self.stamp((cx + px, cy + py), brush, color)
            y += 1
            if decision <= 0:
                decision += 2 * y + 1
            else:
                x -= 1
                decision += 2 * (y - x) + 1

        self._changed()

    def draw_rectangle_border(self, center: tuple[int, int], w: int, h: int, stroke_width: int, color: Color) -> None:
        """Four straight strokes around the box centered on `center`, growing outwards; never filled."""
        cx, cy = center
        hw, hh = w // 2, h // 2

        for x in range(cx - hw, cx + hw + 1):
            for k in range(stroke_width):
                self.set_pixel(x, cy - hh - k, color)
                self.set_pixel(x, cy + hh + k, color)
        for y in range(cy - hh, cy + hh + 1):
            for k in range(stroke_width):
                self.set_pixel(cx - hw - k, y, color)
                self.set_pixel(cx + hw + k, y, color)

        self._changed()

    def flood_fill(self, start: tuple[int, int], color: Color) -> int:
        """Breadth-first fill over 4-connected pixels sharing the start color; returns pixels painted."""
        sx, sy = start
        if not self.is_in_bounds(sx, sy): return 0
        target = self.pixels[sy][sx]
        if target == color: return 0

        painted = 0
        queue = deque([(sx, sy)])
        self.pixels[sy][sx] = color
        while queue:
            x, y = queue.popleft()
            painted += 1
            for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
                # Recoloring on enqueue marks the pixel as visited.
                if self.is_in_bounds(nx, ny) and self.pixels[ny][nx] == target:
                    self.pixels[ny][nx] = color
                    queue.append((nx, ny))

        self._changed()
        return painted
