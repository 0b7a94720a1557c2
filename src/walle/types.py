## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import NamedTuple
from dataclasses import dataclass


# Runtime values form a closed union; `bool` must always be tested before `int`.
Value = int | bool | str

Color = tuple[int, int, int, int]

TYPE_NAMES: dict[type, str] = {bool: 'Bool', int: 'Int', str: 'String'}


class Point(NamedTuple):
    x: int
    y: int

    def __add__(self, other):
        return Point(self.x + other[0], self.y + other[1])

    def scaled(self, factor: int) -> "Point":
        return Point(self.x * factor, self.y * factor)


def type_of(value: Value) -> type:
    """Exact tag of a runtime value, never confusing `bool` with `int`."""
    for tag in (bool, int, str):
        if isinstance(value, tag):
            return tag
    raise TypeError(f"Not a runtime value: {value!r}")

def type_name(value: Value | type) -> str:
    tag = value if isinstance(value, type) else type_of(value)
    return TYPE_NAMES.get(tag, tag.__name__)

def is_value(value, tag: type) -> bool:
    return type(value) is tag


@dataclass
class AgentState:
    position: Point
    color: Color
    brush_size: int
    spawned: bool
