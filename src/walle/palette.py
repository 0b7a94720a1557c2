## walle — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import Color
from .errors import WalleSemanticError


RED: Color = (255, 0, 0, 255)
BLUE: Color = (0, 0, 255, 255)
GREEN: Color = (0, 255, 0, 255)
YELLOW: Color = (255, 255, 0, 255)
ORANGE: Color = (255, 165, 0, 255)
PURPLE: Color = (160, 32, 240, 255)
BLACK: Color = (0, 0, 0, 255)
WHITE: Color = (255, 255, 255, 255)
TRANSPARENT: Color = (0, 0, 0, 0)

COLOR_TABLE: dict[str, Color] = {
    'Red': RED, 'Blue': BLUE, 'Green': GREEN, 'Yellow': YELLOW, 'Orange': ORANGE,
    'Purple': PURPLE, 'Black': BLACK, 'White': WHITE, 'Transparent': TRANSPARENT,
}

_BY_FOLDED_NAME = {name.lower(): color for name, color in COLOR_TABLE.items()}
_HEX_RE = re.compile(r'#([0-9A-Fa-f]{6})([0-9A-Fa-f]{2})?')


def parse_color(name: str) -> Color:
    if (color := _BY_FOLDED_NAME.get(name.lower())) is not None:
        return color
    if m := _HEX_RE.fullmatch(name):
        rgb, alpha = m.group(1), m.group(2) or 'ff'
        return (int(rgb[0:2], 16), int(rgb[2:4], 16), int(rgb[4:6], 16), int(alpha, 16))
    raise WalleSemanticError(f"Unknown color `{name}`.", context=f"expected one of {', '.join(COLOR_TABLE)} or #RRGGBB")


def color_name(color: Color) -> str:
    for name, value in COLOR_TABLE.items():
        if value == color: return name
    return '#' + ''.join(f"{c:02X}" for c in color[:3]) + (f"{color[3]:02X}" if color[3] != 255 else '')
