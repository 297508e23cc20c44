"""
Piet color classification

The 18 chromatic colors form a 6x3 table: hue (red, yellow, green, cyan,
blue, magenta) by lightness (light, normal, dark). Black and white are the
two remaining colors; anything else is not a Piet color.
"""

from enum import Enum
from typing import NamedTuple, Tuple, Union

from piet_errors import UnrecognizedColor


RGB = Tuple[int, int, int]

# Piet color palette (18 colors), index = hue * 3 + lightness
PIET_PALETTE = {
    (255,192,192):0,  (255,0,0):1,     (192,0,0):2,
    (255,255,192):3,  (255,255,0):4,   (192,192,0):5,
    (192,255,192):6,  (0,255,0):7,     (0,192,0):8,
    (192,255,255):9,  (0,255,255):10,  (0,192,192):11,
    (192,192,255):12, (0,0,255):13,    (0,0,192):14,
    (255,192,255):15, (255,0,255):16,  (192,0,192):17
}

BLACK_RGB = (0, 0, 0)
WHITE_RGB = (255, 255, 255)

HUES = ('red', 'yellow', 'green', 'cyan', 'blue', 'magenta')
LIGHTNESSES = ('light', 'normal', 'dark')

_RGB_BY_INDEX = {index: rgb for rgb, index in PIET_PALETTE.items()}


class Achromatic(Enum):
    BLACK = 'black'
    WHITE = 'white'

    def __str__(self):
        return self.value


BLACK = Achromatic.BLACK
WHITE = Achromatic.WHITE


class Colored(NamedTuple):
    hue: int
    lightness: int

    def __str__(self):
        return f"{LIGHTNESSES[self.lightness]} {HUES[self.hue]}"


PietColor = Union[Achromatic, Colored]


def classify(rgb: RGB) -> PietColor:
    """Map an exact RGB value to BLACK, WHITE or Colored(hue, lightness)."""
    rgb = tuple(rgb)
    if rgb == BLACK_RGB:
        return BLACK
    if rgb == WHITE_RGB:
        return WHITE

    index = PIET_PALETTE.get(rgb)
    if index is None:
        raise UnrecognizedColor(rgb)
    return Colored(index // 3, index % 3)


def rgb_for(hue: int, lightness: int) -> RGB:
    """Exact RGB value of a chromatic color (hue and lightness wrap around)."""
    return _RGB_BY_INDEX[(hue % 6) * 3 + lightness % 3]
