"""Shared grid builders for the Piet tests."""

import io

import pytest

from piet_colors import BLACK_RGB, HUES, LIGHTNESSES, WHITE_RGB, rgb_for
from piet_grid import Grid


# Two-letter codel tokens: lightness initial + hue initial ("nr" = normal red),
# plus "KK" for black and "WW" for white.
TOKENS = {'KK': BLACK_RGB, 'WW': WHITE_RGB}
for _h, _hue in enumerate(HUES):
    for _l, _light in enumerate(LIGHTNESSES):
        TOKENS[_light[0] + _hue[0]] = rgb_for(_h, _l)


def grid_from_rows(*rows):
    return Grid([[TOKENS[token] for token in row.split()] for row in rows])


@pytest.fixture
def make_grid():
    """Build a Grid from rows of space separated codel tokens."""
    return grid_from_rows


@pytest.fixture
def output():
    return io.BytesIO()
