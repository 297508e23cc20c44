"""
Piet program grid and color regions

A grid is an immutable 2D array of exact RGB codel colors. Regions (color
blocks) are maximal 4-connected sets of codels with identical RGB value.
"""

from collections import deque
from typing import Dict, FrozenSet, NamedTuple, Tuple

import numpy as np
from PIL import Image

from piet_colors import RGB


Coord = Tuple[int, int]

# Orthogonal neighbor offsets: right, down, left, up
NEIGHBOR_VECS = [(1,0), (0,1), (-1,0), (0,-1)]


class Bounds(NamedTuple):
    """Inclusive bounding rectangle of a region."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int


class Region(NamedTuple):
    color: RGB
    codels: FrozenSet[Coord]
    bounds: Bounds

    @property
    def size(self) -> int:
        return len(self.codels)

    def __contains__(self, coord) -> bool:
        return coord in self.codels


def load_image(path: str) -> Image.Image:
    """Load image file and convert to RGB."""
    try:
        return Image.open(path).convert('RGB')
    except FileNotFoundError:
        raise FileNotFoundError(f"Image file not found: {path}")
    except Exception as e:
        raise ValueError(f"Failed to open image: {e}")


class Grid:
    """Read-only codel grid addressed by (x, y), origin at the top-left."""

    def __init__(self, pixels):
        arr = np.array(pixels, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Expected (height, width, 3) RGB data, got shape {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("Empty program grid")

        arr.setflags(write=False)
        self._pixels = arr
        self.height, self.width = arr.shape[:2]
        self._regions: Dict[Coord, Region] = {}

    @classmethod
    def from_image(cls, img: Image.Image, codel_size: int = 1) -> 'Grid':
        """
        Build a grid from a decoded image.

        Each codel_size x codel_size pixel block is one codel, sampled at its
        top-left pixel. Incomplete blocks at the right/bottom edges are dropped.
        """
        if codel_size < 1:
            raise ValueError(f"Codel size must be >= 1, got {codel_size}")

        arr = np.asarray(img.convert('RGB'))
        h = arr.shape[0] - arr.shape[0] % codel_size
        w = arr.shape[1] - arr.shape[1] % codel_size
        return cls(arr[:h:codel_size, :w:codel_size])

    @property
    def origin(self) -> Coord:
        return (0, 0)

    def contains(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def color_at(self, coord: Coord) -> RGB:
        x, y = coord
        r, g, b = self._pixels[y, x]
        return (int(r), int(g), int(b))

    def neighbors(self, coord: Coord):
        """Get in-bounds orthogonal neighbors"""
        x, y = coord
        for dx, dy in NEIGHBOR_VECS:
            n = (x + dx, y + dy)
            if self.contains(n):
                yield n

    def region_at(self, coord: Coord) -> Region:
        """Region containing coord, memoised for every member codel."""
        region = self._regions.get(coord)
        if region is None:
            region = locate_region(self, coord)
            for codel in region.codels:
                self._regions[codel] = region
        return region

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"


def locate_region(grid: Grid, start: Coord) -> Region:
    """Flood fill the maximal 4-connected same-color region around start."""
    if not grid.contains(start):
        raise IndexError(f"Coordinate outside grid: {start}")

    color = grid.color_at(start)
    queue = deque([start])
    seen = {start}

    while queue:
        codel = queue.popleft()
        for n in grid.neighbors(codel):
            if n not in seen and grid.color_at(n) == color:
                seen.add(n)
                queue.append(n)

    xs = [x for x, _ in seen]
    ys = [y for _, y in seen]
    bounds = Bounds(min(xs), min(ys), max(xs), max(ys))
    return Region(color, frozenset(seen), bounds)
