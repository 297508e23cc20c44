"""
Piet navigation: direction pointer, codel chooser and the move protocol

The navigator owns (position, DP, CC). Each step leaves the current region
through its exit codel; a blocked step runs the recovery protocol, which
alternately toggles CC and rotates DP. If all 8 DP/CC states are blocked the
program halts.
"""

import logging
from enum import Enum
from typing import NamedTuple, Optional

from piet_colors import BLACK, WHITE, PietColor, classify
from piet_errors import UnrecognizedColor
from piet_grid import Coord, Grid, Region
from piet_trace import emit, get_logger


class Direction(Enum):
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    NORTH = (0, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def rotate(self, times: int = 1) -> 'Direction':
        """Rotate clockwise by 90 degrees, `times` times."""
        order = list(Direction)
        return order[(order.index(self) + times) % 4]

    def __str__(self):
        return self.name.lower()


class CodelChooser(Enum):
    LEFT = 'left'
    RIGHT = 'right'

    def toggle(self) -> 'CodelChooser':
        return CodelChooser.RIGHT if self is CodelChooser.LEFT else CodelChooser.LEFT

    def __str__(self):
        return self.value


class Transition(NamedTuple):
    """Successful move from one codel into a differently colored one."""
    source: Coord
    target: Coord
    old_color: PietColor
    new_color: PietColor
    block_size: int


class Navigator:
    def __init__(self, grid: Grid, logger: Optional[logging.Logger] = None):
        self.grid = grid
        self.log = get_logger(logger)
        self.position = grid.origin
        self.dp = Direction.EAST
        self.cc = CodelChooser.LEFT

    def __repr__(self):
        return f"Navigator(pos={self.position}, dp={self.dp}, cc={self.cc})"

    def classify_at(self, coord: Coord) -> PietColor:
        try:
            return classify(self.grid.color_at(coord))
        except UnrecognizedColor as e:
            raise UnrecognizedColor(e.color, coord)

    def exit_codel(self, region: Region) -> Coord:
        """
        Select the codel a region is left through.

        Among codels furthest in the DP direction, take the one furthest
        towards the CC side (left/right of DP, with y growing downwards).
        """
        dx, dy = self.dp.dx, self.dp.dy
        cc_vec = (dy, -dx) if self.cc is CodelChooser.LEFT else (-dy, dx)

        return max(region.codels, key=lambda p: (p[0]*dx + p[1]*dy,
                                                  p[0]*cc_vec[0] + p[1]*cc_vec[1]))

    def can_move_to(self, coord: Coord) -> bool:
        return self.grid.contains(coord) and self.classify_at(coord) is not BLACK

    def _attempt(self) -> Optional[Transition]:
        """Try to move under the current DP/CC; None if blocked."""
        here = self.classify_at(self.position)
        dx, dy = self.dp.dx, self.dp.dy

        if here is WHITE:
            # Glide through contiguous white codels
            x, y = self.position
            while self.grid.contains((x + dx, y + dy)) and \
                  self.classify_at((x + dx, y + dy)) is WHITE:
                x, y = x + dx, y + dy
            self.position = (x, y)
            source, block_size = (x, y), 1
        else:
            region = self.grid.region_at(self.position)
            source, block_size = self.exit_codel(region), region.size

        target = (source[0] + dx, source[1] + dy)
        if not self.can_move_to(target):
            return None

        self.position = target
        return Transition(source, target, here, self.classify_at(target), block_size)

    def step(self) -> Optional[Transition]:
        """
        Perform one move, recovering from blocked moves.

        Returns the transition made, or None when every DP/CC combination is
        blocked (the program halts). DP and CC are then back at their values
        from before the step. When halting from a white codel the position may
        have moved: blocked glides keep the furthest white codel reached.
        """
        before = (self.position, self.dp, self.cc)
        transition = self._attempt()

        toggle_cc = True
        while transition is None:
            if toggle_cc:
                self.cc = self.cc.toggle()
            else:
                self.dp = self.dp.rotate()
            toggle_cc = not toggle_cc
            emit(self.log, 'recover', pos=self.position, dp=self.dp, cc=self.cc)

            if self.dp is before[1] and self.cc is before[2]:
                emit(self.log, 'halt', pos=self.position, dp=self.dp, cc=self.cc)
                return None
            transition = self._attempt()

        emit(self.log, 'step', before=before[0], dp_before=before[1], cc_before=before[2],
             after=self.position, dp=self.dp, cc=self.cc,
             old=transition.old_color, new=transition.new_color)
        return transition

    def rotate_dp(self, times: int) -> None:
        self.dp = self.dp.rotate(times)

    def toggle_cc(self) -> None:
        self.cc = self.cc.toggle()
