"""Tests for piet_navigator.py"""

import logging

import pytest

from piet_colors import BLACK, WHITE, Colored
from piet_errors import UnrecognizedColor
from piet_grid import Grid
from piet_navigator import CodelChooser, Direction, Navigator
from piet_trace import TRACE_LOGGER


def trace_events(caplog, name):
    return [r for r in caplog.records if getattr(r, 'event', None) == name]


class TestDirection:
    def test_clockwise_rotation(self):
        assert Direction.EAST.rotate() is Direction.SOUTH
        assert Direction.SOUTH.rotate() is Direction.WEST
        assert Direction.WEST.rotate() is Direction.NORTH
        assert Direction.NORTH.rotate() is Direction.EAST

    def test_rotate_many(self):
        assert Direction.EAST.rotate(4) is Direction.EAST
        assert Direction.WEST.rotate(7) is Direction.SOUTH
        assert Direction.NORTH.rotate(0) is Direction.NORTH

    def test_vectors(self):
        assert (Direction.SOUTH.dx, Direction.SOUTH.dy) == (0, 1)
        assert (Direction.NORTH.dx, Direction.NORTH.dy) == (0, -1)

    def test_codel_chooser_toggle(self):
        assert CodelChooser.LEFT.toggle() is CodelChooser.RIGHT
        assert CodelChooser.RIGHT.toggle() is CodelChooser.LEFT


class TestExitCodel:
    ROWS = (
        "KK nr nr KK",
        "nr nr nr nr",
        "nr nr nr nr",
        "KK nr nr KK",
    )

    @pytest.mark.parametrize("dp, cc, expected", [
        (Direction.EAST, CodelChooser.LEFT, (3, 1)),
        (Direction.EAST, CodelChooser.RIGHT, (3, 2)),
        (Direction.SOUTH, CodelChooser.LEFT, (2, 3)),
        (Direction.SOUTH, CodelChooser.RIGHT, (1, 3)),
        (Direction.WEST, CodelChooser.LEFT, (0, 2)),
        (Direction.WEST, CodelChooser.RIGHT, (0, 1)),
        (Direction.NORTH, CodelChooser.LEFT, (1, 0)),
        (Direction.NORTH, CodelChooser.RIGHT, (2, 0)),
    ])
    def test_tie_break_table(self, make_grid, dp, cc, expected):
        grid = make_grid(*self.ROWS)
        nav = Navigator(grid)
        nav.dp, nav.cc = dp, cc
        assert nav.exit_codel(grid.region_at((1, 1))) == expected


class TestStep:
    def test_initial_state(self, make_grid):
        nav = Navigator(make_grid("nr ny"))
        assert nav.position == (0, 0)
        assert nav.dp is Direction.EAST
        assert nav.cc is CodelChooser.LEFT

    def test_simple_move(self, make_grid):
        nav = Navigator(make_grid(
            "nr nr ny",
            "nr nr KK",
        ))
        transition = nav.step()
        assert transition.source == (1, 0)
        assert transition.target == (2, 0)
        assert transition.old_color == Colored(0, 1)
        assert transition.new_color == Colored(1, 1)
        assert transition.block_size == 4
        assert nav.position == (2, 0)

    def test_recovery_toggles_cc_first(self, make_grid):
        nav = Navigator(make_grid(
            "nr KK",
            "nr ny",
        ))
        transition = nav.step()
        assert transition.target == (1, 1)
        assert nav.dp is Direction.EAST
        assert nav.cc is CodelChooser.RIGHT

    def test_recovery_then_rotates_dp(self, make_grid):
        nav = Navigator(make_grid(
            "nr KK",
            "ny KK",
        ))
        transition = nav.step()
        assert transition.target == (0, 1)
        assert nav.dp is Direction.SOUTH
        assert nav.cc is CodelChooser.RIGHT

    def test_black_start_codel(self, make_grid):
        transition = Navigator(make_grid("KK nr")).step()
        assert transition.old_color is BLACK
        assert transition.new_color == Colored(0, 1)


class TestHalting:
    def test_single_codel_halts(self, make_grid):
        nav = Navigator(make_grid("ng"))
        assert nav.step() is None
        assert nav.dp is Direction.EAST
        assert nav.cc is CodelChooser.LEFT

    def test_enclosed_region_halts_after_eight_transitions(self, make_grid, caplog):
        caplog.set_level(logging.DEBUG, logger=TRACE_LOGGER)
        nav = Navigator(make_grid(
            "KK KK KK KK",
            "KK nb nb KK",
            "KK nb KK KK",
            "KK KK KK KK",
        ))
        nav.position = (1, 1)
        nav.dp, nav.cc = Direction.WEST, CodelChooser.RIGHT

        assert nav.step() is None
        assert len(trace_events(caplog, 'recover')) == 8
        assert len(trace_events(caplog, 'halt')) == 1
        assert (nav.dp, nav.cc) == (Direction.WEST, CodelChooser.RIGHT)

    def test_step_event(self, make_grid, caplog):
        caplog.set_level(logging.DEBUG, logger=TRACE_LOGGER)
        Navigator(make_grid("nr ny")).step()
        [record] = trace_events(caplog, 'step')
        assert record.fields['before'] == (0, 0)
        assert record.fields['after'] == (1, 0)

    def test_silent_by_default(self, make_grid, caplog):
        Navigator(make_grid("ng")).step()
        assert not trace_events(caplog, 'halt')


class TestWhite:
    def test_move_into_white(self, make_grid):
        nav = Navigator(make_grid("nr WW WW ny"))
        transition = nav.step()
        assert transition.new_color is WHITE
        assert nav.position == (1, 0)

    def test_glide_through_white(self, make_grid):
        nav = Navigator(make_grid("nr WW WW ny"))
        nav.step()
        transition = nav.step()
        assert transition.source == (2, 0)
        assert transition.target == (3, 0)
        assert transition.old_color is WHITE
        assert transition.new_color == Colored(1, 1)
        assert transition.block_size == 1

    def test_single_white_codel_halts(self, make_grid):
        assert Navigator(make_grid("WW")).step() is None

    def test_glide_blocked_by_black_recovers(self, make_grid):
        nav = Navigator(make_grid(
            "WW WW KK",
            "KK ny KK",
        ))
        transition = nav.step()
        # east glide stops at (1, 0); the south turn reaches yellow
        assert transition.source == (1, 0)
        assert transition.target == (1, 1)
        assert nav.dp is Direction.SOUTH

    def test_halt_from_white_keeps_glide_position(self, make_grid):
        nav = Navigator(make_grid(
            "WW WW",
            "KK WW",
        ))
        assert nav.step() is None
        assert nav.position == (1, 0)
        assert nav.dp is Direction.EAST
        assert nav.cc is CodelChooser.LEFT

    def test_enclosed_white_area_halts(self, make_grid):
        nav = Navigator(make_grid(
            "WW WW WW",
            "WW WW WW",
            "WW WW WW",
        ))
        assert nav.step() is None


class TestUnrecognizedColor:
    def test_reports_coordinate(self):
        nav = Navigator(Grid([[(255, 0, 0), (1, 2, 3)]]))
        with pytest.raises(UnrecognizedColor) as excinfo:
            nav.step()
        assert excinfo.value.coord == (1, 0)
