#!/usr/bin/env python3
"""
Piet Programming Language Interpreter

Runs Piet programs: images whose color blocks and color transitions encode
control flow and stack operations.

Examples:
    # Run a program
    python3 piet_interpreter.py hello.png

    # Program drawn with 10x10 pixel codels, with execution trace on stderr
    python3 piet_interpreter.py -c 10 -v hello_big.png

    # Stop after 10000 steps
    python3 piet_interpreter.py --max-steps 10000 loop.png < input.txt
"""

import argparse
import logging
import sys
from typing import BinaryIO, Optional

from piet_commands import CommandDispatcher
from piet_errors import PietError
from piet_grid import Grid, load_image
from piet_navigator import Navigator
from piet_stack import ByteReader, ByteWriter, Stack
from piet_trace import TRACE_LOGGER, TraceFormatter, get_logger


class Interpreter:
    """Drives the navigator and dispatches commands until the program halts."""

    def __init__(
        self,
        grid: Grid,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        logger: Optional[logging.Logger] = None,
        max_steps: Optional[int] = None
    ):
        self.grid = grid
        self.log = get_logger(logger)
        self.max_steps = max_steps

        self.writer = ByteWriter(stdout)
        self.stack = Stack(ByteReader(stdin), self.writer)
        self.navigator = Navigator(grid, self.log)
        self.dispatcher = CommandDispatcher(self.stack, self.navigator, self.log)

        self.steps = 0
        self.halted = False

    def step(self) -> bool:
        """Execute one move; returns False once the program has halted."""
        if self.halted:
            return False

        transition = self.navigator.step()
        if transition is None:
            self.halted = True
            return False

        self.steps += 1
        self.dispatcher.dispatch(transition)
        return True

    def run(self) -> int:
        """Run until halt (or the step limit); returns the number of moves made."""
        while self.max_steps is None or self.steps < self.max_steps:
            if not self.step():
                break
        return self.steps


# CLI

class _ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(1)


def configure_trace(verbose: bool) -> None:
    if not verbose:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(TraceFormatter())
    logger = logging.getLogger(TRACE_LOGGER)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def main(argv=None) -> int:
    parser = _ArgumentParser(
        description='Piet programming language interpreter',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('image', help='Piet program image (PNG, GIF, JPEG, ...)')
    parser.add_argument('-c', '--codel-size', type=int, default=1,
                        help='Pixels per codel edge (default: 1)')
    parser.add_argument('--max-steps', type=int, default=None,
                        help='Stop after this many moves (default: unlimited)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Trace execution on stderr')

    args = parser.parse_args(argv)
    configure_trace(args.verbose)

    try:
        grid = Grid.from_image(load_image(args.image), args.codel_size)
        interpreter = Interpreter(grid, max_steps=args.max_steps)
        interpreter.run()
    except PietError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n[Interrupted by user]", file=sys.stderr)
        return 130

    if not interpreter.halted:
        print(f"\nWarning: stopped after {interpreter.steps} steps without halting",
              file=sys.stderr)

    # In case the program's output didn't end with a newline
    if not interpreter.writer.ends_with_newline:
        interpreter.writer.write(b'\n')
    return 0


if __name__ == "__main__":
    sys.exit(main())
