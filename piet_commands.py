"""
Piet command decoding and dispatch

A move between two chromatic regions selects an operation from the hue and
lightness change between them:

    hue\\light     0           1              2
    0              -           push           pop
    1              add         subtract       multiply
    2              divide      mod            not
    3              greater     pointer        switch
    4              duplicate   roll           in_number
    5              in_char     out_number     out_char
"""

import logging
from typing import Optional

from piet_colors import Colored, PietColor
from piet_errors import UnsupportedOperation
from piet_navigator import Navigator, Transition
from piet_stack import Stack
from piet_trace import emit, get_logger


COMMANDS = {
    0: {1: "push", 2: "pop"},
    1: {0: "add", 1: "subtract", 2: "multiply"},
    2: {0: "divide", 1: "mod", 2: "not"},
    3: {0: "greater", 1: "pointer", 2: "switch"},
    4: {0: "duplicate", 1: "roll", 2: "in_number"},
    5: {0: "in_char", 1: "out_number", 2: "out_char"},
}


def decode(old_color: PietColor, new_color: PietColor) -> Optional[str]:
    """Determine command from color transition"""
    if not isinstance(old_color, Colored) or not isinstance(new_color, Colored):
        return None

    dh = (new_color.hue - old_color.hue) % 6
    dl = (new_color.lightness - old_color.lightness) % 3
    return COMMANDS[dh].get(dl)


class CommandDispatcher:
    def __init__(self, stack: Stack, navigator: Navigator,
                 logger: Optional[logging.Logger] = None):
        self.stack = stack
        self.navigator = navigator
        self.log = get_logger(logger)

    def dispatch(self, transition: Transition) -> Optional[str]:
        """Execute the command selected by a transition; returns its name."""
        cmd = decode(transition.old_color, transition.new_color)
        if cmd is None:
            return None

        self.execute(cmd, transition.block_size)
        if self.log.isEnabledFor(logging.DEBUG):
            emit(self.log, 'command', op=cmd, size=transition.block_size,
                 stack=list(self.stack.data))
        return cmd

    def execute(self, cmd: str, block_size: int) -> None:
        """Execute Piet command"""
        if cmd == "push":
            self.stack.push(block_size)
        elif cmd == "pop":
            self.stack.pop()
        elif cmd == "not":
            self.stack.not_()
        elif cmd == "pointer":
            self._pointer()
        elif cmd == "switch":
            self._switch()
        else:
            getattr(self.stack, cmd)()

    def _pointer(self) -> None:
        if not self.stack.data:
            return
        count = self.stack.pop()
        if count < 0:
            self.stack.push(count)
            raise UnsupportedOperation(f"Negative pointer rotation not implemented: {count}")
        self.navigator.rotate_dp(count)

    def _switch(self) -> None:
        if not self.stack.data:
            return
        if abs(self.stack.pop()) % 2 == 1:
            self.navigator.toggle_cc()
