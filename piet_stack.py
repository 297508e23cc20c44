"""
Piet stack machine

Integer LIFO with the arithmetic, comparison, stack manipulation and I/O
operations of Piet. Operations with too few operands are no-ops.
"""

import sys
from typing import BinaryIO, List, Optional

from piet_errors import InputExhausted, UnsupportedOperation


DIGITS = b'0123456789'


# Byte I/O

class ByteReader:
    """Binary input with one byte of look-ahead."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream if stream is not None else sys.stdin.buffer
        self._peeked: Optional[bytes] = None

    def peek(self) -> bytes:
        """Next byte without consuming it (b'' at end of stream)."""
        if self._peeked is None:
            self._peeked = self.stream.read(1)
        return self._peeked

    def read_byte(self) -> bytes:
        byte = self.peek()
        self._peeked = None
        return byte


class ByteWriter:
    """Binary output that flushes every write and remembers the last byte."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream if stream is not None else sys.stdout.buffer
        self.last_byte = b''

    def write(self, data: bytes) -> None:
        if not data:
            return
        self.stream.write(data)
        self.stream.flush()
        self.last_byte = data[-1:]

    @property
    def ends_with_newline(self) -> bool:
        return self.last_byte == b'\n'


# Stack machine

class Stack:
    def __init__(self, reader: Optional[ByteReader] = None,
                 writer: Optional[ByteWriter] = None):
        self.data: List[int] = []
        self.reader = reader if reader is not None else ByteReader()
        self.writer = writer if writer is not None else ByteWriter()

    def __len__(self):
        return len(self.data)

    def __repr__(self):
        return f"Stack({self.data})"

    def push(self, n: int) -> None:
        self.data.append(n)

    def pop(self) -> int:
        """Pop from stack, return 0 if empty"""
        return self.data.pop() if self.data else 0

    # Arithmetic

    def add(self) -> None:
        if len(self.data) < 2:
            return
        a, b = self.pop(), self.pop()
        self.push(b + a)

    def subtract(self) -> None:
        if len(self.data) < 2:
            return
        top, second = self.pop(), self.pop()
        self.push(second - top)

    def multiply(self) -> None:
        if len(self.data) < 2:
            return
        a, b = self.pop(), self.pop()
        self.push(b * a)

    def divide(self) -> None:
        """Integer division truncating toward zero; no-op on zero divisor."""
        if len(self.data) < 2 or self.data[-1] == 0:
            return
        top, second = self.pop(), self.pop()
        quotient = abs(second) // abs(top)
        self.push(-quotient if (second < 0) != (top < 0) else quotient)

    def mod(self) -> None:
        """Floored modulo (result takes the divisor's sign); no-op on zero divisor."""
        if len(self.data) < 2 or self.data[-1] == 0:
            return
        top, second = self.pop(), self.pop()
        self.push(second % top)

    # Logic

    def not_(self) -> None:
        if not self.data:
            return
        self.push(0 if self.pop() else 1)

    def greater(self) -> None:
        if len(self.data) < 2:
            return
        top, second = self.pop(), self.pop()
        self.push(1 if second > top else 0)

    # Stack manipulation

    def duplicate(self) -> None:
        if self.data:
            self.push(self.data[-1])

    def roll(self) -> None:
        """
        Roll the top `depth` values `num_rolls` times.

        num_rolls is on top, depth below it. One roll buries the top value
        `depth` positions down. An out of range depth is a silent no-op.
        """
        if len(self.data) < 2:
            return
        num_rolls, depth = self.pop(), self.pop()

        if num_rolls < 0:
            self.push(depth)
            self.push(num_rolls)
            raise UnsupportedOperation(f"Negative roll count not implemented: {num_rolls}")
        if not 0 <= depth <= len(self.data):
            self.push(depth)
            self.push(num_rolls)
            return

        r = num_rolls % depth if depth else 0
        if r:
            top = self.data[-depth:]
            self.data[-depth:] = top[-r:] + top[:-r]

    # I/O

    def in_number(self) -> None:
        """Read a run of decimal digits and push it; no-op if none available."""
        digits = bytearray()
        while self.reader.peek() and self.reader.peek() in DIGITS:
            digits += self.reader.read_byte()

        if digits:
            self.push(int(digits))

    def in_char(self) -> None:
        byte = self.reader.read_byte()
        if not byte:
            raise InputExhausted("Input exhausted while reading a character")
        self.push(byte[0])

    def out_number(self) -> None:
        if not self.data:
            return
        self.writer.write(str(self.pop()).encode('ascii'))

    def out_char(self) -> None:
        if not self.data:
            return
        self.writer.write(bytes([self.pop() % 256]))
