# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Bit accumulator and lifecycle phase shared by the streaming state machines."""


# type annotations
from __future__ import annotations

# standard libs
from enum import IntEnum

# public interface
__all__ = ['Phase', 'Accumulator', ]


class Phase(IntEnum):
    """
    Lifecycle of a streaming state machine.

    The phase only ever moves forward (OPEN -> DRAINING -> EOF).
    """
    OPEN = 0      # more input may follow
    DRAINING = 1  # input exhausted (or terminated by padding), output may be pending
    EOF = 2       # nothing left to emit

    def latch(self: Phase, other: Phase) -> Phase:
        """The later of the two phases."""
        return max(self, other)


class Accumulator:
    """
    Register holding up to 24 bits not yet emitted.

    Bits enter at the low end and leave from the high end, so `count` is
    always the number of valid low-order bits in `bits`.

    Example:
        >>> acc = Accumulator()
        >>> acc.push(0x4d, 8)
        >>> acc.pop(6), acc.count
        (19, 2)
    """

    __slots__ = ('bits', 'count')

    CAPACITY: int = 24

    def __init__(self: Accumulator) -> None:
        self.bits = 0
        self.count = 0

    def push(self: Accumulator, value: int, width: int) -> None:
        """Append `width` low-order bits of `value`."""
        if self.count + width > self.CAPACITY:
            raise OverflowError(f'Accumulator overflow ({self.count} + {width} bits)')
        self.bits = (self.bits << width) | (value & ((1 << width) - 1))
        self.count += width

    def pop(self: Accumulator, width: int) -> int:
        """Remove and return the `width` highest valid bits."""
        if width > self.count:
            raise ValueError(f'Cannot pop {width} bits from accumulator holding {self.count}')
        self.count -= width
        value = self.bits >> self.count
        self.bits &= (1 << self.count) - 1
        return value

    def pad(self: Accumulator, width: int) -> None:
        """Left-justify by appending `width` zero bits."""
        self.push(0, width)

    def drop(self: Accumulator, width: int) -> None:
        """Discard the `width` lowest valid bits."""
        if width > self.count:
            raise ValueError(f'Cannot drop {width} bits from accumulator holding {self.count}')
        self.bits >>= width
        self.count -= width

    def clear(self: Accumulator) -> None:
        """Discard all bits."""
        self.bits = 0
        self.count = 0

    def __bool__(self: Accumulator) -> bool:
        return self.count > 0

    def __repr__(self: Accumulator) -> str:
        return f'<Accumulator(count={self.count})>'
