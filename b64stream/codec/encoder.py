# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""
Incremental Base64 encoder.

Raw bytes are folded into a 24-bit accumulator; every time it fills up one
quartet of symbols is appended to the caller's output buffer. Up to two
bytes may remain in the accumulator between calls, so any chunking of the
input produces the same symbols. The padded tail quartet is only written
by `finish`.

Example:
    >>> encoder, out = Base64Encoder(), bytearray()
    >>> for byte in b'hello':
    ...     encoder.update(bytes([byte]), out)
    >>> encoder.finish(out)
    >>> bytes(out)
    b'aGVsbG8='
"""


# type annotations
from __future__ import annotations

# internal libs
from b64stream.core.logging import Logger
from b64stream.codec.alphabet import Alphabet, Mode, ModeType, DEFAULT, MIME, PADDING, CRLF, LINE_LENGTH
from b64stream.codec.state import Phase, Accumulator
from b64stream.codec.exceptions import ClosedStreamError
from b64stream.codec.bulk import BytesLike

# public interface
__all__ = ['Base64Encoder', ]


# module level logger
log = Logger.with_name(__name__)


class Base64Encoder:
    """
    Streaming encoder state machine.

    Not safe for concurrent use; a single owner drives `update` and `finish`.
    """

    mode: Mode
    alphabet: Alphabet
    mime: bool
    accumulator: Accumulator
    phase: Phase
    column: int

    def __init__(self: Base64Encoder, mode: ModeType = DEFAULT) -> None:
        self.mode = Mode(mode)
        self.alphabet = Alphabet.from_mode(self.mode)
        self.mime = bool(self.mode & MIME)
        self.accumulator = Accumulator()
        self.phase = Phase.OPEN
        self.column = 0

    def _begin_group(self: Base64Encoder, out: bytearray) -> None:
        """Write a line separator if the current line is full (MIME only)."""
        if self.mime and self.column >= LINE_LENGTH:
            out += CRLF
            self.column = 0

    def update(self: Base64Encoder, data: BytesLike, out: bytearray) -> None:
        """Encode `data`, appending every completed quartet to `out`."""
        if self.phase is not Phase.OPEN:
            raise ClosedStreamError('Encoder already finalized')
        symbols = self.alphabet.symbols
        acc = self.accumulator
        for byte in memoryview(data).cast('B'):
            if not acc.count:
                self._begin_group(out)
            acc.push(byte, 8)
            if acc.count == Accumulator.CAPACITY:
                word = acc.pop(24)
                out.append(symbols[word >> 18 & 0x3f])
                out.append(symbols[word >> 12 & 0x3f])
                out.append(symbols[word >> 6 & 0x3f])
                out.append(symbols[word & 0x3f])
                self.column += 4

    def finish(self: Base64Encoder, out: bytearray) -> None:
        """Write the final (padded) partial quartet, if any, exactly once."""
        if self.phase is Phase.EOF:
            return
        self.phase = self.phase.latch(Phase.DRAINING)
        acc = self.accumulator
        if acc.count:
            # 1 byte -> 2 symbols + '==', 2 bytes -> 3 symbols + '='
            padding = 3 - acc.count // 8
            acc.pad(6 * (4 - padding) - acc.count)
            while acc.count:
                out.append(self.alphabet.forward(acc.pop(6)))
            out.extend(bytes([PADDING]) * padding)
            self.column += 4
            log.trace(f'Finalized tail group with {padding} padding symbol(s)')
        self.phase = self.phase.latch(Phase.EOF)
