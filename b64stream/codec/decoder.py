# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""
Incremental Base64 decoder.

Symbols are classified through the reverse table of the alphabet and their
6-bit values folded into a 24-bit accumulator. Only whole bytes ever leave
the accumulator, and the bytes of a padded quartet are written exactly once
when its fourth symbol arrives. After that the decoder refuses any further
data, which is what keeps repeated reads at the end of a stream from emitting
anything twice.
"""


# type annotations
from __future__ import annotations
from typing import NoReturn

# internal libs
from b64stream.core.logging import Logger
from b64stream.codec.alphabet import Alphabet, Mode, ModeType, Symbol, DEFAULT, MIME
from b64stream.codec.state import Phase, Accumulator
from b64stream.codec.exceptions import DecodeError, ClosedStreamError
from b64stream.codec.bulk import BytesLike

# public interface
__all__ = ['Base64Decoder', ]


# module level logger
log = Logger.with_name(__name__)


class Base64Decoder:
    """
    Streaming decoder state machine.

    Not safe for concurrent use; a single owner drives `update` and `finish`.
    """

    mode: Mode
    alphabet: Alphabet
    mime: bool
    accumulator: Accumulator
    padding: int
    phase: Phase
    position: int

    def __init__(self: Base64Decoder, mode: ModeType = DEFAULT) -> None:
        self.mode = Mode(mode)
        self.alphabet = Alphabet.from_mode(self.mode)
        self.mime = bool(self.mode & MIME)
        self.accumulator = Accumulator()
        self.padding = 0
        self.phase = Phase.OPEN
        self.position = 0

    @property
    def slot(self: Base64Decoder) -> int:
        """Number of symbols (data and padding) in the current quartet."""
        return self.accumulator.count // 6 + self.padding

    def _reject(self: Base64Decoder, message: str) -> NoReturn:
        """Latch end-of-stream and raise."""
        self.phase = self.phase.latch(Phase.EOF)
        self.accumulator.clear()
        log.debug(message)
        raise DecodeError(message)

    def _illegal(self: Base64Decoder, byte: int) -> NoReturn:
        self._reject(f'Illegal base64 ending sequence: {byte:#04x} at position {self.position}')

    def update(self: Base64Decoder, data: BytesLike, out: bytearray) -> None:
        """Decode symbols in `data`, appending every completed byte to `out`."""
        if self.phase is Phase.EOF:
            raise ClosedStreamError('Decoder already finalized')
        table = self.alphabet.table
        acc = self.accumulator
        for byte in memoryview(data).cast('B'):
            value = table[byte]
            if value >= 0:
                if self.padding or self.phase is not Phase.OPEN:
                    self._illegal(byte)
                acc.push(value, 6)
                if acc.count == Accumulator.CAPACITY:
                    out += acc.pop(24).to_bytes(3, 'big')
            elif value == Symbol.PADDING:
                if self.phase is not Phase.OPEN or self.padding >= 2 or self.slot < 2:
                    self._illegal(byte)
                self.padding += 1
                if self.slot == 4:
                    # 18 bits -> 2 bytes (one '='), 12 bits -> 1 byte (two '=')
                    acc.drop(2 * self.padding)
                    out += acc.pop(acc.count).to_bytes(3 - self.padding, 'big')
                    self.phase = self.phase.latch(Phase.DRAINING)
                    log.trace(f'Padding terminated stream at position {self.position}')
            elif value in (Symbol.CR, Symbol.LF):
                if not self.mime:
                    self._illegal(byte)
            else:
                self._illegal(byte)
            self.position += 1

    def finish(self: Base64Decoder, out: bytearray) -> None:
        """Signal end of input; raises if a quartet was left incomplete."""
        if self.phase is Phase.EOF:
            return
        slot = self.slot if self.phase is Phase.OPEN else 0
        if slot:
            self._reject(f'Truncated base64 group ({slot} of 4 symbols) at end of input')
        self.phase = self.phase.latch(Phase.EOF)
