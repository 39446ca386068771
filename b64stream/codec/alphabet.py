# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""
Base64 alphabets and reverse lookup tables.

Two alphabets are supported, the standard one from RFC 4648 section 4 and
the URL and filename safe variant from section 5. Every alphabet carries a
256-entry reverse table mapping any input byte to either its 6-bit value or
one of the negative `Symbol` codes.

Example:
    >>> STANDARD_ALPHABET.forward(62)
    43
    >>> URL_SAFE_ALPHABET.reverse(ord('_'))
    63
    >>> STANDARD_ALPHABET.reverse(ord('='))
    -2
"""


# type annotations
from __future__ import annotations
from typing import Tuple, Union

# standard libs
from enum import IntEnum, IntFlag

# public interface
__all__ = ['Mode', 'DEFAULT', 'URL_SAFE', 'MIME', 'Symbol', 'Alphabet',
           'STANDARD_ALPHABET', 'URL_SAFE_ALPHABET',
           'PADDING', 'CR', 'LF', 'CRLF', 'LINE_LENGTH', 'GROUPS_PER_LINE', ]


class Mode(IntFlag):
    """Encoding/decoding flags (combinable)."""
    DEFAULT = 0x00
    URL_SAFE = 0x01
    MIME = 0x02


DEFAULT = Mode.DEFAULT
URL_SAFE = Mode.URL_SAFE
MIME = Mode.MIME


ModeType = Union[Mode, int]


class Symbol(IntEnum):
    """Reverse table codes for bytes that carry no data."""
    INVALID = -1
    PADDING = -2
    CR = -3
    LF = -4


PADDING: int = ord('=')
CR: int = ord('\r')
LF: int = ord('\n')
CRLF: bytes = b'\r\n'


# Chunk size per RFC 2045 section 6.8 (the trailing CRLF is not counted)
LINE_LENGTH: int = 76
GROUPS_PER_LINE: int = LINE_LENGTH // 4


class Alphabet:
    """
    Forward (6-bit value -> symbol) and reverse (byte -> value or `Symbol`) tables.

    Instances are read-only after construction and shared process-wide.
    """

    __slots__ = ('name', 'symbols', 'table')

    name: str
    symbols: bytes
    table: Tuple[int, ...]

    def __init__(self: Alphabet, name: str, symbols: bytes) -> None:
        if len(symbols) != 64 or len(set(symbols)) != 64:
            raise ValueError(f'Expected 64 distinct symbols for alphabet \'{name}\'')
        if any(byte in symbols for byte in (PADDING, CR, LF)):
            raise ValueError(f'Alphabet \'{name}\' cannot contain padding or line separators')
        table = [int(Symbol.INVALID)] * 256
        for value, byte in enumerate(symbols):
            table[byte] = value
        table[PADDING] = int(Symbol.PADDING)
        table[CR] = int(Symbol.CR)
        table[LF] = int(Symbol.LF)
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'symbols', bytes(symbols))
        object.__setattr__(self, 'table', tuple(table))

    def __setattr__(self: Alphabet, key: str, value: object) -> None:
        raise AttributeError(f'{self.__class__.__name__} is read-only')

    def forward(self: Alphabet, value: int) -> int:
        """Symbol (as a byte value) for 6-bit `value`."""
        return self.symbols[value]

    def reverse(self: Alphabet, byte: int) -> int:
        """6-bit value for `byte` or a negative `Symbol` code."""
        return self.table[byte]

    @staticmethod
    def from_mode(mode: ModeType = DEFAULT) -> Alphabet:
        """Select alphabet based on `Mode.URL_SAFE` in `mode`."""
        return URL_SAFE_ALPHABET if Mode(mode) & URL_SAFE else STANDARD_ALPHABET

    def __repr__(self: Alphabet) -> str:
        return f'<Alphabet({self.name})>'


STANDARD_ALPHABET = Alphabet('standard', b'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/')
URL_SAFE_ALPHABET = Alphabet('url-safe', b'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_')
