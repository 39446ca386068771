# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""
Whole-buffer Base64 encoding and decoding.

The output length is computed up front and filled in a single pass,
three bytes to four symbols at a time (and the reverse).

Example:
    >>> encode(b'hello')
    'aGVsbG8='
    >>> decode('aGVsbG8=')
    b'hello'
    >>> encode(bytes([0xfb, 0xff]), URL_SAFE)
    '-_8='
"""


# type annotations
from __future__ import annotations
from typing import Union

# internal libs
from b64stream.core.logging import Logger
from b64stream.codec.alphabet import (Alphabet, Mode, ModeType, DEFAULT, URL_SAFE, MIME,
                                      PADDING, CR, CRLF, LINE_LENGTH, GROUPS_PER_LINE)
from b64stream.codec.exceptions import DecodeError, IllegalArgumentError

# public interface
__all__ = ['encoded_length', 'encode_bytes', 'encode', 'encode_url_safe', 'decode', ]


# module level logger
log = Logger.with_name(__name__)


BytesLike = Union[bytes, bytearray, memoryview]


def encoded_length(size: int, mime: bool = False) -> int:
    """Exact number of symbols (including CRLF separators if `mime`) for `size` raw bytes."""
    if size <= 0:
        return 0
    count = ((size - 1) // 3 + 1) * 4
    if not mime:
        return count
    return count + (count - 1) // LINE_LENGTH * 2


def encode_bytes(data: BytesLike, mode: ModeType = DEFAULT) -> bytes:
    """Encode raw `data` into Base64 symbols (as ASCII bytes)."""
    data = bytes(data)
    size = len(data)
    if not size:
        return b''

    mode = Mode(mode)
    mime = bool(mode & MIME)
    symbols = Alphabet.from_mode(mode).symbols
    even = size // 3 * 3
    length = encoded_length(size, mime)
    dest = bytearray(length)

    d = 0
    groups = 0
    for s in range(0, even, 3):
        word = data[s] << 16 | data[s + 1] << 8 | data[s + 2]
        dest[d] = symbols[word >> 18 & 0x3f]
        dest[d + 1] = symbols[word >> 12 & 0x3f]
        dest[d + 2] = symbols[word >> 6 & 0x3f]
        dest[d + 3] = symbols[word & 0x3f]
        d += 4
        if mime:
            groups += 1
            if groups == GROUPS_PER_LINE and d < length - 2:
                dest[d:d + 2] = CRLF
                d += 2
                groups = 0

    left = size - even
    if left:
        # left-justify the remaining 8 or 16 bits into 12 or 18 bits
        word = data[even] << 10 | (data[size - 1] << 2 if left == 2 else 0)
        dest[length - 4] = symbols[word >> 12]
        dest[length - 3] = symbols[word >> 6 & 0x3f]
        dest[length - 2] = symbols[word & 0x3f] if left == 2 else PADDING
        dest[length - 1] = PADDING

    return bytes(dest)


def encode(data: BytesLike, mode: ModeType = DEFAULT) -> str:
    """Encode raw `data` into Base64 encoded string."""
    return encode_bytes(data, mode).decode('ascii')


def encode_url_safe(data: BytesLike) -> str:
    """Encode raw `data` into URL-safe Base64 encoded string (no line breaks)."""
    return encode(data, URL_SAFE)


def _as_symbols(data: Union[str, BytesLike]) -> bytes:
    """Coerce `data` to bytes, rejecting non-ASCII text."""
    if isinstance(data, str):
        try:
            return data.encode('ascii')
        except UnicodeEncodeError as error:
            raise DecodeError(f'Illegal base64 character {data[error.start]!r} at position {error.start}') from error
    return bytes(data)


def _is_line_wrapped(symbols: bytes) -> bool:
    """Guess RFC 2045 line wrapping by looking for CR where the first line must end."""
    return len(symbols) > LINE_LENGTH and symbols[LINE_LENGTH] == CR


def _illegal(symbols: bytes, start: int, stop: int, table: tuple) -> DecodeError:
    """Build error for the first symbol in `symbols[start:stop]` that carries no data."""
    for index in range(start, stop):
        if table[symbols[index]] < 0:
            return DecodeError(f'Illegal base64 ending sequence: {symbols[index]:#04x} '
                               f'at position {index}')
    return DecodeError(f'Illegal base64 ending sequence at position {start}')


def decode(data: Union[str, BytesLike], mode: ModeType = DEFAULT) -> bytes:
    """
    Decode Base64 `data` (string or ASCII bytes) back to raw bytes.

    Line separators are skipped when `mode` includes `MIME`, or when the input
    is recognized as RFC 2045 line wrapped (CR at offset 76). Otherwise any
    CR or LF is rejected like any other illegal symbol.

    Raises:
        IllegalArgumentError: The number of symbols is not a multiple of four.
        DecodeError: An illegal symbol or misplaced padding was found.
    """
    symbols = _as_symbols(data)
    mode = Mode(mode)
    table = Alphabet.from_mode(mode).table
    if mode & MIME or _is_line_wrapped(symbols):
        symbols = symbols.translate(None, CRLF)

    size = len(symbols)
    if not size:
        return b''
    if size % 4:
        raise IllegalArgumentError(f'Base64 input must be a multiple of 4 symbols (found {size})')

    pad = 0
    if symbols[-1] == PADDING:
        pad = 2 if symbols[-2] == PADDING else 1
    length = size // 4 * 3 - pad
    dest = bytearray(length)

    d = 0
    s = 0
    even = length // 3 * 3
    while d < even:
        a, b, c, e = table[symbols[s]], table[symbols[s + 1]], table[symbols[s + 2]], table[symbols[s + 3]]
        if (a | b | c | e) < 0:
            raise _illegal(symbols, s, s + 4, table)
        word = a << 18 | b << 12 | c << 6 | e
        dest[d] = word >> 16
        dest[d + 1] = word >> 8 & 0xff
        dest[d + 2] = word & 0xff
        d += 3
        s += 4

    if d < length:
        # final group: 3 symbols -> 2 bytes, 2 symbols -> 1 byte
        word = 0
        stop = size - pad
        for j, index in enumerate(range(s, stop)):
            value = table[symbols[index]]
            if value < 0:
                raise _illegal(symbols, index, stop, table)
            word |= value << (18 - j * 6)
        for shift in (16, 8)[:length - d]:
            dest[d] = word >> shift & 0xff
            d += 1

    log.trace(f'Decoded {size} symbols into {length} bytes')
    return bytes(dest)
