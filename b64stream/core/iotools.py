# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Helpers for moving bytes between file-like objects."""


# type annotations
from __future__ import annotations
from typing import Optional, Protocol, runtime_checkable

# internal libs
from b64stream.core.logging import Logger
from b64stream.core.config import get_chunksize

# public interface
__all__ = ['ByteSource', 'ByteSink', 'read_fully', 'flow', ]


# module level logger
log = Logger.with_name(__name__)


@runtime_checkable
class ByteSource(Protocol):
    """Anything with a blocking `read(size) -> bytes` returning b'' at end."""

    def read(self, size: int = -1) -> bytes: ...


@runtime_checkable
class ByteSink(Protocol):
    """Anything with a blocking `write(data)`."""

    def write(self, data: bytes) -> Optional[int]: ...


def read_fully(source: ByteSource, size: int) -> bytes:
    """Read exactly `size` bytes from `source` unless it ends first."""
    chunk = source.read(size) or b''
    while chunk and len(chunk) < size:
        more = source.read(size - len(chunk))
        if not more:
            break
        chunk += more
    return chunk


def _close(stream: object) -> None:
    close = getattr(stream, 'close', None)
    if close is not None:
        close()


def flow(source: ByteSource, sink: ByteSink, chunksize: int = None,
         close_source: bool = False, close_sink: bool = False) -> int:
    """
    Copy everything from `source` into `sink` and return the number of bytes copied.

    The sink is flushed when the source is exhausted. Either stream is closed
    afterward if requested, even if copying failed.

    Example:
        >>> from io import BytesIO
        >>> sink = BytesIO()
        >>> flow(BytesIO(b'abc'), sink)
        3
    """
    chunksize = chunksize or get_chunksize()
    count = 0
    try:
        chunk = source.read(chunksize)
        while chunk:
            sink.write(chunk)
            count += len(chunk)
            chunk = source.read(chunksize)
        flush = getattr(sink, 'flush', None)
        if flush is not None:
            flush()
        log.trace(f'Copied {count} bytes')
        return count
    finally:
        try:
            if close_source:
                _close(source)
        finally:
            if close_sink:
                _close(sink)
