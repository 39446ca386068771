# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""
Streaming filters that encode or decode Base64 on the fly.

Each filter wraps exactly one underlying stream (by composition) and
drives one `Base64Encoder` or `Base64Decoder`:

    EncodingReader   read raw bytes from a source, hand out symbols
    DecodingReader   read symbols from a source, hand out raw bytes
    EncodingWriter   accept raw bytes, write symbols to a sink
    DecodingWriter   accept symbols, write raw bytes to a sink

Readers signal the end of the stream with an empty result (b'' from `read`,
0 from `readinto`) only after every byte has been handed out; from then on
the source is never consulted again. Writers finalize on `close`.

Example:
    >>> from io import BytesIO
    >>> sink = BytesIO()
    >>> with open_encoder(sink, close_sink=False) as stream:
    ...     stream.write(b'hel')
    ...     stream.write(b'lo')
    3
    2
    >>> sink.getvalue()
    b'aGVsbG8='
    >>> open_decoder(BytesIO(b'aGVsbG8=')).read()
    b'hello'
"""


# type annotations
from __future__ import annotations
from typing import Optional, Union, TypeVar

# standard libs
from abc import ABC, abstractmethod

# internal libs
from b64stream.core.logging import Logger
from b64stream.core.config import get_chunksize
from b64stream.core.iotools import ByteSource, ByteSink, read_fully
from b64stream.codec.alphabet import Mode, ModeType, DEFAULT, MIME
from b64stream.codec.state import Phase
from b64stream.codec.encoder import Base64Encoder
from b64stream.codec.decoder import Base64Decoder
from b64stream.codec.exceptions import DecodeError, ClosedStreamError
from b64stream.codec.bulk import BytesLike

# public interface
__all__ = ['ByteSource', 'ByteSink', 'EncodingReader', 'DecodingReader', 'EncodingWriter', 'DecodingWriter',
           'open_encoder', 'open_decoder', 'wrap_reader', 'wrap_writer', ]


# module level logger
log = Logger.with_name(__name__)


Filter = TypeVar('Filter', bound='BaseFilter')


class BaseFilter(ABC):
    """Lifecycle shared by every filter: owns one stream, closes it at most once."""

    _stream: Union[ByteSource, ByteSink]
    _owns_stream: bool
    _closed: bool

    def __init__(self: BaseFilter, stream: Union[ByteSource, ByteSink], owns_stream: bool = True) -> None:
        self._stream = stream
        self._owns_stream = owns_stream
        self._closed = False

    @property
    def closed(self: BaseFilter) -> bool:
        """True once `close` has been called."""
        return self._closed

    def _check_open(self: BaseFilter) -> None:
        if self._closed:
            raise ClosedStreamError('I/O operation on closed stream')

    def _release(self: BaseFilter) -> None:
        """Close the underlying stream if we own it."""
        if self._owns_stream:
            close = getattr(self._stream, 'close', None)
            if close is not None:
                close()
        log.debug(f'Closed {self}')

    def close(self: BaseFilter) -> None:
        """Close the filter (idempotent)."""
        if not self._closed:
            self._closed = True
            self._release()

    def readable(self: BaseFilter) -> bool:
        return False

    def writable(self: BaseFilter) -> bool:
        return False

    def __enter__(self: Filter) -> Filter:
        return self

    def __exit__(self: BaseFilter, *exc) -> None:
        self.close()

    def __repr__(self: BaseFilter) -> str:
        return f'<{self.__class__.__name__}(mode={self.mode!r}, closed={self._closed})>'

    @property
    @abstractmethod
    def mode(self: BaseFilter) -> Mode:
        """Flags of the underlying state machine."""


class ReaderFilter(BaseFilter):
    """Pull-side filter: output is produced on demand from the source."""

    _pending: bytearray
    _error: Optional[DecodeError]

    def __init__(self: ReaderFilter, source: ByteSource, close_source: bool = True) -> None:
        super().__init__(source, owns_stream=close_source)
        self._pending = bytearray()
        self._error = None

    def readable(self: ReaderFilter) -> bool:
        return True

    @property
    @abstractmethod
    def _finished(self: ReaderFilter) -> bool:
        """True once the state machine has nothing left to emit."""

    @abstractmethod
    def _produce(self: ReaderFilter, wanted: int) -> None:
        """Advance the state machine, appending to `_pending` (or finishing it)."""

    def readinto(self: ReaderFilter, buffer: Union[bytearray, memoryview]) -> int:
        """
        Fill `buffer` as far as possible and return the number of bytes written.

        Returns 0 only once all output has been delivered (or if `buffer` is empty).
        Once malformed input is found, bytes already copied by this call are returned
        and every later call raises the same `DecodeError`.
        """
        self._check_open()
        if self._error is not None:
            raise self._error
        view = memoryview(buffer).cast('B')
        size = len(view)
        offset = 0
        while offset < size:
            if self._pending:
                count = min(len(self._pending), size - offset)
                view[offset:offset + count] = self._pending[:count]
                del self._pending[:count]
                offset += count
            elif self._finished:
                break
            else:
                try:
                    self._produce(size - offset)
                except DecodeError as error:
                    self._error = error
                    self._pending.clear()
                    if not offset:
                        raise
                    break
        log.trace(f'Read {offset} bytes ({self})')
        return offset

    def read(self: ReaderFilter, size: Optional[int] = -1) -> bytes:
        """Read up to `size` bytes (everything if negative or None); b'' at end of stream."""
        self._check_open()
        if size is None or size < 0:
            return self.readall()
        buffer = bytearray(size)
        count = self.readinto(buffer)
        del buffer[count:]
        return bytes(buffer)

    def readall(self: ReaderFilter) -> bytes:
        """Read until end of stream."""
        chunksize = get_chunksize()
        result = bytearray()
        chunk = self.read(chunksize)
        while chunk:
            result += chunk
            chunk = self.read(chunksize)
        return bytes(result)

    def close(self: ReaderFilter) -> None:
        """Discard pending output and close the source (idempotent)."""
        if not self._closed:
            self._pending.clear()
        super().close()


class EncodingReader(ReaderFilter):
    """Base64-encode everything read from `source`."""

    def __init__(self: EncodingReader, source: ByteSource, mode: ModeType = DEFAULT,
                 close_source: bool = True) -> None:
        super().__init__(source, close_source=close_source)
        self._encoder = Base64Encoder(mode)

    @property
    def mode(self: EncodingReader) -> Mode:
        return self._encoder.mode

    @property
    def _finished(self: EncodingReader) -> bool:
        return self._encoder.phase is Phase.EOF

    def _produce(self: EncodingReader, wanted: int) -> None:
        # every 3 raw bytes yield 4 symbols
        size = max(3, wanted // 4 * 3)
        chunk = read_fully(self._stream, size)
        if chunk:
            self._encoder.update(chunk, self._pending)
        if len(chunk) < size:
            self._encoder.finish(self._pending)
            log.trace(f'End of source reached ({self})')


class DecodingReader(ReaderFilter):
    """Base64-decode everything read from `source`."""

    def __init__(self: DecodingReader, source: ByteSource, mode: ModeType = DEFAULT,
                 close_source: bool = True) -> None:
        super().__init__(source, close_source=close_source)
        self._decoder = Base64Decoder(mode)

    @property
    def mode(self: DecodingReader) -> Mode:
        return self._decoder.mode

    @property
    def _finished(self: DecodingReader) -> bool:
        return self._decoder.phase is Phase.EOF

    def _produce(self: DecodingReader, wanted: int) -> None:
        # every 4 symbols yield 3 raw bytes; once terminated by padding,
        # only check that nothing but line breaks follows
        if self._decoder.phase is Phase.DRAINING:
            size = 1
        else:
            size = max(4, wanted // 3 * 4)
        chunk = self._stream.read(size)
        if chunk:
            self._decoder.update(chunk, self._pending)
        else:
            self._decoder.finish(self._pending)
            log.trace(f'End of source reached ({self})')


class WriterFilter(BaseFilter):
    """Push-side filter: output is forwarded to the sink as input arrives."""

    def __init__(self: WriterFilter, sink: ByteSink, close_sink: bool = True) -> None:
        super().__init__(sink, owns_stream=close_sink)
        self._buffer = bytearray()

    def writable(self: WriterFilter) -> bool:
        return True

    @abstractmethod
    def _update(self: WriterFilter, data: BytesLike) -> None:
        """Feed `data` to the state machine, appending output to `_buffer`."""

    @abstractmethod
    def _finish(self: WriterFilter) -> None:
        """Finalize the state machine, appending output to `_buffer`."""

    def _forward(self: WriterFilter) -> None:
        """Write buffered output to the sink."""
        if self._buffer:
            self._stream.write(bytes(self._buffer))
            self._buffer.clear()

    def write(self: WriterFilter, data: BytesLike) -> int:
        """Transform `data` and forward the result; returns `len(data)`."""
        self._check_open()
        size = memoryview(data).nbytes
        self._update(data)
        self._forward()
        return size

    def flush(self: WriterFilter) -> None:
        """Flush the sink (a partial group stays buffered until `close`)."""
        self._check_open()
        flush = getattr(self._stream, 'flush', None)
        if flush is not None:
            flush()

    def close(self: WriterFilter) -> None:
        """Finalize pending output, then close the sink (idempotent)."""
        if self._closed:
            return
        self._closed = True
        try:
            self._finish()
            self._forward()
            flush = getattr(self._stream, 'flush', None)
            if flush is not None:
                flush()
        finally:
            self._buffer.clear()
            self._release()


class EncodingWriter(WriterFilter):
    """Base64-encode everything written and forward the symbols to `sink`."""

    def __init__(self: EncodingWriter, sink: ByteSink, mode: ModeType = DEFAULT,
                 close_sink: bool = True) -> None:
        super().__init__(sink, close_sink=close_sink)
        self._encoder = Base64Encoder(mode)

    @property
    def mode(self: EncodingWriter) -> Mode:
        return self._encoder.mode

    def _update(self: EncodingWriter, data: BytesLike) -> None:
        self._encoder.update(data, self._buffer)

    def _finish(self: EncodingWriter) -> None:
        self._encoder.finish(self._buffer)


class DecodingWriter(WriterFilter):
    """Base64-decode everything written and forward the raw bytes to `sink`."""

    def __init__(self: DecodingWriter, sink: ByteSink, mode: ModeType = DEFAULT,
                 close_sink: bool = True) -> None:
        super().__init__(sink, close_sink=close_sink)
        self._decoder = Base64Decoder(mode)

    @property
    def mode(self: DecodingWriter) -> Mode:
        return self._decoder.mode

    def _update(self: DecodingWriter, data: BytesLike) -> None:
        try:
            self._decoder.update(data, self._buffer)
        finally:
            # bytes completed before an illegal symbol are still delivered
            self._forward()

    def _finish(self: DecodingWriter) -> None:
        self._decoder.finish(self._buffer)


def open_encoder(sink: ByteSink, mode: ModeType = DEFAULT, close_sink: bool = True) -> EncodingWriter:
    """Every byte written to the returned stream is Base64-encoded into `sink`."""
    return EncodingWriter(sink, mode, close_sink=close_sink)


def open_decoder(source: ByteSource, mode: ModeType = DEFAULT, close_source: bool = True) -> DecodingReader:
    """Bytes read from the returned stream are Base64-decoded from `source`."""
    return DecodingReader(source, mode, close_source=close_source)


def wrap_reader(source: ByteSource, encode: bool = False, mode: ModeType = None,
                close_source: bool = True) -> ReaderFilter:
    """
    Wrap `source` for encoding (`encode=True`) or decoding on read.

    Without an explicit `mode`, encoding uses `DEFAULT` and decoding uses `MIME`.
    """
    if encode:
        return EncodingReader(source, DEFAULT if mode is None else mode, close_source=close_source)
    else:
        return DecodingReader(source, MIME if mode is None else mode, close_source=close_source)


def wrap_writer(sink: ByteSink, encode: bool = True, mode: ModeType = None,
                close_sink: bool = True) -> WriterFilter:
    """
    Wrap `sink` for encoding (`encode=True`) or decoding on write.

    Without an explicit `mode`, encoding uses `DEFAULT` and decoding uses `MIME`.
    """
    if encode:
        return EncodingWriter(sink, DEFAULT if mode is None else mode, close_sink=close_sink)
    else:
        return DecodingWriter(sink, MIME if mode is None else mode, close_sink=close_sink)
