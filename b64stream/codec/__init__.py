# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""
Base64 codec (RFC 4648 standard and URL-safe alphabets, RFC 2045 MIME line wrapping).

Whole-buffer functions (`encode`, `decode`) are for text at rest; the stream
filters (`open_encoder`, `open_decoder`, `wrap_reader`, `wrap_writer`) are for
text in transit and never hold more than a quartet (plus the caller's buffer)
in memory.
"""


# internal libs
from b64stream.codec.alphabet import (Mode, DEFAULT, URL_SAFE, MIME, Symbol, Alphabet,
                                      STANDARD_ALPHABET, URL_SAFE_ALPHABET, LINE_LENGTH)
from b64stream.codec.exceptions import Base64Error, DecodeError, IllegalArgumentError, ClosedStreamError
from b64stream.codec.bulk import encoded_length, encode_bytes, encode, encode_url_safe, decode
from b64stream.codec.encoder import Base64Encoder
from b64stream.codec.decoder import Base64Decoder
from b64stream.codec.stream import (ByteSource, ByteSink, EncodingReader, DecodingReader,
                                    EncodingWriter, DecodingWriter,
                                    open_encoder, open_decoder, wrap_reader, wrap_writer)

# public interface
__all__ = ['Mode', 'DEFAULT', 'URL_SAFE', 'MIME', 'Symbol', 'Alphabet', 'STANDARD_ALPHABET', 'URL_SAFE_ALPHABET',
           'LINE_LENGTH', 'Base64Error', 'DecodeError', 'IllegalArgumentError', 'ClosedStreamError',
           'encoded_length', 'encode_bytes', 'encode', 'encode_url_safe', 'decode',
           'Base64Encoder', 'Base64Decoder', 'ByteSource', 'ByteSink',
           'EncodingReader', 'DecodingReader', 'EncodingWriter', 'DecodingWriter',
           'open_encoder', 'open_decoder', 'wrap_reader', 'wrap_writer', ]
