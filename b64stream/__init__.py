# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""
Streaming Base64 encoder/decoder filters.

This package provides whole-buffer `encode`/`decode` functions as well as
stream filters that transform byte streams to and from Base64 incrementally,
in chunks of any size, without buffering the whole payload.
"""


# standard libs
import sys

# external libs
from rich.traceback import install as enable_rich_tracebacks

# internal libs (forced initialization)
from b64stream.core.config import config
from b64stream.core import logging

# project metadata
from b64stream.__meta__ import (__appname__, __version__, __authors__, __developer__, __contact__,
                                __license__, __website__, __copyright__, __description__, __keywords__)

# public interface
from b64stream.codec import (Mode, DEFAULT, URL_SAFE, MIME,
                             Base64Error, DecodeError, IllegalArgumentError, ClosedStreamError,
                             encode, encode_bytes, encode_url_safe, decode,
                             open_encoder, open_decoder, wrap_reader, wrap_writer)
from b64stream.core.iotools import flow

__all__ = ['__appname__', '__version__', '__authors__', '__developer__', '__contact__',
           '__license__', '__website__', '__copyright__', '__description__', '__keywords__',
           'Mode', 'DEFAULT', 'URL_SAFE', 'MIME',
           'Base64Error', 'DecodeError', 'IllegalArgumentError', 'ClosedStreamError',
           'encode', 'encode_bytes', 'encode_url_safe', 'decode',
           'open_encoder', 'open_decoder', 'wrap_reader', 'wrap_writer', 'flow', ]


# Enable rich tracebacks for interactive shells
if sys.stdout.isatty() and hasattr(sys, 'ps1'):
    enable_rich_tracebacks()
