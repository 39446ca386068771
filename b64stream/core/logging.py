# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""
Logging configuration.

The `b64stream` logger only carries a `NullHandler`; the host application
decides where messages go. Call `add_console_handler` to print them to stderr
using the configured level and style.
"""


# type annotations
from __future__ import annotations
from typing import Dict, Any, IO, Optional

# standard libs
import sys
import uuid
import socket
import logging

# external libs
from cmdkit.config import ConfigurationError

# internal libs
from b64stream.core.ansi import Ansi
from b64stream.core.config import config, blame
from b64stream.core.exceptions import write_traceback

# public interface
__all__ = ['Logger', 'Formatter', 'TRACE', 'HOSTNAME', 'INSTANCE', 'level_from_name', 'add_console_handler', ]


# Cached for later use
HOSTNAME = socket.gethostname()


# Unique for every instance of b64stream
INSTANCE = str(uuid.uuid4())


# Canonical colors for logging messages
level_color: Dict[str, Ansi] = {
    'NULL': Ansi.NULL,
    'TRACE': Ansi.CYAN,
    'DEBUG': Ansi.BLUE,
    'INFO': Ansi.GREEN,
    'WARNING': Ansi.YELLOW,
    'ERROR': Ansi.RED,
    'CRITICAL': Ansi.MAGENTA
}


TRACE: int = logging.DEBUG - 5
logging.addLevelName(TRACE, 'TRACE')


class Logger(logging.LoggerAdapter):
    """Wrap a standard logger to add the TRACE level."""

    def __init__(self, logger: logging.Logger) -> None:
        super().__init__(logger, {})

    def trace(self, msg: str, *args, **kwargs):
        """Log 'msg % args' with severity 'TRACE'."""
        self.log(TRACE, msg, *args, **kwargs)

    @classmethod
    def with_name(cls: Logger, name: str) -> Logger:
        """Shorthand for `Logger(logging.getLogger(name))`."""
        return cls(logging.getLogger(name))


class Formatter(logging.Formatter):
    """Adds the hostname, instance id and ANSI color codes used by `LOGGING_STYLES`."""

    def format(self, record: logging.LogRecord) -> str:
        record.app_id = INSTANCE
        record.hostname = HOSTNAME
        record.ansi_level = level_color.get(record.levelname, Ansi.NULL).value
        record.ansi_reset = Ansi.RESET.value
        record.ansi_bold = Ansi.BOLD.value
        record.ansi_faint = Ansi.FAINT.value
        record.ansi_italic = Ansi.ITALIC.value
        record.ansi_underline = Ansi.UNDERLINE.value
        return super().format(record)


def level_from_name(name: Any, source: str = 'logging.level') -> int:
    """Get level value from `name`."""
    label = blame(config, *source.split('.'))
    if not isinstance(name, str):
        raise ConfigurationError(f'Expected string for logging level, given \'{name}\' ({label})')
    name = name.upper()
    if name == 'TRACE':
        return TRACE
    elif name in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        return getattr(logging, name)
    else:
        raise ConfigurationError(f'Unsupported logging level \'{name}\' ({label})')


try:
    level = level_from_name(config.logging.level)
except ConfigurationError as error:
    write_traceback(error, module=__name__)
    raise


b64stream_logger = logging.getLogger('b64stream')
b64stream_logger.addHandler(logging.NullHandler())


def add_console_handler(stream: Optional[IO[str]] = None) -> logging.Handler:
    """Attach a stream handler (stderr by default) to the `b64stream` logger and return it."""
    handler = logging.StreamHandler(stream=sys.stderr if stream is None else stream)
    handler.setLevel(level)
    handler.setFormatter(Formatter(config.logging.format, datefmt=config.logging.datefmt))
    b64stream_logger.setLevel(level)
    b64stream_logger.addHandler(handler)
    return handler
