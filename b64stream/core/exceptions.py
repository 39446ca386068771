# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Common exception handling for startup failures."""


# type annotations
from __future__ import annotations
from typing import Optional

# standard libs
import os
import sys
import traceback
from datetime import datetime

# internal libs
from b64stream.core.ansi import Ansi, colorize
from b64stream.core.platform import ensure_log_dir

# public interface
__all__ = ['write_traceback', 'display_critical', 'display_warning', ]


def display_critical(message: str, module: Optional[str] = None) -> None:
    """Print critical `message` to stderr (logging may not be configured yet)."""
    label = colorize('CRITICAL', Ansi.BOLD, Ansi.MAGENTA)
    scope = '' if module is None else colorize(f'[{module}] ', Ansi.FAINT)
    print(f'{label} {scope}{message}', file=sys.stderr)


def display_warning(message: str, module: Optional[str] = None) -> None:
    """Print warning `message` to stderr (logging may not be configured yet)."""
    label = colorize(' WARNING', Ansi.BOLD, Ansi.YELLOW)
    scope = '' if module is None else colorize(f'[{module}] ', Ansi.FAINT)
    print(f'{label} {scope}{message}', file=sys.stderr)


def write_traceback(exc: Exception, module: Optional[str] = None) -> str:
    """Write exception traceback to file in the log directory and return its path."""
    time = datetime.now().strftime('%Y%m%d-%H%M%S')
    path = os.path.join(ensure_log_dir(), f'exception-{time}.log')
    with open(path, mode='w') as stream:
        print(''.join(traceback.format_exception(type(exc), exc, exc.__traceback__)), file=stream)
    msg = str(exc).replace('\n', ' - ')
    display_critical(f'{exc.__class__.__name__}: {msg}', module=module)
    display_critical(f'Exception traceback written to {path}', module=module)
    return path
