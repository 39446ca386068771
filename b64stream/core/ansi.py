# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""ANSI escape sequences for colorizing console output."""


# standard libs
from enum import Enum

# public interface
__all__ = ['Ansi', 'colorize', ]


class Ansi(Enum):
    """ANSI escape sequences."""

    NULL = ''
    RESET = '\033[0m'
    BOLD = '\033[1m'
    FAINT = '\033[2m'
    ITALIC = '\033[3m'
    UNDERLINE = '\033[4m'
    BLACK = '\033[30m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    CYAN = '\033[36m'
    WHITE = '\033[37m'


def colorize(text: str, *codes: Ansi) -> str:
    """Wrap `text` in the given escape `codes` followed by a reset."""
    return ''.join(code.value for code in codes) + text + Ansi.RESET.value
