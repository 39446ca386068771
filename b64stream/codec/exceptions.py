# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the Base64 codec."""


# public interface
__all__ = ['Base64Error', 'DecodeError', 'IllegalArgumentError', 'ClosedStreamError', ]


class Base64Error(Exception):
    """Base class for all codec errors."""


class DecodeError(Base64Error, ValueError):
    """Malformed Base64 input (illegal symbol, misplaced padding, or truncated group)."""


class IllegalArgumentError(DecodeError):
    """Static input that cannot possibly be Base64 (e.g., wrong total length)."""


class ClosedStreamError(Base64Error, ValueError):
    """Operation attempted on a closed (or finalized) stream filter."""
