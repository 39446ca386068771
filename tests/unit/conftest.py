# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Fixtures for unit tests."""


# type annotations
from __future__ import annotations
from typing import List, Optional

# standard libs
from io import BytesIO

# external libs
import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line('markers', 'unit: fast tests without external resources')


class CountingSource(BytesIO):
    """A BytesIO that records every call to `read`."""

    def __init__(self, data: bytes = b'', limit: Optional[int] = None) -> None:
        super().__init__(data)
        self.calls: List[int] = []
        self.limit = limit

    def read(self, size: Optional[int] = -1) -> bytes:
        """Return at most `limit` bytes per call (short reads) and count calls."""
        self.calls.append(size)
        if self.limit is not None and (size is None or size < 0 or size > self.limit):
            size = self.limit
        return super().read(size)


class KeepOpenSink(BytesIO):
    """A BytesIO whose contents survive `close`."""

    def __init__(self) -> None:
        super().__init__()
        self.closed_count = 0
        self.result: Optional[bytes] = None

    def close(self) -> None:
        self.closed_count += 1
        if not self.closed:
            self.result = self.getvalue()
        super().close()


@pytest.fixture
def counting_source():
    """Factory for sources that count read calls."""
    return CountingSource


@pytest.fixture
def sink() -> KeepOpenSink:
    """A sink that keeps its value after being closed."""
    return KeepOpenSink()
