# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for logging setup."""


# standard libs
import logging
from io import StringIO

# external libs
import pytest

# internal libs
from b64stream.core.config import ConfigurationError
from b64stream.core.logging import Logger, TRACE, INSTANCE, level_from_name, add_console_handler


@pytest.mark.unit
class TestLogging:
    """Unit tests for logging helpers."""

    @pytest.mark.parametrize('name, level', [('trace', TRACE), ('DEBUG', logging.DEBUG), ('info', logging.INFO),
                                             ('Warning', logging.WARNING), ('error', logging.ERROR),
                                             ('critical', logging.CRITICAL)])
    def test_level_from_name(self, name: str, level: int) -> None:
        assert level_from_name(name) == level

    def test_level_unsupported(self) -> None:
        with pytest.raises(ConfigurationError, match='Unsupported'):
            level_from_name('verbose')

    def test_level_not_a_string(self) -> None:
        with pytest.raises(ConfigurationError, match='Expected string'):
            level_from_name(10)

    def test_logger(self) -> None:
        log = Logger.with_name('b64stream.testing')
        assert isinstance(log, Logger)
        assert log.logger is logging.getLogger('b64stream.testing')
        assert logging.getLevelName(TRACE) == 'TRACE'

    def test_host_logging_untouched(self) -> None:
        assert logging.getLoggerClass() is logging.Logger
        assert logging.getLogRecordFactory() is logging.LogRecord
        handlers = logging.getLogger('b64stream').handlers
        assert any(isinstance(handler, logging.NullHandler) for handler in handlers)
        assert not any(type(handler) is logging.StreamHandler for handler in handlers)

    def test_trace(self, caplog: pytest.LogCaptureFixture) -> None:
        log = Logger.with_name('b64stream.testing.trace')
        with caplog.at_level(TRACE, logger='b64stream.testing.trace'):
            log.trace('hello %s', 'world')
        record, = caplog.records
        assert record.levelname == 'TRACE'
        assert record.getMessage() == 'hello world'

    def test_add_console_handler(self) -> None:
        stream = StringIO()
        package_logger = logging.getLogger('b64stream')
        handler = add_console_handler(stream)
        try:
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(type(handler.formatter)('%(app_id)s %(levelname)s %(message)s'))
            package_logger.setLevel(logging.DEBUG)
            Logger.with_name('b64stream.testing.console').debug('hello')
        finally:
            package_logger.removeHandler(handler)
            package_logger.setLevel(logging.NOTSET)
        assert stream.getvalue() == f'{INSTANCE} DEBUG hello\n'
