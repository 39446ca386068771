# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for startup exception handling."""


# standard libs
import os

# external libs
import pytest

# internal libs
from b64stream.core import exceptions


@pytest.mark.unit
def test_write_traceback(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(exceptions, 'ensure_log_dir', lambda: str(tmp_path))
    try:
        raise RuntimeError('Bad thing\nhappened')
    except RuntimeError as error:
        path = exceptions.write_traceback(error, module='testing')
    assert os.path.dirname(path) == str(tmp_path)
    assert os.path.basename(path).startswith('exception-')
    with open(path, mode='r') as stream:
        assert 'RuntimeError: Bad thing' in stream.read()
    stderr = capsys.readouterr().err
    assert 'RuntimeError: Bad thing - happened' in stderr
    assert path in stderr
    assert 'CRITICAL' in stderr


@pytest.mark.unit
def test_display_warning(capsys) -> None:
    exceptions.display_warning('Careful', module='testing')
    stderr = capsys.readouterr().err
    assert 'WARNING' in stderr and 'Careful' in stderr
