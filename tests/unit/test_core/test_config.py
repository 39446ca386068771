# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for runtime configuration."""


# standard libs
import os
import sys
import subprocess

# external libs
import pytest

# internal libs
import b64stream
from b64stream.core.config import (Configuration, Namespace, ConfigurationError, default, blame,
                                   get_chunksize, get_logging_style, build_preloads,
                                   DEFAULT_CHUNKSIZE, LOGGING_STYLES)


def make_config(**options) -> Configuration:
    """Build configuration with `options` layered over the defaults."""
    return Configuration(default=default, test=Namespace(options))


@pytest.mark.unit
class TestChunksize:
    """Unit tests for `codec.chunksize`."""

    def test_default(self) -> None:
        assert get_chunksize(Configuration(default=default)) == DEFAULT_CHUNKSIZE

    @pytest.mark.parametrize('value, expected', [(1, 1), (4096, 4096), ('512', 512)])
    def test_valid(self, value, expected: int) -> None:
        assert get_chunksize(make_config(codec={'chunksize': value})) == expected

    @pytest.mark.parametrize('value', [0, -1, True, 'abc', None, [1, 2]])
    def test_invalid(self, value) -> None:
        with pytest.raises(ConfigurationError, match='codec.chunksize'):
            get_chunksize(make_config(codec={'chunksize': value}))

    def test_error_names_source(self) -> None:
        with pytest.raises(ConfigurationError, match='from: <test>'):
            get_chunksize(make_config(codec={'chunksize': 0}))


@pytest.mark.unit
class TestBlame:
    """Unit tests for `blame`."""

    def test_named_layer(self) -> None:
        assert blame(make_config(codec={'chunksize': 1}), 'codec', 'chunksize') == 'from: <test>'

    def test_default_layer(self) -> None:
        assert blame(make_config(), 'codec', 'chunksize') == 'from: <default>'

    def test_environment(self) -> None:
        base = Configuration(default=default, env=Namespace({'codec': {'chunksize': 1}}))
        assert blame(base, 'codec', 'chunksize') == 'from: B64STREAM_CODEC_CHUNKSIZE'

@pytest.mark.unit
class TestLoggingStyle:
    """Unit tests for `logging.style`."""

    @pytest.mark.parametrize('style', list(LOGGING_STYLES))
    def test_valid(self, style: str) -> None:
        base = make_config(logging={'style': style.upper()})
        assert get_logging_style(base) == style
        assert build_preloads(base).logging.format == LOGGING_STYLES[style]['format']

    def test_unrecognized(self) -> None:
        with pytest.raises(ConfigurationError, match='Unrecognized'):
            get_logging_style(make_config(logging={'style': 'fancy'}))

    def test_not_a_string(self) -> None:
        with pytest.raises(ConfigurationError, match='Expected string'):
            get_logging_style(make_config(logging={'style': 42}))


IMPORT_SCRIPT = """\
from cmdkit.config import ConfigurationError
try:
    import b64stream
except ConfigurationError as error:
    print('ConfigurationError:', error)
else:
    print('imported')
"""


def run_import(cwd: str, **env: str) -> subprocess.CompletedProcess:
    """Import b64stream in a fresh interpreter with `env` layered over a clean home directory."""
    root = os.path.dirname(os.path.dirname(os.path.abspath(b64stream.__file__)))
    environ = {key: value for key, value in os.environ.items() if not key.startswith('B64STREAM_')}
    environ.update({'HOME': cwd, 'PYTHONPATH': os.pathsep.join([root, os.environ.get('PYTHONPATH', '')]), **env})
    return subprocess.run([sys.executable, '-c', IMPORT_SCRIPT], cwd=cwd, env=environ,
                          stdout=subprocess.PIPE, stderr=subprocess.PIPE, universal_newlines=True)


@pytest.mark.unit
class TestImport:
    """Configuration errors surface to the importing code."""

    def test_clean(self, tmp_path) -> None:
        result = run_import(str(tmp_path))
        assert result.returncode == 0
        assert result.stdout.strip() == 'imported'

    def test_bad_logging_level(self, tmp_path) -> None:
        result = run_import(str(tmp_path), B64STREAM_LOGGING_LEVEL='verbose')
        assert result.returncode == 0
        assert result.stdout.startswith('ConfigurationError: Unsupported logging level')

    def test_non_private_file(self, tmp_path) -> None:
        filepath = tmp_path / '.b64stream' / 'config.toml'
        filepath.parent.mkdir()
        filepath.write_text('[codec]\nchunksize = 1024\n')
        filepath.chmod(0o644)
        result = run_import(str(tmp_path))
        assert result.returncode == 0
        assert result.stdout.startswith('ConfigurationError: Non-private file permissions')
