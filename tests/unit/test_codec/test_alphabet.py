# SPDX-FileCopyrightText: 2022 B64Stream Team
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for alphabet tables."""


# external libs
import pytest
from hypothesis import given, strategies as st

# internal libs
from b64stream.codec.alphabet import (Mode, DEFAULT, URL_SAFE, MIME, Symbol, Alphabet,
                                      STANDARD_ALPHABET, URL_SAFE_ALPHABET, LINE_LENGTH, GROUPS_PER_LINE)


@pytest.mark.unit
class TestMode:
    """Unit tests for Mode flags."""

    def test_values(self) -> None:
        assert int(DEFAULT) == 0
        assert int(URL_SAFE) == 1
        assert int(MIME) == 2

    def test_combinable(self) -> None:
        mode = Mode(URL_SAFE | MIME)
        assert mode & URL_SAFE
        assert mode & MIME
        assert Mode(3) == mode


@pytest.mark.unit
@pytest.mark.parametrize('alphabet', [STANDARD_ALPHABET, URL_SAFE_ALPHABET])
class TestAlphabet:
    """Invariants shared by both alphabets."""

    def test_forward_is_distinct(self, alphabet: Alphabet) -> None:
        assert len(set(alphabet.forward(value) for value in range(64))) == 64

    def test_reverse_inverts_forward(self, alphabet: Alphabet) -> None:
        for value in range(64):
            assert alphabet.reverse(alphabet.forward(value)) == value

    def test_reverse_table_is_total(self, alphabet: Alphabet) -> None:
        codes = [alphabet.reverse(byte) for byte in range(256)]
        assert len(codes) == 256
        assert sum(1 for code in codes if code >= 0) == 64
        assert codes.count(Symbol.PADDING) == 1
        assert codes.count(Symbol.CR) == 1
        assert codes.count(Symbol.LF) == 1
        assert codes.count(Symbol.INVALID) == 256 - 64 - 3

    def test_sentinels(self, alphabet: Alphabet) -> None:
        assert alphabet.reverse(ord('=')) == Symbol.PADDING
        assert alphabet.reverse(ord('\r')) == Symbol.CR
        assert alphabet.reverse(ord('\n')) == Symbol.LF
        assert alphabet.reverse(ord(' ')) == Symbol.INVALID
        assert alphabet.reverse(0xff) == Symbol.INVALID

    def test_read_only(self, alphabet: Alphabet) -> None:
        with pytest.raises(AttributeError):
            alphabet.symbols = b'x' * 64


@pytest.mark.unit
class TestAlphabetVariants:
    """Differences between standard and URL-safe alphabets."""

    def test_shared_prefix(self) -> None:
        assert STANDARD_ALPHABET.symbols[:62] == URL_SAFE_ALPHABET.symbols[:62]

    def test_last_two_symbols(self) -> None:
        assert STANDARD_ALPHABET.symbols[62:] == b'+/'
        assert URL_SAFE_ALPHABET.symbols[62:] == b'-_'

    def test_disjoint_specials(self) -> None:
        assert STANDARD_ALPHABET.reverse(ord('-')) == Symbol.INVALID
        assert STANDARD_ALPHABET.reverse(ord('_')) == Symbol.INVALID
        assert URL_SAFE_ALPHABET.reverse(ord('+')) == Symbol.INVALID
        assert URL_SAFE_ALPHABET.reverse(ord('/')) == Symbol.INVALID

    @given(mode=st.sampled_from([0, 1, 2, 3]))
    def test_from_mode(self, mode: int) -> None:
        expected = URL_SAFE_ALPHABET if mode & 1 else STANDARD_ALPHABET
        assert Alphabet.from_mode(mode) is expected

    def test_line_length(self) -> None:
        assert LINE_LENGTH == 76
        assert GROUPS_PER_LINE == 19


@pytest.mark.unit
class TestAlphabetDefinition:
    """Construction of custom alphabets is validated."""

    def test_wrong_size(self) -> None:
        with pytest.raises(ValueError):
            Alphabet('short', b'ABC')

    def test_duplicates(self) -> None:
        with pytest.raises(ValueError):
            Alphabet('duplicate', b'A' * 64)

    def test_reserved_symbols(self) -> None:
        with pytest.raises(ValueError):
            Alphabet('padded', STANDARD_ALPHABET.symbols[:63] + b'=')
