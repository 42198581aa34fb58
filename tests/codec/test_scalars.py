"""
Scalar parsing tests.
"""

import pytest

from stellar_txrep.codec.scalars import (
    UINT32_MAX,
    parse_bool,
    parse_hex,
    parse_int,
    parse_quoted,
    quote,
    round_half_up,
)
from stellar_txrep.enums import MemoType
from stellar_txrep.codec.scalars import parse_enum
from stellar_txrep.runtime.errors import InvalidFieldError


class TestParseInt:
    """Test strict integer parsing."""

    def test_valid(self):
        assert parse_int("42", "k") == 42
        assert parse_int("-7", "k") == -7
        assert parse_int("0", "k") == 0

    @pytest.mark.parametrize("text", ["007", "+7", "1.0", "", " 1", "0x10", "-0"])
    def test_non_canonical_rejected(self, text):
        """Leading zeros, signs, decimals and blanks are rejected."""
        with pytest.raises(InvalidFieldError, match="not an integer"):
            parse_int(text, "tx.fee")

    def test_out_of_range(self):
        """Range errors name the key."""
        with pytest.raises(InvalidFieldError, match="tx.fee"):
            parse_int(str(UINT32_MAX + 1), "tx.fee", 0, UINT32_MAX)


class TestParseBool:
    def test_valid(self):
        assert parse_bool("true", "k") is True
        assert parse_bool("false", "k") is False

    @pytest.mark.parametrize("text", ["True", "1", "yes", ""])
    def test_invalid(self, text):
        with pytest.raises(InvalidFieldError, match="expected true or false"):
            parse_bool(text, "k")


class TestParseHex:
    def test_valid(self):
        assert parse_hex("b51d604e", "k", length=4) == bytes.fromhex("b51d604e")

    def test_uppercase_accepted(self):
        assert parse_hex("B51D604E", "k") == bytes.fromhex("b51d604e")

    def test_odd_length_rejected(self):
        with pytest.raises(InvalidFieldError, match="not valid hex"):
            parse_hex("abc", "k")

    def test_exact_length(self):
        with pytest.raises(InvalidFieldError, match="expected 32 bytes"):
            parse_hex("00" * 31, "k", length=32)

    def test_max_length(self):
        with pytest.raises(InvalidFieldError, match="at most 64 bytes"):
            parse_hex("00" * 65, "k", max_length=64)


class TestQuotedStrings:
    """Test JSON-quoted string values."""

    def test_quote_escapes(self):
        assert quote('say "hi"') == '"say \\"hi\\""'

    def test_parse_plain(self):
        assert parse_quoted('"hello"', "k") == "hello"

    def test_parse_keeps_parenthesis_inside_quotes(self):
        """A '(' inside the literal is text, not a comment."""
        assert parse_quoted('"a (b)"', "k") == "a (b)"

    def test_parse_allows_trailing_comment(self):
        assert parse_quoted('"hello" (greeting)', "k") == "hello"

    def test_parse_rejects_unquoted(self):
        with pytest.raises(InvalidFieldError, match="double-quoted"):
            parse_quoted("hello", "k")

    def test_parse_rejects_trailing_text(self):
        with pytest.raises(InvalidFieldError, match="unexpected text"):
            parse_quoted('"hello" world', "k")

    def test_parse_rejects_unterminated(self):
        with pytest.raises(InvalidFieldError, match="malformed"):
            parse_quoted('"hello', "k")

    def test_unicode_round_trip(self):
        text = "Dié Möbel"
        assert parse_quoted(quote(text), "k") == text


class TestMisc:
    def test_parse_enum(self):
        assert parse_enum(MemoType, "MEMO_ID", "tx.memo.type") == MemoType.MEMO_ID
        with pytest.raises(InvalidFieldError, match="tx.memo.type"):
            parse_enum(MemoType, "MEMO_BOGUS", "tx.memo.type")

    @pytest.mark.parametrize("total,count,expected", [
        (300, 3, 100),
        (250, 2, 125),
        (101, 2, 51),
        (100, 3, 33),
        (5, 2, 3),
    ])
    def test_round_half_up(self, total, count, expected):
        assert round_half_up(total, count) == expected
