"""
Ordered field map tests.
"""

import pytest

from stellar_txrep.codec.fieldmap import FieldMap
from stellar_txrep.runtime.errors import InvalidFieldError, MissingFieldError


class TestFieldMap:
    """Test insertion order, overwrite and lookup behavior."""

    def test_put_keeps_insertion_order(self):
        """Keys serialize in the order they were first put."""
        fields = FieldMap()
        fields.put("b", "1")
        fields.put("a", "2")
        fields.put("c", 3)
        assert list(fields) == ["b", "a", "c"]
        assert fields.to_text() == "b: 1\na: 2\nc: 3"

    def test_put_overwrites_in_place(self):
        """Overwriting a key keeps its original position."""
        fields = FieldMap()
        fields.put("a", "1")
        fields.put("b", "2")
        fields.put("a", "3")
        assert list(fields.items()) == [("a", "3"), ("b", "2")]

    def test_put_renders_booleans(self):
        """Booleans are written as lowercase true/false."""
        fields = FieldMap()
        fields.put("x._present", True)
        fields.put("y._present", False)
        assert fields.get("x._present") == "true"
        assert fields.get("y._present") == "false"

    def test_get_strips_comment(self):
        """Anything from '(' onward is dropped by get but kept by get_raw."""
        fields = FieldMap()
        fields.put("tx.fee", "100 (0.00001 XLM)")
        assert fields.get("tx.fee") == "100"
        assert fields.get_raw("tx.fee") == "100 (0.00001 XLM)"

    def test_get_missing_returns_none(self):
        """Absent keys read as None."""
        assert FieldMap().get("nope") is None

    def test_require_missing_names_key(self):
        """require raises MissingFieldError naming the key."""
        with pytest.raises(MissingFieldError, match="tx.seqNum"):
            FieldMap().require("tx.seqNum")

    def test_require_raw_missing(self):
        """require_raw raises for an absent key too."""
        with pytest.raises(MissingFieldError):
            FieldMap().require_raw("tx.memo.text")


class TestFieldMapParsing:
    """Test parsing of key: value text."""

    def test_parse_lines(self):
        """Keys and values are trimmed around the first colon."""
        fields = FieldMap.from_text("type: ENVELOPE_TYPE_TX\n  tx.fee :  100  \n")
        assert fields.get("type") == "ENVELOPE_TYPE_TX"
        assert fields.get("tx.fee") == "100"
        assert len(fields) == 2

    def test_value_may_contain_colons(self):
        """Only the first colon separates key from value."""
        fields = FieldMap.from_text('tx.memo.text: "a: b"')
        assert fields.get_raw("tx.memo.text") == '"a: b"'

    def test_blank_lines_skipped(self):
        """Blank and whitespace-only lines are ignored."""
        fields = FieldMap.from_text("\n\na: 1\n   \nb: 2\n")
        assert list(fields) == ["a", "b"]

    def test_duplicate_key_last_wins(self):
        """A later duplicate overwrites the earlier value."""
        fields = FieldMap.from_text("tx.fee: 100\ntx.seqNum: 1\ntx.fee: 200")
        assert fields.get("tx.fee") == "200"
        assert list(fields) == ["tx.fee", "tx.seqNum"]

    def test_line_without_colon_rejected(self):
        """A non-blank line with no colon names its line number."""
        with pytest.raises(InvalidFieldError, match="line 2"):
            FieldMap.from_text("a: 1\nno separator here")

    def test_comment_on_parsed_value(self):
        """Comments survive parsing and are stripped on get."""
        fields = FieldMap.from_text("tx.operations[0].body.paymentOp.amount: 1000000000 (100 XLM)")
        assert fields.get("tx.operations[0].body.paymentOp.amount") == "1000000000"

    def test_text_round_trip(self):
        """to_text output parses back to the same entries."""
        fields = FieldMap()
        fields.put("type", "ENVELOPE_TYPE_TX")
        fields.put("tx.memo.text", '"hello"')
        again = FieldMap.from_text(fields.to_text())
        assert list(again.items()) == list(fields.items())
