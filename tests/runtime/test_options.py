"""
Options tests.
"""

import pytest
from pydantic import ValidationError

from stellar_txrep.runtime.options import DEFAULT_OPTIONS, TxRepOptions


class TestTxRepOptions:
    """Test defaults, aliases and limits."""

    def test_defaults(self):
        opts = TxRepOptions()
        assert opts.max_operations == 100
        assert opts.max_signatures == 20
        assert opts.max_path_length == 5
        assert opts.max_claimants == 10
        assert opts.max_extra_signers == 2
        assert opts.max_predicate_depth == 4
        assert opts.reject_unknown_operations is True
        assert opts.derive_fees is True

    def test_default_instance(self):
        assert DEFAULT_OPTIONS == TxRepOptions()

    def test_alias_and_name(self):
        assert TxRepOptions(maxOperations=10).max_operations == 10
        assert TxRepOptions(max_operations=10).max_operations == 10

    @pytest.mark.parametrize("field,value", [
        ("max_operations", 101),
        ("max_operations", 0),
        ("max_signatures", 21),
        ("max_path_length", 6),
        ("max_claimants", 11),
        ("max_extra_signers", 3),
        ("max_predicate_depth", 0),
    ])
    def test_caps_cannot_exceed_protocol(self, field, value):
        with pytest.raises(ValidationError):
            TxRepOptions(**{field: value})

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_OPTIONS.max_operations = 5

    def test_to_dict(self):
        data = TxRepOptions(derive_fees=False).to_dict()
        assert data["maxOperations"] == 100
        assert data["deriveFees"] is False
        assert data["rejectUnknownOperations"] is True
