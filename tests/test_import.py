"""
Import smoke tests.
"""


class TestImports:
    """Test that the public surface imports."""

    def test_package(self):
        import stellar_txrep
        assert stellar_txrep.__version__ == "0.3.0"

    def test_facade_exports(self):
        from stellar_txrep import TxRep, from_txrep, to_txrep, txrep_from_xdr, xdr_from_txrep
        assert callable(to_txrep)
        assert callable(from_txrep)
        assert callable(txrep_from_xdr)
        assert callable(xdr_from_txrep)
        assert TxRep is not None

    def test_all_names_resolve(self):
        import stellar_txrep
        for name in stellar_txrep.__all__:
            assert hasattr(stellar_txrep, name), name

    def test_submodules(self):
        from stellar_txrep.codec import FieldMap, amount
        from stellar_txrep.codec import envelope, fields, operations, predicate, scalars
        from stellar_txrep.runtime import TxRepError, TxRepOptions
        from stellar_txrep import binary, enums, models
        assert FieldMap and amount and envelope and fields and operations and predicate and scalars
        assert TxRepError and TxRepOptions and binary and enums and models
