"""Tests for element data and bond constants."""

import pytest
from chirtree.elements import (
    AROMATIC_SUBSET,
    ELEMENTS,
    ORGANIC_SUBSET,
    BondType,
    Element,
    Parity,
    get_atomic_number,
    get_normal_valences,
    is_aromatic_symbol,
    is_organic_symbol,
)


class TestElement:
    """Test Element registry."""

    @pytest.mark.parametrize("symbol,number", [
        ("C", 6),
        ("N", 7),
        ("O", 8),
        ("Cl", 17),
        ("Br", 35),
        ("He", 2),
        ("Og", 118),
    ])
    def test_lookup(self, symbol: str, number: int):
        """Element lookup by symbol."""
        elem = Element.from_symbol(symbol)
        assert elem is not None
        assert elem.symbol == symbol
        assert elem.atomic_number == number

    def test_table_is_complete(self):
        """Every element up to oganesson is registered in order."""
        assert len(ELEMENTS) == 118
        assert [e.atomic_number for e in ELEMENTS] == list(range(1, 119))

    def test_from_atomic_number(self):
        elem = Element.from_atomic_number(26)
        assert elem is not None
        assert elem.symbol == "Fe"
        assert elem.name == "Iron"

    def test_invalid_symbol(self):
        """Invalid symbol should return None."""
        assert Element.from_symbol("Xx") is None

    @pytest.mark.parametrize("symbol,expected", [("c", "C"), ("n", "N"), ("se", "Se"), ("as", "As")])
    def test_aromatic_lookup(self, symbol: str, expected: str):
        """Lowercase aromatic symbol lookup."""
        assert Element.from_symbol(symbol).symbol == expected

    @pytest.mark.parametrize("symbol", ["sc", "h", "fe", "cl"])
    def test_lowercase_outside_aromatic_subset(self, symbol: str):
        assert Element.from_symbol(symbol) is None

    def test_immutable(self):
        elem = Element.from_symbol("C")
        with pytest.raises(AttributeError):
            elem.symbol = "N"


class TestBondType:
    """Bond symbol mapping."""

    @pytest.mark.parametrize("symbol,kind", [
        ("-", BondType.SINGLE),
        ("=", BondType.DOUBLE),
        ("#", BondType.TRIPLE),
        ("$", BondType.QUADRUPLE),
        (":", BondType.AROMATIC),
        ("/", BondType.UP),
        ("\\", BondType.DOWN),
    ])
    def test_from_symbol(self, symbol: str, kind: BondType):
        assert BondType.from_symbol(symbol) is kind
        assert kind.symbol == symbol

    def test_unknown_symbol(self):
        with pytest.raises(KeyError):
            BondType.from_symbol("~")

    def test_orders(self):
        assert BondType.SINGLE.order == 1
        assert BondType.QUADRUPLE.order == 4
        assert BondType.AROMATIC.order == 1.5

    def test_directional(self):
        assert BondType.UP.is_directional
        assert not BondType.DOUBLE.is_directional

    def test_str(self):
        assert str(BondType.DOUBLE) == "double"


class TestParity:
    def test_values(self):
        assert Parity("@") is Parity.COUNTERCLOCKWISE
        assert Parity("@@") is Parity.CLOCKWISE


class TestSubsets:
    """Test organic and aromatic subset constants."""

    def test_organic_subset_contains_common(self):
        for symbol in ("B", "C", "N", "O", "P", "S", "F", "Cl", "Br", "I"):
            assert symbol in ORGANIC_SUBSET

    def test_organic_subset_excludes_metals(self):
        """Organic subset should not contain metals."""
        assert "Fe" not in ORGANIC_SUBSET
        assert "Na" not in ORGANIC_SUBSET

    def test_aromatic_subset_lowercase(self):
        for sym in AROMATIC_SUBSET:
            assert sym.islower()


class TestHelperFunctions:
    """Test helper functions."""

    def test_get_atomic_number(self):
        assert get_atomic_number("C") == 6
        assert get_atomic_number("c") == 6
        assert get_atomic_number("Cl") == 17

    def test_get_atomic_number_invalid(self):
        """Unknown symbols and the wildcard map to 0."""
        assert get_atomic_number("Xx") == 0
        assert get_atomic_number("*") == 0

    def test_get_normal_valences(self):
        assert get_normal_valences(6) == (4,)
        assert get_normal_valences(7) == (3, 5)
        assert get_normal_valences(16) == (2, 4, 6)
        assert get_normal_valences(26) == ()

    def test_is_organic_symbol(self):
        assert is_organic_symbol("C")
        assert is_organic_symbol("c")
        assert not is_organic_symbol("Fe")

    def test_is_aromatic_symbol(self):
        assert is_aromatic_symbol("c")
        assert is_aromatic_symbol("se")
        assert not is_aromatic_symbol("C")
