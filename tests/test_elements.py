"""
Tests for the element table and Hill ordering.
"""

import pytest

from iupacgraph.elements import Element, hill_formula
from iupacgraph.errors import UnknownElementError


class TestElementTable:
    """Symbols, groups and bonding numbers."""

    @pytest.mark.parametrize("symbol,bonding", [
        ("H", 1), ("B", 3), ("C", 4), ("N", 3), ("O", 2), ("F", 1),
        ("Si", 4), ("P", 3), ("S", 2), ("Cl", 1), ("Br", 1), ("I", 1),
    ])
    def test_standard_bonding_number(self, symbol, bonding):
        assert Element.parse(symbol).standard_bonding_number == bonding

    def test_symbols_round_trip(self):
        for element in Element:
            assert Element.from_symbol(element.symbol) is element

    def test_table_size(self):
        assert len(Element) == 26

    def test_unknown_symbol_lookup_returns_none(self):
        assert Element.from_symbol("Xx") is None
        assert Element.from_symbol("c") is None

    def test_unknown_symbol_parse_raises(self):
        with pytest.raises(UnknownElementError) as excinfo:
            Element.parse("Na")
        assert excinfo.value.symbol == "Na"
        assert isinstance(excinfo.value, ValueError)


class TestHillOrder:
    """Carbon, then hydrogen, then alphabetical."""

    def test_sort(self):
        elements = [Element.HYDROGEN, Element.OXYGEN, Element.NITROGEN, Element.CARBON]
        assert sorted(elements) == [
            Element.CARBON, Element.HYDROGEN, Element.NITROGEN, Element.OXYGEN,
        ]

    def test_alphabetical_by_symbol_not_name(self):
        assert Element.BROMINE < Element.CHLORINE
        assert Element.ANTIMONY > Element.SULFUR  # "Sb" > "S"

    def test_hill_formula(self):
        counts = {Element.OXYGEN: 1, Element.HYDROGEN: 8, Element.CARBON: 3}
        assert hill_formula(counts) == "C3H8O"

    def test_hill_formula_skips_zero_and_ones(self):
        counts = {Element.NITROGEN: 1, Element.HYDROGEN: 3, Element.CHLORINE: 0}
        assert hill_formula(counts) == "H3N"
