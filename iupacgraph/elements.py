from enum import Enum
from functools import total_ordering
from typing import Optional

from .errors import UnknownElementError

# ============================================================
# Elements
# ============================================================

_BONDING_NUMBERS = {1: 1, 13: 3, 14: 4, 15: 3, 16: 2, 17: 1}


@total_ordering
class Element(Enum):
    # Hydrogen is listed to make graph construction uniform
    HYDROGEN = ("H", 1)

    BORON = ("B", 13)
    CARBON = ("C", 14)
    NITROGEN = ("N", 15)
    OXYGEN = ("O", 16)
    FLUORINE = ("F", 17)

    ALUMINIUM = ("Al", 13)
    SILICON = ("Si", 14)
    PHOSPHORUS = ("P", 15)
    SULFUR = ("S", 16)
    CHLORINE = ("Cl", 17)

    GALLIUM = ("Ga", 13)
    GERMANIUM = ("Ge", 14)
    ARSENIC = ("As", 15)
    SELENIUM = ("Se", 16)
    BROMINE = ("Br", 17)

    INDIUM = ("In", 13)
    TIN = ("Sn", 14)
    ANTIMONY = ("Sb", 15)
    TELLURIUM = ("Te", 16)
    IODINE = ("I", 17)

    THALLIUM = ("Tl", 13)
    LEAD = ("Pb", 14)
    BISMUTH = ("Bi", 15)
    POLONIUM = ("Po", 16)
    ASTATINE = ("At", 17)

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def group(self) -> int:
        return self.value[1]

    @property
    def standard_bonding_number(self) -> int:
        return _BONDING_NUMBERS.get(self.group, 0)

    # ---------- Lookup ----------
    @classmethod
    def from_symbol(cls, symbol: str) -> Optional["Element"]:
        return _BY_SYMBOL.get(symbol)

    @classmethod
    def parse(cls, symbol: str) -> "Element":
        element = cls.from_symbol(symbol)
        if element is None:
            raise UnknownElementError(symbol)
        return element

    # ---------- Hill ordering ----------
    def _hill_key(self):
        # carbon, then hydrogen, then everything else by symbol
        if self is Element.CARBON:
            return (0, "")
        if self is Element.HYDROGEN:
            return (1, "")
        return (2, self.symbol)

    def __lt__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self._hill_key() < other._hill_key()

    def __str__(self):
        return self.symbol


_BY_SYMBOL = {element.symbol: element for element in Element}


def hill_formula(counts: dict) -> str:
    """Format {Element: count} in Hill order, e.g. C4H10."""
    parts = []
    for element in sorted(counts):
        n = counts[element]
        if n == 0:
            continue
        parts.append(element.symbol if n == 1 else f"{element.symbol}{n}")
    return "".join(parts)
