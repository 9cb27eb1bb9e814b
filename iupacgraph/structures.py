from dataclasses import dataclass
from enum import Enum

from .elements import Element
from .errors import InvariantError
from .graph import Graph, free_valence, substitute
from .locant import Locant

C, H, N, O = Element.CARBON, Element.HYDROGEN, Element.NITROGEN, Element.OXYGEN


def _numbered(n):
    return [(Locant(i + 1), i) for i in range(n)]


# ============================================================
# Parent Hydrides
# ============================================================

@dataclass(frozen=True)
class SimpleHydride:
    """A homogeneous unbranched chain: methane, ethane, silane, ..."""

    length: int
    element: Element = C

    has_isomers = False

    def to_graph(self) -> Graph:
        n = self.length
        bonding = self.element.standard_bonding_number

        if n < 1:
            raise InvariantError(f"Chain length must be positive, got {n}")
        if n == 1:
            return Graph(
                atoms=[self.element] + [H] * bonding,
                bonds=[(0, i + 1) for i in range(bonding)],
                positions=_numbered(1),
            )
        if bonding < 2:
            raise InvariantError(f"{self.element.symbol} cannot form a chain")

        # chain atoms first, then (bonding - 2) hydrogens per atom, then the two end caps
        hydrogens = n * (bonding - 2) + 2
        bonds = [(i, i + 1) for i in range(n - 1)]
        for i in range(n):
            for j in range(bonding - 2):
                bonds.append((i, n + j * n + i))
        bonds += [(0, n + hydrogens - 2), (n - 1, n + hydrogens - 1)]

        return Graph(
            atoms=[self.element] * n + [H] * hydrogens,
            bonds=bonds,
            positions=_numbered(n),
        )


def alkane(length: int) -> SimpleHydride:
    return SimpleHydride(length, C)


METHANE = alkane(1)
ETHANE = alkane(2)
PROPANE = alkane(3)
BUTANE = alkane(4)


class MonocyclicHydrocarbon(Enum):
    BENZENE = "benzene"

    @property
    def has_isomers(self):
        return False

    def to_graph(self) -> Graph:
        # ring carbons 0-5, hydrogen i + 6 on carbon i
        bonds = []
        for i in range(6):
            bonds += [(i, i + 6), (i, (i + 1) % 6)]
        return Graph(atoms=[C] * 6 + [H] * 6, bonds=bonds, positions=_numbered(6))


class HeteromonocyclicHydride(Enum):
    PYRIMIDINE = "pyrimidine"

    @property
    def has_isomers(self):
        return False

    def to_graph(self) -> Graph:
        return Graph(
            atoms=[N, C, N, C, C, C] + [H] * 4,
            bonds=[(i, (i + 1) % 6) for i in range(6)] + [(1, 6), (3, 7), (4, 8), (5, 9)],
            positions=_numbered(6),
        )


class HeterocyclicRing(Enum):
    """Fused ring components. These need an indicated hydrogen ("9H-purine")."""

    PURINE = "purine"

    @property
    def has_isomers(self):
        return True

    def with_isomer(self, indicated_hydrogen: int) -> "FusedRingSystem":
        return FusedRingSystem(self, indicated_hydrogen)


@dataclass(frozen=True)
class FusedRingSystem:
    ring: HeterocyclicRing
    indicated_hydrogen: int

    has_isomers = False

    def to_graph(self) -> Graph:
        if self.ring is HeterocyclicRing.PURINE:
            return _purine(self.indicated_hydrogen)
        raise InvariantError(f"No template for {self.ring}")


def _purine(isomer: int) -> Graph:
    if not 1 <= isomer <= 9:
        raise InvariantError(f"Purine has no position {isomer}")
    return Graph(
        atoms=[N, C, N, C, C, C, N, C, N] + [H] * 4,
        bonds=[
            # six-membered ring
            (0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 0),
            # five-membered ring
            (4, 6), (6, 7), (7, 8), (8, 3),
            # C-H
            (1, 9), (5, 10), (7, 11),
            # indicated hydrogen
            (isomer - 1, 12),
        ],
        positions=_numbered(9),
    )


# ============================================================
# Bases
# ============================================================

class Base(Enum):
    """Small molecules that substituent groups are cut from."""

    HYDROGEN = "hydrogen"
    OXYGEN = "oxygen"
    WATER = "water"
    AMMONIA = "ammonia"
    ISOBUTANE = "isobutane"
    HYDROGEN_FLUORIDE = "hydrogen fluoride"
    HYDROGEN_CHLORIDE = "hydrogen chloride"
    HYDROGEN_BROMIDE = "hydrogen bromide"
    HYDROGEN_IODIDE = "hydrogen iodide"

    def to_graph(self) -> Graph:
        if self is Base.HYDROGEN:
            return _diatomic(H)
        if self is Base.OXYGEN:
            return _diatomic(O)
        if self is Base.WATER:
            return _hydride_of(O, 2)
        if self is Base.AMMONIA:
            return _hydride_of(N, 3)
        if self is Base.ISOBUTANE:
            # 1,1-dimethylethane: position 1 is the branching carbon
            methyl = free_valence(METHANE.to_graph())
            ethyl = substitute(Locant(1), methyl, ETHANE.to_graph())
            return substitute(Locant(1), methyl, ethyl)
        return _hydride_of(_HALIDES[self], 1)


_HALIDES = {
    Base.HYDROGEN_FLUORIDE: Element.FLUORINE,
    Base.HYDROGEN_CHLORIDE: Element.CHLORINE,
    Base.HYDROGEN_BROMIDE: Element.BROMINE,
    Base.HYDROGEN_IODIDE: Element.IODINE,
}


def _diatomic(element: Element) -> Graph:
    return Graph(atoms=[element, element], bonds=[(0, 1)], positions=_numbered(2))


def _hydride_of(element: Element, hydrogens: int) -> Graph:
    return Graph(
        atoms=[element] + [H] * hydrogens,
        bonds=[(0, i + 1) for i in range(hydrogens)],
        positions=_numbered(1),
    )


# ============================================================
# Characteristic Groups
# ============================================================

class CharacteristicGroup(Enum):
    HYDRO = Base.HYDROGEN
    HYDROXY = Base.WATER
    OXO = Base.OXYGEN
    AMINO = Base.AMMONIA
    FLUORO = Base.HYDROGEN_FLUORIDE
    CHLORO = Base.HYDROGEN_CHLORIDE
    BROMO = Base.HYDROGEN_BROMIDE
    IODO = Base.HYDROGEN_IODIDE

    @property
    def base(self) -> Base:
        return self.value
