from collections import Counter
from typing import Iterator, List, Optional, Tuple

import networkx as nx
from networkx.algorithms.isomorphism import categorical_node_match

from .elements import Element, hill_formula
from .errors import InvariantError
from .locant import Locant

# ============================================================
# Molecular Graph
# ============================================================

class Graph:
    """
    Atoms, bonds, named positions and pending free valences.

    Every hydrogen is an explicit atom. Bond order is not stored: a double or
    triple bond shows up only as missing hydrogens on its two atoms.
    """

    def __init__(self, atoms=None, bonds=None, positions=None, free_valences=None):
        self.atoms: List[Element] = list(atoms or [])
        self.bonds: List[Tuple[int, int]] = list(bonds or [])
        self.positions: List[Tuple[Locant, int]] = list(positions or [])
        self.free_valences: List[int] = list(free_valences or [])

    def copy(self) -> "Graph":
        return Graph(self.atoms, self.bonds, self.positions, self.free_valences)

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        return (
            self.atoms == other.atoms
            and self.bonds == other.bonds
            and self.positions == other.positions
            and self.free_valences == other.free_valences
        )

    def __repr__(self):
        return f"Graph({self.formula()}, bonds={len(self.bonds)}, free_valences={self.free_valences})"

    # ---------- Queries ----------
    def neighbors(self, i: int) -> Iterator[int]:
        for a, b in self.bonds:
            if a == i:
                yield b
            elif b == i:
                yield a

    def hydrogen_neighbor(self, i: int) -> Optional[int]:
        return next((j for j in self.neighbors(i) if self.atoms[j] is Element.HYDROGEN), None)

    def degree(self, i: int) -> int:
        return sum(1 for _ in self.neighbors(i))

    def implicit_hydrogens(self, i: int) -> int:
        """Bonding capacity of atom i not used by an explicit bond."""
        return self.atoms[i].standard_bonding_number - self.degree(i)

    def locate(self, locant: Locant) -> int:
        if not self.positions:
            raise InvariantError("Structure has no named positions")
        if locant.unspecified:
            return self.positions[0][1]

        for position, i in self.positions:
            if position.number != locant.number:
                continue
            # an element locant ("2N") must also name the right atom
            if locant.element is not None and locant.element is not Element.HYDROGEN:
                if self.atoms[i] is not locant.element:
                    continue
            return i
        raise InvariantError(f"No atom at position {locant}")

    def formula(self) -> str:
        return hill_formula(Counter(self.atoms))

    # ---------- Mutation ----------
    def merge(self, other: "Graph") -> "Graph":
        """Append `other` in a shifted index space. Its positions are dropped."""
        offset = len(self.atoms)
        merged = self.copy()
        merged.atoms.extend(other.atoms)
        merged.bonds.extend((a + offset, b + offset) for a, b in other.bonds)
        merged.free_valences.extend(i + offset for i in other.free_valences)
        return merged

    def remove_atom(self, i: int):
        """Delete atom i in place, dropping its bonds and shifting later indices down."""
        def shift(j):
            return j - 1 if j > i else j

        del self.atoms[i]
        self.bonds = [(shift(a), shift(b)) for a, b in self.bonds if a != i and b != i]
        self.positions = [(p, shift(j)) for p, j in self.positions if j != i]
        self.free_valences = [shift(j) for j in self.free_valences if j != i]

    # ---------- Checks ----------
    def validate(self) -> "Graph":
        n = len(self.atoms)
        for a, b in self.bonds:
            if not (0 <= a < n and 0 <= b < n) or a == b:
                raise InvariantError(f"Bond ({a}, {b}) does not join two atoms of {n}")
        if self.free_valences:
            raise InvariantError(f"Molecule still has free valences at {self.free_valences}")
        for i in range(n):
            if self.implicit_hydrogens(i) < 0:
                raise InvariantError(
                    f"Atom {i} ({self.atoms[i].symbol}) has {self.degree(i)} bonds, "
                    f"more than its bonding number {self.atoms[i].standard_bonding_number}"
                )
        return self

    # ---------- Export ----------
    def to_dot(self) -> str:
        lines = ["// Compile using `neato`", "graph molecule {"]
        for i, atom in enumerate(self.atoms):
            lines.append(f'    {i} [label="{atom.symbol}", shape=none];')
        for a, b in self.bonds:
            lines.append(f"    {a} -- {b};")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def __str__(self):
        return self.to_dot()

    def to_networkx(self) -> nx.Graph:
        g = nx.Graph()
        for i, atom in enumerate(self.atoms):
            g.add_node(i, element=atom)
        g.add_edges_from(self.bonds)
        return g

    def is_isomorphic(self, other) -> bool:
        """Element-labelled isomorphism against a Graph or a networkx graph."""
        theirs = other if isinstance(other, nx.Graph) else other.to_networkx()
        return nx.is_isomorphic(
            self.to_networkx(), theirs, node_match=categorical_node_match("element", None)
        )


# ============================================================
# Graph Rewriting
# ============================================================

def free_valence(graph: Graph) -> Graph:
    """
    Open one free valence at the first position.

    A hydrogen there is removed if present; otherwise any neighbour goes
    (amino from ammonia keeps two hydrogens, oxo from O2 drops an oxygen).
    """
    molecule = graph.copy()
    if not molecule.positions:
        raise InvariantError("Cannot open a free valence on a structure with no positions")
    i = molecule.positions[0][1]

    j = molecule.hydrogen_neighbor(i)
    if j is None:
        j = next(molecule.neighbors(i), None)
    if j is None:
        raise InvariantError(f"Atom {i} has no neighbour to make room for a free valence")

    molecule.remove_atom(j)
    molecule.free_valences.append(molecule.positions[0][1])
    return molecule


def unsaturate(n: int, graph: Graph) -> Graph:
    """Remove n hydrogen pairs across the first two positions."""
    molecule = graph.copy()
    for _ in range(n):
        if len(molecule.positions) < 2:
            raise InvariantError("Unsaturation needs at least two positions")
        for k in (0, 1):
            locant, i = molecule.positions[k]
            j = molecule.hydrogen_neighbor(i)
            if j is None:
                raise InvariantError(f"No hydrogen left at position {locant} to unsaturate")
            molecule.remove_atom(j)
    return molecule


def bond_order(group: Graph) -> int:
    # a lone atom (=O, -H, -Cl) attaches with its full bonding number
    if len(group.atoms) == 1 and not group.bonds:
        return group.atoms[0].standard_bonding_number
    return 1


def substitute(locant: Locant, group: Graph, parent: Graph) -> Graph:
    """Bond `group`'s last free valence to `parent` at `locant`."""
    if not group.free_valences:
        raise InvariantError("Substituent group has no free valence")

    order = bond_order(group)
    molecule = parent.merge(group)
    i = molecule.locate(locant)

    for _ in range(order):
        j = molecule.hydrogen_neighbor(i)
        if j is None:
            # e.g. indicated hydrogen on a ring nitrogen
            break
        molecule.remove_atom(j)
        if j < i:
            i -= 1

    k = molecule.free_valences.pop()
    molecule.bonds.append((i, k))
    return molecule
