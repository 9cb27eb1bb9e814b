"""
Minimal InChI reader used to cross-check graphs built from names.

Only the standard prefix and the formula (/), connection (/c) and hydrogen
(/h) layers are read; later layers are ignored.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple

import networkx as nx
from loguru import logger

from .elements import Element
from .errors import InChIError
from .graph import Graph

PREFIX = "InChI=1S"

_TOKEN = re.compile(r"\d+|[A-Z][a-z]*|[-,()]")


def _tokenize(text: str) -> List[str]:
    tokens = []
    pos = 0
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        if match is None:
            raise InChIError(f"Unexpected character {text[pos]!r} in {text!r}")
        tokens.append(match.group())
        pos = match.end()
    return tokens


# ============================================================
# Layers
# ============================================================

@dataclass
class Formula:
    atom_counts: Dict[Element, int] = field(default_factory=dict)

    @classmethod
    def parse(cls, text: str) -> "Formula":
        if not re.fullmatch(r"(?:[A-Z][a-z]*\d*)+", text):
            raise InChIError(f"Malformed formula layer: {text!r}")

        counts = {}
        for symbol, digits in re.findall(r"([A-Z][a-z]*)(\d*)", text):
            element = Element.parse(symbol)
            counts[element] = counts.get(element, 0) + (int(digits) if digits else 1)
        return cls(counts)

    @property
    def skeleton(self) -> List[Element]:
        """Non-hydrogen atoms in InChI numbering order (Hill order)."""
        atoms = []
        for element in sorted(self.atom_counts):
            if element is not Element.HYDROGEN:
                atoms += [element] * self.atom_counts[element]
        return atoms

    @property
    def hydrogens(self) -> int:
        return self.atom_counts.get(Element.HYDROGEN, 0)


def parse_connections(text: str) -> List[Tuple[int, int]]:
    """'1-3(2)4' -> [(1, 3), (3, 2), (3, 4)]"""
    connections = []
    last = None
    branches = []

    for token in _tokenize(text):
        if token.isdigit():
            i = int(token)
            if last is not None:
                connections.append((last, i))
            last = i
        elif token == "-":
            pass
        elif token == ",":
            # next branch from the same branch point
            if not branches:
                raise InChIError(f"',' outside a branch in connection layer {text!r}")
            last = branches[-1]
        elif token == "(":
            branches.append(last)
        elif token == ")":
            if not branches:
                raise InChIError(f"Unmatched ')' in connection layer {text!r}")
            last = branches.pop()
        else:
            raise InChIError(f"Unexpected {token!r} in connection layer {text!r}")

    if branches:
        raise InChIError(f"Unmatched '(' in connection layer {text!r}")
    return connections


@dataclass
class Hydrogens:
    # ([(first, last), ...], count): every atom in the ranges carries `count` H
    immobile: List[Tuple[List[Tuple[int, int]], int]] = field(default_factory=list)
    # (count, [candidates]): `count` H spread over the candidate atoms
    mobile: List[Tuple[int, List[int]]] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> "Hydrogens":
        hydrogens = cls()
        tokens = _tokenize(text)
        pos = 0

        def peek():
            return tokens[pos] if pos < len(tokens) else None

        def expect(predicate, what):
            nonlocal pos
            token = peek()
            if token is None or not predicate(token):
                raise InChIError(f"Expected {what} in hydrogen layer {text!r}, found {token!r}")
            pos += 1
            return token

        def count():
            if peek() is not None and peek().isdigit():
                return int(expect(str.isdigit, "a count"))
            return 1

        while True:
            if peek() is not None and peek().isdigit():
                ranges = []
                while True:
                    start = int(expect(str.isdigit, "an atom number"))
                    end = start
                    if peek() == "-":
                        expect("-".__eq__, "'-'")
                        end = int(expect(str.isdigit, "an atom number"))
                    ranges.append((start, end))
                    if peek() != ",":
                        break
                    expect(",".__eq__, "','")
                expect("H".__eq__, "'H'")
                hydrogens.immobile.append((ranges, count()))
            else:
                expect("(".__eq__, "'('")
                expect("H".__eq__, "'H'")
                n = count()
                indices = []
                while peek() == ",":
                    expect(",".__eq__, "','")
                    indices.append(int(expect(str.isdigit, "an atom number")))
                expect(")".__eq__, "')'")
                if not indices:
                    raise InChIError(f"Mobile hydrogen group without atoms in {text!r}")
                hydrogens.mobile.append((n, indices))

            if peek() != ",":
                break
            expect(",".__eq__, "','")

        if peek() is not None:
            raise InChIError(f"Trailing {tokens[pos:]!r} in hydrogen layer {text!r}")
        return hydrogens

    def fixed_counts(self) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for ranges, n in self.immobile:
            for start, end in ranges:
                for i in range(start, end + 1):
                    counts[i] = counts.get(i, 0) + n
        return counts


# ============================================================
# InChI
# ============================================================

@dataclass
class InChI:
    formula: Formula = field(default_factory=Formula)
    connections: List[Tuple[int, int]] = field(default_factory=list)
    hydrogens: Hydrogens = field(default_factory=Hydrogens)

    @classmethod
    def parse(cls, text: str) -> "InChI":
        parts = text.strip().split("/")
        if parts[0] != PREFIX:
            raise InChIError(f"Not a standard InChI: {text!r}")

        inchi = cls()
        if len(parts) > 1:
            inchi.formula = Formula.parse(parts[1])
        for layer in parts[2:]:
            if layer.startswith("c"):
                inchi.connections = parse_connections(layer[1:])
            elif layer.startswith("h"):
                inchi.hydrogens = Hydrogens.parse(layer[1:])

        size = len(inchi.formula.skeleton)
        for i, j in inchi.connections:
            if not (1 <= i <= size and 1 <= j <= size):
                raise InChIError(f"Connection {i}-{j} outside atoms 1-{size}")
        return inchi

    # ---------- Mobile hydrogens ----------
    def plausible(self) -> bool:
        """No skeletal atom has more bonds than its bonding number."""
        skeleton = self.formula.skeleton
        degrees = [0] * len(skeleton)
        for i, j in self.connections:
            degrees[i - 1] += 1
            degrees[j - 1] += 1
        for i, n in self.hydrogens.fixed_counts().items():
            if not 1 <= i <= len(skeleton):
                return False
            degrees[i - 1] += n
        return all(d <= e.standard_bonding_number for e, d in zip(skeleton, degrees))

    def isomers(self) -> List["InChI"]:
        """
        Every placement of the mobile hydrogens as fixed ones.

        Hydrogens are placed one at a time and a partial placement that
        overloads an atom is dropped before the next hydrogen is tried.
        Within a group candidates are taken in non-decreasing order, so each
        placement is produced once.
        """
        found: List[InChI] = []
        self._collect_isomers(found)
        logger.debug(f"{len(found)} hydrogen placement(s) for {self.formula.atom_counts}")
        return found

    def _collect_isomers(self, found: List["InChI"], start: int = 0):
        if not self.hydrogens.mobile:
            found.append(self)
            return

        (n, candidates), rest = self.hydrogens.mobile[0], self.hydrogens.mobile[1:]
        candidates = sorted(set(candidates))
        for k in range(start, len(candidates)):
            if n > 1:
                mobile, next_start = [(n - 1, candidates)] + rest, k
            else:
                mobile, next_start = list(rest), 0
            candidate = replace(
                self,
                hydrogens=Hydrogens(
                    immobile=self.hydrogens.immobile + [([(candidates[k], candidates[k])], 1)],
                    mobile=mobile,
                ),
            )
            if candidate.plausible():
                candidate._collect_isomers(found, next_start)

    # ---------- Graph ----------
    def to_networkx(self) -> nx.Graph:
        if self.hydrogens.mobile:
            raise InChIError("Mobile hydrogens must be placed first, see isomers()")

        skeleton = self.formula.skeleton
        g = nx.Graph()
        for i, element in enumerate(skeleton, start=1):
            g.add_node(i, element=element)
        g.add_edges_from(self.connections)

        h = 0
        for i, n in sorted(self.hydrogens.fixed_counts().items()):
            for _ in range(n):
                h += 1
                node = f"H{h}"
                g.add_node(node, element=Element.HYDROGEN)
                g.add_edge(i, node)

        # hydrogens not attached by the layer (e.g. H2, or a charged species)
        for _ in range(self.formula.hydrogens - h):
            h += 1
            g.add_node(f"H{h}", element=Element.HYDROGEN)
        if h > self.formula.hydrogens:
            raise InChIError(f"Hydrogen layer places {h} H but the formula has {self.formula.hydrogens}")
        return g

    def matches(self, graph: Graph) -> bool:
        """True when `graph` is isomorphic to some hydrogen placement."""
        return any(graph.is_isomorphic(isomer.to_networkx()) for isomer in self.isomers())


def parse_inchi(text: str) -> InChI:
    return InChI.parse(text)
