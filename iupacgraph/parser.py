from dataclasses import dataclass
from typing import Any, Iterator, List, NamedTuple, Union

from loguru import logger

from .elements import Element
from .errors import GrammarError, MissingLocantError, UnbalancedBracketsError, UnbalancedStackError
from .locant import UNSPECIFIED, Locant
from .scanner import TokenKind, normalize, scan
from .structures import Base, alkane

# ============================================================
# Abstract Syntax Tree
# ============================================================
#
# Nodes are immutable, so one subtree can be shared by several
# substitutions ("hexamethyl" reuses a single methyl group).

class AST:
    @property
    def free_valence(self) -> int:
        """Number of open attachment points the built graph will have."""
        return 0


@dataclass(frozen=True)
class HydrideNode(AST):
    hydride: Any


@dataclass(frozen=True)
class BaseNode(AST):
    base: Base


@dataclass(frozen=True)
class GroupNode(AST):
    child: AST

    @property
    def free_valence(self) -> int:
        return self.child.free_valence + 1


@dataclass(frozen=True)
class UnsaturatedNode(AST):
    degree: int
    child: AST

    @property
    def free_valence(self) -> int:
        return self.child.free_valence


@dataclass(frozen=True)
class SubstitutionNode(AST):
    locant: Locant
    group: AST
    parent: AST

    @property
    def free_valence(self) -> int:
        return self.parent.free_valence + self.group.free_valence - 1


def group_of(base: Base) -> GroupNode:
    return GroupNode(BaseNode(base))


# ============================================================
# Parser
# ============================================================

class Multiplicity(NamedTuple):
    count: int


class _OpenBracket:
    def __repr__(self):
        return "OPEN_BRACKET"


OPEN_BRACKET = _OpenBracket()

StackItem = Union[AST, _OpenBracket, Locant, Multiplicity]


class Parser:
    """
    Shift-reduce parser over the token stream.

    The stack holds finished molecules (AST), open bracket markers, and
    locants / multiplicities waiting for the group they describe.
    """

    def __init__(self):
        self.stack: List[StackItem] = []

    def feed(self, token):
        kind = token.kind

        if kind is TokenKind.OPEN_BRACKET:
            self.stack.append(OPEN_BRACKET)

        elif kind is TokenKind.CLOSE_BRACKET:
            self._close_bracket()

        elif kind is TokenKind.LOCANT:
            self.stack.append(token.value)

        elif kind is TokenKind.MULTIPLICITY:
            self.stack.append(Multiplicity(token.value))

        elif kind is TokenKind.UNSATURATED:
            molecule = self.pop_molecule()
            if token.value != 0:
                molecule = UnsaturatedNode(token.value, molecule)
            self.stack.append(molecule)

        elif kind is TokenKind.FREE_VALENCE:
            self.stack.append(GroupNode(self.pop_molecule()))

        elif kind is TokenKind.HYDRIDE:
            hydride = token.value
            if hydride.has_isomers:
                hydride = hydride.with_isomer(self._pop_isomer(hydride))
            self.stack.append(HydrideNode(hydride))

        elif kind is TokenKind.BASE:
            self.stack.append(BaseNode(token.value))

        elif kind is TokenKind.PREFIX:
            self.stack.append(group_of(token.value.base))

        elif kind is TokenKind.SUFFIX:
            group = group_of(token.value.base)
            locants = list(self.pop_multiplicity_and_locants())
            molecule = self.pop_molecule()
            for locant in locants:
                molecule = SubstitutionNode(locant, group, molecule)
            self.stack.append(molecule)

        else:
            raise GrammarError(f"Unexpected token {token!r}")

    def finish(self) -> AST:
        molecule = self.pop_molecule()
        if self.stack:
            if any(item is OPEN_BRACKET for item in self.stack):
                raise UnbalancedBracketsError(f"Unclosed bracket in {self.stack!r}")
            raise UnbalancedStackError(self.stack)
        if molecule.free_valence != 0:
            raise GrammarError(f"Name ends in a substituent with {molecule.free_valence} open valence(s)")
        return molecule

    # ---------- Reductions ----------
    def pop_molecule(self) -> AST:
        """
        Pop the molecule on top, then fold every group sitting below it into
        it as a substitution, one per unit of the group's multiplicity.
        """
        if not self.stack:
            raise GrammarError("Expected a molecule, found nothing")

        top = self.stack[-1]
        if isinstance(top, AST):
            molecule = self.stack.pop()
        elif isinstance(top, Multiplicity):
            # bare "pent", "tetradec": an unbranched carbon chain
            molecule = HydrideNode(alkane(self.pop_multiplicity()))
        else:
            raise GrammarError(f"Expected a molecule, found {top!r}")

        while self.stack and isinstance(self.stack[-1], AST):
            group = self.stack.pop()
            if group.free_valence < 1:
                raise GrammarError(f"{group!r} has no free valence to attach with")
            for locant in self.pop_multiplicity_and_locants():
                molecule = SubstitutionNode(locant, group, molecule)

        return molecule

    def pop_multiplicity(self) -> int:
        if self.stack and isinstance(self.stack[-1], Multiplicity):
            return self.stack.pop().count
        return 1

    def pop_multiplicity_and_locants(self) -> Iterator[Locant]:
        for _ in range(self.pop_multiplicity()):
            if self.stack and isinstance(self.stack[-1], Locant):
                yield self.stack.pop()
            else:
                yield UNSPECIFIED

    def _pop_isomer(self, hydride) -> int:
        top = self.stack[-1] if self.stack else None
        if (
            not isinstance(top, Locant)
            or top.element not in (None, Element.HYDROGEN)
            or not 1 <= (top.number or 0) <= 9
        ):
            raise MissingLocantError(f"{hydride.value} needs an indicated hydrogen locant, e.g. 9H-{hydride.value}")
        self.stack.pop()
        return top.number

    def _close_bracket(self):
        if not any(item is OPEN_BRACKET for item in self.stack):
            raise UnbalancedBracketsError("Closing bracket without an opening one")

        # "(1H,3H)": indicated hydrogens, added after the bracket is resolved
        hydrogen_positions = []
        while self.stack and isinstance(self.stack[-1], Locant):
            locant = self.stack.pop()
            if locant.element is not Element.HYDROGEN:
                raise GrammarError(f"Expected an indicated hydrogen in brackets, found {locant}")
            hydrogen_positions.append(Locant(locant.number))

        if self.stack and self.stack[-1] is OPEN_BRACKET:
            self.stack.pop()
        else:
            molecule = self.pop_molecule()
            if not self.stack or self.stack[-1] is not OPEN_BRACKET:
                raise UnbalancedBracketsError(f"Unbalanced brackets around {molecule!r}")
            self.stack.pop()
            self.stack.append(molecule)

        if not hydrogen_positions:
            return

        for i in range(len(self.stack) - 1, -1, -1):
            if isinstance(self.stack[i], AST):
                break
        else:
            raise GrammarError("Indicated hydrogen with no molecule to apply it to")

        molecule = self.stack[i]
        for locant in hydrogen_positions:
            molecule = SubstitutionNode(locant, group_of(Base.HYDROGEN), molecule)
        self.stack[i] = molecule


def parse(name: str) -> AST:
    """Parse an IUPAC name into its AST."""
    parser = Parser()
    count = 0
    for token in scan(normalize(name)):
        parser.feed(token)
        count += 1
    logger.debug(f"Parsed {name!r} from {count} tokens")
    return parser.finish()
