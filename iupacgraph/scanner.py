from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import Any, Iterator, Optional, Sequence, Tuple

from loguru import logger

from .automaton import Automaton
from .config import get_settings
from .elements import Element
from .errors import LexicalError
from .locant import Locant
from .structures import (
    BUTANE,
    ETHANE,
    METHANE,
    PROPANE,
    Base,
    CharacteristicGroup,
    HeterocyclicRing,
    HeteromonocyclicHydride,
    MonocyclicHydrocarbon,
    SimpleHydride,
)

# ============================================================
# Tokens
# ============================================================

class TokenKind(Enum):
    OPEN_BRACKET = auto()    # "(", "["
    CLOSE_BRACKET = auto()   # ")", "]"
    LOCANT = auto()          # "1", "2", "1H", ...
    MULTIPLICITY = auto()    # "di", "tri", "tetradeca", ...
    UNSATURATED = auto()     # "an", "en", "yn"
    FREE_VALENCE = auto()    # "yl"
    HYDRIDE = auto()         # "eth", "benzen", "purin", ...
    BASE = auto()            # "water", "tert-but", ...
    PREFIX = auto()          # "hydroxy", "amino", ...
    SUFFIX = auto()          # "ol", "one", "amine"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any = None

    def __repr__(self):
        if self.value is None:
            return f"Token({self.kind.name})"
        return f"Token({self.kind.name}, {self.value!r})"


OPEN = Token(TokenKind.OPEN_BRACKET)
CLOSE = Token(TokenKind.CLOSE_BRACKET)
FREE_VALENCE = Token(TokenKind.FREE_VALENCE)


def multiplicity(n: int) -> Token:
    return Token(TokenKind.MULTIPLICITY, n)


def hydride(structure) -> Token:
    return Token(TokenKind.HYDRIDE, structure)


def locant(number: int, element: Optional[Element] = None) -> Token:
    return Token(TokenKind.LOCANT, Locant(number, element))


# ============================================================
# Vocabulary
# ============================================================

MULTIPLICATIVE_PREFIXES = {
    "mono": 1, "hen": 1, "di": 2, "do": 2, "tri": 3, "tetr": 4,
    "pent": 5, "hex": 6, "hept": 7, "oct": 8, "non": 9, "dec": 10,

    "undec": 11, "icos": 20, "cos": 20, "triacont": 30, "tetracont": 40,
    "pentacont": 50, "hexacont": 60, "heptacont": 70, "octacont": 80,
    "nonacont": 90, "hect": 100,

    "henhect": 101, "dict": 200, "trict": 300, "tetract": 400, "pentact": 500,
    "hexact": 600, "heptact": 700, "octact": 800, "nonact": 900, "kili": 1000,

    "henkili": 1001, "dili": 2000, "trili": 3000, "tetrali": 4000, "pentali": 5000,
    "hexali": 6000, "heptali": 7000, "octali": 8000, "nonali": 9000,
}

# "di" and "mono" only ever count whole groups ("didecyl" is two decyls, 12 is "dodec")
SIMPLE_ONLY = {"mono", "di"}

# name stems, "-ane" dropped
MONONUCLEAR_HYDRIDES = {
    "bor": Element.BORON,
    "carb": Element.CARBON,
    "az": Element.NITROGEN,
    "oxid": Element.OXYGEN,
    "fluor": Element.FLUORINE,
    "alum": Element.ALUMINIUM,
    "sil": Element.SILICON,
    "phosph": Element.PHOSPHORUS,
    "sulf": Element.SULFUR,
    "chlor": Element.CHLORINE,
    "gall": Element.GALLIUM,
    "germ": Element.GERMANIUM,
    "ars": Element.ARSENIC,
    "sel": Element.SELENIUM,
    "brom": Element.BROMINE,
    "indig": Element.INDIUM,
    "stann": Element.TIN,
    "stib": Element.ANTIMONY,
    "tell": Element.TELLURIUM,
    "iod": Element.IODINE,
    "thall": Element.THALLIUM,
    "plumb": Element.LEAD,
    "bismuth": Element.BISMUTH,
    "pol": Element.POLONIUM,
    "ast": Element.ASTATINE,
}

PREFIXES = {
    "hydr": CharacteristicGroup.HYDRO,
    "oxy": CharacteristicGroup.HYDROXY,
    "hydroxy": CharacteristicGroup.HYDROXY,
    "amino": CharacteristicGroup.AMINO,
    "fluoro": CharacteristicGroup.FLUORO,
    "chloro": CharacteristicGroup.CHLORO,
    "bromo": CharacteristicGroup.BROMO,
    "iodo": CharacteristicGroup.IODO,
}

SUFFIXES = {
    "one": CharacteristicGroup.OXO,
    "ol": CharacteristicGroup.HYDROXY,
    "amine": CharacteristicGroup.AMINO,
}

BASES = {
    "water": Base.WATER,
    "ammonia": Base.AMMONIA,
    "tert-but": Base.ISOBUTANE,
}


@lru_cache(maxsize=None)
def build_vocabulary() -> Automaton:
    """Every literal the scanner knows, built once per process."""
    vocabulary = Automaton()

    for glyph in "([":
        vocabulary.insert(glyph, OPEN)
    for glyph in ")]":
        vocabulary.insert(glyph, CLOSE)

    for literal, n in MULTIPLICATIVE_PREFIXES.items():
        vocabulary.insert(literal, multiplicity(n))

    for literal, element in MONONUCLEAR_HYDRIDES.items():
        vocabulary.insert(literal, hydride(SimpleHydride(1, element)))
    vocabulary.insert("meth", hydride(METHANE))
    vocabulary.insert("eth", hydride(ETHANE))
    vocabulary.insert("prop", hydride(PROPANE))
    vocabulary.insert("but", hydride(BUTANE))

    vocabulary.insert("benzen", hydride(MonocyclicHydrocarbon.BENZENE))
    vocabulary.insert("phen", hydride(MonocyclicHydrocarbon.BENZENE))
    vocabulary.insert("pyrimidin", hydride(HeteromonocyclicHydride.PYRIMIDINE))
    vocabulary.insert("purin", hydride(HeterocyclicRing.PURINE))

    for literal, base in BASES.items():
        vocabulary.insert(literal, Token(TokenKind.BASE, base))

    vocabulary.insert("yl", FREE_VALENCE)
    vocabulary.insert("an", Token(TokenKind.UNSATURATED, 0))
    vocabulary.insert("en", Token(TokenKind.UNSATURATED, 1))
    vocabulary.insert("yn", Token(TokenKind.UNSATURATED, 2))

    for literal, group in PREFIXES.items():
        vocabulary.insert(literal, Token(TokenKind.PREFIX, group))
    for literal, group in SUFFIXES.items():
        vocabulary.insert(literal, Token(TokenKind.SUFFIX, group))

    logger.debug(f"Built scanner vocabulary with {len(vocabulary)} literals")
    return vocabulary


@lru_cache(maxsize=None)
def element_symbols() -> Automaton:
    symbols = Automaton()
    for element in Element:
        symbols.insert(element.symbol, element)
    return symbols


# ============================================================
# Name normalization
# ============================================================

def uncapitalize(name: str) -> str:
    """
    Undo sentence capitalization: lowercase the first uppercase letter that
    is followed by a lowercase one. "N-Methylphenethylamine" keeps its "N".
    """
    for i in range(len(name) - 1):
        if name[i].isascii() and name[i].isupper() and name[i + 1].islower():
            return name[:i] + name[i].lower() + name[i + 1:]
    return name


def trim_stereo_prefixes(name: str, prefixes: Sequence[str]) -> str:
    trimmed = True
    while trimmed:
        trimmed = False
        for prefix in prefixes:
            if prefix and name.startswith(prefix):
                name = name[len(prefix):]
                trimmed = True
    return name


def normalize(name: str, stereo_prefixes: Optional[Sequence[str]] = None) -> str:
    if stereo_prefixes is None:
        stereo_prefixes = get_settings().get("scanner", "stereo_prefixes")
    return uncapitalize(trim_stereo_prefixes(name.strip(), stereo_prefixes))


# ============================================================
# Scanner
# ============================================================

def _place(n: int) -> int:
    for place in (1000, 100, 10):
        if n >= place:
            return place
    return 1


def _lex(text: str) -> Iterator[Tuple[Token, str]]:
    """Yield (token, literal) pairs for already-normalized text."""
    vocabulary = build_vocabulary()
    symbols = element_symbols()
    rest = text

    while rest:
        # 1. separators
        if rest[0] in "-,":
            rest = rest[1:]
            continue

        # 2. longest vocabulary match
        match = vocabulary.get_by_prefix(rest)
        if match is not None and match[0] > 0:
            length, token = match
            yield token, rest[:length]
            rest = rest[length:]
            continue

        # 3. locant, optionally followed by an element symbol ("1H")
        if rest[0].isdigit():
            end = 1
            while end < len(rest) and rest[end].isdigit():
                end += 1
            number, rest = int(rest[:end]), rest[end:]

            element = None
            match = symbols.get_by_prefix(rest)
            if match is not None and match[0] > 0:
                length, element = match
                rest = rest[length:]
            yield Token(TokenKind.LOCANT, Locant(number, element)), str(number)
            continue

        # 4. elided vowel
        if rest[0] in "aeiou":
            rest = rest[1:]
            continue

        raise LexicalError(rest)


def scan(name: str) -> Iterator[Token]:
    """
    Tokens of a normalized name.

    Multiplicative prefixes written in rising place order ("tetra" + "deca")
    come out as one MULTIPLICITY token with their sum.
    """
    pending: Optional[Tuple[int, str]] = None

    for token, literal in _lex(name):
        if token.kind is TokenKind.MULTIPLICITY:
            if pending is not None:
                total, first = pending
                if first not in SIMPLE_ONLY and literal not in SIMPLE_ONLY and total < _place(token.value):
                    pending = (total + token.value, first)
                    continue
                yield multiplicity(total)
            pending = (token.value, literal)
            continue

        if pending is not None:
            yield multiplicity(pending[0])
            pending = None
        yield token

    if pending is not None:
        yield multiplicity(pending[0])
