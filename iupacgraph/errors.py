# ============================================================
# Exceptions
# ============================================================

class IupacError(Exception):
    """Base class for everything this package raises on purpose."""


# ---------- User input ----------
class ParseError(IupacError, ValueError):
    """A name was rejected. Nothing is built from a rejected name."""


class LexicalError(ParseError):
    def __init__(self, remaining: str):
        super().__init__(f"Unrecognized input: {remaining!r}")
        self.remaining = remaining


class GrammarError(ParseError):
    pass


class UnbalancedBracketsError(GrammarError):
    def __init__(self, message="Unbalanced brackets"):
        super().__init__(message)


class UnbalancedStackError(GrammarError):
    def __init__(self, stack=None):
        message = "Unbalanced stack"
        if stack:
            message += f": {len(stack)} item(s) left over"
        super().__init__(message)
        self.stack = list(stack or [])


class MissingLocantError(GrammarError):
    pass


# ---------- Internal ----------
class InvariantError(IupacError, RuntimeError):
    """
    Raised while building a graph when an operation finds the molecule in a
    state the parser should never produce (missing position, hydrogen or
    free valence). Seeing one means a bug, not a bad name.
    """


# ---------- Data ----------
class UnknownElementError(IupacError, ValueError):
    def __init__(self, symbol: str):
        super().__init__(f"Unknown element: {symbol!r}")
        self.symbol = symbol


class InChIError(IupacError, ValueError):
    pass


class PubChemError(IupacError):
    pass
