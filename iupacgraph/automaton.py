from typing import Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")

# ============================================================
# Prefix Automaton
# ============================================================
#
# Runs a DFA over the low 4 bits of each character, then walks back up the
# visited states checking the strings stored there for a real prefix match.
# A string of length n is always stored at depth n, so the first hit on the
# way up is the longest match.


def _nibble(c: str) -> int:
    return ord(c) & 0xF


class _State(Generic[T]):
    __slots__ = ("transitions", "parent", "mappings")

    def __init__(self, parent=0):
        self.transitions: List[Optional[int]] = [None] * 16
        self.parent = parent
        self.mappings: List[Tuple[str, T]] = []


class Automaton(Generic[T]):
    def __init__(self, ignore_case=False):
        self.ignore_case = ignore_case
        self._states: List[_State[T]] = []

    def __len__(self):
        return sum(len(state.mappings) for state in self._states)

    # ---------- Build ----------
    def insert(self, key: str, value: T):
        if not self._states:
            self._states.append(_State())

        cursor = 0
        for c in key:
            nibble = _nibble(c)
            nxt = self._states[cursor].transitions[nibble]
            if nxt is None:
                nxt = len(self._states)
                self._states.append(_State(parent=cursor))
                self._states[cursor].transitions[nibble] = nxt
            cursor = nxt

        self._states[cursor].mappings.append((key, value))

    # ---------- Lookup ----------
    def _descend(self, text: str) -> int:
        cursor = 0
        for c in text:
            nxt = self._states[cursor].transitions[_nibble(c)]
            if nxt is None:
                break
            cursor = nxt
        return cursor

    def _matches(self, text: str, key: str) -> bool:
        if self.ignore_case:
            return text[: len(key)].lower() == key.lower()
        return text.startswith(key)

    def get_by_prefix(self, text: str) -> Optional[Tuple[int, T]]:
        """
        Longest inserted key that is a prefix of `text`.

        Returns (matched_length, value), or None when nothing matches.
        """
        if not self._states:
            return None

        cursor = self._descend(text)
        while True:
            state = self._states[cursor]
            for key, value in state.mappings:
                if self._matches(text, key):
                    return len(key), value

            if cursor == 0:
                return None
            cursor = state.parent
