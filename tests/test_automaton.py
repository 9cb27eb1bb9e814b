"""
Tests for the longest-prefix automaton.
"""

from iupacgraph.automaton import Automaton


class TestGetByPrefix:
    """Longest-match lookups."""

    def test_longest_match_wins(self):
        automaton = Automaton()
        automaton.insert("a", 0)
        automaton.insert("aa", 1)
        automaton.insert("ab", 2)
        automaton.insert("abc", 3)

        assert automaton.get_by_prefix("") is None
        assert automaton.get_by_prefix("a") == (1, 0)
        assert automaton.get_by_prefix("aa") == (2, 1)
        assert automaton.get_by_prefix("aaa") == (2, 1)
        assert automaton.get_by_prefix("aba") == (2, 2)
        assert automaton.get_by_prefix("abc") == (3, 3)

    def test_empty_automaton(self):
        assert Automaton().get_by_prefix("abc") is None

    def test_empty_key_always_matches(self):
        automaton = Automaton()
        automaton.insert("", 0)
        automaton.insert("abc", 1)

        assert automaton.get_by_prefix("") == (0, 0)
        assert automaton.get_by_prefix("a") == (0, 0)
        assert automaton.get_by_prefix("abd") == (0, 0)
        assert automaton.get_by_prefix("abc") == (3, 1)

    def test_chemistry_terms(self):
        automaton = Automaton()
        automaton.insert("But", 0)
        automaton.insert("Butyl", 1)
        automaton.insert("Butane", 2)

        assert automaton.get_by_prefix("But") == (3, 0)
        assert automaton.get_by_prefix("Butane") == (6, 2)
        assert automaton.get_by_prefix("Butene") == (3, 0)

    def test_nibble_collisions_are_rejected(self):
        """'q' and 'a' share a low nibble but must not match each other."""
        automaton = Automaton()
        automaton.insert("a", "a")
        assert ord("q") & 0xF == ord("a") & 0xF
        assert automaton.get_by_prefix("q") is None

    def test_colliding_keys_coexist(self):
        automaton = Automaton()
        automaton.insert("a", 1)
        automaton.insert("q", 2)
        assert automaton.get_by_prefix("axe") == (1, 1)
        assert automaton.get_by_prefix("quo") == (1, 2)


class TestIgnoreCase:
    """Case-insensitive automata."""

    def test_matches_either_case(self):
        automaton = Automaton(ignore_case=True)
        automaton.insert("meth", "methane")

        assert automaton.get_by_prefix("Methyl") == (4, "methane")
        assert automaton.get_by_prefix("METHYL") == (4, "methane")

    def test_case_sensitive_by_default(self):
        automaton = Automaton()
        automaton.insert("meth", "methane")

        assert automaton.get_by_prefix("Methyl") is None

    def test_len_counts_entries(self):
        automaton = Automaton()
        automaton.insert("di", 2)
        automaton.insert("do", 2)
        automaton.insert("", None)
        assert len(automaton) == 3
