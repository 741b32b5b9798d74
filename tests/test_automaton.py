"""Tests for the token trie NFA, its subset construction and DFA matching."""

import pytest

from khc.automaton import NFA, build_automata, fmt_set, nfa_to_dfa
from khc.lexer import tokenize


def _dfa(texts):
    return build_automata(texts)[1]


# ###############
# NFA construction
# ###############


class TestNFA:
    def test_state_count_for_disjoint_tokens(self) -> None:
        nfa = NFA.from_tokens(["x", "->", "10"])
        # start, x, -, ->, 1, 10
        assert len(nfa.states) == 6
        assert len(nfa.accepts) == 3

    def test_shared_prefix_reuses_states(self) -> None:
        nfa = NFA.from_tokens(["whole", "while"])
        assert [s.path for s in nfa.states] == [
            "", "w", "wh", "who", "whol", "whole", "whi", "whil", "while",
        ]

    def test_duplicate_tokens_add_nothing(self) -> None:
        once = NFA.from_tokens(["say", "x"])
        twice = NFA.from_tokens(["say", "x", "say", "x"])
        assert len(once.states) == len(twice.states)

    def test_token_that_is_prefix_of_another(self) -> None:
        nfa = NFA.from_tokens(["<=", "<"])
        assert [s.path for s in nfa.accepts] == ["<", "<="]

    def test_single_incoming_transition(self) -> None:
        nfa = NFA.from_tokens(["whole", "while", "x", "->", "10", "1"])
        incoming = {s.id: 0 for s in nfa.states}
        for s in nfa.states:
            for dest in s.transitions.values():
                assert len(dest) == 1
                incoming[dest[0].id] += 1
        assert incoming[nfa.start.id] == 0
        assert all(n == 1 for sid, n in incoming.items() if sid != nfa.start.id)

    def test_summary(self) -> None:
        s = NFA.from_tokens(["x", "->", "10"]).summary()
        assert (s.name, s.states, s.accepting) == ("nfa", 6, 3)
        assert len(s.transitions) == 5
        assert s.transitions[0] == ("→q0", "'x'", "{q1}")


# ###############
# Subset construction
# ###############


class TestDeterminize:
    def test_all_states_are_singletons(self) -> None:
        nfa = NFA.from_tokens(_texts_of("whole x -> 10; if (x > 5) { say x; }"))
        dfa = nfa_to_dfa(nfa)
        assert all(len(S) == 1 for S in dfa.states)
        assert len(dfa.states) == len(nfa.states)

    def test_accepting_sets(self) -> None:
        nfa, dfa = build_automata(["ab", "a"])
        assert len(dfa.accepts) == len(nfa.accepts) == 2

    def test_start_is_start_state(self) -> None:
        nfa, dfa = build_automata(["x"])
        assert dfa.start == frozenset({nfa.start.id})
        assert fmt_set(dfa.start) == "{q0}"

    def test_construction_is_deterministic(self) -> None:
        texts = _texts_of("whole a -> 1; fraction b -> 2.5; if (a) { say b; }")
        first = _dfa(texts).transition_table()
        second = _dfa(texts).transition_table()
        assert first == second

    def test_empty_token_list(self) -> None:
        nfa, dfa = build_automata([])
        assert len(dfa.states) == 1
        assert not dfa.matches("")
        assert not dfa.matches("x")


# ###############
# Matching
# ###############


class TestMatch:
    def test_own_tokens_accepted(self) -> None:
        texts = _texts_of('whole x -> 10; say "hi"; if (x >= 5) { say x; }')
        dfa = _dfa(texts)
        assert all(dfa.matches(t) for t in texts)

    @pytest.mark.parametrize("word", ["y", "1", "-", "100", "x1", ""])
    def test_foreign_strings_rejected(self, word) -> None:
        assert not _dfa(["x", "->", "10"]).matches(word)

    def test_run_trace_on_accept(self) -> None:
        ok, trace, reason = _dfa(["->"]).run("->")
        assert ok
        assert trace == [("{q0}", "'-'", "{q1}"), ("{q1}", "'>'", "{q2}")]
        assert "принимающем" in reason

    def test_run_trace_on_missing_transition(self) -> None:
        ok, trace, reason = _dfa(["x"]).run("y")
        assert not ok
        assert trace == [("{q0}", "'y'", "-")]
        assert "шаге 0" in reason

    def test_run_stops_in_non_accepting_state(self) -> None:
        ok, _trace, reason = _dfa(["10"]).run("1")
        assert not ok
        assert "непринимающем" in reason


def _texts_of(source: str) -> list:
    return [t.text for t in tokenize(source)]
