# -*- coding: utf-8 -*-

"""
автомат проверки токенов.

nfa строится по конкретным написаниям токенов как префиксное дерево:
каждое состояние задаётся путём от старта (строка прочитанных символов),
принимающие стоят на концах токенов. дальше обычная конструкция подмножеств
превращает его в dfa. так как у узла дерева по каждому символу ровно
один переход, все состояния dfa получаются одноэлементными множествами.

dfa используется только для повторной посимвольной проверки токенов,
которые уже выдал лексер.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple

logger = logging.getLogger(__name__)

StateSet = FrozenSet[int]


# =========================================
# форматирование
# =========================================

def fmt_set(s: Iterable[int]) -> str:
    ids = sorted(s)
    return "{" + ",".join(f"q{x}" for x in ids) + "}" if ids else "∅"

def mark_state(name: str, is_start: bool, is_acc: bool) -> str:
    prefix = ""
    if is_start:
        prefix += "→"
    if is_acc:
        prefix += "*"
    return prefix + name


@dataclass
class AutomatonSummary:
    name: str
    states: int
    accepting: int
    transitions: List[Tuple[str, str, str]] = field(default_factory=list)


# =========================================
# nfa (префиксное дерево по токенам)
# =========================================

class NFAState:
    def __init__(self, sid: int, path: str):
        self.id = sid
        self.path = path
        self.transitions: Dict[str, List["NFAState"]] = {}
        self.accepting = False

    @property
    def name(self) -> str:
        return f"q{self.id}"

    def add_transition(self, ch: str, nxt: "NFAState"):
        self.transitions.setdefault(ch, []).append(nxt)

    def __repr__(self):
        return f"NFAState({self.name}, {self.path!r})"


class NFA:
    def __init__(self):
        # путь -> состояние; порядок вставки = порядок создания
        self.by_path: Dict[str, NFAState] = {}
        self.states: List[NFAState] = []
        self.start = self._get_or_create("")

    @classmethod
    def from_tokens(cls, texts: Iterable[str]) -> "NFA":
        nfa = cls()
        for text in texts:
            nfa.add_token(text)
        logger.debug("nfa: состояний %d, принимающих %d", len(nfa.states), len(nfa.accepts))
        return nfa

    def _get_or_create(self, path: str) -> NFAState:
        state = self.by_path.get(path)
        if state is None:
            state = NFAState(len(self.states), path)
            self.by_path[path] = state
            self.states.append(state)
        return state

    def add_token(self, text: str):
        cur = self.start
        for ch in text:
            existing = cur.transitions.get(ch)
            if existing:
                cur = existing[0]
                continue
            nxt = self._get_or_create(cur.path + ch)
            cur.add_transition(ch, nxt)
            cur = nxt
        cur.accepting = True

    @property
    def accepts(self) -> List[NFAState]:
        return [s for s in self.states if s.accepting]

    def move(self, S: Iterable[int], ch: str) -> StateSet:
        """
        множество состояний, достижимых из S по символу ch
        """
        out: Set[int] = set()
        for q in S:
            for nxt in self.states[q].transitions.get(ch, []):
                out.add(nxt.id)
        return frozenset(out)

    def transition_table(self) -> Tuple[List[str], List[List[str]]]:
        headers = ["состояние", "путь", "символ", "следующее"]
        rows: List[List[str]] = []
        for q in self.states:
            label = mark_state(q.name, q is self.start, q.accepting)
            for ch, dest in q.transitions.items():
                rows.append([label, repr(q.path), repr(ch), fmt_set(n.id for n in dest)])
        return headers, rows

    def summary(self) -> AutomatonSummary:
        _headers, rows = self.transition_table()
        return AutomatonSummary("nfa", len(self.states), len(self.accepts),
                                [(r[0], r[2], r[3]) for r in rows])


# =========================================
# dfa (конструкция подмножеств)
# =========================================

class DFA:
    def __init__(self, start: StateSet):
        self.start = start
        self.states: List[StateSet] = [start]
        self.accepts: Set[StateSet] = set()
        self.delta: Dict[StateSet, Dict[str, StateSet]] = {}

    def transition_table(self) -> Tuple[List[str], List[List[str]]]:
        headers = ["состояние", "символ", "следующее"]
        rows: List[List[str]] = []
        for S in self.states:
            label = mark_state(fmt_set(S), S == self.start, S in self.accepts)
            for ch, T in self.delta.get(S, {}).items():
                rows.append([label, repr(ch), fmt_set(T)])
        return headers, rows

    def summary(self) -> AutomatonSummary:
        _headers, rows = self.transition_table()
        return AutomatonSummary("dfa", len(self.states), len(self.accepts),
                                [(r[0], r[1], r[2]) for r in rows])

    def run(self, w: str):
        """
        проходит слово по dfa. возвращает (принято, трассировка, причина);
        трассировка: список (текущее, символ, следующее).
        """
        cur = self.start
        trace: List[Tuple[str, str, str]] = []
        for i, ch in enumerate(w):
            nxt = self.delta.get(cur, {}).get(ch)
            trace.append((fmt_set(cur), repr(ch), fmt_set(nxt) if nxt else "-"))
            if nxt is None:
                return False, trace, f"на шаге {i}: переход из '{fmt_set(cur)}' по {ch!r} не задан"
            cur = nxt
        ok = cur in self.accepts
        return ok, trace, f"закончили в {'принимающем' if ok else 'непринимающем'} состоянии '{fmt_set(cur)}'"

    def matches(self, w: str) -> bool:
        ok, _trace, _reason = self.run(w)
        return ok


def nfa_to_dfa(nfa: NFA) -> DFA:
    start_set: StateSet = frozenset({nfa.start.id})
    dfa = DFA(start_set)
    queue, seen = [start_set], {start_set}

    while queue:
        S = queue.pop(0)
        dfa.delta.setdefault(S, {})
        if any(nfa.states[q].accepting for q in S):
            dfa.accepts.add(S)

        # символы в порядке первого появления среди членов множества
        chars: Dict[str, None] = {}
        for q in sorted(S):
            for ch in nfa.states[q].transitions:
                chars.setdefault(ch, None)

        for ch in chars:
            T = nfa.move(S, ch)
            dfa.delta[S][ch] = T
            if T not in seen:
                seen.add(T)
                dfa.states.append(T)
                queue.append(T)

    logger.debug("dfa: состояний %d, принимающих %d", len(dfa.states), len(dfa.accepts))
    return dfa


def build_automata(texts: Iterable[str]) -> Tuple[NFA, DFA]:
    nfa = NFA.from_tokens(texts)
    return nfa, nfa_to_dfa(nfa)
