# -*- coding: utf-8 -*-

"""
печать результатов прогона: таблицы через tabulate, отчёт в markdown
и граф автомата через graphviz.
"""

from typing import List, Optional, Sequence

import graphviz
from tabulate import tabulate

from .automaton import DFA, NFA, fmt_set, mark_state
from .pipeline import PipelineResult
from .tokens import Token

TABLEFMT = "github"


def _table(rows: Sequence[Sequence[str]], headers: List[str]) -> str:
    # пустая таблица всё равно печатается с прочерками
    if not rows:
        rows = [["—"] * len(headers)]
    return tabulate(rows, headers=headers, tablefmt=TABLEFMT)


# =========================================
# отдельные таблицы
# =========================================

def tokens_table(tokens: Sequence[Token]) -> str:
    rows = [[str(i), t.text, t.kind.value, str(t.line)] for i, t in enumerate(tokens, 1)]
    return _table(rows, ["#", "token", "kind", "line"])

def lexical_errors_table(result: PipelineResult) -> str:
    rows = [[e.token, str(e.line), str(e.index)] for e in result.lexical_errors]
    return _table(rows, ["invalid token", "line", "token #"])

def automaton_table(auto) -> str:
    headers, rows = auto.transition_table()
    s = auto.summary()
    head = f"состояний: {s.states}, принимающих: {s.accepting}"
    return head + "\n\n" + _table(rows, headers)

def validation_table(result: PipelineResult) -> str:
    rows = [[text, "valid" if ok else "INVALID"] for text, ok in result.validations]
    return _table(rows, ["token", "validation"])

def symbols_table(result: PipelineResult) -> str:
    return _table(result.symbols.rows(), ["identifier", "type", "scope", "value", "memory", "line"])

def trace_table(dfa: DFA, word: str) -> str:
    ok, trace, reason = dfa.run(word)
    rows = [[str(j), cur, ch, nxt] for j, (cur, ch, nxt) in enumerate(trace)]
    verdict = "принято" if ok else "отклонено"
    return f"{verdict}: {reason}\n\n" + _table(rows, ["шаг", "текущее", "символ", "следующее"])

def verdict_line(result: PipelineResult) -> str:
    if result.success:
        return "[ok] компиляция успешна"
    if not result.lexed:
        return f"[!] лексический анализ не пройден: ошибок {len(result.lexical_errors)}"
    if not result.tokens_valid:
        return "[!] часть токенов не принята dfa"
    return f"[!] {result.syntax_error}"


# =========================================
# печать в консоль
# =========================================

def print_report(result: PipelineResult, traces: bool = False):
    if not result.lexed:
        print("\nлексические ошибки:")
        print(lexical_errors_table(result))
        print("\n" + verdict_line(result))
        return

    print(f"\nлексемы (всего {len(result.tokens)}):")
    print(tokens_table(result.tokens))

    print("\nδ-таблица: nfa по токенам")
    print(automaton_table(result.nfa))
    print("\nδ-таблица: dfa")
    print(automaton_table(result.dfa))

    print("\nпроверка токенов по dfa:")
    print(validation_table(result))
    if traces:
        for i, (text, _ok) in enumerate(result.validations, 1):
            print(f"\n[{i}] {text!r}")
            print(trace_table(result.dfa, text))

    print("\nтаблица символов:")
    print(symbols_table(result))
    for err in result.symbols.errors:
        print(f"[i] {err}")

    print("\nпроверка if/else:")
    if result.syntax_error is None:
        print(f"[ok] конструкций if проверено: {result.conditionals}")
    else:
        print(f"[!] {result.syntax_error}")

    print("\n" + verdict_line(result))


# =========================================
# отчёт в markdown
# =========================================

def render_markdown(result: PipelineResult) -> str:
    out: List[str] = []
    w = out.append

    if not result.lexed:
        w("## Лексические ошибки\n")
        w(lexical_errors_table(result))
        w("\n" + verdict_line(result))
        return "\n".join(out) + "\n"

    w("## Лексемы\n")
    w(tokens_table(result.tokens))
    w("\n## δ-таблица NFA\n")
    w(automaton_table(result.nfa))
    w("\n## δ-таблица DFA\n")
    w(automaton_table(result.dfa))
    w("\n## Проверка токенов\n")
    w(validation_table(result))
    w("\n## Таблица символов\n")
    w(symbols_table(result))
    for err in result.symbols.errors:
        w(f"\n- {err}")
    w("\n## Проверка if/else\n")
    w(str(result.syntax_error) if result.syntax_error else f"проверено конструкций: {result.conditionals}")
    w("\n" + verdict_line(result))
    return "\n".join(out) + "\n"

def save_report(result: PipelineResult, filename: str = "report.md"):
    with open(filename, "w", encoding="utf-8") as f:
        f.write(render_markdown(result))
    print(f"[ok] отчет сохранен в {filename}")


# =========================================
# визуализация автоматов (dot + png)
# =========================================

def nfa_graph(nfa: NFA) -> graphviz.Digraph:
    g = graphviz.Digraph(comment="token nfa", format="png")
    g.attr(rankdir="LR")
    for q in nfa.states:
        shape = "doublecircle" if q.accepting else "circle"
        g.node(q.name, label=mark_state(q.name, q is nfa.start, False), shape=shape)
    for q in nfa.states:
        for ch, dest in q.transitions.items():
            for t in dest:
                g.edge(q.name, t.name, label=ch)
    return g

def dfa_graph(dfa: DFA) -> graphviz.Digraph:
    g = graphviz.Digraph(comment="token dfa", format="png")
    g.attr(rankdir="LR")
    for S in dfa.states:
        shape = "doublecircle" if S in dfa.accepts else "circle"
        g.node(fmt_set(S), label=mark_state(fmt_set(S), S == dfa.start, False), shape=shape)
    for S, edges in dfa.delta.items():
        for ch, T in edges.items():
            g.edge(fmt_set(S), fmt_set(T), label=ch)
    return g

def draw_automata(result: PipelineResult, basename: str = "automaton", render: bool = False) -> List[str]:
    """
    сохраняет .dot для nfa и dfa; с render=True пытается ещё и png
    (нужен системный graphviz).
    """
    written: List[str] = []
    for suffix, g in (("nfa", nfa_graph(result.nfa)), ("dfa", dfa_graph(result.dfa))):
        filename = f"{basename}_{suffix}.dot"
        g.save(filename)
        written.append(filename)
        print(f"[ok] dot-файл сохранён: {filename}")
        if not render:
            continue
        try:
            outpath: Optional[str] = g.render(filename=f"{basename}_{suffix}", cleanup=True)
            written.append(outpath)
            print(f"[ok] png с графом автомата: {outpath}")
        except graphviz.ExecutableNotFound as e:
            print(f"[i] не удалось сгенерировать png через graphviz: {e}")
            print(f"    вы можете сгенерировать вручную: dot -Tpng {filename} -o {basename}_{suffix}.png")
    return written
