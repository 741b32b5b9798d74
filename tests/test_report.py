"""Tests for the tabulate/graphviz presentation layer and the CLI."""

import json

from khc.cli import main
from khc.pipeline import run_pipeline
from khc.report import (dfa_graph, draw_automata, nfa_graph, render_markdown, symbols_table,
                        tokens_table, trace_table, verdict_line)


class TestTables:
    def test_tokens_table(self, sample_source) -> None:
        table = tokens_table(run_pipeline(sample_source).tokens)
        assert "Keyword" in table
        assert "Boolean Constant" in table
        assert "ratio" in table

    def test_symbols_table(self, sample_source) -> None:
        table = symbols_table(run_pipeline(sample_source))
        assert "M1000" in table
        assert "0.33333" in table
        assert "ERROR" in table

    def test_trace_table(self) -> None:
        result = run_pipeline("whole x -> 1;")
        assert trace_table(result.dfa, "->").startswith("принято")

    def test_verdicts(self) -> None:
        assert verdict_line(run_pipeline("whole x -> 1;")).startswith("[ok]")
        assert "лексический" in verdict_line(run_pipeline("X"))
        assert verdict_line(run_pipeline("if x")).startswith("[!]")


class TestMarkdown:
    def test_sections(self, sample_source) -> None:
        text = render_markdown(run_pipeline(sample_source))
        for heading in ("## Лексемы", "## δ-таблица NFA", "## δ-таблица DFA",
                        "## Проверка токенов", "## Таблица символов", "## Проверка if/else"):
            assert heading in text

    def test_lexical_failure(self) -> None:
        text = render_markdown(run_pipeline("whole X -> 1;"))
        assert "## Лексические ошибки" in text
        assert "## Лексемы" not in text


class TestGraphs:
    def test_nfa_graph(self) -> None:
        result = run_pipeline("x;")
        source = nfa_graph(result.nfa).source
        assert "doublecircle" in source
        assert "q0" in source

    def test_dfa_graph(self) -> None:
        result = run_pipeline("x;")
        assert "{q1}" in dfa_graph(result.dfa).source

    def test_dot_files_written(self, tmp_path) -> None:
        result = run_pipeline("whole x -> 1;")
        written = draw_automata(result, str(tmp_path / "auto"))
        assert [p.rsplit("/", 1)[-1] for p in written] == ["auto_nfa.dot", "auto_dfa.dot"]
        assert (tmp_path / "auto_nfa.dot").read_text(encoding="utf-8").startswith("//")


class TestCli:
    def test_success_exit_code(self, sample_file, capsys) -> None:
        assert main([str(sample_file)]) == 0
        out = capsys.readouterr().out
        assert "таблица символов" in out
        assert "[ok] компиляция успешна" in out

    def test_failure_exit_code(self, tmp_path, capsys) -> None:
        path = tmp_path / "bad.kh"
        path.write_text("whole X -> 1;", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "лексические ошибки" in capsys.readouterr().out

    def test_missing_file(self, tmp_path) -> None:
        assert main([str(tmp_path / "nope.kh")]) == 2

    def test_json_output(self, sample_file, capsys) -> None:
        assert main([str(sample_file), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["success"] is True
        assert data["symbols"][0]["name"] == "x"

    def test_report_file(self, sample_file, tmp_path) -> None:
        report = tmp_path / "report.md"
        assert main([str(sample_file), "--report", str(report)]) == 0
        assert "## Таблица символов" in report.read_text(encoding="utf-8")

    def test_graph_files(self, sample_file, tmp_path) -> None:
        base = tmp_path / "g"
        assert main([str(sample_file), "--graph", str(base)]) == 0
        assert (tmp_path / "g_nfa.dot").exists()
        assert (tmp_path / "g_dfa.dot").exists()
