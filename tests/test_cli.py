from __future__ import annotations

import io

import pytest

import rcalc
from adapters.executor import StackMachineExecutor
from contracts import MAX_DEPTH_LIMIT


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc:
        rcalc.main(argv)
    return exc.value.code


def test_eval_prints_result(capsys):
    assert _run(["eval", "--text", "1 + 2 * 3"]) == 0
    assert capsys.readouterr().out.strip() == "7"


def test_eval_continues_after_failed_lines(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("7 / 2\n1 / 0\n1 2\n\n8 - 3 - 2\n"))

    assert _run(["eval", "--executor", "vm"]) == 1

    captured = capsys.readouterr()
    assert captured.out.split() == ["3", "3"]
    errors = captured.err.strip().splitlines()
    assert errors[0] == "error: attempt to divide by zero: 1 / 0"
    assert errors[1].startswith("error: syntax error in row 1, column 3")


def test_eval_reads_file(tmp_path, capsys):
    path = tmp_path / "expr.txt"
    path.write_text("42\n2 * 21\n", encoding="utf-8")

    assert _run(["eval", "--file", str(path), "--compare"]) == 0
    assert capsys.readouterr().out.split() == ["42", "42"]


def test_eval_without_input_fails(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("  \n"))

    assert _run(["eval"]) == 1
    assert "error:" in capsys.readouterr().err


def test_compare_reports_disagreement(capsys, monkeypatch):
    monkeypatch.setattr(StackMachineExecutor, "run", lambda self, program: 0)

    assert _run(["eval", "--text", "1 + 1", "--compare"]) == 1
    assert "executors disagree" in capsys.readouterr().err


def test_default_executor_from_environment(capsys, monkeypatch):
    monkeypatch.setenv("RCALC_DEFAULT_EXECUTOR", "vm")
    monkeypatch.setattr(StackMachineExecutor, "run", lambda self, program: -1)

    assert _run(["eval", "--text", "1 + 1"]) == 0
    assert capsys.readouterr().out.strip() == "-1"


def test_parse_shows_infix(capsys):
    assert _run(["parse", "--text", "8 - 3 - 2"]) == 0

    out = capsys.readouterr().out
    assert "((8 - 3) - 2)" in out
    assert "binop" in out


def test_compile_shows_listing(capsys):
    assert _run(["compile", "--text", "1 + 2 * 3"]) == 0

    out = capsys.readouterr().out
    assert "PUSH 3" in out
    assert "MUL" in out
    assert "ADD" in out


def test_compile_reports_syntax_error(capsys):
    assert _run(["compile", "--text", "1 +"]) == 1
    assert "expected a number" in capsys.readouterr().err


def test_eval_at_largest_allowed_depth(capsys, monkeypatch):
    terms = MAX_DEPTH_LIMIT + 1
    monkeypatch.setenv("RCALC_MAX_DEPTH", str(MAX_DEPTH_LIMIT))
    monkeypatch.setattr("sys.stdin", io.StringIO("+".join(["1"] * terms) + "\n1 + 1\n"))

    assert _run(["eval", "--executor", "interpreter"]) == 0
    assert capsys.readouterr().out.split() == [str(terms), "2"]


def test_eval_rejects_depth_above_limit(capsys, monkeypatch):
    monkeypatch.setenv("RCALC_MAX_DEPTH", "5000")

    assert _run(["eval", "--text", "1 + 1"]) == 1
    assert "error: invalid configuration: max_depth" in capsys.readouterr().err


def test_eval_reports_unreadable_file(tmp_path, capsys):
    assert _run(["eval", "--file", str(tmp_path / "missing.txt")]) == 1
    assert "error: cannot read file" in capsys.readouterr().err
