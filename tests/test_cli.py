## monkeyfl — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def _env(extra: dict | None = None) -> dict:
    merged_env = os.environ.copy()
    src = str(repo_root() / "src")
    merged_env["PYTHONPATH"] = os.pathsep.join(p for p in (src, merged_env.get("PYTHONPATH")) if p)
    merged_env.pop("MONKEY_DEBUG", None)
    if extra:
        merged_env.update(extra)
    return merged_env


def run_cli(*cli_args: str | Path, stdin: str | None = None, env: dict | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "monkeyfl", "--plain", *(str(arg) for arg in cli_args)]
    return subprocess.run(args, input=stdin if stdin is not None else "", capture_output=True, text=True, env=_env(env))


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _strip_output_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.strip()]


def _write(tmp_path: Path, name: str, source: str) -> Path:
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_cli_run_file_prints_final_value(tmp_path: Path):
    program = _write(tmp_path, "sum.monkey", "let sum = fn (a, b) { return a + b; };\nsum(10, sum(5, 5));\n")
    result = run_cli(program)
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["20"]


def test_cli_run_file_without_value_prints_nothing(tmp_path: Path):
    program = _write(tmp_path, "let.monkey", "let x = 1;\n")
    result = run_cli(program)
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == []


def test_cli_parser_error_shows_context(tmp_path: Path):
    program = _write(tmp_path, "broken.monkey", "let a = 1;\nlet x 5;\nlet = 10;\n")
    result = run_cli(program)
    assert result.returncode != 0
    out = result.stdout
    assert "SYNTAX ERROR." in out
    assert "Parsing `" in out
    assert "File \"" in out and "line 2" in out
    assert "expected next token to be =, got INT instead" in out
    assert "expected next token to be IDENT, got = instead" in out


def test_cli_runtime_error_sets_retcode(tmp_path: Path):
    program = _write(tmp_path, "error.monkey", "let a = 1;\nfoo(a);\n")
    result = run_cli(program)
    assert result.returncode != 0
    assert "RUNTIME ERROR." in result.stdout
    assert "Error: identifier not found foo" in result.stdout


def test_cli_inline_commands_share_bindings():
    result = run_cli("-c", "let x = 41;", "-c", "x + 1")
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["42"]


def test_cli_runs_mixed_inputs_in_order(tmp_path: Path):
    first = _write(tmp_path, "first.monkey", "1\n")
    second = _write(tmp_path, "second.monkey", "3\n")
    result = run_cli(first, "-c", "2", second)
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["1", "2", "3"]


def test_cli_ignore_keeps_going_after_errors():
    result = run_cli("--ignore", "-c", "1 / 0", "-c", "1 + 1")
    assert result.returncode == 1
    out = result.stdout
    assert "Error: division by zero INTEGER / INTEGER" in out
    assert _strip_output_lines(out)[-1] == "2"


def test_cli_stdin_implicit_runs_program():
    result = run_cli(stdin="(100 - 20) / 4 * 2 + 2\n")
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["42"]


def test_cli_stdin_dash_runs_program():
    result = run_cli("-", stdin="!true\n")
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["false"]


def test_cli_repl_session():
    session = "\n".join([
        "let x = 2;",
        "x * 21",
        "let f = fn(a) {",
        "  a + x }",
        "f(1)",
        "let y = ;",
        "5 + true",
        "quit",
    ]) + "\n"
    result = run_cli("--repl", stdin=session)
    assert result.returncode == 0
    out = result.stdout
    assert "Have fun with the Monkey programming language!" in out
    assert "42" in out
    assert "3" in out
    assert "Ooops ... we encountered some errors:" in out
    assert "no prefix parse expression for ; found" in out
    assert "Error: type mismatch INTEGER + BOOLEAN" in out


def test_cli_verbose_and_stats(tmp_path: Path):
    program = _write(tmp_path, "math.monkey", "1 + 2 * 3\n")
    result = run_cli("-v", "--stats", program)
    assert result.returncode == 0
    out = result.stdout
    assert "(1 + (2 * 3))" in out
    assert "7" in _strip_output_lines(out)
    assert "STATISTICS." in out
    assert "step" in out


def test_cli_rejects_unknown_files():
    result = run_cli("-c", "1", "missing.monkey")
    assert result.returncode != 0


def test_cli_command_requires_code():
    result = run_cli("-c")
    assert result.returncode == 2
    assert "Missing inline Monkey code" in result.stderr


def test_cli_rejects_unknown_options_and_suffixes(tmp_path: Path):
    assert run_cli("--bogus").returncode == 2
    script = _write(tmp_path, "script.txt", "1\n")
    result = run_cli(script)
    assert result.returncode == 2
    assert ".monkey" in result.stderr


def test_cli_inline_then_repl_share_bindings():
    result = run_cli("-c", "let x = 20;", "--repl", stdin="x + 22\nquit\n")
    assert result.returncode == 0
    assert "42" in _strip_output_lines(result.stdout)


def test_cli_multi_statement_program_prints_separators(tmp_path: Path):
    program = _write(tmp_path, "two.monkey", "a; -b\n")
    result = run_cli("-v", "--ignore", program)
    assert "a; (-b)" in result.stdout
