## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import lark
import pytest

from monkeyfl.runtime import Runtime
from monkeyfl.environment import Environment
from monkeyfl.errors import MonkeyError, MonkeyParseError, MonkeyIncompleteParse
from monkeyfl.types import Integer, Error, TRUE


def test_runtime_keeps_bindings_between_runs():
    rt = Runtime()
    assert rt.run("let x = 20;") is None
    assert rt.run("let double = fn(n) { n * 2 };") is None
    assert rt.run("double(x) + 2") == Integer(42)


def test_runtime_session_accessors():
    rt = Runtime()
    rt.set('answer', Integer(41))
    assert rt.run("answer + 1") == Integer(42)
    rt.run("let flag = true;")
    assert rt.get('flag') is TRUE

    rt.reset()
    assert rt.get('answer') is None
    assert rt.run("answer") == Error("identifier not found answer")


def test_runtime_uses_given_environment():
    env = Environment()
    rt = Runtime(env)
    rt.run("let y = 3;")
    assert env.get('y') == Integer(3)


def test_runtime_parse_error_collects_all_diagnostics():
    rt = Runtime()
    with pytest.raises(MonkeyParseError) as info:
        rt.run("let x 5;\nlet = 1;", filename="<test>")

    exc = info.value
    assert not isinstance(exc, MonkeyIncompleteParse)
    assert exc.diagnostics == [
        "expected next token to be =, got INT instead",
        "expected next token to be IDENT, got = instead",
    ]
    assert (exc.filename, exc.line, exc.column, exc.token) == ("<test>", 1, 7, '5')
    assert "Ooops" in str(exc)


def test_runtime_parse_error_skips_evaluation():
    rt = Runtime()
    with pytest.raises(MonkeyParseError):
        rt.run("let x = 1; let y 2;")
    assert rt.get('x') is None


def test_runtime_incomplete_parse():
    rt = Runtime()
    with pytest.raises(MonkeyIncompleteParse) as info:
        rt.run("let add = fn(a, b) {")
    assert isinstance(info.value, lark.exceptions.ParseError)
    assert isinstance(info.value, MonkeyError)


def test_runtime_front_end_helpers():
    rt = Runtime()
    assert [tok.type for tok in rt.tokenize("1 + 2")] == ['INT', '+', 'INT', 'EOF']
    program, diagnostics = rt.parse("1 + 2")
    assert diagnostics == []
    assert rt.evaluate(program) == Integer(3)


def test_runtime_stats():
    rt = Runtime()
    stats = {}
    rt.run("1; 2; 3", stats=stats)
    assert stats['steps'] == 7


def test_runtime_verbose_prints_program(capsys):
    Runtime().run("1 + 2 * 3", verbosity=1)
    assert "(1 + (2 * 3))" in capsys.readouterr().out


def test_runtime_very_verbose_prints_tokens(capsys):
    Runtime().run("let x = 1;", verbosity=2)
    out = capsys.readouterr().out
    assert "LET" in out and "IDENT" in out and "EOF" in out
