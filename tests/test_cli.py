import logging

import pytest

from lambdarun.cli import build_parser, main


def run(capsys, *argv):
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_int_result(capsys):
    assert run(capsys, "_PLUS _2 _3") == (0, "5\n", "")


def test_bool_result(capsys):
    assert run(capsys, "_NOT _FALSE") == (0, "true\n", "")


def test_auto_falls_back_to_lambda(capsys):
    assert run(capsys, r"(\x. x) y") == (0, "y\n", "")


def test_lambda_result(capsys):
    assert run(capsys, "--type", "lambda", "_ZERO") == (0, "λf.λx.x\n", "")


def test_forced_int_mismatch(capsys):
    code, out, err = run(capsys, "--type", "int", "_TRUE")
    assert code == 1
    assert out == "λx.λy.x\n"
    assert "not a Church int" in err


def test_forced_bool(capsys):
    assert run(capsys, "--type", "bool", "_ISZERO _0") == (0, "true\n", "")


def test_parse_error(capsys):
    code, out, err = run(capsys, r"(\x. x")
    assert code == 1
    assert out == ""
    assert err.startswith("Parse error: missing 1 closing parenthesis(es)")


def test_step_limit_warning(capsys, caplog):
    with caplog.at_level(logging.INFO, logger="lambdarun"):
        code, out, _ = run(capsys, "--steps", "5", "--type", "lambda", "_OMEGA")
    assert code == 0
    assert out == "(λx.x x) (λx.x x)\n"
    assert "Stopped after 5 steps" in caplog.text


def test_steps_reported(capsys, caplog):
    with caplog.at_level(logging.INFO, logger="lambdarun"):
        run(capsys, r"(\x. x) y")
    assert "Reduced in 1 steps" in caplog.text


def test_trace(capsys):
    code, out, _ = run(capsys, "--trace", r"(\x.\y. x) a b")
    assert code == 0
    assert out.splitlines() == ["0: (λx.λy.x) a b", "1: (λy.a) b", "2: a", "a"]


def test_eta(capsys):
    assert run(capsys, "--eta", "--type", "lambda", r"\x. f x") == (0, "f\n", "")


def test_unicode_diagram(capsys):
    code, out, _ = run(capsys, "--type", "lambda", "--diagram", "unicode", r"\x. x")
    assert code == 0
    assert out == "λx.x\n┬\n│\n"


def test_svg_diagram(capsys):
    _, out, _ = run(capsys, "--diagram", "svg", "x y")
    assert out.splitlines()[1].startswith("<svg")


def test_invalid_type():
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["--type", "float", "x"])
    assert info.value.code == 2


def test_false_prints_as_zero(capsys):
    # λx.λy.y is also the numeral 0, and numbers are tried first
    assert run(capsys, "_FALSE") == (0, "0\n", "")
    assert run(capsys, "--type", "bool", "_FALSE") == (0, "false\n", "")


def test_module_example(capsys):
    assert run(capsys, "--type", "lambda", r"\x. (\y. y) x") == (0, "λx.x\n", "")
