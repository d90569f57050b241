"""Fixture generator tests: generated expressions must evaluate to their recorded values."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(REPO_ROOT / "python"))

from sdb.expr import EvalSettings, evaluate_expression
from sdb.gen_expr import ExprGenerator, format_fixture, load_fixtures, main


@pytest.mark.parametrize("word_bits", [8, 32, 64])
def test_generated_fixtures_match_evaluator(word_bits):
    generator = ExprGenerator(seed=1234 + word_bits, word_bits=word_bits)
    settings = EvalSettings(word_bits=word_bits)
    for expected, text in generator.iter_fixtures(300):
        result = evaluate_expression(text, settings=settings)
        assert result.ok, f"{text!r}: {result.reason}"
        assert result.value == expected, text


def test_generator_is_deterministic_for_seed():
    first = list(ExprGenerator(seed=7).iter_fixtures(20))
    second = list(ExprGenerator(seed=7).iter_fixtures(20))
    assert first == second


def test_generator_depth_zero_yields_literals():
    generator = ExprGenerator(seed=3, max_depth=0)
    for value, text in generator.iter_fixtures(10):
        assert text.rstrip("u") == str(value)


def test_generator_rejects_bad_width():
    with pytest.raises(ValueError):
        ExprGenerator(word_bits=12)


def test_load_fixtures_skips_comments(tmp_path):
    path = tmp_path / "fixtures.txt"
    path.write_text("# header\n\n7 1+2*3\n3 8 - 3 - 2\n", encoding="utf-8")
    assert load_fixtures(path) == [(7, "1+2*3"), (3, "8 - 3 - 2")]


@pytest.mark.parametrize("body", ["7\n", "seven 1+2\n"])
def test_load_fixtures_rejects_malformed_lines(tmp_path, body):
    path = tmp_path / "fixtures.txt"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError, match=":1:"):
        load_fixtures(path)


def test_main_writes_fixture_file(tmp_path):
    out = tmp_path / "input"
    assert main(["25", "--seed", "11", "-o", str(out)]) == 0
    fixtures = load_fixtures(out)
    assert len(fixtures) == 25
    for expected, text in fixtures:
        assert evaluate_expression(text).value == expected


def test_main_prints_to_stdout(capsys):
    assert main(["3", "--seed", "5", "--word-bits", "16"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 3
    expected = [format_fixture(v, t) for v, t in ExprGenerator(seed=5, word_bits=16).iter_fixtures(3)]
    assert lines == expected
