# tests/test_cli.py
from __future__ import annotations

import builtins
import logging

import pytest
from textual.logging import TextualHandler

from kissing import cli
from kissing.fmt import strip_ansi
from kissing.logging_config import LOGGER_NAME


@pytest.fixture
def quiet_profile(tmp_path):
    p = tmp_path / "quiet.toml"
    p.write_text("[DISPLAY]\nCOLOR = false\nCLEAR_SCREEN = false\n", encoding="utf-8")
    return str(p)


def _feed(monkeypatch, *lines: str) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


# ---------- one-shot ----------------------------------------------------------


def test_one_shot_exact(capsys):
    assert cli.main(["8", "--no-color"]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "Exact Kissing Number: 240" in out
    assert "Root System: E8" in out


def test_one_shot_asymptotic(capsys):
    assert cli.main(["24", "--mode", "asymptotic", "--no-color"]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "Asymptotic Bounds (Kabatiansky–Levenshtein)" in out
    assert "Lower Bound: 3.156e+01" in out


@pytest.mark.parametrize("bad", ["0", "-3", "abc"])
def test_one_shot_invalid(capsys, bad):
    assert cli.main(["--no-color", "--", bad]) == 2
    captured = capsys.readouterr()
    assert "Invalid dimension" in strip_ansi(captured.err)
    assert "Invalid dimension" not in captured.out


def test_one_shot_respects_profile_limit(tmp_path, capsys):
    p = tmp_path / "small.toml"
    p.write_text("[LIMITS]\nMAX_DIMENSION = 10\n", encoding="utf-8")
    assert cli.main(["11", "--profile", str(p), "--no-color"]) == 2
    assert "exceeds the limit of 10" in strip_ansi(capsys.readouterr().err)


def test_profile_default_mode(tmp_path, capsys):
    p = tmp_path / "asym.toml"
    p.write_text('[BEHAVIOUR]\nDEFAULT_MODE = "asymptotic"\n', encoding="utf-8")
    assert cli.main(["8", "--profile", str(p), "--no-color"]) == 0
    assert "Asymptotic Bounds" in capsys.readouterr().out


def test_bad_profile_is_a_friendly_error(tmp_path, capsys):
    p = tmp_path / "broken.toml"
    p.write_text("[DISPLAY\n", encoding="utf-8")
    assert cli.main(["8", "--profile", str(p)]) == 2
    err = strip_ansi(capsys.readouterr().err)
    assert err.startswith("Error: reading broken.toml")
    assert "Traceback" not in err


def test_tui_with_dimension_is_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["8", "--tui"])
    assert exc.value.code == 2


def test_tui_debug_logging_goes_through_textual(monkeypatch, quiet_profile):
    from kissing.tui import KissingApp

    seen = []

    def fake_run(app):
        seen.append(list(logging.getLogger(LOGGER_NAME).handlers))

    monkeypatch.setattr(KissingApp, "run", fake_run)
    assert cli.main(["--tui", "--debug", "--profile", quiet_profile]) == 0
    handlers = seen[0]
    assert [type(h) for h in handlers] == [TextualHandler]
    for h in handlers:
        h.close()
        logging.getLogger(LOGGER_NAME).removeHandler(h)


# ---------- interactive prompt ------------------------------------------------


def test_repl_submit_then_toggle(monkeypatch, capsys, quiet_profile):
    _feed(monkeypatch, "8", "a", "e", "q")
    assert cli.main(["--profile", quiet_profile]) == 0
    out = strip_ansi(capsys.readouterr().out)
    exact_first = out.index("Exact Kissing Number: 240")
    asym = out.index("Asymptotic Bounds")
    exact_again = out.index("Exact Kissing Number: 240", asym)
    assert exact_first < asym < exact_again


def test_repl_mode_before_dimension(monkeypatch, capsys, quiet_profile):
    _feed(monkeypatch, "asymptotic", "9", "")
    assert cli.main(["--profile", quiet_profile]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "Mode: asymptotic" in out
    assert "Asymptotic Bounds" in out
    assert "No finite bounds stored." not in out


def test_repl_invalid_input_keeps_going(monkeypatch, capsys, quiet_profile):
    _feed(monkeypatch, "7", "nonsense", "-2", "a", "quit")
    assert cli.main(["--profile", quiet_profile]) == 0
    captured = capsys.readouterr()
    assert strip_ansi(captured.err).count("Invalid dimension") == 2
    out = strip_ansi(captured.out)
    assert "Dimension 7 (Unproven)" in out
    # mode switch re-renders the last valid dimension
    assert "Asymptotic Bounds" in out


def test_repl_history_help_and_table(monkeypatch, capsys, quiet_profile):
    _feed(monkeypatch, "3", "24", "hist", "h", "t")
    assert cli.main(["--profile", quiet_profile]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "n=3" in out and "n=24" in out
    assert "[E] Exact / Bounds   [A] Asymptotic   [Q] Quit" in out
    assert "196560" in out
    assert "40 – 44" in out


def test_repl_empty_history(monkeypatch, capsys, quiet_profile):
    _feed(monkeypatch, "history", "q")
    assert cli.main(["--profile", quiet_profile]) == 0
    assert "History is empty." in capsys.readouterr().out


def test_repl_single_keys_ignore_case(monkeypatch, capsys, quiet_profile):
    _feed(monkeypatch, "A", "8", "E", "Q", "9")
    assert cli.main(["--profile", quiet_profile]) == 0
    out = strip_ansi(capsys.readouterr().out)
    assert "Mode: asymptotic" in out
    assert out.index("Asymptotic Bounds") < out.index("Exact Kissing Number: 240")
    # Q quits before the 9 is read
    assert "Dimension 9" not in out


def test_repl_rejects_dot_grouping(monkeypatch, capsys, quiet_profile):
    _feed(monkeypatch, "8.000", "q")
    assert cli.main(["--profile", quiet_profile]) == 0
    captured = capsys.readouterr()
    assert "Invalid dimension" in strip_ansi(captured.err)
    assert "8000" not in captured.out
