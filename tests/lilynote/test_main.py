"""Tests for the lilynote command line."""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Iterator

import pytest

from lilynote import config
from lilynote.main import main, make_parser


@pytest.fixture(autouse=True)
def english_default(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv(config.LANGUAGE_ENV, raising=False)
    config.reset_active()
    yield
    config.reset_active()


def test_parse(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["parse", "fs,,,", "r8."]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "fs,,,: type=Note name=F accidental=Sharp octave=S0 length=Quarter dots=0",
        "r8.: type=Rest name=- accidental=- octave=- length=Eighth dots=1",
    ]


def test_parse_reports_bad_notes_and_continues(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert main(["parse", "c", "h", "d"]) == 1
    captured = capsys.readouterr()
    assert len(captured.out.splitlines()) == 2
    assert "ERROR: h: Invalid note syntax" in captured.err


def test_parse_with_language(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--language", "nederlands", "parse", "aeses'''''8"]) == 0
    out = capsys.readouterr().out
    assert "accidental=DoubleFlat octave=S8 length=Eighth" in out


def test_parse_with_language_from_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv(config.LANGUAGE_ENV, "nederlands")
    config.reset_active()
    assert main(["parse", "cis"]) == 0
    assert "accidental=Sharp" in capsys.readouterr().out


def test_unknown_language_from_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv(config.LANGUAGE_ENV, "klingon")
    config.reset_active()
    assert main(["parse", "c"]) == 1
    assert "klingon" in capsys.readouterr().err


def test_convert(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["convert", "--to", "nederlands", "bf,8", "fss''", "r2."]) == 0
    assert capsys.readouterr().out.strip() == "bes,8 fisis''4 r2."


def test_convert_back(capsys: pytest.CaptureFixture[str]) -> None:
    args = ["--language", "nederlands", "convert", "--to", "english", "eeses", "x"]
    assert main(args) == 1
    captured = capsys.readouterr()
    assert captured.out.strip() == "eff4"
    assert "ERROR: x:" in captured.err


def test_midi(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["midi", "c", "r", "a'", "cf,,,"]) == 0
    assert capsys.readouterr().out.strip() == "48 - 69 11"


def test_midi_out_of_range(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["midi", "gs''''''"]) == 1
    assert "out of range" in capsys.readouterr().err


def test_render(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    fake = tmp_path / "fake-lilypond"
    fake.write_text("#!/bin/sh\ntouch score.pdf\n")
    fake.chmod(fake.stat().st_mode | stat.S_IXUSR)
    output = tmp_path / "score.pdf"
    args = ["render", "--output", str(output), "--key", "1f", "--time", "3/4"]
    args += ["--lilypond", str(fake), "f4", "a4", "c'4"]
    assert main(args) == 0
    assert capsys.readouterr().out.strip() == str(output)
    source = (tmp_path / "score.ly").read_text()
    assert "\\key f \\major" in source
    assert "\\time 3/4" in source
    assert "f4 a4 c'4" in source


def test_render_bad_key(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    output = tmp_path / "score.pdf"
    assert main(["render", "--output", str(output), "--key", "9s", "c"]) == 1
    assert "out of range" in capsys.readouterr().err
    assert not output.exists()


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        make_parser().parse_args([])


def test_bad_log_level(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--log-level", "loud", "parse", "c"]) == 1
    assert "Unknown level" in capsys.readouterr().err


def test_bad_log_level_from_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv(config.LOG_LEVEL_ENV, "chatty")
    assert main(["parse", "c"]) == 1
    assert "Unknown level: 'chatty'" in capsys.readouterr().err
