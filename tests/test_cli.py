"""Tests for the command line interface."""

import io
import json
import pathlib

import pytest

from icaltree.cli import main

CONTENT = (
    "BEGIN:VCALENDAR\n"
    "BEGIN:VEVENT\n"
    "SUMMARY:test\n"
    "DTSTART:19970610T172345Z\n"
    "END:VEVENT\n"
    "END:VCALENDAR\n"
)


@pytest.fixture
def ics_file(tmp_path: pathlib.Path) -> pathlib.Path:
    """Fixture that writes a calendar file."""
    filename = tmp_path / "calendar.ics"
    filename.write_text(CONTENT, encoding="utf-8")
    return filename


def test_json_default(ics_file: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the default output format is json."""
    assert main(["-f", str(ics_file)]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result[0]["name"] == "VCALENDAR"
    assert result[0]["components"][0]["prop"][0] == {"name": "SUMMARY", "value": "test"}


def test_markdown(ics_file: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test markdown output."""
    assert main(["--file", str(ics_file), "--markdown"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("# VCALENDAR\n")
    assert "- *DTSTART*: 1997-06-10 17:23:45 UTC" in out


def test_ics(ics_file: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test re-encoding the content."""
    assert main(["-f", str(ics_file), "-i"]) == 0
    assert capsys.readouterr().out == CONTENT


def test_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test reading from stdin."""
    monkeypatch.setattr("sys.stdin", io.StringIO(CONTENT))
    assert main(["-j", "-f", "-"]) == 0
    assert json.loads(capsys.readouterr().out)[0]["name"] == "VCALENDAR"


def test_output_file(ics_file: pathlib.Path, tmp_path: pathlib.Path) -> None:
    """Test writing to an output file."""
    output = tmp_path / "out.json"
    assert main(["-f", str(ics_file), "-o", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8"))[0]["name"] == "VCALENDAR"


def test_exclusive_formats(
    ics_file: pathlib.Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test the output formats can't be combined."""
    assert main(["-f", str(ics_file), "-j", "-m"]) == 1
    assert "not allowed with argument" in capsys.readouterr().err


def test_unexpected_argument(capsys: pytest.CaptureFixture[str]) -> None:
    """Test positional arguments are a usage error."""
    assert main(["extra"]) == 1
    assert "unrecognized arguments" in capsys.readouterr().err


def test_missing_file(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test a file that can't be opened."""
    assert main(["-f", str(tmp_path / "missing.ics")]) == 1
    assert "cannot open file" in capsys.readouterr().err


def test_help(capsys: pytest.CaptureFixture[str]) -> None:
    """Test the help message."""
    assert main(["-h"]) == 0
    assert "Parse iCalendar streams." in capsys.readouterr().out


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    """Test the version message."""
    assert main(["-v"]) == 0
    assert capsys.readouterr().out.startswith("version: ")


def test_parse_error(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test a fatal parse error exits with an error."""
    filename = tmp_path / "bad.ics"
    filename.write_text("BEGIN:VCALENDAR\nBEGIN:VEVENT\n", encoding="utf-8")
    assert main(["-f", str(filename)]) == 1
    assert "END:VEVENT" in capsys.readouterr().err


def test_strict(tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test strict END matching from the command line."""
    filename = tmp_path / "mismatch.ics"
    filename.write_text("BEGIN:VCALENDAR\nEND:VEVENT\n", encoding="utf-8")
    assert main(["-f", str(filename)]) == 0
    capsys.readouterr()
    assert main(["-f", str(filename), "--strict"]) == 1
    assert "expected END:VCALENDAR" in capsys.readouterr().err


def test_max_depth(ics_file: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test limiting the nesting depth."""
    assert main(["-f", str(ics_file), "--max-depth", "1"]) == 1
    assert "maximum nesting depth" in capsys.readouterr().err
    assert main(["-f", str(ics_file), "--max-depth", "0"]) == 1
    assert "invalid option" in capsys.readouterr().err


def test_fail_on_malformed(
    tmp_path: pathlib.Path,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test malformed lines are skipped unless requested otherwise."""
    filename = tmp_path / "malformed.ics"
    filename.write_text("BEGIN:VCALENDAR\nbogus\nEND:VCALENDAR\n", encoding="utf-8")
    assert main(["-f", str(filename)]) == 0
    assert "Skipping content line" in caplog.text
    assert main(["-f", str(filename), "--fail-on-malformed"]) == 1
    assert "no value found" in capsys.readouterr().err


def test_invalid_encoding(
    tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test input that is not utf-8 exits with an error message."""
    filename = tmp_path / "latin1.ics"
    filename.write_bytes(b"BEGIN:VCALENDAR\nSUMMARY:caf\xe9\nEND:VCALENDAR\n")
    assert main(["-f", str(filename)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("icaltree: error: ")
    assert "not valid utf-8 text" in err
