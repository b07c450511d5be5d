# tests/test_cli.py

import json

import pytest

from calrender.cli import main


def test_svg_to_stdout(capsys):
    assert main(["svg", "--year", "2025", "--layout", "weekday-grid", "--set", "US"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("<?xml")
    assert out.count('class="month"') == 12


def test_svg_to_file_with_config(tmp_path, capsys):
    cfg = tmp_path / "cal.json"
    cfg.write_text(json.dumps({"year": 2026, "calendarType": "hebrew", "holidaySets": ["HEBREW_ALL"]}), encoding="utf-8")
    out = tmp_path / "cal.svg"
    assert main(["svg", "--config", str(cfg), "-o", str(out)]) == 0
    text = out.read_text(encoding="utf-8")
    assert "5786" in text
    assert "wrote" in capsys.readouterr().err


def test_configuration_error_exit_code(capsys):
    assert main(["svg", "--year", "2025", "--display", "huge"]) == 2
    assert "error [event_display_mode]" in capsys.readouterr().err


def test_pdf(tmp_path):
    out = tmp_path / "cal.pdf"
    assert main(["pdf", "--year", "2025", "--moon", "phases", "--mono", "-o", str(out)]) == 0
    assert out.read_bytes().startswith(b"%PDF")


def test_pdf_needs_output():
    with pytest.raises(SystemExit):
        main(["pdf", "--year", "2025"])


def test_moon(capsys):
    assert main(["moon", "2000-01-21", "--lat", "40.7", "--lon", "-74.0"]) == 0
    out = capsys.readouterr().out
    assert "Illumination" in out and "Rotation" in out
    assert "Sunrise" in out


def test_hebrew(capsys):
    assert main(["hebrew", "5784"]) == 0
    out = capsys.readouterr().out
    assert "Hebrew year 5784: 13 months" in out
    assert "Adar II" in out and "Purim" in out


def test_holidays(capsys):
    assert main(["holidays", "2025", "us"]) == 0
    assert "2025-11-27" in capsys.readouterr().out
    assert main(["holidays", "2025", "ATLANTIS"]) == 1


def test_pretty_month(capsys):
    assert main(["pretty-month", "2025", "3", "--monday"]) == 0
    out = capsys.readouterr().out
    assert "Gregorian month  2025-03" in out
    assert out.splitlines()[1].startswith("Mo")


def test_generate_after_cli_survives_closed_stderr(monkeypatch):
    import io
    import sys

    from calrender.lifecycle import GenerationState, generate
    from calrender.logging_config import configure_logging

    stream = io.StringIO()
    monkeypatch.setattr(sys, "stderr", stream)
    configure_logging(force=True)
    assert main(["holidays", "2025", "ATLANTIS"]) == 1
    stream.close()

    outcome = generate({"year": 99999}, print_document=False)
    assert outcome.state is GenerationState.FAILED


def test_configure_logging_runs_once(monkeypatch):
    import structlog

    from calrender import logging_config

    calls = []
    monkeypatch.setattr(structlog, "configure", lambda **kw: calls.append(kw))
    monkeypatch.setattr(logging_config, "_configured", False)
    logging_config.configure_logging()
    logging_config.configure_logging()
    assert len(calls) == 1
    assert isinstance(calls[0]["logger_factory"], structlog.stdlib.LoggerFactory)
    logging_config.configure_logging(force=True)
    assert len(calls) == 2
