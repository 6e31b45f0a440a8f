"""Tests for touchbase.app — the console digest entry point."""

import json
from datetime import date
from pathlib import Path
from unittest.mock import patch

from touchbase.app import main, resolve_today
from touchbase.config import settings

EXAMPLE_EXPORT = Path(__file__).resolve().parent.parent / "data" / "contacts.example.json"


def test_resolve_today_returns_date():
    assert isinstance(resolve_today("UTC"), date)


def test_main_prints_digest_for_example_export(capsys):
    main(["--data", str(EXAMPLE_EXPORT), "--date", "2024-06-15"])
    out = capsys.readouterr().out
    assert out.startswith("June 15, 2024")
    assert "Sarah Chen" in out
    assert "Priya Patel" in out
    assert "Tom Alvarez: In 5 days" in out


def test_main_missing_export_prints_fallback(tmp_path, capsys):
    main(["--data", str(tmp_path / "missing.json"), "--date", "2024-06-15"])
    assert "Couldn't load your contacts" in capsys.readouterr().out


def test_main_with_minimal_export(tmp_path, capsys):
    path = tmp_path / "contacts.json"
    path.write_text(json.dumps({"contacts": [], "interactions": []}), encoding="utf-8")
    main(["--data", str(path), "--date", "2024-06-15"])
    out = capsys.readouterr().out
    assert "nobody is due" in out
    assert "Weekly streak: 0 (best 0)" in out


def test_main_configures_logging(tmp_path, capsys):
    path = tmp_path / "contacts.json"
    path.write_text(json.dumps({"contacts": [], "interactions": []}), encoding="utf-8")
    with patch("touchbase.app.logging.basicConfig") as basic_config:
        main(["--data", str(path), "--date", "2024-06-15"])
    basic_config.assert_called_once()
    assert basic_config.call_args.kwargs["level"] == settings.LOG_LEVEL
    capsys.readouterr()
