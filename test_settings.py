"""Tests for JSON settings persistence."""

import json
import logging
from datetime import date

import pytest

import settings
from calendar_logic import ANCHOR_DATE


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr(settings, "_SETTINGS_PATH", str(path))
    return path


def test_defaults_when_missing(settings_path):
    loaded = settings.load_settings()
    assert loaded == {
        "anchor_date": ANCHOR_DATE,
        "clamp_days": True,
        "show_week_numbers": True,
    }


def test_round_trip(settings_path):
    settings.save_settings({
        "anchor_date": date(2025, 5, 17),
        "clamp_days": False,
        "show_week_numbers": False,
    })
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["anchor_date"] == "2025-05-17"

    loaded = settings.load_settings()
    assert loaded["anchor_date"] == date(2025, 5, 17)
    assert loaded["clamp_days"] is False
    assert loaded["show_week_numbers"] is False


def test_corrupt_file_falls_back(settings_path, caplog):
    settings_path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="settings"):
        loaded = settings.load_settings()
    assert loaded["anchor_date"] == ANCHOR_DATE
    assert "unreadable settings" in caplog.text


def test_non_object_falls_back(settings_path):
    settings_path.write_text("[1, 2, 3]", encoding="utf-8")
    assert settings.load_settings()["clamp_days"] is True


def test_invalid_values_are_ignored(settings_path, caplog):
    settings_path.write_text(json.dumps({
        "anchor_date": "2026-02-30",
        "clamp_days": "yes",
        "show_week_numbers": False,
    }), encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="settings"):
        loaded = settings.load_settings()
    assert loaded["anchor_date"] == ANCHOR_DATE
    assert loaded["clamp_days"] is True
    assert loaded["show_week_numbers"] is False
    assert "Invalid anchor_date" in caplog.text
