"""Tests for JSON-persisted settings."""

from __future__ import annotations

import json

import pytest

from breathflow.breathing.session import SessionController
from breathflow.settings import Settings, load_settings, save_settings


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr("breathflow.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("breathflow.settings.APP_SUPPORT_DIR", tmp_path)
    return path


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.grace_delay_ms == 500
        assert s.tick_interval_ms == 1000
        assert s.default_technique == "4-7-8"
        assert s.haptics_enabled is True
        assert s.reduced_motion is False

    def test_missing_file_gives_defaults(self, settings_path):
        assert load_settings() == Settings()

    def test_round_trip(self, settings_path):
        original = Settings(grace_delay_ms=800, haptics_enabled=False, reduced_motion=True)
        save_settings(original)
        assert load_settings() == original

    def test_unknown_keys_ignored(self, settings_path):
        settings_path.write_text(json.dumps({"reduced_motion": True, "theme": "ocean"}))
        loaded = load_settings()
        assert loaded.reduced_motion is True
        assert loaded.grace_delay_ms == 500

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_corrupt_file_falls_back_to_defaults(self, settings_path, content, caplog):
        settings_path.write_text(content)
        with caplog.at_level("WARNING", logger="breathflow.settings"):
            assert load_settings() == Settings()
        assert "unreadable settings" in caplog.text

    @pytest.mark.parametrize("key, value", [
        ("tick_interval_ms", "fast"),
        ("tick_interval_ms", 0),
        ("grace_delay_ms", -100),
        ("grace_delay_ms", True),
        ("grace_delay_ms", 2.5),
        ("haptics_enabled", 0),
        ("default_technique", 478),
    ])
    def test_bad_value_dropped_with_warning(self, settings_path, key, value, caplog):
        settings_path.write_text(json.dumps({key: value, "reduced_motion": True}))
        with caplog.at_level("WARNING", logger="breathflow.settings"):
            loaded = load_settings()
        assert getattr(loaded, key) == getattr(Settings(), key)
        assert loaded.reduced_motion is True
        assert key in caplog.text

    def test_bad_interval_does_not_break_controller(self, settings_path, qapp):
        settings_path.write_text(json.dumps({"tick_interval_ms": "fast"}))
        controller = SessionController(settings=load_settings())
        assert controller.scheduler.tick_interval_ms == 1000
