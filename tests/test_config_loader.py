from pathlib import Path

import pytest

from depthchart.config_loader import DEFAULT_PORT, AppSettings


def test_from_env_defaults():
    settings = AppSettings.from_env()

    assert settings.port == DEFAULT_PORT == 5210
    assert settings.cors_origins == ["*"]
    assert settings.seed_path is None


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DEPTHCHART_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("DEPTHCHART_SEED_PATH", "/data/players.json")
    monkeypatch.setenv("DEPTHCHART_LOG_LEVEL", "debug")

    settings = AppSettings.from_env()

    assert settings.port == 8080
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.seed_path == "/data/players.json"
    assert settings.log_level == "DEBUG"


def test_invalid_port_falls_back(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    monkeypatch.setenv("PORT", "not-a-port")

    with caplog.at_level("WARNING"):
        settings = AppSettings.from_env()

    assert settings.port == DEFAULT_PORT
    assert "Invalid int for PORT" in caplog.text


def test_save_and_load_round_trip(tmp_path: Path):
    path = tmp_path / "settings.json"
    AppSettings(db_path="roster.sqlite", port=9000, cors_origins=["http://ui.test"]).save(path)

    loaded = AppSettings.load(path)

    assert loaded.db_path == "roster.sqlite"
    assert loaded.port == 9000
    assert loaded.cors_origins == ["http://ui.test"]
