"""Tests for environment-driven settings."""

from tax_estimator.config.settings import Settings, get_settings, settings


def test_settings_exist():
    assert hasattr(settings, "TAX_YEAR")
    assert hasattr(settings, "TAX_BRACKETS_FILE")
    assert hasattr(settings, "DEFAULT_PERSONAL_AMOUNT")
    assert hasattr(settings, "INSTALMENT_MATCH_WINDOW_DAYS")


def test_settings_defaults(monkeypatch):
    for name in ("TAX_YEAR", "DEFAULT_PERSONAL_AMOUNT", "DEFAULT_OTHER_CREDITS",
                 "INSTALMENT_MATCH_WINDOW_DAYS", "INSTALMENT_MIN_AMOUNT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.TAX_YEAR == 2024
    assert cfg.DEFAULT_PERSONAL_AMOUNT == 15705
    assert cfg.DEFAULT_OTHER_CREDITS == 0
    assert cfg.INSTALMENT_MATCH_WINDOW_DAYS == 7
    assert cfg.INSTALMENT_MIN_AMOUNT == 100
    assert cfg.LOG_LEVEL == "INFO"


def test_env_override(monkeypatch):
    monkeypatch.setenv("TAX_YEAR", "2025")
    monkeypatch.setenv("default_personal_amount", "16129")
    cfg = Settings(_env_file=None)
    assert cfg.TAX_YEAR == 2025
    assert cfg.DEFAULT_PERSONAL_AMOUNT == 16129


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_get_settings_returns_module_instance():
    assert get_settings() is settings
