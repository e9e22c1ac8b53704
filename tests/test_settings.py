from pathlib import Path

from importcalc.settings import DEFAULT_CONFIG_PATH, Settings, load_settings


def test_bundled_config_is_loaded():
    settings = load_settings()
    assert DEFAULT_CONFIG_PATH.exists()
    assert settings.tariff_config["delivery_defaults"]["freight_usd"] == 300


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("RATES_URL", "https://bank.test/exchange/")
    monkeypatch.setenv("HTTP_TIMEOUT", "3.5")
    monkeypatch.setenv("STRICT_RECYCLING", "true")
    settings = Settings()
    assert settings.RATES_URL == "https://bank.test/exchange/"
    assert settings.HTTP_TIMEOUT == 3.5
    assert settings.STRICT_RECYCLING is True


def test_missing_config_file(tmp_path):
    settings = load_settings(tmp_path / "absent.yaml")
    assert settings.tariff_config == {}
    assert isinstance(settings.RATE_CACHE_DIR, Path)
