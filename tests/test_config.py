import pytest
from pydantic import ValidationError

from core import config
from core.config import AppSettings, write_user_env_vars


def test_env_vars_override_defaults(monkeypatch):
    monkeypatch.setenv("GENZAICHI_LOCATION_PROVIDER", "static")
    monkeypatch.setenv("GENZAICHI_STATIC_LATITUDE", "35.0")
    monkeypatch.setenv("GENZAICHI_STATIC_LONGITUDE", "139.5")
    monkeypatch.setenv("GENZAICHI_LOCATION_TIMEOUT_MS", "2500")

    settings = AppSettings()

    assert settings.location_provider == "static"
    assert settings.static_latitude == 35.0
    assert settings.static_longitude == 139.5
    options = settings.location_options()
    assert options.timeout_ms == 2500
    assert options.high_accuracy is True
    assert options.force_fresh is True


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        AppSettings(static_latitude=95.0)
    with pytest.raises(ValidationError):
        AppSettings(location_provider="gps")
    with pytest.raises(ValidationError):
        AppSettings(http_timeout_seconds=0)


def test_write_user_env_vars_merges(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "get_user_config_dir", lambda: tmp_path / "genzaichi")

    path = write_user_env_vars({"GENZAICHI_STATIC_LATITUDE": "1.5"})
    path = write_user_env_vars({"GENZAICHI_STATIC_LONGITUDE": "2.5"})

    text = path.read_text(encoding="utf-8")
    assert path == tmp_path / "genzaichi" / ".env"
    assert "GENZAICHI_STATIC_LATITUDE=1.5" in text
    assert "GENZAICHI_STATIC_LONGITUDE=2.5" in text
    assert text.startswith("# genzaichi user config")
