"""
Tests for loading the admin secret and the startup checks around it.
"""
import json

import pytest
from pydantic import ValidationError

from merlin.config import Settings, get_settings


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ["MERLIN_SECRET", "MERLIN_PORT", "MERLIN_ADMIN_PATH"]:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


def _write_config(path, data):
    (path / "config.json").write_text(json.dumps(data))


def test_secret_from_config_json(isolated_config):
    _write_config(isolated_config, {"secret": "from-file"})

    settings = Settings()

    assert settings.secret == "from-file"
    assert settings.admin_path == "/admin"
    assert settings.port == 8080


def test_environment_overrides_config_json(isolated_config, monkeypatch):
    _write_config(isolated_config, {"secret": "from-file"})
    monkeypatch.setenv("MERLIN_SECRET", "from-env")
    monkeypatch.setenv("MERLIN_PORT", "9000")

    settings = Settings()

    assert settings.secret == "from-env"
    assert settings.port == 9000


def test_missing_config_is_fatal():
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize("secret", ["", "   "])
def test_empty_secret_is_fatal(isolated_config, secret):
    _write_config(isolated_config, {"secret": secret})

    with pytest.raises(ValidationError):
        Settings()


def test_malformed_config_is_fatal(isolated_config):
    _write_config(isolated_config, {"not_secret": "x"})

    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize("admin_path", ["/", "admin", ""])
def test_invalid_admin_path(admin_path):
    with pytest.raises(ValidationError):
        Settings(secret="x", admin_path=admin_path)


def test_admin_path_trailing_slash_is_trimmed():
    assert Settings(secret="x", admin_path="/review/").admin_path == "/review"


def test_settings_are_immutable():
    settings = Settings(secret="x")

    with pytest.raises(ValidationError):
        settings.secret = "y"


def test_get_settings_is_cached(isolated_config):
    _write_config(isolated_config, {"secret": "cached"})

    assert get_settings() is get_settings()
    assert get_settings().secret == "cached"
