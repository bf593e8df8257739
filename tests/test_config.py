import pytest

from config import get_settings_module


@pytest.mark.parametrize(
    "env, expected",
    [
        ("production", "config.production"),
        ("PROD", "config.production"),
        ("test", "config.testing"),
        ("development", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_settings(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == expected


def test_default_is_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_settings_module() == "config.development"
