"""
Tests for environment-based settings
"""
import pytest

from gatekeeper import config
from gatekeeper.config import ConfigError, load_settings


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr(config, 'load_dotenv', lambda: None)
    for name in ('SESSION_SECRET', 'DATABASE_URL', 'PORT', 'LOG_LEVEL', 'STATIC_DIR'):
        monkeypatch.delenv(name, raising=False)


def test_missing_required_variables_listed(monkeypatch):
    with pytest.raises(ConfigError) as exc_info:
        load_settings()

    assert 'SESSION_SECRET' in str(exc_info.value)
    assert 'DATABASE_URL' in str(exc_info.value)


def test_one_missing_variable(monkeypatch):
    monkeypatch.setenv('SESSION_SECRET', 'shh')

    with pytest.raises(ConfigError, match='DATABASE_URL'):
        load_settings()


def test_defaults(monkeypatch):
    monkeypatch.setenv('SESSION_SECRET', 'shh')
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///./gatekeeper.db')

    settings = load_settings()

    assert settings.port == 3000
    assert settings.log_level == 'INFO'
    assert settings.static_dir == config.DEFAULT_STATIC_DIR


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv('SESSION_SECRET', 'shh')
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///./gatekeeper.db')
    monkeypatch.setenv('PORT', '8080')
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    monkeypatch.setenv('STATIC_DIR', str(tmp_path))

    settings = load_settings()

    assert settings.port == 8080
    assert settings.log_level == 'DEBUG'
    assert settings.static_dir == tmp_path


def test_non_numeric_port(monkeypatch):
    monkeypatch.setenv('SESSION_SECRET', 'shh')
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///./gatekeeper.db')
    monkeypatch.setenv('PORT', 'eighty')

    with pytest.raises(ConfigError, match="PORT must be an integer, got 'eighty'"):
        load_settings()
