from __future__ import annotations

from taskboard.core.config import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


def test_environment_profiles_apply_defaults() -> None:
    dev = _settings(environment="development")
    assert dev.environment == "development"
    assert dev.log_level == "DEBUG"
    assert dev.reload is True
    assert dev.debug is True
    assert dev.create_tables is True

    test_profile = _settings(environment="test")
    assert test_profile.environment == "test"
    assert test_profile.log_level == "WARNING"
    assert test_profile.reload is False
    assert test_profile.debug is False
    assert test_profile.create_tables is False

    ci_profile = _settings(environment="ci")
    assert ci_profile.log_level == "INFO"
    assert ci_profile.create_tables is True

    production = _settings(environment="prod")
    assert production.environment == "production"
    assert production.debug is False
    assert production.create_tables is False


def test_environment_aliases_are_normalised() -> None:
    assert _settings(environment="DEV").environment == "development"
    assert _settings(environment="testing").environment == "test"


def test_environment_profile_respects_explicit_overrides(monkeypatch) -> None:
    monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "error")
    overridden = _settings(environment="test")
    assert overridden.log_level == "ERROR"

    monkeypatch.delenv("TASKBOARD_LOG_LEVEL", raising=False)
    monkeypatch.setenv("TASKBOARD_CREATE_TABLES", "true")
    assert _settings(environment="production").create_tables is True


def test_cors_lists_accept_comma_separated_strings(monkeypatch) -> None:
    monkeypatch.setenv("TASKBOARD_CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    assert _settings().cors_allow_origins == ["https://a.example", "https://b.example"]


def test_router_prefix_is_normalised() -> None:
    assert _settings(api_prefix="api/").router_prefix == "/api"
    assert _settings(api_prefix="/").router_prefix == ""


def test_token_expiry_defaults_to_seven_days() -> None:
    assert _settings().access_token_expire_minutes == 60 * 24 * 7
    assert _settings(access_token_expire_minutes=0).access_token_expire_minutes == 1
