"""Unit tests for application settings configuration."""

from pathlib import Path

from blogpress.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project-level .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_wordpress_url_trailing_slash_is_removed():
    settings = Settings(wordpress_url="https://blog.example.com/")
    assert settings.wordpress_url == "https://blog.example.com"


def test_auth_tokens_from_environment(monkeypatch):
    monkeypatch.setenv("AUTH_TOKENS", '{"tok": "owner-1"}')
    monkeypatch.setenv("PUBLISH_CLAIM_TTL_SECONDS", "60")

    settings = Settings()

    assert settings.auth_tokens == {"tok": "owner-1"}
    assert settings.publish_claim_ttl_seconds == 60
