from rendezvous.core.config import Settings


def test_settings_defaults(monkeypatch) -> None:
    for name in ("PORT", "HOST", "LOG_LEVEL", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert settings.log_level == "INFO"
    assert settings.cors_allow_origins == ["*"]


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]
