from weddingapp.config import DEFAULT_CORS_ORIGINS, DEFAULT_SECRET, load_settings


def test_defaults(monkeypatch, tmp_path):
    for name in ("DATABASE_URL", "JWT_SECRET", "TOKEN_TTL_SECONDS", "CORS_ORIGINS", "LOG_LEVEL", "PORT"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings.jwt_secret == DEFAULT_SECRET
    assert settings.token_ttl_seconds == 86400
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS
    assert settings.port == 5000


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("TOKEN_TTL_SECONDS", "60")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example.com, https://b.example.com")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings.database_url == "sqlite:///./other.db"
    assert settings.jwt_secret == "s3cret"
    assert settings.token_ttl_seconds == 60
    assert settings.cors_origins == ("https://a.example.com", "https://b.example.com")
    assert settings.log_level == "DEBUG"


def test_dotenv_file_is_read(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PORT=6123\n")
    # register PORT with monkeypatch so whatever load_dotenv sets is undone
    monkeypatch.setenv("PORT", "1")
    monkeypatch.delenv("PORT")
    assert load_settings(str(env_file)).port == 6123
