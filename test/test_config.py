from correspondence_tracker.core.config import Settings


def test_settings_load_without_optional_env(monkeypatch):
    monkeypatch.delenv("LOG_FILE", raising=False)
    settings = Settings(_env_file=None)
    assert settings.log_file is None
    assert settings.reference_number_attempts == 5


def test_log_file_from_env(monkeypatch):
    monkeypatch.setenv("LOG_FILE", "/tmp/correspondence.log")
    assert Settings(_env_file=None).log_file == "/tmp/correspondence.log"


def test_cors_origins_split_and_trimmed(monkeypatch):
    monkeypatch.setenv("ALLOWED_CORS_URLS", "http://a.test, http://b.test,")
    assert Settings(_env_file=None).cors_origins == ["http://a.test", "http://b.test"]
