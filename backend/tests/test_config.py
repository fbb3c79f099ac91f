"""Settings loading from the environment and the .env file."""

from campaign_settings.core.config import Settings


def test_env_file_is_read(tmp_path, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LEVEL=DEBUG\nTENANT_HEADER=X-Org-ID\n")

    loaded = Settings(_env_file=env_file)

    assert loaded.LOG_LEVEL == "DEBUG"
    assert loaded.TENANT_HEADER == "X-Org-ID"


def test_variable_names_are_case_sensitive(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("log_level", "DEBUG")

    loaded = Settings(_env_file=None)

    assert loaded.LOG_LEVEL == "INFO"
