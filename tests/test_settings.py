import pytest
from pydantic import ValidationError

from g711.constants import DEFAULT_CHUNK_SIZE, WAV_HEADER_SIZE
from g711.settings import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("G711_CHUNK_SIZE", raising=False)
    monkeypatch.delenv("G711_WAV_HEADER_SIZE", raising=False)
    settings = Settings(_env_file=None)
    assert settings.wav_header_size == WAV_HEADER_SIZE == 44
    assert settings.chunk_size == DEFAULT_CHUNK_SIZE


def test_environment_override(monkeypatch):
    monkeypatch.setenv("G711_CHUNK_SIZE", "128")
    monkeypatch.setenv("g711_log_level", "DEBUG")
    settings = Settings(_env_file=None)
    assert settings.chunk_size == 128
    assert settings.log_level == "DEBUG"


def test_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("G711_WAV_HEADER_SIZE=0\n")
    assert Settings(_env_file=env_file).wav_header_size == 0


@pytest.mark.parametrize("name, value", [("G711_CHUNK_SIZE", "0"), ("G711_WAV_HEADER_SIZE", "-1")])
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
