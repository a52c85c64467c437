from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from g711.constants import DEFAULT_CHUNK_SIZE, WAV_HEADER_SIZE


class Settings(BaseSettings):
    wav_header_size: int = Field(default=WAV_HEADER_SIZE, ge=0)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="G711_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
