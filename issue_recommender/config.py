from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    GH_TOKEN: str = ""
    LOG_LEVEL: str = "INFO"
    SYNC_PER_QUERY: int = 20
    PROFILE_REPO_SAMPLE: int = 10
    TOP_LANGUAGES_LIMIT: int = 5
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
