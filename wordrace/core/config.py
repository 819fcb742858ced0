from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

WORDS_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    PROJECT_NAME: str = "WordRace"
    API_PREFIX: str = "/api"

    DATABASE_URL: str | None = None
    DATABASE_ECHO: bool = False

    ANSWER_WORDS_PATH: Path = WORDS_DIR / "answers.txt"
    VALID_WORDS_PATH: Path = WORDS_DIR / "guesses.txt"

    MAX_PLAYERS: int = 8
    TIME_LIMIT: int = 300

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_test_settings() -> Settings:
    return Settings(_env_file=".env.test")


settings = get_settings()
