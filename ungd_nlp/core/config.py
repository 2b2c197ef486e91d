# ungd_nlp/core/config.py

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    # Input assets
    DATA_PATH: Path = Path("data/ungd_speeches.csv")
    TOPIC_DICTIONARY_PATH: Path = Path("data/dictionaries/policy_agendas.yml")
    SENTIMENT_DICTIONARY_PATH: Path = Path("data/dictionaries/sentiment.yml")
    CONTINENT_LOOKUP_PATH: Path | None = None  # csv: country,continent

    OUTPUT_DIR: Path = Path("output")

    # Static analysis constants
    NUM_TOPICS: int = 10
    MIN_DOCFREQ: float = 0.075
    MAX_DOCFREQ: float = 0.90
    RANDOM_SEED: int = 1234
    MAX_EM_ITERATIONS: int = 500
    TOPIC_BACKEND: str = "nmf"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
