from dotenv import find_dotenv, load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, ClassVar
import os


class Settings(BaseSettings):
    APP_NAME: str = "ecoflood-service"
    API_TOKEN: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_NAME: str = "ecoflood"
    MONGODB_TIMEOUT_MS: int = 2000

    OPEN_METEO_URL: str = "https://api.open-meteo.com/v1/forecast"
    OPEN_METEO_FLOOD_URL: str = "https://flood-api.open-meteo.com/v1/flood"
    OPEN_METEO_ARCHIVE_URL: str = "https://archive-api.open-meteo.com/v1/archive"
    HTTP_TIMEOUT_SECONDS: float = 15.0
    USE_LIVE_DATA: bool = True

    # Central Kalimantan
    DEFAULT_LAT: float = -2.5
    DEFAULT_LON: float = 113.0
    TIMEZONE: str = "Asia/Jakarta"

    # Seed for the static mock datasets
    MOCK_SEED: int = 2023

    env_path: ClassVar[str] = os.path.join(os.path.dirname(os.path.dirname(
        os.path.dirname(os.path.abspath(__file__)))), ".env")
    model_config = SettingsConfigDict(env_file=env_path, extra="ignore")


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Build settings after loading a ``.env`` from the working directory.

    Variables already present in the environment win over the file.
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))
    return Settings()


settings = load_settings()
