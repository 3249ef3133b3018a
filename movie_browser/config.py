from pydantic_settings import BaseSettings
from pydantic import ConfigDict


class Settings(BaseSettings):
    TMDB_BASE_URL: str = ""
    TMDB_API_KEY: str = ""
    IMAGE_BASE_URL: str = "https://image.tmdb.org/t/p/w500"
    REQUEST_TIMEOUT: float = 10.0
    SEARCH_DEBOUNCE_SECONDS: float = 0.5
    SEARCH_MIN_QUERY_LENGTH: int = 3
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore"
    )


settings = Settings()
