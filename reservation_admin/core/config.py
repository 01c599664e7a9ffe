# reservation_admin/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "http://localhost:8080"


class Settings(BaseSettings):
    api_base_url: str = DEFAULT_API_BASE_URL  # = RESERVATION_API_BASE_URL
    request_timeout: float | None = None
    email: str | None = None
    password: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RESERVATION_",
        extra="ignore",
    )


settings = Settings()
