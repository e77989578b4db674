# app/config.py
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_ENV: Literal["dev", "prod", "staging"] = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Shared bearer secret; empty means every request is rejected
    AUTH_TOKEN: str = ""

    # Logging
    LOG_RESPONSE_BODY: bool = True

    # read .env and ignore any extra keys so this doesn't break again
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
