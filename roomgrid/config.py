from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- live sheet ---
    LIVE_SHEET_URL: str = ""            # published CSV; empty disables live mode
    LIVE_REFRESH_SECONDS: int = 60

    # --- upload ---
    SHEET_NAME: str = "DATABASE"

    # --- http ---
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )


settings = Settings()
