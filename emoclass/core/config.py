from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    APP_NAME: str = "EmoClass API"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str
    # IANA zone that defines the "school day"; empty means host local time
    APP_TIMEZONE: str = ""

    JWT_SECRET: Optional[str] = None
    JWT_AUDIENCE: str = "authenticated"

    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None
    TELEGRAM_API_BASE: str = "https://api.telegram.org"
    TELEGRAM_TIMEOUT_SECONDS: float = 5.0

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @field_validator("APP_TIMEZONE")
    @classmethod
    def _known_zone(cls, v: str) -> str:
        v = v.strip()
        if v:
            try:
                ZoneInfo(v)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"APP_TIMEZONE {v!r} is not a known IANA time zone") from e
        return v

settings = Settings()  # type: ignore
