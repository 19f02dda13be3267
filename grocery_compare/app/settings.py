from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Key must be provided via env / .env (never hardcode secrets in code)
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash-preview-05-20"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"

    request_timeout: float = 60.0
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        # logging only knows upper-case level names
        return v.strip().upper()


settings = Settings()  # load once at import


def get_settings() -> Settings:
    return settings
