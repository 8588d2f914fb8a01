from pathlib import Path
from typing import Union
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Extraction limits
    MAX_REQUEST_LENGTH: int = 2000
    MAX_BATCH_SIZE: int = 10

    # Monitor payload defaults when the text names no location / guest count
    DEFAULT_LOCATION: str = "Kauai, HI"
    DEFAULT_GUESTS: int = 2

    # Rate Limiting
    ENABLE_RATE_LIMITING: bool = True
    RATE_LIMIT_EXTRACT: str = "30/minute"
    RATE_LIMIT_BATCH: str = "10/minute"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # empty disables the file handler

    # CORS
    ALLOWED_ORIGINS: Union[list, str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse ALLOWED_ORIGINS from comma-separated string or list"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parents[3] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )
