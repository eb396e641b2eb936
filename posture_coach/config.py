# posture_coach/config.py
import logging
from typing import Optional

import dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

dotenv.load_dotenv()

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_GATEWAY_MODEL = "google/gemini-2.5-flash"
DEFAULT_GROQ_MODEL = "llama-3.3-70b-versatile"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Completion and logging settings, read from the environment on every construction"""
    model_config = SettingsConfigDict(extra="ignore", frozen=True)

    completion_provider: str = Field(default="gateway", description="'gateway' or 'groq'")
    ai_gateway_url: str = DEFAULT_GATEWAY_URL
    ai_gateway_api_key: Optional[str] = None
    ai_gateway_model: str = DEFAULT_GATEWAY_MODEL
    groq_api_key: Optional[str] = None
    groq_model: str = DEFAULT_GROQ_MODEL
    completion_timeout: float = Field(default=30.0, gt=0, description="Transport timeout in seconds")
    log_level: str = "INFO"

    @field_validator("completion_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("ai_gateway_api_key", "groq_api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


def get_settings() -> Settings:
    # not cached: keys may be rotated in the environment at runtime
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
    )
