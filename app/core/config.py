"""
Application configuration using pydantic-settings.
"""
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.constants import CaptionConfig, CompletionConfig, YtDlpConfig
from app.models.enums import LLMProviderType


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    PROJECT_NAME: str = "YouTube Video Summarizer"
    BACKEND_CORS_ORIGINS: Union[List[str], str] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    # Completion service (any OpenAI-compatible endpoint)
    LLM_PROVIDER: LLMProviderType = LLMProviderType.OPENAI
    LLM_ENDPOINT_URL: Optional[str] = None
    LLM_API_KEY: str = ""
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = CompletionConfig.TEMPERATURE
    LLM_MAX_TOKENS: Optional[int] = None
    LLM_TIMEOUT_SECONDS: float = CompletionConfig.TIMEOUT_SECONDS

    # Captions
    CAPTION_LANGUAGE: str = CaptionConfig.DEFAULT_LANGUAGE
    CAPTION_FETCH_TIMEOUT_SECONDS: float = CaptionConfig.FETCH_TIMEOUT_SECONDS
    HTTP_USER_AGENT: str = CaptionConfig.USER_AGENT
    YTDLP_TIMEOUT_SECONDS: int = YtDlpConfig.TIMEOUT_SECONDS

    # Debug
    DEBUG_MOCK_SUMMARY: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "logs/app.log"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
