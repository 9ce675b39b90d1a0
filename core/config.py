"""
Configuration Settings

Environment-based application settings, read once at startup
"""

from typing import List, Optional
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

AI_PROVIDERS = ("openai", "gemini", "none")


def resolve_ai_provider(explicit: Optional[str], openai_key: Optional[str], gemini_key: Optional[str]) -> str:
    """
    Pick the AI backend once at startup.
    An explicit AI_PROVIDER wins; otherwise OpenAI is preferred over Gemini
    and "none" is returned when neither key is present.
    """
    if explicit:
        provider = explicit.strip().lower()
        if provider not in AI_PROVIDERS:
            raise ValueError(f"Unknown AI_PROVIDER '{explicit}', expected one of {', '.join(AI_PROVIDERS)}")
        return provider
    if openai_key:
        return "openai"
    if gemini_key:
        return "gemini"
    return "none"


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # AI providers (keys come first: ai_provider is resolved from them)
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    ai_provider: Optional[str] = Field(default=None, validate_default=True)

    # JWT
    jwt_secret_key: str = "your-super-secret-key"
    jwt_algorithm: str = "HS256"
    access_token_expire_hours: int = 24

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:5173"

    log_level: str = "INFO"

    @field_validator("openai_api_key", "gemini_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("ai_provider")
    @classmethod
    def _resolve_provider(cls, value: Optional[str], info: ValidationInfo) -> str:
        return resolve_ai_provider(value, info.data.get("openai_api_key"), info.data.get("gemini_api_key"))

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    def get_allowed_origins(self) -> List[str]:
        """CORS allowed origins as a list"""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    return Settings()
