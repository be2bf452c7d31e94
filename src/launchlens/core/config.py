"""Configuration management for LaunchLens."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Inference provider (OpenAI-compatible endpoint, Groq by default)
    groq_api_key: str = Field("", description="Groq API key")
    GROQ_API_KEY: str = Field("", description="Groq API key (alternative naming)")
    provider_base_url: str = Field("https://api.groq.com/openai/v1", description="Chat completions base URL")
    provider_model: str = Field("llama-3.3-70b-versatile", description="Model used for every analysis call")
    request_timeout: float = Field(60.0, description="Per-request timeout in seconds")

    @property
    def effective_api_key(self) -> str:
        """Get the effective provider API key from either field."""
        return self.groq_api_key or self.GROQ_API_KEY

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # Analysis settings
    parallel_sentiment: bool = Field(False, description="Score pre/post sentiments concurrently")
    max_upload_bytes: int = Field(10 * 1024 * 1024, description="Largest accepted CSV upload")


# Global settings instance
settings = Settings()
