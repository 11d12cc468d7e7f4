from __future__ import annotations

from pydantic_settings import BaseSettings

# Value shipped in .env.example; treated the same as an empty key
PLACEHOLDER_API_KEY = "your-key-here"


def is_configured_key(value: str | None) -> bool:
    """Return True if an API key is set to something other than the placeholder."""
    return bool(value) and value != PLACEHOLDER_API_KEY


class Settings(BaseSettings):
    # App
    app_name: str = "Property Lookup"
    debug: bool = False
    api_prefix: str = "/api"

    # Rentcast (primary, structured property records)
    rentcast_api_key: str = ""
    rentcast_base_url: str = "https://api.rentcast.io/v1"

    # Perplexity (fallback, AI web search)
    perplexity_api_key: str = ""
    perplexity_url: str = "https://api.perplexity.ai/chat/completions"
    perplexity_model: str = "sonar"
    perplexity_max_tokens: int = 150
    perplexity_default_source: str = "web search"  # used when the model names no source

    # Lookup orchestration
    lookup_max_fallback_attempts: int = 3
    lookup_retry_delay_seconds: float = 1.0
    http_timeout_seconds: float = 30.0

    # CORS (widget is embedded on third-party pages)
    cors_origins: list[str] = ["*"]

    @property
    def rentcast_configured(self) -> bool:
        return is_configured_key(self.rentcast_api_key)

    @property
    def perplexity_configured(self) -> bool:
        return is_configured_key(self.perplexity_api_key)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
