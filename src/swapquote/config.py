"""Application configuration using pydantic-settings.

All upstream and pipeline knobs live here and are handed to the services at
construction time.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # SwapKit aggregator
    # ======================
    swapkit_api_key: str = Field(default="", description="SwapKit API key (x-api-key header)")
    swapkit_api_url: str = Field(
        default="https://api.swapkit.dev", description="SwapKit API base URL"
    )
    request_timeout: float = Field(
        default=30.0, description="Per-call timeout for upstream requests (seconds)"
    )

    # ======================
    # Quote pipeline
    # ======================
    quote_ttl_seconds: int = Field(
        default=900, description="expiresIn returned with a non-empty route list"
    )
    provider_advisories: bool = Field(
        default=True, description="Append informational per-provider notes to routes"
    )
    integration_test_delay: float = Field(
        default=2.0, description="Pause between integration test cases (seconds)"
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    cors_origins: str = Field(
        default="*", description="Comma-separated list of allowed CORS origins"
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode (dumps raw routes)")

    @property
    def allowed_origins(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "swapkit": {
                "url": self.swapkit_api_url,
                "api_key": "***" if self.swapkit_api_key else "(not set)",
                "timeout": self.request_timeout,
            },
            "pipeline": {
                "quote_ttl_seconds": self.quote_ttl_seconds,
                "provider_advisories": self.provider_advisories,
                "integration_test_delay": self.integration_test_delay,
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
