"""
Configuration module with strict validation.

Key principles:
- APP STARTUP only requires DATABASE_URL
- Third-party integrations (LLM, RapidAPI, NewsAPI) are optional and degrade
  to empty results when their keys are missing
- JSearch is the one integration that fails loudly without its key
- Safe defaults for all optional settings
"""
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.api_errors import ConfigurationError


class MissingAPIKeyError(ConfigurationError):
    """Raised when an integration that requires a key is called without one."""
    pass


class Settings(BaseSettings):
    """Application settings with validation.

    Loads from environment variables and .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database (REQUIRED for API startup)
    database_url: str = Field(
        ...,
        description="SQLAlchemy connection URL (MySQL, PostgreSQL or SQLite)"
    )

    # Authentication
    jwt_secret_key: str = Field(
        default="culturescope-secret-key-change-in-production",
        description="Secret used to sign access tokens"
    )
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        ge=1,
        description="Lifetime of issued access tokens"
    )

    # LLM Configuration (OPTIONAL - AI features fall back to heuristics)
    openai_api_key: Optional[str] = Field(default=None)
    anthropic_api_key: Optional[str] = Field(default=None)
    llm_provider: Optional[str] = Field(
        default=None,
        description="Force 'openai' or 'anthropic'; auto-detected when unset"
    )
    llm_model: Optional[str] = Field(
        default=None,
        description="Model name override for the configured provider"
    )
    llm_max_tokens: int = Field(default=2000, ge=100, le=16000)
    llm_max_retries: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per LLM call (1 = no retry)"
    )

    # RapidAPI Configuration (OPTIONAL)
    rapidapi_glassdoor_key: Optional[str] = Field(
        default=None,
        description="RapidAPI key for the Glassdoor real-time API"
    )
    rapidapi_glassdoor_host: str = Field(
        default="glassdoor-real-time.p.rapidapi.com",
        description="RapidAPI host for the Glassdoor real-time API"
    )
    rapidapi_linkedin_jobs_key: Optional[str] = Field(
        default=None,
        description="RapidAPI key for the LinkedIn Job Search API"
    )
    rapidapi_jsearch_key: Optional[str] = Field(
        default=None,
        description="RapidAPI key for JSearch - required for job search"
    )

    # NewsAPI Configuration (OPTIONAL)
    newsapi_key: Optional[str] = Field(
        default=None,
        description="newsapi.org key used to refresh company news"
    )

    # Outbound HTTP
    http_timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Timeout in seconds for third-party API calls"
    )
    http_max_retries: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per third-party request (1 = no retry)"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("llm_provider")
    @classmethod
    def validate_llm_provider(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v_lower = v.lower()
        if v_lower not in {"openai", "anthropic"}:
            raise ValueError("llm_provider must be 'openai' or 'anthropic'")
        return v_lower

    def get_openai_api_key(self) -> Optional[str]:
        """Get OpenAI API key if configured."""
        return self.openai_api_key

    def get_anthropic_api_key(self) -> Optional[str]:
        """Get Anthropic API key if configured."""
        return self.anthropic_api_key

    def get_glassdoor_api_key(self) -> Optional[str]:
        """
        Get the Glassdoor RapidAPI key if configured.

        Glassdoor lookups return empty results when this is missing.
        """
        return self.rapidapi_glassdoor_key

    def get_linkedin_jobs_api_key(self) -> Optional[str]:
        """Get the LinkedIn Job Search RapidAPI key if configured."""
        return self.rapidapi_linkedin_jobs_key

    def get_newsapi_key(self) -> Optional[str]:
        """Get the NewsAPI key if configured."""
        return self.newsapi_key

    def require_jsearch_api_key(self) -> str:
        """
        Get JSearch API key, raising clear error if missing.

        Call this at the START of any JSearch operation.

        Raises:
            MissingAPIKeyError: If the key is not configured

        Returns:
            str: The API key
        """
        if not self.rapidapi_jsearch_key:
            raise MissingAPIKeyError(
                "RAPIDAPI_JSEARCH_KEY is required for job search. "
                "Please set it in your .env file or environment variables. "
                "Subscribe at: https://rapidapi.com/letscrape-6bRBa3QguO5/api/jsearch",
                source="jsearch",
                missing_config="RAPIDAPI_JSEARCH_KEY",
            )
        return self.rapidapi_jsearch_key


# Global settings instance
# This can be imported throughout the application
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the global settings instance.

    This pattern allows:
    - Easy testing (can reset settings between tests)
    - Lazy loading (only loads when first accessed)
    - Singleton pattern (same instance used everywhere)
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """
    Reset the global settings instance.

    Useful for testing to ensure clean state between tests.
    """
    global _settings
    _settings = None
