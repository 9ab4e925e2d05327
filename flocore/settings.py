"""Application settings"""

from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load the .env file
load_dotenv()

# Project root directory
ROOT_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Generation client
    llm_provider: Literal["gemini", "openai", "anthropic", "dummy"] = Field(
        default="gemini", description="LLM provider (gemini | openai | anthropic | dummy)"
    )
    gemini_api_key: str | None = Field(default=None, description="Google Gemini API key")
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    anthropic_api_key: str | None = Field(default=None, description="Anthropic API key")
    llm_timeout_seconds: float = Field(
        default=60.0, description="Per-call timeout for the generation client (seconds)"
    )

    # Models per role
    model_classifier: str = Field(
        default="gemini-2.5-flash", description="Model for intent/sub-task classification"
    )
    model_specialist: str = Field(
        default="gemini-2.5-flash", description="Model for structured specialist generation"
    )

    # Models per engine tier (conversation path)
    model_compact: str = Field(default="gemini-2.5-flash-lite", description="Compact tier model")
    model_advanced: str = Field(default="gemini-2.5-flash", description="Advanced tier model")
    model_premium: str = Field(default="gemini-2.5-flash", description="Premium tier model")

    # Orchestration
    engine_tier: Literal["compact", "advanced", "premium"] = Field(
        default="premium", description="Default engine tier"
    )
    language: Literal["en", "id"] = Field(default="en", description="Default response language")
    calculation_standard: str = Field(
        default="ACI 318-19 (USA)", description="Default calculation standard"
    )
    intent_context_chars: int = Field(
        default=500, description="Characters of the previous AI message used as intent context"
    )
    corpus_cache_ttl_seconds: float = Field(
        default=60.0, description="TTL of the cached document corpus listing (0 disables)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    logging_config_path: str = Field(
        default="config/logging.yml", description="Logging YAML path (relative to project root)"
    )

    def model_for_tier(self, tier: str) -> str:
        """Model name used for conversational generation at the given engine tier"""
        return {
            "compact": self.model_compact,
            "advanced": self.model_advanced,
            "premium": self.model_premium,
        }.get(getattr(tier, "value", tier), self.model_premium)


# Global settings instance
settings = Settings()


def validate_settings() -> dict[str, str]:
    """Validate settings and return warning messages"""
    warnings = {}

    if settings.llm_provider == "gemini":
        if not settings.gemini_api_key:
            warnings["llm"] = "The Gemini provider requires GEMINI_API_KEY."
    elif settings.llm_provider == "openai":
        if not settings.openai_api_key:
            warnings["llm"] = "The OpenAI provider requires OPENAI_API_KEY."
    elif settings.llm_provider == "anthropic":
        if not settings.anthropic_api_key:
            warnings["llm"] = "The Anthropic provider requires ANTHROPIC_API_KEY."

    if settings.llm_timeout_seconds <= 0:
        warnings["timeout"] = "LLM_TIMEOUT_SECONDS must be positive; provider default is used."

    return warnings
