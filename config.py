import os
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from core.errors import ConfigurationUnavailableError

# Load environment variables from .env
load_dotenv()


class AppConfig(BaseModel):
    """Process-wide settings. Read-only once loaded."""

    # Server
    port: int = Field(default=3000, ge=1, le=65535)
    host: str = "0.0.0.0"
    environment: Literal["development", "production", "test"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Parsing
    max_input_length: int = Field(default=1000, gt=0)
    default_currency: str = "USD"
    default_urgency: Literal["standard", "high"] = "standard"

    # LLM enhancement (all optional)
    llm_enabled: bool = False
    llm_provider: Optional[Literal["openai", "claude", "anthropic", "google"]] = None
    llm_confidence_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    llm_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=500, gt=0)
    llm_use_fallback: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @field_validator("llm_provider", mode="before")
    @classmethod
    def blank_provider_is_none(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @field_validator("default_currency", mode="before")
    @classmethod
    def upper_currency(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


# env var -> AppConfig field
ENV_VARS = {
    "PORT": "port",
    "HOST": "host",
    "APP_ENV": "environment",
    "LOG_LEVEL": "log_level",
    "MAX_INPUT_LENGTH": "max_input_length",
    "DEFAULT_CURRENCY": "default_currency",
    "DEFAULT_URGENCY": "default_urgency",
    "LLM_ENABLED": "llm_enabled",
    "LLM_PROVIDER": "llm_provider",
    "LLM_CONFIDENCE_THRESHOLD": "llm_confidence_threshold",
    "LLM_TEMPERATURE": "llm_temperature",
    "LLM_MAX_TOKENS": "llm_max_tokens",
    "LLM_USE_FALLBACK": "llm_use_fallback",
}

_config: Optional[AppConfig] = None


def load_config() -> AppConfig:
    """
    Validate the environment into an AppConfig and cache it.
    Subsequent calls return the cached instance until reset_config().
    """
    global _config
    if _config is not None:
        return _config

    values = {}
    for env_var, field_name in ENV_VARS.items():
        raw = os.getenv(env_var)
        if raw is not None and raw.strip() != "":
            values[field_name] = raw.strip()

    try:
        _config = AppConfig(**values)
    except ValidationError as e:
        problems = "\n".join(
            f"  - {'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationUnavailableError(
            f"Invalid environment configuration:\n{problems}\n\n"
            "👉 Check your .env file and make sure every variable is set correctly."
        ) from e

    return _config


def get_config() -> AppConfig:
    """Return the loaded configuration or raise if load_config() was never called."""
    if _config is None:
        raise ConfigurationUnavailableError(
            "Configuration not loaded. Call load_config() before using get_config()."
        )
    return _config


def reset_config() -> None:
    """Forget the cached configuration (test hook)."""
    global _config
    _config = None
