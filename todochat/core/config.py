"""
Configuration management via environment variables.

This module loads configuration from a .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Model API keys are the only secrets. The Gemini key is read from API_KEY,
with GOOGLE_API_KEY accepted as a fallback.
"""
import os
import re
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Optional

from dotenv import find_dotenv, load_dotenv


def load_env_file() -> Optional[str]:
    """
    Load .env from the working directory or the nearest parent holding one.

    Variables already set in the environment win.

    Returns:
        Path of the loaded file, or None if there is none
    """
    env_path = find_dotenv(usecwd=True)
    if not env_path:
        return None
    load_dotenv(env_path)
    return env_path


# This must happen before accessing os.environ
load_env_file()


SUPPORTED_PROVIDERS = ("gemini", "groq")


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable. Use with_overrides()
    to derive a modified copy (e.g. from command-line flags).

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, production)
        log_level: Console logging verbosity
        log_dir: Directory for log files (None = logs/ in the working directory)
        database_url: SQLAlchemy connection string for the to-do table
        llm_provider: Which model backend to use ('gemini' or 'groq')
        google_api_key: API key for Google Gemini
        groq_api_key: API key for Groq
        llm_model: Gemini model identifier
        groq_model: Groq model identifier
        llm_temperature: Sampling temperature for the model
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    log_dir: Optional[str]

    # Database settings
    database_url: str

    # LLM settings
    llm_provider: str
    google_api_key: str
    groq_api_key: str
    llm_model: str
    groq_model: str
    llm_temperature: float

    def with_overrides(self, **overrides) -> "Settings":
        """
        Return a copy with the given fields replaced.

        None values are ignored so that unset CLI flags keep
        the environment value.
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "database_url" in changes:
            changes["database_url"] = normalize_database_url(changes["database_url"])
        if "llm_provider" in changes:
            changes["llm_provider"] = _validate_provider(changes["llm_provider"])
        return replace(self, **changes)


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def normalize_database_url(database_url: str) -> str:
    """
    Rewrite short database URLs into SQLAlchemy driver URLs.

    Hosted providers hand out postgres:// and mysql:// URLs which
    SQLAlchemy does not accept directly.
    """
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    if database_url.startswith("mysql://"):
        database_url = database_url.replace("mysql://", "mysql+pymysql://", 1)

    # pymysql rejects the ssl-mode query parameter
    if "ssl-mode=" in database_url:
        database_url = re.sub(r"[?&]ssl-mode=[^&]+", "", database_url)
        if "?" not in database_url and "&" in database_url:
            database_url = database_url.replace("&", "?", 1)

    return database_url


def _validate_provider(provider: str) -> str:
    provider = provider.strip().lower()
    if provider not in SUPPORTED_PROVIDERS:
        raise ValueError(
            f"Unsupported LLM provider '{provider}'. "
            f"Choose one of: {', '.join(SUPPORTED_PROVIDERS)}"
        )
    return provider


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If a value cannot be parsed
    """
    google_api_key = os.environ.get("API_KEY") or _get_env("GOOGLE_API_KEY", "")

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "TodoChat"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "WARNING"),
        log_dir=os.environ.get("LOG_DIR") or None,

        # Database
        database_url=normalize_database_url(_get_env("DATABASE_URL", "sqlite:///todos.db")),

        # LLM
        llm_provider=_validate_provider(_get_env("LLM_PROVIDER", "gemini")),
        google_api_key=google_api_key,
        groq_api_key=_get_env("GROQ_API_KEY", ""),
        llm_model=_get_env("LLM_MODEL", "gemini-2.0-flash"),
        groq_model=_get_env("GROQ_MODEL", "llama-3.3-70b-versatile"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.1")),
    )


def reset_settings() -> None:
    """Drop the cached settings so the environment is re-read (for testing)."""
    get_settings.cache_clear()
