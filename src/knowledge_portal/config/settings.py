"""Configuration management using Pydantic Settings v2."""

from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env into os.environ BEFORE any nested BaseSettings class is
# instantiated by the Settings default factories. The nested
# classes have no env_file of their own and only search os.environ.
load_dotenv()


class StoreSettings(BaseSettings):
    """Record store configuration."""

    data_dir: str = "./data"
    seed_demo_data: bool = True

    model_config = SettingsConfigDict(env_prefix="STORE_")


class SessionSettings(BaseSettings):
    """Session gate and cookie configuration."""

    ttl_hours: int = 24
    cookie_name: str = "kb_session"
    cookie_secure: bool = False
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    model_config = SettingsConfigDict(env_prefix="SESSION_")


class ApiSettings(BaseSettings):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5000"]

    model_config = SettingsConfigDict(env_prefix="API_")


class Settings(BaseSettings):
    """Root settings class combining all sections."""

    # Factories, so every Settings() re-reads the prefixed env vars
    store: StoreSettings = Field(default_factory=StoreSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore prefixed env vars handled by nested classes
    )


_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the global Settings instance (singleton pattern)."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reload_settings() -> Settings:
    """Rebuild settings from the current environment (mainly for testing)."""
    global _settings_instance
    _settings_instance = Settings()
    return _settings_instance
