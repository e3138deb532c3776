from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # GitHub contents API (server side)
    github_token: Optional[str] = None
    github_owner: Optional[str] = None
    github_repo: Optional[str] = None
    github_branch: str = "main"
    github_api_url: str = "https://api.github.com"
    orders_document_path: str = "data/store-data.json"
    request_timeout_seconds: float = 30.0

    # Storefront client
    orders_api_url: Optional[str] = None
    store_data_url: Optional[str] = None
    page_secure: bool = True
    local_store_path: str = "local_orders.json"

    # Application
    app_env: str = "local"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("github_branch", mode="before")
    @classmethod
    def _default_branch(cls, value):
        value = (value or "").strip()
        return value or "main"

    @property
    def github_configured(self) -> bool:
        """True when the token, owner and repository are all set."""
        return bool(self.github_token and self.github_owner and self.github_repo)

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
    return _config
