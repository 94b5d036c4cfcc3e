"""
Centralized application configuration implementing the 12-Factor App methodology.
Every tunable is read from environment variables (or a local .env file).
"""
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable configuration schema backed by environment variables."""

    APP_NAME: str = "DebtFree"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"

    # Origins allowed to call the API from a browser front-end
    CORS_ORIGINS: List[str] = ["*"]

    # Display only; all amounts are single-currency
    CURRENCY_SYMBOL: str = "₹"

    MAX_INSIGHTS: int = 5

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
