"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="GROCHAIN_", extra="ignore"
    )

    # GroChain backend
    api_base_url: str = "http://localhost:5000"
    http_timeout_seconds: float = 10.0

    # Service
    service_name: str = "grochain-portal"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Session
    token_file: str = ".grochain/auth.json"

    # "demo" substitutes canned data when the backend fails, "strict" re-raises
    data_provider: Literal["demo", "strict"] = "demo"

    # Lists
    default_page_size: int = 10
    suggestion_limit: int = 10
    commission_cache_seconds: float = 300.0
    commission_cache_max_entries: int = 1000

    # Loans: the application page and the quick form quote different rates
    loan_application_rate: float = 0.15
    loan_form_rate: float = 0.12
    loan_form_term_months: int = 12
    loan_min_amount: int = 50_000
    loan_max_amount: int = 5_000_000


settings = Settings()
