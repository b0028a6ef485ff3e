"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./credit_ledger.db"

    # Pool custody (in-memory pool when pool_api_base is unset)
    pool_api_base: str | None = None
    pool_capability_token: str = "dev-capability"
    pool_seed_funds: int = 0  # WAD, deposited into the in-memory pool at startup

    # Ledger
    admin_principal: str = "admin"
    blocks_per_day: int = 5760  # 15 second blocks

    # Service
    service_name: str = "credit-ledger"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
