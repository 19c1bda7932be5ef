"""Application configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "Estate Market"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Session cookie signing (flash messages)
    SECRET_KEY: str = "your-secret-key-change-this-in-production"

    # Ledger gateway
    LEDGER_URL: str = "http://127.0.0.1:7545"
    LEDGER_TIMEOUT: float = 10.0
    FETCH_CONCURRENCY: int = 8

    # Payment unit: amounts on the ledger are integers of 10**-DECIMALS display units
    PAYMENT_UNIT_DECIMALS: int = 18
    PAYMENT_UNIT_SYMBOL: str = "ETH"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "standard"


settings = Settings()
