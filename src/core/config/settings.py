# src/core/config/settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from src.core.enums.valuation_method import ValuationMethod

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env file.
    Includes general app settings and the default ledger configuration.
    """
    # General App Settings
    APP_NAME: str = "Inventory Valuation API"
    APP_VERSION: str = "0.1.0"
    DEBUG_MODE: bool = False

    # API Specific Settings
    API_V1_STR: str = "/api/v1"

    # Logging Settings
    LOG_LEVEL: str = "INFO" # e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Ledger defaults, used when a request does not choose its own
    VALUATION_METHOD: ValuationMethod = ValuationMethod.FIFO
    ALLOW_NEGATIVE_INVENTORY: bool = False
    DECIMAL_PRECISION: int = 28

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent.parent / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

settings = Settings()
