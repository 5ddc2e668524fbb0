"""
Application Configuration
Loads settings from environment variables with validation
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses pydantic-settings for validation and type coercion.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # ============================================
    # Application Settings
    # ============================================
    app_name: str = "InvoiceStats"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    
    # ============================================
    # Server Settings
    # ============================================
    host: str = "0.0.0.0"
    port: int = 8000
    
    # ============================================
    # Record Store (Google Sheets)
    # ============================================
    sheet_id: str = ""
    sheets_api_base_url: str = "https://sheets.googleapis.com/v4"
    sheets_api_key: str = ""
    sheets_access_token: str = ""
    invoices_range: str = "Invoices!A:P"
    quotations_range: str = "Quotations!A:P"
    records_fetch_timeout_seconds: float = 15.0
    
    # ============================================
    # Rate Limiting
    # ============================================
    stats_rate_limit: str = "60/minute"
    
    # ============================================
    # CORS Settings
    # ============================================
    cors_origins: str = "http://localhost:3000"
    
    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to avoid loading .env file on every call.
    """
    return Settings()


# Export a default settings instance for convenience
settings = get_settings()
