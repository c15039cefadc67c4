"""
Configuration management for Uncle's Fries Bot.
Loads settings from environment variables with validation.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Paths
    base_dir: Path = Path(__file__).parent.parent

    # Telegram
    telegram_bot_token: str = Field(..., description="Telegram Bot API token")

    # Google Sheets catalog
    sheet_id: Optional[str] = Field(default=None, description="Google Sheets spreadsheet ID")
    sheet_api_key: Optional[str] = Field(default=None, description="Google Sheets API key")
    categories_sheet: str = Field(default="Sheet1", description="Sheet with categories")
    items_sheet: str = Field(default="Sheet2", description="Sheet with menu items")
    catalog_timeout_seconds: float = Field(
        default=10.0, description="Timeout for catalog requests"
    )

    # Paystack
    paystack_secret: Optional[str] = Field(
        default=None, description="Paystack secret key (also signs webhooks)"
    )
    payment_timeout_seconds: float = Field(
        default=30.0, description="Timeout for payment gateway requests"
    )

    # Admin notification
    admin_recipient_id: Optional[str] = Field(
        default=None, description="Chat ID of admin to receive orders and payments"
    )

    # Webhook server
    public_base_url: str = Field(
        default="http://localhost:3000",
        alias="BASE_URL",
        description="Public URL the payment gateway calls back",
    )
    webhook_host: str = Field(default="0.0.0.0", description="Webhook server host")
    port: int = Field(default=3000, description="Webhook server port")

    # Debug
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def payment_callback_url(self) -> str:
        """Callback URL registered with the payment gateway."""
        return f"{self.public_base_url.rstrip('/')}/api/paystack/webhook"

    @property
    def catalog_enabled(self) -> bool:
        """Whether a live catalog source is configured."""
        return bool(self.sheet_id and self.sheet_api_key)


# Global settings instance
settings = Settings()
