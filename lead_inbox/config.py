"""
Centralized configuration using Pydantic Settings.

All environment variables are loaded and validated here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000

    # Gmail (OAuth user credentials, acquired out of band)
    gmail_access_token: str = ""
    gmail_refresh_token: str = ""
    gmail_client_id: str = ""
    gmail_client_secret: str = ""
    gmail_token_uri: str = "https://oauth2.googleapis.com/token"
    gmail_user_id: str = "me"
    gmail_timeout_seconds: int = 30

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    inference_timeout_seconds: int = 60

    # Polling
    poll_interval_minutes: int = 2
    poll_page_size: int = 10  # Unread messages considered per cycle
    pacing_seconds: float = 1.0  # Delay between messages within a cycle
    scheduler_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True  # False for colored dev output

    @property
    def has_gmail_credentials(self) -> bool:
        """Check if enough Gmail credentials are set to build a client."""
        return bool(self.gmail_access_token or self.gmail_refresh_token)


# Global settings instance
settings = Settings()
