"""
Configuration settings for the Expense Tracker API.

Loads environment variables from .env file and provides typed configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Security Configuration
    SECRET_KEY: str = Field(
        default="3f9b6c0e2a7d41f58e1c9a64b02d7f35c8e6a1b94d3027f6e5c4b8a1d9f0e237",
        description="Secret key for signing JWT session tokens",
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60, description="Access token expiration time in minutes"
    )
    BCRYPT_ROUNDS: int = Field(
        default=12, description="Work factor for bcrypt password hashing"
    )
    LOGIN_RATE_LIMIT: str = Field(
        default="5/minute", description="Login attempts allowed per client address"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite:///./data/expenses.db", description="SQLAlchemy database URL"
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )

    # Reports
    MAX_REPORT_RANGE_DAYS: int = Field(
        default=366, description="Longest date range a report may span"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    ENABLE_FILE_LOGGING: bool = Field(
        default=False, description="Enable logging to file"
    )
    LOG_DIR: str = Field(default="./logs", description="Directory for log files")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
