"""
Configuration management for VivaPonto Backend
"""
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import Optional, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    DATABASE_URL: str = Field(
        default="sqlite:///./vivaponto.db",
        description="SQLAlchemy database URL (SQLite or PostgreSQL)"
    )
    JWT_SECRET_KEY: str = Field(
        default="vivaponto-local-secret",
        description="JWT secret key for token signing"
    )

    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_EXPIRE_MINUTES: int = Field(default=60 * 24 * 7, description="JWT token expiration in minutes")

    APP_ENV: str = Field(default="local", description="Application environment: local, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level: DEBUG, INFO, WARNING, ERROR")

    # CORS settings
    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins. Use '*' for local only."
    )

    # Punches are stamped with the wall clock of this timezone
    APP_TIMEZONE: str = Field(default="America/Sao_Paulo", description="IANA timezone used for punch date and time")

    # Hour bank
    DEFAULT_EXPECTED_MINUTES: int = Field(
        default=480,
        description="Expected daily minutes for users without an assigned shift"
    )
    REPORT_ZERO_PUNCH_DAYS: str = Field(
        default="count",
        description="How days without punches count toward expected minutes: count, skip_weekends"
    )
    REPORT_PAGE_SIZE: int = Field(default=31, description="Default page size for the flat hours report")
    REPORT_MAX_DAYS: int = Field(default=366, ge=1, description="Longest date range a single report may cover")
    DASHBOARD_PENDING_LIMIT: int = Field(default=5, description="Pending requests shown on the admin dashboard")

    VERSION: Optional[str] = Field(default=None, description="Application version (git SHA or semver)")

    # Initial admin bootstrap settings
    INITIAL_ADMIN_NAME: str = Field(default="Administrador", description="Name for the initial admin user")
    INITIAL_ADMIN_EMAIL: str = Field(
        default="admin@vivaponto.com",
        description="Email for initial admin user (used when no admin exists)"
    )
    INITIAL_ADMIN_CPF: str = Field(default="00000000000", description="CPF for the initial admin user")
    INITIAL_ADMIN_PASSWORD: str = Field(
        default="Admin@12345",
        description="Password for initial admin user (used when no admin exists)"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    @field_validator("APP_ENV")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate APP_ENV"""
        allowed = ["local", "staging", "prod"]
        if v not in allowed:
            raise ValueError(f"APP_ENV must be one of {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate LOG_LEVEL"""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v.upper()

    @field_validator("REPORT_ZERO_PUNCH_DAYS")
    @classmethod
    def validate_zero_punch_policy(cls, v: str) -> str:
        allowed = ["count", "skip_weekends"]
        if v not in allowed:
            raise ValueError(f"REPORT_ZERO_PUNCH_DAYS must be one of {allowed}")
        return v

    @field_validator("APP_TIMEZONE")
    @classmethod
    def validate_app_timezone(cls, v: str) -> str:
        """APP_TIMEZONE must be an IANA key zoneinfo can resolve"""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"APP_TIMEZONE '{v}' is not a known IANA timezone")
        return v

    @field_validator("DEFAULT_EXPECTED_MINUTES")
    @classmethod
    def validate_default_expected(cls, v: int) -> int:
        if v < 0:
            raise ValueError("DEFAULT_EXPECTED_MINUTES cannot be negative")
        return v

    def validate_production(self) -> None:
        """
        Validate settings for production environment

        Raises:
            ValueError: If production settings are invalid
        """
        if self.APP_ENV == "prod":
            if len(self.JWT_SECRET_KEY) < 32:
                raise ValueError(
                    "JWT_SECRET_KEY must be at least 32 characters in production environment"
                )

            if self.ALLOWED_ORIGINS == "*" or not self.ALLOWED_ORIGINS:
                raise ValueError(
                    "ALLOWED_ORIGINS must be explicitly set (not '*') in production environment"
                )

    def get_allowed_origins_list(self) -> List[str]:
        """
        Get list of allowed CORS origins

        Returns:
            List of allowed origins (or ['*'] for local)
        """
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Create settings instance
settings = Settings()

# Validate production settings if in prod
if settings.APP_ENV == "prod":
    settings.validate_production()
