"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
Supports three modes:
    - DEVELOPMENT: Demo OTP codes are returned to the caller, demo data is seeded
    - STAGING: Same services, OTP codes are no longer exposed
    - PRODUCTION: Same as staging, plus a check for insecure secrets

The ENV_MODE variable controls which behaviours are enabled throughout
the application.

Usage:
    from tiffin.core.config import get_settings

    settings = get_settings()
    if settings.is_development:
        # Expose the OTP in the send-otp response

Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_JWT_SECRET = "your-secret-key-change-in-production"


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local testing, demo data and visible OTP codes
        PRODUCTION: Live environment
        STAGING: Pre-production environment
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    The JWT secret should NEVER be committed to version control.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # Security
        jwt_secret: HMAC secret used to sign session tokens
        jwt_algorithm: JWT signing algorithm
        jwt_expire_hours: Session token validity window
        password_scheme: passlib scheme used for password digests

        # OTP
        otp_ttl_minutes: Validity window of an OTP challenge
        otp_static_code: Fixed demo code (random codes when unset)

        # Business Configuration
        delivery_rate: Earnings credited per completed delivery
        default_currency: Currency used when a payment omits one
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Tiffin Ordering API",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8080,
        description="API server port"
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # ==========================================================================
    # SECURITY
    # ==========================================================================

    jwt_secret: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="Secret used to sign session tokens"
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    jwt_expire_hours: int = Field(
        default=24,
        ge=1,
        description="Session token validity in hours"
    )
    password_scheme: str = Field(
        default="argon2",
        description="passlib hashing scheme for passwords"
    )

    # ==========================================================================
    # OTP
    # ==========================================================================

    otp_ttl_minutes: int = Field(
        default=5,
        ge=1,
        description="Minutes before an OTP challenge expires"
    )
    otp_length: int = Field(
        default=6,
        ge=4,
        le=10,
        description="Number of digits in generated OTP codes"
    )
    otp_static_code: Optional[str] = Field(
        default="123456",
        description="Fixed demo OTP code; random codes are generated when empty"
    )
    expose_otp: Optional[bool] = Field(
        default=None,
        description="Return the OTP in the send-otp response (defaults to development only)"
    )

    # ==========================================================================
    # BUSINESS CONFIGURATION
    # ==========================================================================

    delivery_rate: float = Field(
        default=50.0,
        ge=0,
        description="Earnings per completed delivery"
    )
    default_currency: str = Field(
        default="INR",
        description="Default currency for payment orders"
    )
    default_payment_method: str = Field(
        default="RAZORPAY",
        description="Default payment method for payment orders"
    )
    seed_demo_data: bool = Field(
        default=True,
        description="Load demo users and dishes at startup"
    )
    strict_status_transitions: bool = Field(
        default=False,
        description="Reject order status changes that skip or reverse the lifecycle"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    @field_validator("otp_static_code", mode="before")
    @classmethod
    def validate_otp_static_code(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty string as 'generate random codes'."""
        if v is None or str(v).strip() == "":
            return None
        return str(v).strip()

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def use_real_services(self) -> bool:
        """Check if real external services were requested."""
        return self.env_mode in (EnvironmentMode.PRODUCTION, EnvironmentMode.STAGING)

    @property
    def should_expose_otp(self) -> bool:
        """Whether send-otp responses include the generated code."""
        if self.expose_otp is None:
            return self.is_development
        return self.expose_otp

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Validate that production settings are not left at insecure defaults.

        Returns:
            List of offending configuration keys (empty if all good)
        """
        insecure = []

        if self.use_real_services:
            if self.jwt_secret == DEFAULT_JWT_SECRET:
                insecure.append("JWT_SECRET")
            if self.should_expose_otp:
                insecure.append("EXPOSE_OTP")

        return insecure


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are loaded only once and stay
    consistent across the application lifecycle.

    Returns:
        Settings: Configured application settings

    Example:
        >>> settings = get_settings()
        >>> print(settings.env_mode)
        EnvironmentMode.DEVELOPMENT
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured application logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)

    return logging.getLogger("tiffin")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
