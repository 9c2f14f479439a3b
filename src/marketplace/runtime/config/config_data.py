"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class RateLimiterConfig(BaseModel):
    """Rate limiter configuration model."""

    requests: int = Field(
        default=100, description="Number of requests allowed per window"
    )
    window_ms: int = Field(default=60000, description="Time window in milliseconds")
    otp_requests: int = Field(
        default=5, description="OTP issuance requests allowed per window"
    )
    otp_window_ms: int = Field(
        default=60000, description="OTP issuance window in milliseconds"
    )
    enabled: bool = Field(default=True, description="Enable rate limiting")
    per_endpoint: bool = Field(
        default=True, description="Apply rate limiting per endpoint"
    )
    per_method: bool = Field(
        default=True, description="Apply rate limiting per HTTP method"
    )


class JWTConfig(BaseModel):
    """Session token configuration."""

    allowed_algorithms: list[str] = Field(
        default_factory=lambda: ["HS256"],
        description="JWT algorithms allowed for token generation and validation",
    )
    gen_issuer: str = Field(
        default="marketplace-api", description="Issuer name to use when generating tokens"
    )
    clock_skew: int = Field(default=60, description="Clock skew tolerance in seconds")


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./marketplace.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @computed_field
    @property
    def password(self) -> str | None:
        """Resolve the database password from a secrets file or environment variable."""
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if not password:
                raise ValueError(
                    f"Environment variable {self.password_env_var} not set"
                )
            return password
        return None

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with password if provided."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if base_url.get_backend_name() == "sqlite":
            return self.url

        resolved_password = self.password
        if resolved_password is None:
            return self.url

        if base_url.password and base_url.password != resolved_password:
            logger.warning(
                "Database password in URL does not match the configured secret. Using the configured secret."
            )
        # render_as_string keeps the password instead of masking it
        return base_url.set(password=resolved_password).render_as_string(
            hide_password=False
        )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    session_signing_secret: str | None = Field(
        default=None, description="Secret for signing session JWTs"
    )
    session_ttl_seconds: int = Field(
        default=24 * 60 * 60, description="Session token lifetime in seconds"
    )
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class OtpConfig(BaseModel):
    """One-time code configuration."""

    length: int = Field(default=6, ge=4, le=10, description="Number of digits per code")
    expiry_minutes: int = Field(default=10, description="Code lifetime in minutes")
    expose_in_response: bool = Field(
        default=True,
        description="Echo the code in API responses outside production",
    )


class PhoneConfig(BaseModel):
    """Phone number matching configuration."""

    country_code: str = Field(default="962", description="Country calling code")
    national_number_length: int = Field(
        default=9, description="Length of a national number without trunk prefix"
    )


class SmsConfig(BaseModel):
    """SMS gateway configuration."""

    provider: Literal["console", "twilio"] = Field(
        default="console", description="SMS delivery provider"
    )
    account_sid: str | None = Field(default=None, description="Twilio account SID")
    auth_token: str | None = Field(default=None, description="Twilio auth token")
    from_number: str | None = Field(default=None, description="Sender phone number")
    api_base_url: str = Field(
        default="https://api.twilio.com/2010-04-01",
        description="Twilio REST API base URL",
    )
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout")
    message_template: str = Field(
        default="Your Khubzati verification code is: {code}. Valid for {minutes} minutes.",
        description="SMS body; {code} and {minutes} are substituted",
    )


class OrdersConfig(BaseModel):
    """Order handling configuration."""

    number_prefix: str = Field(default="KHB", description="Order number prefix")
    page_size_default: int = Field(default=10, description="Default page size")
    page_size_max: int = Field(default=100, description="Maximum page size")


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    rate_limiter: RateLimiterConfig = Field(
        default_factory=RateLimiterConfig, description="Rate limiter configuration"
    )
    jwt: JWTConfig = Field(
        default_factory=JWTConfig, description="Session token configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
    otp: OtpConfig = Field(default_factory=OtpConfig, description="OTP configuration")
    phone: PhoneConfig = Field(
        default_factory=PhoneConfig, description="Phone matching configuration"
    )
    sms: SmsConfig = Field(default_factory=SmsConfig, description="SMS configuration")
    orders: OrdersConfig = Field(
        default_factory=OrdersConfig, description="Order configuration"
    )
