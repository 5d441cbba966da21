"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.

Blank environment values fall back to defaults, numbers that do not parse fall
back to defaults, and comma-separated lists are exposed through the grouped
read-only views (``settings.s3``, ``settings.security`` ...).
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, List
from urllib.parse import urlparse

from pydantic import Field, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TRUTHY_VALUES = ("1", "true", "yes", "y", "on")


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


@dataclass(frozen=True)
class DatabaseConfig:
    url: str
    echo: bool


@dataclass(frozen=True)
class JwtConfig:
    secret: str
    expires_in: str


@dataclass(frozen=True)
class ClientConfig:
    url: str
    cookie_domain: str


@dataclass(frozen=True)
class S3Config:
    access_endpoint: str
    response_endpoint: str
    region: str
    access_key_id: str
    secret_access_key: str
    bucket: str
    image_prefix: str
    use_path_style: bool


@dataclass(frozen=True)
class SecurityConfig:
    backend_cors_origins: List[str]
    allowed_hosts: List[str]


def split_csv(value: str) -> List[str]:
    """Split a comma-separated value, trimming entries and dropping blanks."""
    return [part.strip() for part in (value or "").split(",") if part.strip()]


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="JINAQ", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8080, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://jinaq@localhost:5432/jinaq",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")

    # JWT settings
    jwt_secret: str = Field(default="changeme", description="JWT signing secret")
    jwt_expiration: str = Field(default="720h", description="JWT lifetime")

    # Client settings
    client_url: str = Field(
        default="http://localhost:3000", description="Frontend client URL"
    )

    # Object storage settings
    s3_access_endpoint: str = Field(
        default="http://localhost:9000", description="Endpoint the API talks to"
    )
    s3_response_endpoint: str = Field(
        default="http://localhost:9000", description="Endpoint used in public URLs"
    )
    s3_region: str = Field(default="ap-northeast-2", description="Storage region")
    s3_access_key: str = Field(default="minio", description="Storage access key")
    s3_secret_key: str = Field(default="minio123", description="Storage secret key")
    s3_bucket: str = Field(default="jinaq-media", description="Media bucket")
    s3_image_prefix: str = Field(default="images", description="Image key prefix")
    s3_path_style: bool = Field(default=True, description="Path-style addressing")
    storage_bootstrap_on_startup: bool = Field(
        default=True, description="Ensure bucket, policy and prefix on startup"
    )
    max_image_size_bytes: int = Field(
        default=10 * 1024 * 1024, ge=1, description="Maximum accepted image upload"
    )

    # Security settings (comma-separated)
    security_backend_cors_origins: str = Field(
        default="", description="Allowed CORS origins, comma-separated"
    )
    security_allowed_hosts: str = Field(
        default="", description="Allowed Host header values, comma-separated"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # API settings
    api_prefix: str = Field(default="/api/v1", description="API route prefix")
    api_title: str = Field(default="JINAQ API", description="API documentation title")
    api_description: str = Field(
        default="JINAQ API Documentation",
        description="API documentation description",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        """Trim string values and treat blank ones as unset"""
        if not isinstance(data, dict):
            return data
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            cleaned[key] = value
        return cleaned

    @field_validator("server_port", "max_image_size_bytes", mode="before")
    @classmethod
    def coerce_number(cls, v, info: ValidationInfo):
        """Fall back to the field default when the value is not a finite number"""
        default = cls.model_fields[info.field_name].default
        if isinstance(v, bool):
            return default
        if isinstance(v, (int, float)):
            return int(v) if math.isfinite(v) else default
        try:
            number = float(str(v))
        except ValueError:
            return default
        return int(number) if math.isfinite(number) else default

    @field_validator(
        "debug", "db_echo", "s3_path_style", "storage_bootstrap_on_startup",
        mode="before",
    )
    @classmethod
    def coerce_bool(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in TRUTHY_VALUES
        return v

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    @property
    def database(self) -> DatabaseConfig:
        return DatabaseConfig(url=self.database_url, echo=self.db_echo)

    @property
    def jwt(self) -> JwtConfig:
        return JwtConfig(secret=self.jwt_secret, expires_in=self.jwt_expiration)

    @property
    def client(self) -> ClientConfig:
        return ClientConfig(
            url=self.client_url,
            cookie_domain=urlparse(self.client_url).hostname or "",
        )

    @property
    def s3(self) -> S3Config:
        return S3Config(
            access_endpoint=self.s3_access_endpoint,
            response_endpoint=self.s3_response_endpoint,
            region=self.s3_region,
            access_key_id=self.s3_access_key,
            secret_access_key=self.s3_secret_key,
            bucket=self.s3_bucket,
            image_prefix=self.s3_image_prefix,
            use_path_style=self.s3_path_style,
        )

    @property
    def security(self) -> SecurityConfig:
        return SecurityConfig(
            backend_cors_origins=split_csv(self.security_backend_cors_origins),
            allowed_hosts=split_csv(self.security_allowed_hosts),
        )


# Global settings instance
settings = Settings()
