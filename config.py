"""
Configuration management for the SocialX gateway.

Settings are read from environment variables (and an optional .env file)
with development-friendly defaults for every field.
"""

from typing import List, Optional
from urllib.parse import urlparse
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Supported logging levels"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    The backend origin is taken from NEXT_PUBLIC_API_URL (or API_URL) so the
    same variable drives both this gateway and the web client.
    """

    # --- Environment Configuration ---
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Deployment environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    # --- Application Configuration ---
    app_name: str = Field(default="SocialX Advanced", description="Application name")
    app_description: str = Field(
        default="A modern social platform with AI-powered features",
        description="Application description used in page metadata",
    )
    app_version: str = Field(default="0.1.0", description="Application version")

    # --- Server Configuration ---
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")

    # --- API Proxy Configuration ---
    api_url: str = Field(
        default="http://localhost:4000",
        validation_alias=AliasChoices("NEXT_PUBLIC_API_URL", "API_URL", "api_url"),
        description="Backend origin that /api requests are forwarded to",
    )
    api_proxy_source: str = Field(
        default="/api/:path*", description="Path pattern handled by the proxy"
    )
    api_proxy_destination_path: str = Field(
        default="/api/:path*", description="Path template appended to api_url"
    )
    proxy_timeout: float = Field(
        default=30.0, description="Upstream request timeout in seconds"
    )
    proxy_max_connections: int = Field(
        default=100, description="Maximum concurrent upstream connections"
    )

    # --- CORS Configuration ---
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow credentials in CORS requests"
    )

    # --- Logging Configuration ---
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to stdout)"
    )
    log_max_size: int = Field(
        default=10 * 1024 * 1024,  # 10MB
        description="Maximum log file size in bytes",
    )
    log_backup_count: int = Field(
        default=5, description="Number of log backup files to keep"
    )

    # --- Performance Configuration ---
    response_compression_threshold: int = Field(
        default=500, description="Minimum response size for compression (bytes)"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        """Validate and normalize log level"""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v):
        """Parse CORS origins from string if needed"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v):
        """Require an http(s) origin and drop any trailing slash"""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("API URL must be an absolute http(s) URL")
        return v.rstrip("/")

    @field_validator("api_proxy_source", "api_proxy_destination_path")
    @classmethod
    def validate_proxy_paths(cls, v):
        """Proxy paths must be absolute"""
        if not v.startswith("/"):
            raise ValueError("Proxy paths must start with '/'")
        return v

    @field_validator("proxy_timeout")
    @classmethod
    def validate_proxy_timeout(cls, v):
        """Validate upstream timeout"""
        if v <= 0:
            raise ValueError("Proxy timeout must be positive")
        return v

    @property
    def proxy_destination(self) -> str:
        """Full destination template for the API rewrite rule"""
        return f"{self.api_url}{self.api_proxy_destination_path}"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment (useful for testing)"""
    global settings
    settings = Settings()
    return settings
