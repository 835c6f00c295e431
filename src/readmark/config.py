"""Configuration management for readmark.

Handles environment-based configuration with layered loading:
1. .env.template (base defaults)
2. .env.local (personal overrides)
3. READMARK_* environment variables (highest priority)
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        # Load from multiple env files in order
        env_file=[".env.template", ".env.local"],
        env_file_encoding="utf-8",
        env_prefix="READMARK_",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    app_name: str = Field(default="readmark", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")

    # HTTP Fetch Settings
    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; readmark/0.1; +https://pypi.org/project/readmark/)",
        description="User-Agent header sent when fetching pages",
    )
    request_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    max_content_bytes: int = Field(default=10_000_000, description="Largest response body accepted")

    # Conversion Settings
    html_parser: str = Field(default="html.parser", description="BeautifulSoup tree builder")
    default_format: str = Field(default="markdown", description="Default output format (markdown or html)")

    # Archive Settings
    archive_dir: Path = Field(default=Path("./archive"), description="Default archive output directory")

    # MCP Server Settings
    mcp_server_name: str = Field(default="readmark", description="MCP server identifier")
    http_host: str = Field(default="127.0.0.1", description="HTTP server host")
    http_port: int = Field(default=8000, description="HTTP server port")

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    log_format: str = Field(default="%(name)s - %(message)s", description="Log format")

    @field_validator("request_timeout", "max_content_bytes")
    @classmethod
    def ensure_positive(cls, v: float) -> float:
        """Reject zero or negative limits."""
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @field_validator("html_parser")
    @classmethod
    def validate_html_parser(cls, v: str) -> str:
        """Validate the BeautifulSoup tree builder name."""
        valid_parsers = {"html.parser", "lxml", "html5lib"}
        if v.lower() not in valid_parsers:
            raise ValueError(f"html_parser must be one of {valid_parsers}")
        return v.lower()

    @field_validator("default_format")
    @classmethod
    def validate_default_format(cls, v: str) -> str:
        """Validate default output format."""
        valid_formats = {"markdown", "html"}
        if v.lower() not in valid_formats:
            raise ValueError(f"default_format must be one of {valid_formats}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()


# Global settings instance
settings = Settings()
