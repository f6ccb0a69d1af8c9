"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:4200"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str = Field(
        default="logs/catalog.log",
        description="Log file path (empty string disables the file sink)",
    )
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./catalog.db",
        description="Database connection URL",
    )
    user: str | None = Field(default=None, description="Database username")
    password: str | None = Field(default=None, description="Database password")
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    create_schema: bool = Field(
        default=True, description="Create missing tables when the API starts"
    )
    echo: bool = Field(default=False, description="Echo SQL statements")

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with user and password if provided."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)

        if self.user and self.user != base_url.username:
            if base_url.username:
                logger.warning(
                    f"Database user '{self.user}' does not match the one in the URL '{base_url.username}'. Using '{self.user}'."
                )
            base_url = base_url.set(username=self.user)

        if self.password and self.password != base_url.password:
            if base_url.password:
                logger.warning(
                    "Database password from configuration does not match the one in the URL. Using password from configuration."
                )
            base_url = base_url.set(password=self.password)

        # Render manually to avoid SQLAlchemy's password masking
        return base_url.render_as_string(hide_password=False)


class FileStoreConfig(BaseModel):
    """Blob store configuration for uploaded product images."""

    root_dir: str = Field(
        default="uploads", description="Directory holding uploaded files"
    )
    max_upload_size_mb: int = Field(
        default=10, description="Maximum accepted upload size in MB"
    )


class PaginationConfig(BaseModel):
    """Pagination defaults."""

    # Paging is client driven; the value is kept for clients that read config.
    default_page_size: int = Field(default=10, description="Default page size")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    file_store: FileStoreConfig = Field(
        default_factory=FileStoreConfig, description="File store configuration"
    )
    pagination: PaginationConfig = Field(
        default_factory=PaginationConfig, description="Pagination configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
