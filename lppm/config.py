# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Settings for the LPPM API, read from the environment and an optional .env.

Assumptions:
- Variable names are the field names, case-insensitive (DATABASE_URL, ...)
- The WordPress database belongs to the WordPress site; this API only reads it
- AUTH_ENABLED=false opens the admin content routes for local development
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # WordPress
    database_url: str = "sqlite:///./wordpress.db"
    wp_table_prefix: str = "2022_"
    wp_site_url: str = "https://lppm.unila.ac.id"

    # Admin login
    auth_enabled: bool = True
    password_max_count_log2: int = Field(
        20, ge=7, le=30,
        description="Highest PHPass iteration exponent accepted from a stored hash"
    )

    # Content documents
    content_dir: str = "./public/data"

    # HTTP
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_version: str = "v1"
    posts_per_page: int = Field(9, ge=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("wp_site_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


settings = Settings()
