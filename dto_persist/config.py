"""
Configuration management for dto_persist.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings, read from ``DTO_PERSIST_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DTO_PERSIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Repository behaviour
    default_id_column: str = Field(
        default="id",
        description="Identifier column used by update/create_or_update when none is given",
    )
    commit_on_write: bool = Field(
        default=True,
        description="Commit the session after each write; flush only when false",
    )

    # Logging
    log_level: str = Field(default="INFO")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get library settings."""
    return settings
