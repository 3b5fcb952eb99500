"""Configuration loading for the Panorama CLI."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connection and polling settings loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_prefix="PANORAMA_CLI_",
        extra="ignore",
    )

    host: str | None = None
    api_key: str | None = None
    username: str | None = None
    password: str | None = None
    port: int | None = None
    verify_ssl: bool = True
    timeout: float = Field(default=30.0, gt=0)
    device_timezone: str | None = None
    job_poll_interval: float = Field(default=1.0, gt=0)
    job_timeout: float = Field(default=600.0, gt=0)

    @classmethod
    def from_env_file(cls, env_file: Path | None = None) -> Settings:
        kwargs: dict[str, Path] = {}
        if env_file is not None:
            kwargs["_env_file"] = env_file
        return cls(**kwargs)
