"""Centralised process settings for voxroute, loaded from env / .env."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class VoxrouteSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VOXROUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- general ---
    app_name: str = "voxroute"
    log_level: str = "INFO"

    # --- HTTP ---
    host: str = "127.0.0.1"
    port: int = 50051


@lru_cache
def get_settings() -> VoxrouteSettings:
    return VoxrouteSettings()
