from __future__ import annotations

from typing import Any, List, Optional
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def split_csv(raw: str) -> List[str]:
    if not raw:
        return []
    parts = [p.strip() for p in raw.split(",")]
    return [p for p in parts if p]


def _validate_base_url(name: str, value: str) -> None:
    if not value:
        raise RuntimeError(f"{name} is empty/invalid.")
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        raise RuntimeError(f"{name} must start with http:// or https://")
    if not parsed.netloc:
        raise RuntimeError(f"{name} must include a host (and optional port).")


def _validate_log_level(value: str) -> None:
    allowed = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
    v = (value or "").strip().upper()
    if v not in allowed:
        raise RuntimeError(f"LOG_LEVEL must be one of: {', '.join(sorted(allowed))}")


def _validate_timeout(value: float) -> None:
    if value <= 0:
        raise RuntimeError("HTTP_TIMEOUT must be > 0.")
    if value > 120:
        raise RuntimeError("HTTP_TIMEOUT is too high (max 120s).")


def _validate_prefix(value: str) -> None:
    if not value:
        raise RuntimeError("BOT_PREFIX must not be empty.")
    if any(ch.isspace() for ch in value):
        raise RuntimeError("BOT_PREFIX must not contain whitespace.")
    if len(value) > 8:
        raise RuntimeError("BOT_PREFIX is too long (max 8 chars).")


class Settings(BaseSettings):
    """
    Bot settings.

    Rules:
    - Loaded once per process from env / .env, never mutated afterwards
    - validate_for_boot() fails fast on malformed values
    - A missing DISCORD_BOT_TOKEN is not checked here; Discord login reports it
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
    )

    # Core / logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    bot_version: str = Field(default="1.0.0", alias="BOT_VERSION")

    # Discord
    discord_bot_token: str = Field(default="", alias="DISCORD_BOT_TOKEN")
    discord_application_id: Optional[int] = Field(default=None, alias="DISCORD_APPLICATION_ID")
    discord_guild_id: Optional[int] = Field(default=None, alias="DISCORD_GUILD_ID")
    discord_api_base: str = Field(default="https://discord.com/api/v10", alias="DISCORD_API_BASE")
    prefix: str = Field(default="!", alias="BOT_PREFIX")
    operator_channel_id: Optional[int] = Field(default=None, alias="OPERATOR_CHANNEL_ID")

    # Command module allow/deny lists (comma-separated module names)
    commands_allow_raw: str = Field(default="", alias="DISCORD_COMMANDS_ALLOW")
    commands_deny_raw: str = Field(default="", alias="DISCORD_COMMANDS_DENY")

    # Backend API
    backend_api_base: str = Field(default="http://127.0.0.1:8080", alias="BACKEND_API_BASE")
    backend_token: str = Field(default="", alias="BACKEND_TOKEN")

    # HTTP
    http_timeout_s: float = Field(default=20.0, alias="HTTP_TIMEOUT")
    http_user_agent: str = Field(default="crimecat-discord-bot/1.0", alias="HTTP_USER_AGENT")

    # Local music storage (one folder per user id)
    music_data_dir: str = Field(default="./MusicData", alias="MUSIC_DATA_DIR")

    # Bot-listing site stats
    bot_list_api_base: str = Field(default="https://koreanbots.dev/api/v2", alias="BOT_LIST_API_BASE")
    bot_list_token: str = Field(default="", alias="BOT_LIST_TOKEN")
    bot_list_interval_s: float = Field(default=1800.0, alias="BOT_LIST_INTERVAL")

    # Advertisement presence rotation
    ad_rotation_interval_s: float = Field(default=60.0, alias="AD_ROTATION_INTERVAL")

    # Ops API (uvicorn)
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # -------------------------
    # Validators / normalizers
    # -------------------------

    @field_validator("log_level", mode="before")
    @classmethod
    def _norm_log_level(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip().upper()
        return s or "INFO"

    @field_validator("backend_api_base", "bot_list_api_base", "discord_api_base", mode="before")
    @classmethod
    def _norm_url(cls, v: Any) -> str:
        return ("" if v is None else str(v)).strip().rstrip("/")

    @field_validator("discord_application_id", "discord_guild_id", "operator_channel_id", mode="before")
    @classmethod
    def _norm_snowflake(cls, v: Any) -> Optional[int]:
        s = ("" if v is None else str(v)).strip()
        if not s:
            return None
        return int(s)

    @field_validator("prefix", mode="before")
    @classmethod
    def _norm_prefix(cls, v: Any) -> str:
        s = ("" if v is None else str(v)).strip()
        return s or "!"

    # -------------------------
    # Derived helpers
    # -------------------------

    @property
    def commands_allow(self) -> Optional[List[str]]:
        items = split_csv(self.commands_allow_raw)
        return items or None

    @property
    def commands_deny(self) -> Optional[List[str]]:
        items = split_csv(self.commands_deny_raw)
        return items or None

    def validate_for_boot(self) -> None:
        """
        Strict validation for boot safety.
        """
        _validate_base_url("BACKEND_API_BASE", self.backend_api_base)
        _validate_base_url("DISCORD_API_BASE", self.discord_api_base)
        if self.bot_list_token:
            _validate_base_url("BOT_LIST_API_BASE", self.bot_list_api_base)

        _validate_log_level(self.log_level)
        _validate_prefix(self.prefix)
        _validate_timeout(self.http_timeout_s)

        if self.discord_guild_id is not None and self.discord_guild_id <= 0:
            raise RuntimeError("DISCORD_GUILD_ID must be a positive integer.")
        if self.bot_list_interval_s < 60:
            raise RuntimeError("BOT_LIST_INTERVAL must be >= 60 seconds.")
        if self.ad_rotation_interval_s < 5:
            raise RuntimeError("AD_ROTATION_INTERVAL must be >= 5 seconds.")


settings = Settings()

__all__ = ["Settings", "settings", "split_csv"]
