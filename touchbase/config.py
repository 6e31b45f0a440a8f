"""
Touchbase — Centralized configuration.

Loads all settings from .env and validates them.
This module is the foundation for every other module in the project.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

# Load .env from project root (two levels up from touchbase/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)

STATS_SCOPES = ("both", "friends", "network")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Contact Store — JSON export of contacts + interactions
    DATA_PATH: str = "data/contacts.json"

    # "Today" is resolved once per run in this timezone
    TIMEZONE: str = "UTC"

    # Home pages
    DUE_NOW_LIMIT: int = 4
    BIRTHDAY_LOOKAHEAD_DAYS: int = 60

    # Stats: "both" | "friends" | "network"
    STATS_SCOPE: str = "both"

    LOG_LEVEL: str = "INFO"

    @field_validator("DUE_NOW_LIMIT", "BIRTHDAY_LOOKAHEAD_DAYS", mode="before")
    @classmethod
    def parse_non_negative(cls, v: str | int) -> int:
        value = int(v)
        if value < 0:
            raise ValueError(f"must be >= 0, got {value}")
        return value

    @field_validator("TIMEZONE")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {v!r}") from exc
        return v

    @field_validator("STATS_SCOPE", mode="before")
    @classmethod
    def check_scope(cls, v: str) -> str:
        scope = str(v).strip().lower()
        if scope not in STATS_SCOPES:
            raise ValueError(f"must be one of {STATS_SCOPES}, got {v!r}")
        return scope

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def check_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {LOG_LEVELS}, got {v!r}")
        return level


def _load_settings() -> Settings:
    """Load settings from environment, exiting on invalid values."""
    try:
        return Settings(
            DATA_PATH=os.getenv("DATA_PATH", "data/contacts.json"),
            TIMEZONE=os.getenv("TIMEZONE", "UTC"),
            DUE_NOW_LIMIT=os.getenv("DUE_NOW_LIMIT", "4"),
            BIRTHDAY_LOOKAHEAD_DAYS=os.getenv("BIRTHDAY_LOOKAHEAD_DAYS", "60"),
            STATS_SCOPE=os.getenv("STATS_SCOPE", "both"),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        )
    except ValidationError as exc:
        print(f"ERROR: invalid settings in .env:\n{exc}", file=sys.stderr)
        sys.exit(1)


# Singleton — imported by other modules as:
#   from touchbase.config import settings
settings = _load_settings()
