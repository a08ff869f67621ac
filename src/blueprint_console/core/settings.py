"""Centralized console configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the working directory: .env, .env.local, .env.dev/.env.test/.env.prod
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed console configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `BPCONSOLE_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    host : str
        Bind address of the standalone web console; maps from `BPCONSOLE_HOST`.
    port : int
        Bind port of the standalone web console; maps from `BPCONSOLE_PORT`.
    plugin_label : str
        URL segment the page is served under; maps from `BPCONSOLE_PLUGIN_LABEL`.
    plugin_title : str
        Page heading / navigation title; maps from `BPCONSOLE_PLUGIN_TITLE`.
    demo : bool
        Seed the in-process platform with sample modules; maps from `BPCONSOLE_DEMO`.
    """

    environment: EnvName = Field(default="dev", alias="BPCONSOLE_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    host: str = Field(default="127.0.0.1", alias="BPCONSOLE_HOST")
    port: int = Field(default=8080, ge=1, le=65535, alias="BPCONSOLE_PORT")
    plugin_label: str = Field(
        default="blueprint", pattern=r"^[A-Za-z0-9_-]+$", alias="BPCONSOLE_PLUGIN_LABEL"
    )
    plugin_title: str = Field(default="Blueprint", alias="BPCONSOLE_PLUGIN_TITLE")
    demo: bool = Field(default=False, alias="BPCONSOLE_DEMO")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Kept behind an LRU cache so tests can force a rebuild via
    `load_settings.cache_clear()` after mutating `os.environ`.
    """
    os.environ.setdefault("BPCONSOLE_ENV", "dev")
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "blueprint_console") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
