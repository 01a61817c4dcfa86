"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
DATA_DIR = PROJECT_ROOT / "data"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class ApiSettings(BaseModel):
    """Settings for the CMS REST API."""
    base_url: str = "http://localhost:5000"
    request_timeout: float = 30.0


class AuthSettings(BaseModel):
    """Where the signed-in session token is persisted."""
    token_file: str = str(DATA_DIR / "session.json")
    token_key: str = "token"

    @property
    def token_path(self) -> Path:
        """Resolve token file relative to project root."""
        p = Path(self.token_file)
        if p.is_absolute():
            return p
        return PROJECT_ROOT / p


class LocaleSettings(BaseModel):
    """Content locales."""
    default_locale: str = "ko"
    supported_locales: list[str] = Field(default_factory=lambda: ["ko", "en", "zh"])

    def is_supported(self, locale: str) -> bool:
        return locale in self.supported_locales


class Settings(BaseModel):
    """Top-level application settings."""
    api: ApiSettings = Field(default_factory=ApiSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    locale: LocaleSettings = Field(default_factory=LocaleSettings)

    @classmethod
    def load(cls, settings_path: Optional[Path] = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults.

        Environment variables win over the YAML file.
        """
        settings_path = settings_path or CONFIG_DIR / "settings.yaml"
        data: dict = {}
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        settings = cls(**data)
        settings.apply_env_overrides()
        return settings

    def apply_env_overrides(self) -> None:
        """Override values from CMS_* environment variables."""
        if url := os.getenv("CMS_BASE_URL"):
            self.api.base_url = url
        if timeout := os.getenv("CMS_REQUEST_TIMEOUT"):
            self.api.request_timeout = float(timeout)
        if token_file := os.getenv("CMS_TOKEN_FILE"):
            self.auth.token_file = token_file
        if locale := os.getenv("CMS_DEFAULT_LOCALE"):
            self.locale.default_locale = locale


# Singleton settings instance
settings = Settings.load()
