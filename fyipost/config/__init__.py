"""Configuration handling for the post wizard."""

from .models import AppSettings, StorageBackend, PostDraft, FyiPost
from .loader import SettingsLoader, ConfigError

__all__ = [
    "AppSettings",
    "StorageBackend",
    "PostDraft",
    "FyiPost",
    "SettingsLoader",
    "ConfigError",
]
