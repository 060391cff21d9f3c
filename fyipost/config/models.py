"""
Pydantic models for settings and post records.

PostDraft is the accumulator carried between wizard steps; FyiPost is
the record committed to per-user state when the wizard is confirmed.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class StorageBackend(str, Enum):
    """Where bot state is kept between turns."""
    MEMORY = "memory"
    FILE = "file"


# ============================================================
# Post Records
# ============================================================

class PostDraft(BaseModel):
    """Answers collected so far in one wizard run."""

    source_type: Optional[str] = Field(None, description="Chosen source type label")
    url: Optional[str] = Field(None, description="Raw URL text")
    description: Optional[str] = Field(None, description="Raw description text")
    priority: Optional[str] = Field(None, description="Chosen priority label")

    def missing_fields(self) -> List[str]:
        """Names of fields that have not been answered yet."""
        return [name for name, value in self.model_dump().items() if value is None]


class FyiPost(BaseModel):
    """Stored post recommendation, one per user."""

    source_type: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None

    def overwrite_from(self, draft: PostDraft) -> None:
        """Replace all four fields with the draft's values."""
        self.source_type = draft.source_type
        self.url = draft.url
        self.description = draft.description
        self.priority = draft.priority


# ============================================================
# Application Settings
# ============================================================

class AppSettings(BaseModel):
    """Runtime settings for the CLI and bot host."""

    storage: StorageBackend = Field(default=StorageBackend.FILE, description="State backend")
    state_dir: Path = Field(default=Path.home() / ".fyipost", description="Directory for state files")
    state_filename: str = Field(default="state.json", description="State file name")
    default_user: str = Field(default="local", description="User id when none is given")

    @field_validator("state_filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """State file name must be a bare file name."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid state file name: {v!r}")
        return v

    @field_validator("default_user")
    @classmethod
    def validate_user(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Default user must not be empty")
        return v.strip()

    @property
    def state_file(self) -> Path:
        return self.state_dir / self.state_filename
