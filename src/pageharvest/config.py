# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Persisted user settings.

One option today: ``limit_chars``, the size budget for exported records.
Stored as JSON at ~/.pageharvest/settings.json, read at the start of every
capture and written whenever the user edits it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pageharvest import DEFAULT_LIMIT_CHARS
from pageharvest.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_DIR = Path.home() / ".pageharvest"
SETTINGS_FILE = "settings.json"
MIN_PRACTICAL_LIMIT = 1000


class HarvestSettings(BaseModel):
    """User-editable capture options."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    limit_chars: int = Field(
        DEFAULT_LIMIT_CHARS,
        gt=0,
        strict=True,
        description="Maximum serialized record size in characters (practical minimum 1000)",
    )


class SettingsStore:
    """Load/store HarvestSettings in a profile directory."""

    def __init__(self, profile_dir: str | Path | None = None) -> None:
        self._dir = Path(profile_dir).expanduser() if profile_dir is not None else DEFAULT_PROFILE_DIR

    @property
    def path(self) -> Path:
        return self._dir / SETTINGS_FILE

    def load(self) -> HarvestSettings:
        """Read settings; a missing or corrupt file yields defaults."""
        path = self.path
        if not path.exists():
            return HarvestSettings()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return HarvestSettings.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable settings at %s: %s", path, e)
            return HarvestSettings()

    def save(self, settings: HarvestSettings) -> None:
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            self.path.write_text(settings.model_dump_json(indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not write settings to {self.path}: {e}") from e

    def set_limit(self, limit_chars: int) -> HarvestSettings:
        """Validate and persist a new ``limit_chars``."""
        try:
            settings = HarvestSettings.model_validate({**self.load().model_dump(), "limit_chars": limit_chars})
        except ValidationError as e:
            raise ConfigError(f"Invalid limit_chars {limit_chars!r}: must be a positive integer") from e
        if settings.limit_chars < MIN_PRACTICAL_LIMIT:
            logger.warning(
                "limit_chars=%d is below the practical minimum of %d; snippets may exceed it",
                settings.limit_chars,
                MIN_PRACTICAL_LIMIT,
            )
        self.save(settings)
        return settings
