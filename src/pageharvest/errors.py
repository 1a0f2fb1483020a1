# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""pageharvest exception hierarchy.

All harvest-specific errors inherit from HarvestError, allowing callers
to catch the base class for any capture failure or specific subclasses
for targeted handling.

ParseError and ExtractorFault are contained inside the pipeline (logged,
never propagated). CaptureFailure and ExportFailure reach the caller.
"""

from __future__ import annotations


class HarvestError(Exception):
    """Base exception for all pageharvest errors."""


class SnapshotError(HarvestError):
    """HTML could not be parsed into a page snapshot."""


class ParseError(HarvestError):
    """A structured-data block is not valid JSON."""

    def __init__(self, message: str, *, index: int = -1) -> None:
        super().__init__(message)
        self.index = index


class ExtractorFault(HarvestError):
    """A site extractor raised while evaluating a page."""

    def __init__(self, message: str, *, source: str = "") -> None:
        super().__init__(message)
        self.source = source


class CaptureFailure(HarvestError):
    """The capture pipeline failed as a whole."""


class CaptureInProgressError(CaptureFailure):
    """A capture was triggered while another one is still running."""


class ExportFailure(HarvestError):
    """Export or copy requested with no captured data available."""


class ConfigError(HarvestError):
    """Invalid configuration value (e.g. a non-positive limit)."""
