# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Caller-side capture session.

Holds the most recent capture and plays the role of the capture panel:
- at most one capture in flight (re-entrant triggers are rejected)
- display text: the indented JSON, or ``Error: ...`` after a failure
- export: ``harvest_<host>_<epoch-ms>.json`` files, and copyable text
"""

from __future__ import annotations

import contextlib
import logging
import re
import threading
import time
import uuid
from collections.abc import Generator, Sequence
from pathlib import Path

import structlog

from pageharvest import HarvestRecord
from pageharvest.config import SettingsStore
from pageharvest.errors import CaptureFailure, CaptureInProgressError, ExportFailure
from pageharvest.extractors import SiteExtractor
from pageharvest.harvest import MonotonicClock, harvest, harvest_async
from pageharvest.snapshot import PageSnapshot

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^\w.-]", re.ASCII)

NOTHING_TO_EXPORT = "Nothing to export. Hit Capture first."


def export_filename(hostname: str, epoch_ms: int | None = None) -> str:
    """``harvest_<sanitized-hostname>_<epoch-millis>.json``."""
    if epoch_ms is None:
        epoch_ms = time.time_ns() // 1_000_000
    return f"harvest_{_UNSAFE_FILENAME_RE.sub('_', hostname)}_{epoch_ms}.json"


class CaptureSession:
    """One user's capture state for the lifetime of a host process."""

    def __init__(
        self,
        store: SettingsStore | None = None,
        *,
        clock: MonotonicClock | None = None,
        extractors: Sequence[SiteExtractor] | None = None,
    ) -> None:
        self._store = store if store is not None else SettingsStore()
        self._clock = clock if clock is not None else MonotonicClock()
        self._extractors = extractors
        self._guard = threading.Lock()
        self._last: HarvestRecord | None = None
        self._hostname = ""
        self.output = ""

    # --- State ---

    @property
    def busy(self) -> bool:
        """True while a capture is running (the capture control is disabled)."""
        return self._guard.locked()

    @property
    def last_record(self) -> HarvestRecord | None:
        return self._last

    @property
    def limit_chars(self) -> int:
        return self._store.load().limit_chars

    def update_limit(self, limit_chars: int) -> int:
        """Persist a new size limit; used from the next capture on."""
        return self._store.set_limit(limit_chars).limit_chars

    # --- Capture ---

    @contextlib.contextmanager
    def _in_flight(self) -> Generator[None, None, None]:
        if not self._guard.acquire(blocking=False):
            raise CaptureInProgressError("A capture is already in progress")
        try:
            with structlog.contextvars.bound_contextvars(capture_id=uuid.uuid4().hex[:12]):
                yield
        finally:
            self._guard.release()

    def capture(self, snapshot: PageSnapshot) -> HarvestRecord:
        """Capture *snapshot* with the persisted limit.

        Raises:
            CaptureInProgressError: another capture is running.
            CaptureFailure: the pipeline failed; ``output`` holds the error text.
        """
        with self._in_flight():
            try:
                record = harvest(snapshot, self.limit_chars, clock=self._clock, extractors=self._extractors)
            except Exception as e:
                raise self._failed(e) from e
            return self._captured(snapshot, record)

    async def capture_async(self, snapshot: PageSnapshot) -> HarvestRecord:
        """``capture()`` for event-loop hosts; the pipeline runs in a worker thread."""
        with self._in_flight():
            try:
                record = await harvest_async(
                    snapshot, self.limit_chars, clock=self._clock, extractors=self._extractors
                )
            except Exception as e:
                raise self._failed(e) from e
            return self._captured(snapshot, record)

    def _captured(self, snapshot: PageSnapshot, record: HarvestRecord) -> HarvestRecord:
        self._last = record
        self._hostname = snapshot.hostname
        self.output = record.to_json(indent=2)
        logger.info("Capture complete: source=%s chars=%d", record.source, record.serialized_size)
        return record

    def _failed(self, error: Exception) -> CaptureFailure:
        self._last = None
        self._hostname = ""
        self.output = f"Error: {error}"
        logger.error("Capture failed: %s", error, exc_info=error)
        return CaptureFailure(str(error))

    # --- Export ---

    def copy_text(self) -> str:
        """Text for the clipboard collaborator.

        Raises:
            ExportFailure: nothing has been captured.
        """
        if self._last is None or not self.output.strip():
            raise ExportFailure(NOTHING_TO_EXPORT)
        return self.output

    def export(self, directory: str | Path, *, epoch_ms: int | None = None) -> Path:
        """Write the last capture to *directory* and return the file path.

        Raises:
            ExportFailure: nothing has been captured.
        """
        payload = self.copy_text().strip()
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / export_filename(self._hostname, epoch_ms)
        path.write_text(payload, encoding="utf-8")
        logger.info("Exported %s", path)
        return path
