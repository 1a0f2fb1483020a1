# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Capture entry point: select → stamp provenance → normalize."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from pageharvest import DEFAULT_LIMIT_CHARS, HarvestRecord
from pageharvest.extractors import SiteExtractor
from pageharvest.normalizer import normalize
from pageharvest.selector import select_extraction
from pageharvest.snapshot import PageSnapshot

logger = logging.getLogger(__name__)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class MonotonicClock:
    """Wall clock whose readings never go backwards.

    If the system clock steps back between captures, the previous reading
    is repeated until real time catches up.
    """

    __slots__ = ("_now", "_last", "_lock")

    def __init__(self, now: Callable[[], datetime] | None = None) -> None:
        self._now = now or (lambda: datetime.now(UTC))
        self._last: datetime | None = None
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            current = self._now()
            if self._last is not None and current < self._last:
                current = self._last
            self._last = current
            return current

    def timestamp(self) -> str:
        return format_timestamp(self.now())


_default_clock = MonotonicClock()


def harvest(
    snapshot: PageSnapshot,
    limit_chars: int = DEFAULT_LIMIT_CHARS,
    *,
    clock: MonotonicClock | None = None,
    extractors: Sequence[SiteExtractor] | None = None,
) -> HarvestRecord:
    """Run one capture against *snapshot* and return the bounded record."""
    location = snapshot.location
    result = select_extraction(snapshot, extractors)
    record = HarvestRecord(
        result=result,
        harvested_at=(clock or _default_clock).timestamp(),
        location=location,
    )
    logger.debug("Captured %s from %s (%d chars)", result.source, location.href, record.serialized_size)
    return normalize(record, limit_chars)


async def harvest_async(
    snapshot: PageSnapshot,
    limit_chars: int = DEFAULT_LIMIT_CHARS,
    *,
    clock: MonotonicClock | None = None,
    extractors: Sequence[SiteExtractor] | None = None,
) -> HarvestRecord:
    """``harvest()`` in a worker thread so an event loop stays responsive."""
    return await asyncio.to_thread(harvest, snapshot, limit_chars, clock=clock, extractors=extractors)
