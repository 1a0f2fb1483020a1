# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Pick one extraction result for a snapshot.

Site extractors run in a fixed priority order; the first non-generic
result wins. An extractor that raises is logged and counted as a decline.
When nothing matches, the generic extractor runs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pageharvest import GENERIC_SOURCE, ExtractionResult
from pageharvest.extractors import DEFAULT_EXTRACTORS, GENERIC_EXTRACTOR, SiteExtractor
from pageharvest.snapshot import PageSnapshot

logger = logging.getLogger(__name__)


def select_extraction(
    snapshot: PageSnapshot,
    extractors: Sequence[SiteExtractor] | None = None,
    fallback: SiteExtractor | None = None,
) -> ExtractionResult:
    """Return the first applicable site result, else the generic one."""
    ordered = DEFAULT_EXTRACTORS if extractors is None else extractors
    for extractor in ordered:
        try:
            result = extractor.extract(snapshot)
        except Exception:
            logger.exception("Extractor error: %r on %s", extractor, snapshot.hostname)
            continue
        if result is not None and result.source != GENERIC_SOURCE:
            logger.debug("Extractor %r matched %s", extractor, snapshot.hostname)
            return result

    generic = fallback if fallback is not None else GENERIC_EXTRACTOR
    result = generic.extract(snapshot)
    if result is None:
        # Only a misconfigured fallback can decline
        raise LookupError(f"Fallback extractor {generic!r} declined {snapshot.hostname!r}")
    return result
