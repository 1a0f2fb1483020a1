# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Size bound for harvest records.

Single best-effort pass: when the compact JSON is over the limit, a note is
added and an oversized ``text_snippet`` is cut to ``max(500, limit // 4)``.
The size is not re-checked afterwards, so records dominated by other fields
(a large ``ld`` list, long descriptions) can stay over the limit.
"""

from __future__ import annotations

import dataclasses
import logging

from pageharvest import DEFAULT_LIMIT_CHARS, HarvestRecord

logger = logging.getLogger(__name__)

SNIPPET_FLOOR_CHARS = 500


def truncation_note(limit_chars: int) -> str:
    return f"Truncated to ~{limit_chars} chars for portability"


def snippet_budget(limit_chars: int) -> int:
    return max(SNIPPET_FLOOR_CHARS, limit_chars // 4)


def normalize(record: HarvestRecord, limit_chars: int = DEFAULT_LIMIT_CHARS) -> HarvestRecord:
    """Return *record* unchanged if it fits *limit_chars*, else a truncated copy.

    Raises:
        ValueError: *limit_chars* is not a positive integer.
    """
    if isinstance(limit_chars, bool) or not isinstance(limit_chars, int) or limit_chars <= 0:
        raise ValueError(f"limit_chars must be a positive integer, got {limit_chars!r}")

    size = record.serialized_size
    if size <= limit_chars:
        return record

    result = record.result
    snippet = result.get("text_snippet")
    if isinstance(snippet, str) and len(snippet) * 2 > limit_chars:
        fields = dict(result.fields)
        fields["text_snippet"] = snippet[: snippet_budget(limit_chars)]
        result = dataclasses.replace(result, fields=fields)

    truncated = dataclasses.replace(record, result=result, note=truncation_note(limit_chars))
    logger.info(
        "Record truncated: source=%s size=%d limit=%d after=%d",
        record.source,
        size,
        limit_chars,
        truncated.serialized_size,
    )
    return truncated
