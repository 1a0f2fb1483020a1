# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Document-level metadata: meta tags and JSON-LD blocks.

Meta lookup order: name= tag > property= tag > "".
JSON-LD: every block parsed independently; one bad block never aborts the scan.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pageharvest.errors import ParseError
from pageharvest.snapshot import PageSnapshot

logger = logging.getLogger(__name__)


def read_meta(snapshot: PageSnapshot, key: str) -> str:
    """Return the content of the first ``name=key`` tag, else ``property=key``, else ""."""
    return snapshot.meta_names.get(key) or snapshot.meta_properties.get(key) or ""


def _parse_block(text: str, index: int) -> Any:
    try:
        return json.loads(text or "{}")
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Invalid JSON-LD block #{index}: {e}", index=index) from e


def parse_structured_data(snapshot: PageSnapshot) -> list[Any]:
    """Collect all JSON-LD items in document order.

    A block holding an array contributes each element; any other value is
    appended as a single item. Malformed blocks are skipped and logged.
    """
    items: list[Any] = []
    for index, text in enumerate(snapshot.ld_blocks):
        try:
            data = _parse_block(text, index)
        except ParseError as e:
            logger.warning("Invalid JSON-LD skipped: %s", e)
            continue
        if isinstance(data, list):
            items.extend(data)
        else:
            items.append(data)
    return items
