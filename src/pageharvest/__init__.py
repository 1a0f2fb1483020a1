# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Page Harvest: bounded-size JSON export of a page's public metadata.

Turns one loaded HTML document into a small portable record:
- source: which site extractor produced it (reddit, youtube, twitter, generic)
- site fields: title, author, description, OpenGraph + JSON-LD, text snippet
- provenance: capture timestamp and location
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

GENERIC_SOURCE = "generic"
DEFAULT_LIMIT_CHARS = 5000


def dumps_compact(data: Any) -> str:
    """Serialize the way size budgets are measured (no whitespace, raw unicode)."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


@dataclass(frozen=True)
class ExtractionResult:
    """Site-shaped record produced by one extractor.

    ``fields`` is stored as a read-only view of a private copy. Nested
    values (the generic ``og`` mapping, the ``ld`` list) are not copied.
    """

    source: str  # generic, reddit, youtube, twitter, ...
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, **self.fields}


@dataclass(frozen=True)
class Location:
    """Where the page was when it was captured."""

    href: str
    host: str  # hostname plus port, if any
    pathname: str

    def to_dict(self) -> dict[str, str]:
        return {"href": self.href, "host": self.host, "pathname": self.pathname}


@dataclass(frozen=True)
class HarvestRecord:
    """ExtractionResult plus provenance; the exported artifact."""

    result: ExtractionResult
    harvested_at: str  # ISO-8601 UTC, millisecond precision
    location: Location
    note: str | None = None  # set only when normalization truncated

    @property
    def source(self) -> str:
        return self.result.source

    def to_dict(self) -> dict[str, Any]:
        data = self.result.to_dict()
        data["harvested_at"] = self.harvested_at
        data["location"] = self.location.to_dict()
        if self.note is not None:
            data["note"] = self.note
        return data

    def to_json(self, *, indent: int | None = None) -> str:
        """Compact JSON by default; ``indent`` for display/export text."""
        if indent is None:
            return dumps_compact(self.to_dict())
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @property
    def serialized_size(self) -> int:
        return len(self.to_json())
