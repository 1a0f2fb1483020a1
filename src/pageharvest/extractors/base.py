# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Extractor base class and field lookup chains.

Every field is resolved by trying candidate lookups in order until one
yields non-empty text. A candidate that raises is treated as empty, so a
broken selector degrades one field instead of the whole extractor.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

from pageharvest import ExtractionResult
from pageharvest.errors import ExtractorFault
from pageharvest.meta import read_meta
from pageharvest.snapshot import PageSnapshot, inner_text

logger = logging.getLogger(__name__)

Lookup = Callable[[PageSnapshot], str]


# --- Candidate lookups ---


def element_text(xpath: str) -> Lookup:
    """Visible text of the first element matching *xpath*."""

    def _lookup(snapshot: PageSnapshot) -> str:
        found = snapshot.xpath(xpath)
        return inner_text(found[0]) if found else ""

    _lookup.__name__ = f"text({xpath})"
    return _lookup


def element_attr(xpath: str, attr: str) -> Lookup:
    """Attribute *attr* of the first element matching *xpath*."""

    def _lookup(snapshot: PageSnapshot) -> str:
        found = snapshot.xpath(xpath)
        return (found[0].get(attr) or "").strip() if found else ""

    _lookup.__name__ = f"attr({xpath}@{attr})"
    return _lookup


def meta(key: str) -> Lookup:
    """``<meta name|property=key>`` content."""

    def _lookup(snapshot: PageSnapshot) -> str:
        return read_meta(snapshot, key)

    _lookup.__name__ = f"meta({key})"
    return _lookup


def page_title(snapshot: PageSnapshot) -> str:
    return snapshot.title


def page_url(snapshot: PageSnapshot) -> str:
    return snapshot.url


def has_class(name: str) -> str:
    """XPath predicate body matching a whole class token."""
    return f'contains(concat(" ", normalize-space(@class), " "), " {name} ")'


def first_of(snapshot: PageSnapshot, *candidates: Lookup) -> str:
    """First non-empty candidate value, else ""."""
    for candidate in candidates:
        try:
            value = candidate(snapshot)
        except Exception as e:
            logger.debug("Lookup %s failed: %s", getattr(candidate, "__name__", candidate), e)
            continue
        if value:
            return value
    return ""


# --- Extractor contract ---


class SiteExtractor(ABC):
    """One site-specific strategy for turning a snapshot into a record.

    Subclasses set ``source`` and ``domains`` and implement ``fields()``.
    ``extract()`` returns None when the snapshot's host is not one of
    ``domains`` (or a subdomain of one).
    """

    source: ClassVar[str]
    domains: ClassVar[tuple[str, ...]] = ()

    def matches(self, snapshot: PageSnapshot) -> bool:
        host = snapshot.hostname
        return any(host == d or host.endswith("." + d) for d in self.domains)

    def extract(self, snapshot: PageSnapshot) -> ExtractionResult | None:
        if not self.matches(snapshot):
            return None
        try:
            fields = self.fields(snapshot)
        except Exception as e:
            raise ExtractorFault(f"{self.source} extractor failed: {e}", source=self.source) from e
        return ExtractionResult(source=self.source, fields=fields)

    @abstractmethod
    def fields(self, snapshot: PageSnapshot) -> dict[str, Any]:
        """Site-shaped field mapping, in output order."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source!r})"
