# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Generic OpenGraph + JSON-LD extractor. Never declines."""

from __future__ import annotations

from typing import Any

from pageharvest import GENERIC_SOURCE, ExtractionResult
from pageharvest.extractors.base import SiteExtractor, first_of, meta, page_title, page_url
from pageharvest.meta import parse_structured_data
from pageharvest.snapshot import PageSnapshot

TEXT_SNIPPET_CHARS = 1000


def _hostname(snapshot: PageSnapshot) -> str:
    return snapshot.hostname


class GenericExtractor(SiteExtractor):
    """Universal fallback: OG meta, JSON-LD items and a visible-text snippet."""

    source = GENERIC_SOURCE

    def matches(self, snapshot: PageSnapshot) -> bool:
        return True

    def extract(self, snapshot: PageSnapshot) -> ExtractionResult:
        return ExtractionResult(source=self.source, fields=self.fields(snapshot))

    def fields(self, snapshot: PageSnapshot) -> dict[str, Any]:
        og = {
            "title": first_of(snapshot, meta("og:title"), page_title),
            "description": first_of(snapshot, meta("og:description"), meta("description")),
            "url": first_of(snapshot, meta("og:url"), page_url),
            "site_name": first_of(snapshot, meta("og:site_name"), _hostname),
            "image": first_of(snapshot, meta("og:image")),
            "type": first_of(snapshot, meta("og:type")),
        }
        return {
            "og": og,
            "ld": parse_structured_data(snapshot),
            "text_snippet": snapshot.text.strip()[:TEXT_SNIPPET_CHARS],
        }
