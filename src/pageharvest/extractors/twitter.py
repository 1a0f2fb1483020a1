# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Twitter / X public pages. Meta tags only; the timeline DOM is too volatile."""

from __future__ import annotations

from typing import Any

from pageharvest.extractors.base import SiteExtractor, first_of, meta, page_title, page_url
from pageharvest.snapshot import PageSnapshot


class TwitterExtractor(SiteExtractor):
    source = "twitter"
    domains = ("twitter.com", "x.com")

    def fields(self, snapshot: PageSnapshot) -> dict[str, Any]:
        return {
            "title": first_of(snapshot, meta("og:title"), page_title),
            "author": first_of(snapshot, meta("twitter:creator")),
            "description": first_of(snapshot, meta("og:description"), meta("description")),
            "url": page_url(snapshot),
        }
