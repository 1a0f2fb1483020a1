# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Reddit post pages (old redesign markup and the shreddit-post element)."""

from __future__ import annotations

from typing import Any

from pageharvest.extractors.base import SiteExtractor, element_attr, element_text, first_of, page_title, page_url
from pageharvest.snapshot import PageSnapshot

_POST = "//shreddit-post"


class RedditExtractor(SiteExtractor):
    source = "reddit"
    domains = ("reddit.com",)

    def fields(self, snapshot: PageSnapshot) -> dict[str, Any]:
        return {
            "title": first_of(
                snapshot,
                element_text('//h1[@data-test-id="post-content-title"]'),
                element_attr(_POST, "post-title"),
                element_text("//h1"),
                page_title,
            ),
            "author": first_of(
                snapshot,
                element_text('//a[@data-testid="post_author_link"]'),
                element_attr(_POST, "author"),
            ),
            "votes": first_of(
                snapshot,
                element_attr('//*[starts-with(@id, "vote-arrows-")]', "aria-label"),
                element_attr(_POST, "score"),
            ),
            "content": first_of(snapshot, element_text('//*[@data-test-id="post-content"]')),
            "url": page_url(snapshot),
        }
