# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""YouTube watch pages."""

from __future__ import annotations

from typing import Any

from pageharvest.extractors.base import (
    SiteExtractor,
    element_attr,
    element_text,
    first_of,
    has_class,
    page_title,
    page_url,
)
from pageharvest.snapshot import PageSnapshot

_TITLE_H1 = f"//h1[{has_class('ytd-video-primary-info-renderer')}]"
_CHANNEL_TEXT = f'//*[@id="text-container" and {has_class("ytd-channel-name")}]//*[@id="text"]'


class YouTubeExtractor(SiteExtractor):
    source = "youtube"
    domains = ("youtube.com", "youtu.be")

    def fields(self, snapshot: PageSnapshot) -> dict[str, Any]:
        return {
            "title": first_of(
                snapshot,
                element_text(_TITLE_H1),
                element_attr('//meta[@itemprop="name"]', "content"),
                page_title,
            ),
            "channel": first_of(
                snapshot,
                element_text(_CHANNEL_TEXT),
                element_attr('//meta[@itemprop="channelId"]', "content"),
            ),
            "description": first_of(
                snapshot,
                element_text('//*[@id="description-inline-expander"]'),
                element_attr('//meta[@name="description"]', "content"),
            ),
            "url": page_url(snapshot),
        }
