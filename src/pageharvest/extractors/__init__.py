# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Site extractors.

DEFAULT_EXTRACTORS is the priority order the selector walks; the generic
extractor is not in it and only runs when every entry declines.
To support a new site, add a SiteExtractor subclass and append it here.
"""

from __future__ import annotations

from pageharvest.extractors.base import SiteExtractor
from pageharvest.extractors.generic import GenericExtractor
from pageharvest.extractors.reddit import RedditExtractor
from pageharvest.extractors.twitter import TwitterExtractor
from pageharvest.extractors.youtube import YouTubeExtractor

DEFAULT_EXTRACTORS: tuple[SiteExtractor, ...] = (
    RedditExtractor(),
    YouTubeExtractor(),
    TwitterExtractor(),
)

GENERIC_EXTRACTOR = GenericExtractor()

__all__ = [
    "DEFAULT_EXTRACTORS",
    "GENERIC_EXTRACTOR",
    "GenericExtractor",
    "RedditExtractor",
    "SiteExtractor",
    "TwitterExtractor",
    "YouTubeExtractor",
]
