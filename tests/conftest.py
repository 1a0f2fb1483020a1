# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import pageharvest  # noqa: F401
except ImportError:
    raise ImportError("pageharvest is not installed. Run: pip install -e '.[dev]'") from None

import json
import logging

import pytest
import structlog

from pageharvest.snapshot import PageSnapshot


def build_html(
    *,
    title: str = "",
    head: str = "",
    body: str = "",
    meta: dict[str, str] | None = None,
    properties: dict[str, str] | None = None,
    ld: list | None = None,
) -> str:
    """Assemble a small HTML document.

    ``ld`` entries that are strings are embedded verbatim (for malformed
    blocks); anything else is JSON-encoded.
    """
    parts = [f"<title>{title}</title>"] if title else []
    for name, content in (meta or {}).items():
        parts.append(f'<meta name="{name}" content="{content}">')
    for prop, content in (properties or {}).items():
        parts.append(f'<meta property="{prop}" content="{content}">')
    for block in ld or []:
        text = block if isinstance(block, str) else json.dumps(block)
        parts.append(f'<script type="application/ld+json">{text}</script>')
    parts.append(head)
    return f"<!DOCTYPE html><html><head>{''.join(parts)}</head><body>{body}</body></html>"


@pytest.fixture
def make_snapshot():
    """Factory: make_snapshot(url, **build_html kwargs) -> PageSnapshot."""

    def _make(url: str = "https://example.org/page", html: str | None = None, **kwargs) -> PageSnapshot:
        return PageSnapshot.from_html(html if html is not None else build_html(**kwargs), url)

    return _make


@pytest.fixture
def profile_dir(tmp_path):
    """Isolated settings directory (never touches ~/.pageharvest)."""
    return tmp_path / "profile"


@pytest.fixture(autouse=True)
def _reset_logging():
    """Keep root handlers/level and structlog state from leaking between tests."""
    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
