# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Read-only page snapshot built from HTML with lxml.

A snapshot is taken once per capture and never mutated. It keeps the parsed
tree for element lookups (XPath) plus the document-level pieces every
extractor needs: title, location parts, meta tags, JSON-LD blocks and the
visible text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlsplit

from lxml import etree
from lxml.html import HtmlElement, document_fromstring

from pageharvest import Location
from pageharvest.errors import SnapshotError

logger = logging.getLogger(__name__)

# Elements whose content is never rendered as text
_HIDDEN_TAGS = frozenset({"script", "style", "noscript", "template", "head", "title", "meta", "link"})

# Elements that start a new line in rendered text
_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "br", "dd", "details", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4", "h5", "h6",
        "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section", "summary", "table",
        "td", "th", "tr", "ul",
    }
)  # fmt: skip

_WS_RE = re.compile(r"\s+")

_LD_JSON_TYPE = "application/ld+json"


def inner_text(element: Any) -> str:
    """Approximate ``innerText``: visible text, block elements on their own lines.

    Hidden elements (script, style, ...), comments and processing
    instructions contribute nothing except their tail text. Whitespace
    inside a line is collapsed.
    """
    if element is None:
        return ""
    segments: list[str] = []
    current: list[str] = []

    def _break() -> None:
        line = _WS_RE.sub(" ", "".join(current)).strip()
        if line:
            segments.append(line)
        current.clear()

    # (node, closing) pairs; iterating a node yields comments too, unlike iterwalk
    stack: list[tuple[Any, bool]] = [(element, False)]
    while stack:
        node, closing = stack.pop()
        tag = node.tag if isinstance(node.tag, str) else None
        if not closing and tag is not None and tag not in _HIDDEN_TAGS:
            if tag in _BLOCK_TAGS:
                _break()
            if node.text:
                current.append(node.text)
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node))
            continue
        if closing and tag in _BLOCK_TAGS:
            _break()
        if node is not element and node.tail:
            current.append(node.tail)

    _break()
    return "\n".join(segments)


def _split_location(url: str) -> tuple[str, str, str]:
    """Return (hostname, host, pathname) the way a browser location reports them."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "", "", ""
    hostname = (parts.hostname or "").lower()
    try:
        port = parts.port
    except ValueError:
        port = None
    host = f"{hostname}:{port}" if port else hostname
    pathname = parts.path or ("/" if hostname else "")
    return hostname, host, pathname


@dataclass(frozen=True, slots=True)
class PageSnapshot:
    """A read-only view of one loaded document."""

    url: str
    hostname: str
    host: str
    path: str
    title: str
    text: str
    meta_names: dict[str, str] = field(default_factory=dict)
    meta_properties: dict[str, str] = field(default_factory=dict)
    ld_blocks: tuple[str, ...] = ()
    document: HtmlElement | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_html(cls, html: str | bytes, url: str) -> PageSnapshot:
        """Parse *html* loaded from *url* into a snapshot.

        Raises:
            SnapshotError: when lxml cannot build a document (e.g. empty input).
        """
        if not html or not html.strip():
            raise SnapshotError("Document is empty")
        if isinstance(html, str) and html.lstrip().startswith("<?xml"):
            # lxml rejects str input carrying an encoding declaration
            html = html.encode("utf-8")
        try:
            doc = document_fromstring(html)
        except (etree.ParserError, ValueError) as e:
            raise SnapshotError(f"Could not parse HTML: {e}") from e

        hostname, host, pathname = _split_location(url)

        title_el = doc.find(".//title")
        title = _WS_RE.sub(" ", title_el.text_content()).strip() if title_el is not None else ""

        meta_names: dict[str, str] = {}
        meta_properties: dict[str, str] = {}
        for el in doc.iter("meta"):
            content = el.get("content") or ""
            name = el.get("name")
            if name:
                meta_names.setdefault(name, content)
            prop = el.get("property")
            if prop:
                meta_properties.setdefault(prop, content)

        ld_blocks = tuple(
            el.text or ""
            for el in doc.iter("script")
            if (el.get("type") or "").strip().lower() == _LD_JSON_TYPE
        )

        body = doc.find("body")
        text = inner_text(body) if body is not None else ""

        logger.debug(
            "Snapshot taken: host=%s meta=%d ld_blocks=%d text_chars=%d",
            hostname,
            len(meta_names) + len(meta_properties),
            len(ld_blocks),
            len(text),
        )
        return cls(
            url=url,
            hostname=hostname,
            host=host,
            path=pathname,
            title=title,
            text=text,
            meta_names=meta_names,
            meta_properties=meta_properties,
            ld_blocks=ld_blocks,
            document=doc,
        )

    @property
    def location(self) -> Location:
        return Location(href=self.url, host=self.host, pathname=self.path)

    def xpath(self, expr: str) -> list[Any]:
        """Evaluate *expr* against the document; empty list without a document."""
        if self.document is None:
            return []
        return self.document.xpath(expr)
