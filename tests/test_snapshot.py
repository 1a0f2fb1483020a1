# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for PageSnapshot construction and visible-text extraction."""

from __future__ import annotations

import pytest
from lxml.html import fragment_fromstring

from pageharvest import Location
from pageharvest.errors import SnapshotError
from pageharvest.snapshot import PageSnapshot, inner_text


class TestLocation:
    def test_basic_parts(self, make_snapshot):
        snap = make_snapshot("https://www.Example.org/a/b?q=1#top", title="T")
        assert snap.hostname == "www.example.org"
        assert snap.host == "www.example.org"
        assert snap.path == "/a/b"
        assert snap.url == "https://www.Example.org/a/b?q=1#top"

    def test_port_kept_in_host_not_hostname(self, make_snapshot):
        snap = make_snapshot("http://localhost:8080/x")
        assert snap.hostname == "localhost"
        assert snap.host == "localhost:8080"

    def test_empty_path_is_root(self, make_snapshot):
        assert make_snapshot("https://example.org").path == "/"

    def test_location_descriptor(self, make_snapshot):
        snap = make_snapshot("https://example.org/p")
        assert snap.location == Location(href="https://example.org/p", host="example.org", pathname="/p")


class TestDocumentFields:
    def test_title_whitespace_collapsed(self, make_snapshot):
        snap = make_snapshot(title="  Hello \n  World  ")
        assert snap.title == "Hello World"

    def test_missing_title(self, make_snapshot):
        assert make_snapshot(body="<p>x</p>").title == ""

    def test_meta_first_occurrence_wins(self, make_snapshot):
        html = (
            "<html><head>"
            '<meta name="description" content="first">'
            '<meta name="description" content="second">'
            '<meta property="og:title" content="OG one">'
            '<meta property="og:title" content="OG two">'
            "</head><body></body></html>"
        )
        snap = make_snapshot(html=html)
        assert snap.meta_names["description"] == "first"
        assert snap.meta_properties["og:title"] == "OG one"

    def test_meta_without_content_is_empty(self, make_snapshot):
        snap = make_snapshot(html='<html><head><meta name="author"></head><body></body></html>')
        assert snap.meta_names["author"] == ""

    def test_ld_blocks_in_document_order(self, make_snapshot):
        snap = make_snapshot(ld=[{"a": 1}, "not json", {"b": 2}])
        assert len(snap.ld_blocks) == 3
        assert '"a"' in snap.ld_blocks[0]
        assert snap.ld_blocks[1] == "not json"

    def test_ld_type_match_is_case_insensitive(self, make_snapshot):
        html = '<html><head><script type=" Application/LD+JSON ">{"x": 1}</script></head><body></body></html>'
        assert make_snapshot(html=html).ld_blocks == ('{"x": 1}',)

    def test_plain_scripts_ignored(self, make_snapshot):
        html = "<html><head><script>var x = 1;</script></head><body></body></html>"
        assert make_snapshot(html=html).ld_blocks == ()

    def test_xml_declaration_accepted(self):
        html = '<?xml version="1.0" encoding="utf-8"?><html><head><title>X</title></head><body></body></html>'
        assert PageSnapshot.from_html(html, "https://example.org/").title == "X"

    def test_bytes_input(self):
        html = "<html><head><title>Café</title></head><body></body></html>".encode()
        assert PageSnapshot.from_html(html, "https://example.org/").title.startswith("Caf")

    @pytest.mark.parametrize("html", ["", "   ", b""])
    def test_empty_document_rejected(self, html):
        with pytest.raises(SnapshotError):
            PageSnapshot.from_html(html, "https://example.org/")

    def test_xpath_without_document(self):
        snap = PageSnapshot(url="", hostname="", host="", path="", title="", text="")
        assert snap.xpath("//h1") == []


class TestInnerText:
    def test_hidden_content_excluded(self):
        el = fragment_fromstring(
            "<div>Visible<script>var hidden = 1;</script> text"
            "<style>.x{}</style><noscript>nojs</noscript><!-- comment -->!</div>"
        )
        assert inner_text(el) == "Visible text!"

    def test_text_after_inline_comment_kept(self):
        el = fragment_fromstring("<p>Price: <!-- x -->$10</p>")
        assert inner_text(el) == "Price: $10"

    def test_comment_between_blocks(self):
        el = fragment_fromstring("<div><p>one</p><!-- c --><p>two</p>after</div>")
        assert inner_text(el) == "one\ntwo\nafter"

    def test_comment_inside_hidden_element(self):
        el = fragment_fromstring("<div>a<script><!-- x --></script>b</div>")
        assert inner_text(el) == "ab"

    def test_snapshot_text_across_comments(self, make_snapshot):
        snap = make_snapshot(body="<p>a<!-- c -->b</p><p>after</p>tail")
        assert snap.text == "ab\nafter\ntail"

    def test_blocks_on_separate_lines(self):
        el = fragment_fromstring("<div><p>Hello</p><p>World</p></div>")
        assert inner_text(el) == "Hello\nWorld"

    def test_inline_elements_join(self):
        el = fragment_fromstring("<p>foo<b>bar</b> baz</p>")
        assert inner_text(el) == "foobar baz"

    def test_br_breaks_line(self):
        el = fragment_fromstring("<p>one<br>two</p>")
        assert inner_text(el) == "one\ntwo"

    def test_whitespace_collapsed(self):
        el = fragment_fromstring("<div>\n   a \t  b\n\n  </div>")
        assert inner_text(el) == "a b"

    def test_root_tail_not_included(self):
        outer = fragment_fromstring("<div><span>in</span> tail</div>")
        span = outer[0]
        assert inner_text(span) == "in"

    def test_none(self):
        assert inner_text(None) == ""

    def test_body_text_on_snapshot(self, make_snapshot):
        snap = make_snapshot(body="<h1>Title</h1><p>Para <a href='#'>link</a></p><script>x()</script>")
        assert snap.text == "Title\nPara link"

