"""Tests for parsing HTML into the immutable node tree."""

import dataclasses

import pytest

from readmark.utils.document import (
    Comment,
    Doctype,
    Document,
    Element,
    ProcessingInstruction,
    Text,
    parse_html,
)


class TestParseHtml:
    """Test mapping of parsed HTML onto nodes."""

    def test_element_with_text(self):
        document = parse_html("<p>hello</p>")

        assert isinstance(document, Document)
        assert len(document.children) == 1
        paragraph = document.children[0]
        assert isinstance(paragraph, Element)
        assert paragraph.tag == "p"
        assert paragraph.children == (Text("hello"),)

    def test_children_keep_document_order(self):
        document = parse_html("<div><p>a</p><p>b</p></div>")
        div = document.children[0]

        assert [child.tag for child in div.children] == ["p", "p"]
        assert [child.children[0].content for child in div.children] == ["a", "b"]

    def test_attributes_are_plain_string_pairs(self):
        document = parse_html('<a class="x y" href="/path">link</a>')
        link = document.children[0]

        assert ("class", "x y") in link.attrs
        assert link.get("href") == "/path"
        assert link.get("HREF") == "/path"
        assert link.get("title") is None
        assert link.get("title", "") == ""

    def test_comment(self):
        document = parse_html("<!-- note --><p>x</p>")
        assert isinstance(document.children[0], Comment)
        assert document.children[0].content == " note "

    def test_doctype(self):
        document = parse_html("<!DOCTYPE html><p>x</p>")
        assert isinstance(document.children[0], Doctype)

    def test_processing_instruction(self):
        document = parse_html('<?xml version="1.0"?><p>x</p>')
        assert isinstance(document.children[0], ProcessingInstruction)

    def test_accepts_bytes(self):
        document = parse_html('<meta charset="utf-8"><p>café</p>'.encode("utf-8"))
        paragraph = document.children[-1]
        assert paragraph.tag == "p"
        assert paragraph.children[0].content == "café"


class TestNodes:
    """Test node value semantics."""

    def test_nodes_are_immutable(self):
        element = Element("p")
        with pytest.raises(dataclasses.FrozenInstanceError):
            element.name = "div"

    def test_tag_is_lowercased(self):
        assert Element("DIV").tag == "div"

    def test_attribute_lookup_last_wins(self):
        element = Element("img", attrs=(("alt", "first"), ("ALT", "second")))
        assert element.get("alt") == "second"
