"""
Document Provider

Parses raw HTML with BeautifulSoup and freezes the result into an immutable
tree of nodes for the Markdown converter to read.

Main entry point: parse_html(html_content) -> Document

Node kinds:
- Document: root, ordered children
- Element: tag name, ordered (name, value) attribute pairs, ordered children
- Text: raw text content
- Comment, Doctype, ProcessingInstruction: carried but never rendered

The tree is built iteratively, so document depth is not limited by the
interpreter's recursion limit.
"""

from dataclasses import dataclass, field
from typing import Union

from bs4 import BeautifulSoup, Tag
from bs4.element import (
    Comment as SoupComment,
    Declaration as SoupDeclaration,
    Doctype as SoupDoctype,
    NavigableString,
    ProcessingInstruction as SoupProcessingInstruction,
)

from ..config import settings


@dataclass(frozen=True)
class Text:
    """Raw text content."""
    content: str


@dataclass(frozen=True)
class Comment:
    content: str


@dataclass(frozen=True)
class Doctype:
    content: str


@dataclass(frozen=True)
class ProcessingInstruction:
    content: str


@dataclass(frozen=True)
class Element:
    """Tagged node with attributes and ordered children."""
    name: str
    attrs: tuple[tuple[str, str], ...] = ()
    children: tuple["Node", ...] = ()

    @property
    def tag(self) -> str:
        """Tag name normalized for matching."""
        return self.name.lower()

    def get(self, name: str, default: str | None = None) -> str | None:
        """Look up an attribute by case-insensitive name; the last match wins."""
        value = default
        wanted = name.lower()
        for attr_name, attr_value in self.attrs:
            if attr_name.lower() == wanted:
                value = attr_value
        return value


@dataclass(frozen=True)
class Document:
    children: tuple["Node", ...] = field(default_factory=tuple)


Node = Union[Document, Element, Text, Comment, Doctype, ProcessingInstruction]


def _leaf_from_string(string: NavigableString) -> Node:
    """Map a BeautifulSoup string subclass onto a leaf node."""
    if isinstance(string, SoupComment):
        return Comment(str(string))
    if isinstance(string, (SoupDoctype, SoupDeclaration)):
        return Doctype(str(string))
    if isinstance(string, SoupProcessingInstruction):
        return ProcessingInstruction(str(string))
    # CData and script/style strings render as plain text
    return Text(str(string))


def _attribute_pairs(tag: Tag) -> tuple[tuple[str, str], ...]:
    pairs = []
    for name, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        pairs.append((str(name), "" if value is None else str(value)))
    return tuple(pairs)


def freeze(soup: Tag) -> Document:
    """Convert a parsed BeautifulSoup tree into an immutable Document.

    Children are converted after their parents are visited (post-order),
    using an explicit stack instead of recursion.

    Args:
        soup: BeautifulSoup object (or any Tag) to use as the document root

    Returns:
        Document whose children mirror the children of ``soup``
    """
    # Each frame: (source tag, converted children collected so far)
    stack: list[tuple[Tag, list[Node], int]] = [(soup, [], 0)]
    root_children: tuple[Node, ...] = ()

    while stack:
        tag, converted, index = stack.pop()
        contents = tag.contents

        if index < len(contents):
            child = contents[index]
            stack.append((tag, converted, index + 1))
            if isinstance(child, Tag):
                stack.append((child, [], 0))
            else:
                converted.append(_leaf_from_string(child))
            continue

        if tag is soup:
            root_children = tuple(converted)
            continue

        element = Element(
            name=tag.name,
            attrs=_attribute_pairs(tag),
            children=tuple(converted),
        )
        # Parent frame is now on top of the stack
        stack[-1][1].append(element)

    return Document(children=root_children)


def parse_html(html_content: str | bytes, parser: str | None = None) -> Document:
    """Parse HTML into an immutable node tree.

    Args:
        html_content: HTML markup as text or UTF-8 bytes
        parser: BeautifulSoup tree builder; defaults to ``settings.html_parser``

    Returns:
        Document root of the parsed tree
    """
    # Keep attribute values as plain strings (no class/rel splitting)
    soup = BeautifulSoup(
        html_content,
        parser or settings.html_parser,
        multi_valued_attributes=None,
    )
    return freeze(soup)
