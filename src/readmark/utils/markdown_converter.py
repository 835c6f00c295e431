"""
Markdown Converter Module

Serializes a Document tree (see ``document.py``) into Markdown text.

Main entry point: convert_html(root) -> str

Conversion Rules:
- Bold (b, strong) and emphasis (i, em) become ** and * delimiters
- Paragraphs (p, div) are separated by one blank line, line breaks (br) by a newline
- Links become [text](href), images become ![alt](src)
- Unordered lists use "* " markers, ordered lists "1. ", "2. ", ...
- Nested lists and paragraphs inside list items are indented under their marker
- Blockquote lines are prefixed with "> " per nesting level
- head, style and script subtrees are dropped
- Whitespace runs inside text collapse to a single space
- Unknown tags pass their children through without adding markup

The walk is iterative, so arbitrarily deep documents cannot exhaust the
interpreter stack. Each call owns its ConversionState; nothing is shared
between calls.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from .document import Document, Element, Node, Text, parse_html

logger = logging.getLogger(__name__)

SUPPRESSED_TAGS = frozenset({"head", "style", "script"})

QUOTE_PREFIX = "> "
DEFAULT_ALT_TEXT = "no alt text"

# Whitespace characters collapsed to a single space inside text runs
COLLAPSIBLE_WHITESPACE = frozenset(" \n\t\r\f")


class MarkerKind(str, Enum):
    """Kind of list a marker belongs to."""

    BULLET = "bullet"
    ORDERED = "ordered"


@dataclass(frozen=True)
class ListMarker:
    """One level of list context: a bullet or an ordered counter."""

    kind: MarkerKind
    counter: int = 1

    @classmethod
    def bullet(cls) -> "ListMarker":
        return cls(MarkerKind.BULLET)

    @classmethod
    def ordered(cls, counter: int = 1) -> "ListMarker":
        return cls(MarkerKind.ORDERED, counter)

    @property
    def literal(self) -> str:
        """Marker text written at the start of a list item."""
        if self.kind is MarkerKind.ORDERED:
            return f"{self.counter}. "
        return "* "

    @property
    def indent_width(self) -> int:
        # Fixed per kind: "1. " is three characters, "* " is two
        return 3 if self.kind is MarkerKind.ORDERED else 2

    def advanced(self) -> "ListMarker":
        """Marker for the next sibling item."""
        if self.kind is MarkerKind.ORDERED:
            return ListMarker.ordered(self.counter + 1)
        return self


def indentation(markers: list[ListMarker] | tuple[ListMarker, ...]) -> str:
    """Continuation indent for content nested under the given list levels."""
    return " " * sum(marker.indent_width for marker in markers)


class OutputBuffer:
    """Append-only text buffer with trailing-whitespace trimming.

    Text is kept as a list of chunks; suffix checks only join as many
    trailing chunks as needed.
    """

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self.line_quoted = False

    def append(self, text: str) -> None:
        if not text:
            return
        self._chunks.append(text)
        if "\n" in text:
            self.line_quoted = False

    def is_empty(self) -> bool:
        return not self._chunks

    def endswith(self, suffix: str) -> bool:
        tail = ""
        for chunk in reversed(self._chunks):
            tail = chunk + tail
            if len(tail) >= len(suffix):
                break
        return tail.endswith(suffix)

    def trim_trailing_whitespace(self) -> None:
        """Drop trailing spaces and tabs (never newlines)."""
        while self._chunks:
            stripped = self._chunks[-1].rstrip(" \t")
            if stripped:
                self._chunks[-1] = stripped
                return
            self._chunks.pop()

    def ensure_newline(self) -> None:
        """End the current line, unless the buffer is empty or already does."""
        self.trim_trailing_whitespace()
        if self.endswith("\n") or self.is_empty():
            return
        self.append("\n")

    def ensure_blank_line(self) -> None:
        """End the current paragraph with exactly two newlines."""
        self.trim_trailing_whitespace()
        if self.endswith("\n\n") or self.is_empty():
            return
        if self.endswith("\n"):
            self.append("\n")
        else:
            self.append("\n\n")

    def getvalue(self) -> str:
        return "".join(self._chunks)


@dataclass
class ConversionState:
    """Mutable state of a single conversion call."""

    buffer: OutputBuffer = field(default_factory=OutputBuffer)
    quotes: list[str] = field(default_factory=list)
    markers: list[ListMarker] = field(default_factory=list)

    @property
    def innermost_marker(self) -> ListMarker | None:
        return self.markers[-1] if self.markers else None

    def just_opened_item(self) -> bool:
        """True when the buffer ends with the innermost list marker."""
        marker = self.innermost_marker
        return marker is not None and self.buffer.endswith(marker.literal)


def write_text(text: str, state: ConversionState) -> None:
    """Append a text node, collapsing whitespace and adding quote prefixes.

    Args:
        text: Raw text node content
        state: Conversion state to append to
    """
    buffer = state.buffer
    visible = any(char not in COLLAPSIBLE_WHITESPACE for char in text)

    if state.quotes and visible and not buffer.line_quoted:
        buffer.append("".join(state.quotes))
        buffer.line_quoted = True

    previous_blank = buffer.is_empty() or buffer.endswith(" ") or buffer.endswith("\n")
    out = []
    for char in text:
        if char in COLLAPSIBLE_WHITESPACE:
            if not previous_blank:
                previous_blank = True
                out.append(" ")
        else:
            previous_blank = False
            out.append(char)
    buffer.append("".join(out))


# ---------------------------------------------------------------------------
# Tag handlers
# ---------------------------------------------------------------------------

def _bold(state: ConversionState, element: Element) -> None:
    state.buffer.append("**")


def _emphasis(state: ConversionState, element: Element) -> None:
    state.buffer.append("*")


def _paragraph_start(state: ConversionState, element: Element) -> None:
    if state.just_opened_item():
        return
    state.buffer.ensure_blank_line()
    state.buffer.append(indentation(state.markers))


def _line_break(state: ConversionState, element: Element) -> None:
    if state.just_opened_item():
        return
    state.buffer.ensure_newline()
    state.buffer.append(indentation(state.markers))


def _blockquote_start(state: ConversionState, element: Element) -> None:
    state.buffer.ensure_newline()
    state.quotes.append(QUOTE_PREFIX)


def _blockquote_end(state: ConversionState, element: Element) -> None:
    if state.quotes:
        state.quotes.pop()
    state.buffer.ensure_newline()


def _link_start(state: ConversionState, element: Element) -> None:
    state.buffer.append("[")


def _link_end(state: ConversionState, element: Element) -> None:
    href = element.get("href", "")
    state.buffer.append(f"]({href})")


def _image(state: ConversionState, element: Element) -> None:
    src = element.get("src", "")
    alt = element.get("alt", DEFAULT_ALT_TEXT)
    state.buffer.append(f"![{alt}]({src})")


def _unordered_list_start(state: ConversionState, element: Element) -> None:
    state.buffer.ensure_blank_line()
    state.markers.append(ListMarker.bullet())


def _ordered_list_start(state: ConversionState, element: Element) -> None:
    state.buffer.ensure_blank_line()
    state.markers.append(ListMarker.ordered())


def _list_end(state: ConversionState, element: Element) -> None:
    state.buffer.ensure_blank_line()
    if state.markers:
        state.markers.pop()
    state.buffer.append(indentation(state.markers))


def _list_item_start(state: ConversionState, element: Element) -> None:
    marker = state.innermost_marker
    if marker is None:
        return
    state.buffer.append(indentation(state.markers[:-1]))
    state.buffer.append(marker.literal)


def _list_item_end(state: ConversionState, element: Element) -> None:
    if not state.markers:
        return
    marker = state.markers.pop()
    state.buffer.ensure_newline()
    state.markers.append(marker.advanced())


Handler = Callable[[ConversionState, Element], None]


class HtmlTag(str, Enum):
    """Tags with formatting rules; anything else passes through."""

    B = "b"
    STRONG = "strong"
    I = "i"  # noqa: E741
    EM = "em"
    P = "p"
    DIV = "div"
    BR = "br"
    BLOCKQUOTE = "blockquote"
    A = "a"
    IMG = "img"
    UL = "ul"
    OL = "ol"
    LI = "li"


START_HANDLERS: dict[HtmlTag, Handler] = {
    HtmlTag.B: _bold,
    HtmlTag.STRONG: _bold,
    HtmlTag.I: _emphasis,
    HtmlTag.EM: _emphasis,
    HtmlTag.P: _paragraph_start,
    HtmlTag.DIV: _paragraph_start,
    HtmlTag.BR: _line_break,
    HtmlTag.BLOCKQUOTE: _blockquote_start,
    HtmlTag.A: _link_start,
    HtmlTag.IMG: _image,
    HtmlTag.UL: _unordered_list_start,
    HtmlTag.OL: _ordered_list_start,
    HtmlTag.LI: _list_item_start,
}

END_HANDLERS: dict[HtmlTag, Handler] = {
    HtmlTag.B: _bold,
    HtmlTag.STRONG: _bold,
    HtmlTag.I: _emphasis,
    HtmlTag.EM: _emphasis,
    HtmlTag.BLOCKQUOTE: _blockquote_end,
    HtmlTag.A: _link_end,
    HtmlTag.UL: _list_end,
    HtmlTag.OL: _list_end,
    HtmlTag.LI: _list_item_end,
}

_KNOWN_TAGS = {tag.value: tag for tag in HtmlTag}


def _dispatch(table: dict[HtmlTag, Handler], state: ConversionState, element: Element) -> None:
    tag = _KNOWN_TAGS.get(element.tag)
    if tag is None:
        return
    handler = table.get(tag)
    if handler is not None:
        handler(state, element)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

class MarkdownConverter:
    """Depth-first Markdown serializer for Document trees.

    ``state`` holds the state of the most recent ``convert`` call; every
    call starts from an empty one.
    """

    def __init__(self) -> None:
        self.state = ConversionState()

    def convert(self, root: Node) -> str:
        """Walk ``root`` and return its Markdown.

        Args:
            root: Document (or any node) to convert

        Returns:
            Markdown text
        """
        state = self.state = ConversionState()
        # Work items: ("visit", node) or ("end", element)
        work: list[tuple[str, Node]] = [("visit", root)]

        while work:
            action, node = work.pop()

            if action == "end":
                _dispatch(END_HANDLERS, state, node)
                continue

            if isinstance(node, Document):
                work.extend(("visit", child) for child in reversed(node.children))
            elif isinstance(node, Text):
                write_text(node.content, state)
            elif isinstance(node, Element):
                if node.tag in SUPPRESSED_TAGS:
                    logger.debug("Skipping <%s> subtree", node.tag)
                    continue
                _dispatch(START_HANDLERS, state, node)
                work.append(("end", node))
                work.extend(("visit", child) for child in reversed(node.children))
            # Comment, Doctype and ProcessingInstruction render nothing

        return state.buffer.getvalue()


def convert_html(root: Node) -> str:
    """Convert a parsed node tree to Markdown with a fresh converter."""
    markdown = MarkdownConverter().convert(root)
    logger.debug("Converted document to %d characters of markdown", len(markdown))
    return markdown


def convert_string(html_content: str | bytes, parser: str | None = None) -> str:
    """Parse an HTML string and convert it to Markdown.

    Args:
        html_content: HTML markup
        parser: Optional BeautifulSoup tree builder override

    Returns:
        Markdown text
    """
    return convert_html(parse_html(html_content, parser=parser))
