"""Markup reader: element-based input to a ``Node`` tree.

Accepted grammar (best effort, no namespaces, comments, CDATA or entities)::

    opening   := "<" ws* NAME (ws* NAME ws* "=" ws* QUOTED)* ws* (">" | "/>")
    closing   := "<" ws* "/" NAME ws* ">"

Text between sibling tags is dropped. The content of an element that does
not start with another tag is kept verbatim as the element's value. Closing
tags are located by the first textual ``</name>`` after the cursor; there is
no tag stack.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..shared import (
    MarkupReaderConfig,
    NestingTooDeepError,
    UnterminatedElementError,
    get_logger,
)
from ..tree import Node
from .base import SourceFormat, TreeReader
from .scanner import Scanner


def looks_like_markup(text: str, pos: int = 0) -> bool:
    """Check whether the content at ``pos`` starts with ``<`` and a tag name."""
    scanner = Scanner(text, pos)
    scanner.skip_whitespace()
    if not scanner.consume("<"):
        return False
    scanner.skip_whitespace()
    return scanner.scan_identifier() is not None


@dataclass
class OpeningTag:
    """A scanned opening tag."""

    name: str
    start: int
    end: int
    self_closing: bool = False
    attributes: List[Tuple[str, str]] = field(default_factory=list)


def scan_opening_tag(text: str, pos: int) -> Optional[OpeningTag]:
    """Scan an opening tag starting exactly at ``pos``, or return None."""
    scanner = Scanner(text, pos)
    if not scanner.consume("<"):
        return None
    scanner.skip_whitespace()
    name = scanner.scan_identifier()
    if name is None:
        return None

    tag = OpeningTag(name=name, start=pos, end=pos)
    while True:
        scanner.skip_whitespace()
        if scanner.consume("/>"):
            tag.self_closing = True
            break
        if scanner.consume(">"):
            break

        attribute = scanner.scan_identifier()
        if attribute is None:
            return None
        scanner.skip_whitespace()
        if not scanner.consume("="):
            return None
        scanner.skip_whitespace()
        value = scanner.scan_quoted()
        if value is None:
            return None
        tag.attributes.append((attribute, value))

    tag.end = scanner.pos
    return tag


def find_opening_tag(text: str, pos: int) -> Optional[OpeningTag]:
    """Find the next well-formed opening tag at or after ``pos``."""
    while True:
        candidate = text.find("<", pos)
        if candidate < 0:
            return None
        tag = scan_opening_tag(text, candidate)
        if tag is not None:
            return tag
        pos = candidate + 1


def find_closing_tag(text: str, name: str, pos: int) -> Optional[Tuple[int, int]]:
    """Find the first ``</name>`` at or after ``pos``.

    Returns:
        ``(start, end)`` offsets of the closing tag, or None
    """
    while True:
        candidate = text.find("<", pos)
        if candidate < 0:
            return None
        scanner = Scanner(text, candidate + 1)
        scanner.skip_whitespace()
        if scanner.consume("/") and scanner.consume(name):
            scanner.skip_whitespace()
            if scanner.consume(">"):
                return candidate, scanner.pos
        pos = candidate + 1


class MarkupReader(TreeReader):
    """Recursive reader for element-based input."""

    format = SourceFormat.MARKUP

    def __init__(
        self,
        config: Optional[MarkupReaderConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or MarkupReaderConfig()
        self.logger = get_logger(__name__, correlation_id, "markup_reader")

    def detect(self, text: str) -> bool:
        return looks_like_markup(text)

    def read(self, text: str) -> Node:
        """Parse every top-level element of ``text`` under an unnamed root.

        Raises:
            UnterminatedElementError: an element's closing tag is missing
            NestingTooDeepError: nesting exceeds ``config.max_depth``
        """
        root = Node()
        end = self._read_elements(text, root, 0, 0, None)
        self.logger.debug(
            "Markup read completed",
            extra={"elements": len(root.children), "consumed": end}
        )
        return root

    def _read_elements(
        self,
        text: str,
        parent: Node,
        pos: int,
        depth: int,
        enclosing: Optional[str]
    ) -> int:
        """Read sibling elements under ``parent`` and return the new cursor.

        When ``enclosing`` is given, reading stops at the first tag that
        starts at or after the enclosing element's closing tag.
        """
        closing_start: Optional[int] = None
        while True:
            tag = find_opening_tag(text, pos)
            if tag is None:
                break

            if enclosing is not None:
                if closing_start is None or closing_start < pos:
                    closing = find_closing_tag(text, enclosing, pos)
                    closing_start = closing[0] if closing else len(text)
                if tag.start >= closing_start:
                    break

            element = parent.add_child(tag.name)
            for key, value in tag.attributes:
                element.set_attribute(key, value)
            pos = tag.end

            if tag.self_closing:
                continue

            if looks_like_markup(text, pos):
                if depth + 1 > self.config.max_depth:
                    raise NestingTooDeepError(self.config.max_depth, position=pos)
                pos = self._read_elements(text, element, pos, depth + 1, tag.name)

            closing = find_closing_tag(text, tag.name, pos)
            if closing is None:
                raise UnterminatedElementError(tag.name, position=tag.start)

            if not element.has_children:
                element.set_value(text[pos:closing[0]])
            pos = closing[1]

        return pos


def read_markup(text: str, config: Optional[MarkupReaderConfig] = None) -> Node:
    """Parse markup ``text`` with a one-off reader."""
    return MarkupReader(config).read(text)
