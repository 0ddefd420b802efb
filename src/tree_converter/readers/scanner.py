"""Cursor-based scanning primitives used by both readers.

The readers are recursive-descent parsers driven by a ``Scanner`` positioned
in the input buffer. Each ``scan_*`` method either consumes a complete token
and returns it, or leaves the cursor untouched and returns None.
"""

import string
from typing import Optional

WHITESPACE = frozenset(" \t\n\r\f\v")
IDENTIFIER_START = frozenset(string.ascii_letters + "_")
WORD_CHARACTERS = frozenset(string.ascii_letters + string.digits + "_")
DIGITS = frozenset(string.digits)


def is_identifier(text: Optional[str], extra: str = "") -> bool:
    """Check that ``text`` is a letter or underscore followed by word characters.

    Args:
        text: Candidate identifier
        extra: Additional characters allowed after the first one
    """
    if not text or text[0] not in IDENTIFIER_START:
        return False
    allowed = WORD_CHARACTERS.union(extra)
    return all(char in allowed for char in text[1:])


class Scanner:
    """A read cursor over a text buffer."""

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    def __repr__(self) -> str:
        return f"Scanner(pos={self.pos}, ahead={self.text[self.pos:self.pos + 20]!r})"

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        """Return the character at the cursor (plus offset), or '' past the end."""
        index = self.pos + offset
        if index >= len(self.text):
            return ""
        return self.text[index]

    def skip_whitespace(self) -> int:
        """Advance past whitespace and return how many characters were skipped."""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1
        return self.pos - start

    def consume(self, literal: str) -> bool:
        """Consume ``literal`` if it is next in the buffer."""
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def scan_identifier(self, extra: str = "") -> Optional[str]:
        """Scan a letter or underscore followed by word characters."""
        text = self.text
        start = self.pos
        if start >= len(text) or text[start] not in IDENTIFIER_START:
            return None
        allowed = WORD_CHARACTERS.union(extra)
        end = start + 1
        while end < len(text) and text[end] in allowed:
            end += 1
        self.pos = end
        return text[start:end]

    def scan_quoted(self) -> Optional[str]:
        """Scan a double-quoted run ending at the next quote; no escapes."""
        if self.peek() != '"':
            return None
        closing = self.text.find('"', self.pos + 1)
        if closing < 0:
            return None
        content = self.text[self.pos + 1:closing]
        self.pos = closing + 1
        return content

    def scan_number(self) -> Optional[str]:
        """Scan ``digits`` optionally followed by ``.`` and more digits."""
        text = self.text
        end = self.pos
        while end < len(text) and text[end] in DIGITS:
            end += 1
        if end == self.pos:
            return None
        if end < len(text) and text[end] == ".":
            end += 1
            while end < len(text) and text[end] in DIGITS:
                end += 1
        numeral = text[self.pos:end]
        self.pos = end
        return numeral

    def find(self, literal: str, start: Optional[int] = None) -> int:
        """Position of the next ``literal`` at or after ``start`` (default: cursor)."""
        return self.text.find(literal, self.pos if start is None else start)
