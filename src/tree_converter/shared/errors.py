"""Error types raised by the markup and object readers.

Every failure is fatal for the buffer being read: the readers never return a
partial tree. Each error carries a ``kind`` tag so callers converting batches
can decide per failure whether to stop or continue.
"""

from enum import Enum
from typing import Optional


class ConversionErrorKind(Enum):
    """Tag identifying why a conversion failed."""

    UNTERMINATED_ELEMENT = "unterminated_element"
    UNTERMINATED_OBJECT = "unterminated_object"
    INVALID_VALUE = "invalid_value"
    NESTING_TOO_DEEP = "nesting_too_deep"
    INPUT_TOO_LARGE = "input_too_large"


class ConversionError(Exception):
    """Base exception for all reader failures."""

    kind: ConversionErrorKind
    default_message = "Conversion failed."

    def __init__(self, message: Optional[str] = None, position: Optional[int] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at offset {self.position})"


class UnterminatedElementError(ConversionError):
    """An opened element has no matching closing tag."""

    kind = ConversionErrorKind.UNTERMINATED_ELEMENT
    default_message = "Enclosing tag expected."

    def __init__(self, tag: str, position: Optional[int] = None):
        super().__init__(position=position)
        self.tag = tag


class UnterminatedObjectError(ConversionError):
    """An object is missing its closing brace."""

    kind = ConversionErrorKind.UNTERMINATED_OBJECT
    default_message = "Object end expected."


class InvalidValueError(ConversionError):
    """A key is followed by something that is not an accepted value."""

    kind = ConversionErrorKind.INVALID_VALUE
    default_message = "Attribute value expected."

    def __init__(self, key: str, position: Optional[int] = None):
        super().__init__(position=position)
        self.key = key


class NestingTooDeepError(ConversionError):
    """Nesting exceeded the configured depth limit."""

    kind = ConversionErrorKind.NESTING_TOO_DEEP
    default_message = "Maximum nesting depth exceeded."

    def __init__(self, max_depth: int, position: Optional[int] = None):
        super().__init__(
            f"Maximum nesting depth of {max_depth} exceeded.", position=position
        )
        self.max_depth = max_depth


class InputTooLargeError(ConversionError):
    """The input buffer exceeds the configured size limit."""

    kind = ConversionErrorKind.INPUT_TOO_LARGE
    default_message = "Input exceeds the maximum allowed size."
