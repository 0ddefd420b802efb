"""Reader interface and registry.

Each reader recognizes one input format through a cheap prefix probe and
parses a whole buffer into a ``Node`` tree. The registry picks the first
registered reader whose probe accepts a buffer.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional

from ..tree import Node


class SourceFormat(Enum):
    """Input formats recognized by the readers."""

    MARKUP = "markup"
    OBJECT = "object"
    UNKNOWN = "unknown"


class TreeReader(ABC):
    """Base class for format readers."""

    format: SourceFormat = SourceFormat.UNKNOWN

    @property
    def name(self) -> str:
        return self.format.value

    @abstractmethod
    def detect(self, text: str) -> bool:
        """Return True if ``text`` looks like this reader's format."""
        ...

    @abstractmethod
    def read(self, text: str) -> Node:
        """Parse the whole of ``text`` and return the unnamed root node.

        Raises:
            ConversionError: if the buffer is malformed
        """
        ...


class ReaderRegistry:
    """Ordered registry of readers with format detection."""

    def __init__(self) -> None:
        self._readers: List[TreeReader] = []
        self._by_name: Dict[str, TreeReader] = {}

    def register(self, reader: TreeReader) -> None:
        """Register a reader; readers are probed in registration order."""
        self._readers.append(reader)
        self._by_name[reader.name] = reader

    def get_by_name(self, name: str) -> Optional[TreeReader]:
        return self._by_name.get(name)

    def detect(self, text: str) -> Optional[TreeReader]:
        """Return the first reader accepting ``text``, or None."""
        for reader in self._readers:
            if reader.detect(text):
                return reader
        return None

    @property
    def readers(self) -> List[TreeReader]:
        return list(self._readers)
