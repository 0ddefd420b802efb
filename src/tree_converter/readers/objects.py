"""Object reader: object-notation input to a ``Node`` tree.

Accepted grammar (best effort, no arrays, booleans or string escapes)::

    object  := "{" (KEY ":" value ","?)* "}" ","?
    value   := object | QUOTED | NUMBER | "null"

Every member becomes a node named by its key. Nested objects are reconciled
(see ``reconcile``) before being attached; the members of the top-level
object become children of the unnamed root.
"""

from typing import Optional

from ..shared import (
    InvalidValueError,
    NestingTooDeepError,
    ObjectReaderConfig,
    UnterminatedObjectError,
    get_logger,
)
from ..tree import Node
from .base import SourceFormat, TreeReader
from .reconcile import Reconciler
from .scanner import Scanner

NULL_LITERAL = "null"


def looks_like_object(text: str, pos: int = 0) -> bool:
    """Check whether the content at ``pos`` starts an object (``{"`` or ``{}``)."""
    scanner = Scanner(text, pos)
    scanner.skip_whitespace()
    if not scanner.consume("{"):
        return False
    scanner.skip_whitespace()
    return scanner.peek() in ('"', "}")


class ObjectReader(TreeReader):
    """Recursive reader for object-notation input."""

    format = SourceFormat.OBJECT

    def __init__(
        self,
        config: Optional[ObjectReaderConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ObjectReaderConfig()
        self.reconciler = Reconciler(self.config, correlation_id)
        self.logger = get_logger(__name__, correlation_id, "object_reader")

    def detect(self, text: str) -> bool:
        return looks_like_object(text)

    def read(self, text: str) -> Node:
        """Parse the top-level object of ``text`` under an unnamed root.

        A buffer that does not open with ``{`` yields an empty root.

        Raises:
            InvalidValueError: a member value is not an accepted value
            UnterminatedObjectError: an object's closing brace is missing
            NestingTooDeepError: nesting exceeds ``config.max_depth``
        """
        root = Node()
        scanner = Scanner(text)
        self._read_object(scanner, root, 0)
        self.logger.debug(
            "Object read completed",
            extra={"members": len(root.children), "consumed": scanner.pos}
        )
        return root

    def _read_object(self, scanner: Scanner, parent: Node, depth: int) -> None:
        scanner.skip_whitespace()
        if not scanner.consume("{"):
            return

        while True:
            key = self._scan_key(scanner)
            if key is None:
                break

            if looks_like_object(scanner.text, scanner.pos):
                if depth + 1 > self.config.max_depth:
                    raise NestingTooDeepError(self.config.max_depth, position=scanner.pos)
                node = Node(key)
                self._read_object(scanner, node, depth + 1)
                if self.config.reconcile:
                    node = self.reconciler.reconcile(node)
            else:
                node = Node(key, self._scan_scalar(scanner, key))

            parent.add_child(node)

        scanner.skip_whitespace()
        if not scanner.consume("}"):
            raise UnterminatedObjectError(position=scanner.pos)
        scanner.skip_whitespace()
        scanner.consume(",")

    @staticmethod
    def _scan_key(scanner: Scanner) -> Optional[str]:
        """Scan ``"key" :`` or restore the cursor and return None."""
        start = scanner.pos
        scanner.skip_whitespace()
        key = scanner.scan_quoted()
        if key is not None:
            scanner.skip_whitespace()
            if scanner.consume(":"):
                scanner.skip_whitespace()
                return key
        scanner.pos = start
        return None

    @staticmethod
    def _scan_scalar(scanner: Scanner, key: str) -> Optional[str]:
        """Scan a string, number or null, plus an optional trailing comma."""
        scanner.skip_whitespace()
        position = scanner.pos

        value = scanner.scan_quoted()
        if value is None:
            value = scanner.scan_number()
        if value is None:
            if not scanner.consume(NULL_LITERAL):
                raise InvalidValueError(key, position=position)

        scanner.skip_whitespace()
        scanner.consume(",")
        return value


def read_object(text: str, config: Optional[ObjectReaderConfig] = None) -> Node:
    """Parse object ``text`` with a one-off reader."""
    return ObjectReader(config).read(text)
