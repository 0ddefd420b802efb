"""Attribute reconciliation for object input.

Object notation has no attributes and no mixed text content. By convention a
key prefixed with ``#`` carries an element's own text (``"#name"``) or nested
content, and a key prefixed with ``@`` carries an attribute. Reconciliation
turns a freshly parsed object into the node the markup reader would have
produced for the equivalent element:

    {"x": {"@a": "1", "#x": "hello"}}   ->   <x a="1">hello</x>

Objects that do not follow the convention are pruned instead: prefixed keys
lose their prefix unless that collides with a plain sibling, and keys that
cannot be element names are dropped.
"""

from typing import Optional, Set

from ..shared import ObjectReaderConfig, get_logger
from ..tree import Node
from .scanner import is_identifier

# Object keys may contain dots, element names from markup may not.
KEY_EXTRA_CHARACTERS = "."


class Reconciler:
    """Bottom-up transform from a parsed object node to its markup shape."""

    def __init__(
        self,
        config: Optional[ObjectReaderConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ObjectReaderConfig()
        self.prefixes = self.config.text_prefix + self.config.attribute_prefix
        self.logger = get_logger(__name__, correlation_id, "reconciler")

    def is_attribute_key(self, key: Optional[str]) -> bool:
        """Check for a text/attribute prefix followed by an identifier."""
        return (
            key is not None
            and len(key) > 1
            and key[0] in self.prefixes
            and is_identifier(key[1:], KEY_EXTRA_CHARACTERS)
        )

    @staticmethod
    def is_identifier_key(key: Optional[str]) -> bool:
        return is_identifier(key, KEY_EXTRA_CHARACTERS)

    def is_markup_record(self, raw: Node) -> bool:
        """Check whether ``raw`` encodes an element with text and attributes.

        True only if a ``#<own name>`` key exists, every key is prefixed, and
        no attribute key holds a nested object.
        """
        if raw.name is None:
            return False
        text_key = self.config.text_prefix + raw.name
        if not any(child.name == text_key for child in raw.children):
            return False
        for child in raw.children:
            if not self.is_attribute_key(child.name):
                return False
            if child.name.startswith(self.config.attribute_prefix) and child.has_children:
                return False
        return True

    def reconcile(self, raw: Node) -> Node:
        """Build the reconciled node for ``raw``.

        ``raw`` is consumed: surviving descendants are moved to the returned
        node and must not be used through ``raw`` afterwards.
        """
        if self.is_markup_record(raw):
            result = self._from_markup_record(raw)
            self.logger.debug(
                "Object reconciled as element record",
                extra={"node": raw.name, "attributes": len(result.attributes)}
            )
            return result
        return self._pruned(raw)

    def _from_markup_record(self, raw: Node) -> Node:
        result = Node(raw.name, attributes=dict(raw.attributes))
        for child in list(raw.children):
            key = child.name
            if key.startswith(self.config.text_prefix):
                if child.has_children:
                    for grandchild in list(child.children):
                        result.add_child(grandchild)
                else:
                    result.set_value(child.value)
            else:
                result.set_attribute(key[1:], "" if child.value is None else child.value)
        return result

    def _pruned(self, raw: Node) -> Node:
        result = Node(raw.name, attributes=dict(raw.attributes))
        keys: Set[Optional[str]] = {child.name for child in raw.children}
        dropped = 0

        for child in list(raw.children):
            key = child.name
            if self.is_attribute_key(key):
                if key[1:] in keys:
                    dropped += 1
                    continue
                child.set_name(key[1:])
            elif not self.is_identifier_key(key):
                dropped += 1
                continue
            result.add_child(child)

        if not result.has_children:
            result.set_value("")

        if dropped:
            self.logger.debug(
                "Dropped keys that cannot be element names",
                extra={"node": raw.name, "dropped": dropped}
            )
        return result


def reconcile(raw: Node, config: Optional[ObjectReaderConfig] = None) -> Node:
    """Reconcile a single parsed object node with a one-off ``Reconciler``."""
    return Reconciler(config).reconcile(raw)
