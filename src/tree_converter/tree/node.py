"""Generic tree node shared by the markup and object readers.

A tree has an unnamed synthetic root owned by the caller. Every other node is
owned by exactly one parent, and keeps a back-reference to it so that paths
can be rebuilt from any node.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union


@dataclass(eq=False)
class Node:
    """A named node with an optional scalar value, attributes and children.

    Nodes compare by identity. The model performs no validation: callers
    are responsible for passing well-formed names and keys.
    """

    name: Optional[str] = None
    value: Optional[str] = None
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)
    parent: Optional["Node"] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        """Establish parent relationships for children passed to the constructor."""
        for child in self.children:
            child.parent = self

    def __repr__(self) -> str:
        return (
            f"Node(name={self.name!r}, value={self.value!r}, "
            f"attributes={self.attributes!r}, children={len(self.children)})"
        )

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def add_child(self, child: Union["Node", str, None] = None) -> "Node":
        """Append a child and return it.

        A string (or None) creates a new node with that name. An existing
        node is detached from its previous parent first.
        """
        if child is None or isinstance(child, str):
            child = Node(child)
        elif not isinstance(child, Node):
            raise TypeError("Child must be a Node, a name or None")

        previous = child.parent
        if previous is not None:
            previous.remove_child(child)

        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: "Node") -> Optional["Node"]:
        """Detach ``child`` and return it, or return None if it is not a child."""
        for index, candidate in enumerate(self.children):
            if candidate is child:
                del self.children[index]
                child.parent = None
                return child
        return None

    def set_name(self, name: Optional[str]) -> None:
        self.name = name

    def set_value(self, value: Optional[str]) -> None:
        self.value = value

    def set_attribute(self, key: str, value: str) -> None:
        """Set an attribute; overwriting keeps the key's original position."""
        self.attributes[key] = value

    def get_attribute(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(key, default)

    def children_by_name(self) -> Dict[Optional[str], "Node"]:
        """Map child names to children.

        Keys appear in first-seen order; for duplicated names the last child
        wins. The mapping is a snapshot, not a maintained index.
        """
        mapping: Dict[Optional[str], Node] = {}
        for child in self.children:
            mapping[child.name] = child
        return mapping

    def path(self) -> str:
        """Names from the root down to this node, separated by ``", "``.

        Unnamed nodes (the synthetic root) contribute nothing.
        """
        names = []
        node: Optional[Node] = self
        while node is not None:
            if node.name is not None:
                names.append(node.name)
            node = node.parent
        return ", ".join(reversed(names))

    def depth(self) -> int:
        """Distance from the root (root = 0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def iter_nodes(self) -> Iterator["Node"]:
        """Traverse the subtree depth-first, yielding self then descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, name: str) -> Optional["Node"]:
        """Find the first descendant (document order) with the given name."""
        for node in self.iter_nodes():
            if node is not self and node.name == name:
                return node
        return None

    def find_all(self, name: str) -> List["Node"]:
        """Find all descendants with the given name, in document order."""
        return [
            node for node in self.iter_nodes()
            if node is not self and node.name == name
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree to plain dictionaries."""
        return {
            "name": self.name,
            "value": self.value,
            "attributes": dict(self.attributes),
            "children": [child.to_dict() for child in self.children],
        }
