"""Text and JSON renderings of a converted tree."""

import json
from typing import Iterator, List

from .node import Node


def _element_block(node: Node) -> str:
    lines: List[str] = ["Element:", f"path = {node.path()}"]

    if node.value is not None:
        lines.append(f'value = "{node.value}"')
    elif not node.children:
        lines.append("value = null")

    if node.attributes:
        lines.append("attributes:")
        for key, value in node.attributes.items():
            lines.append(f'{key} = "{"" if value is None else value}"')

    return "\n".join(lines) + "\n"


def iter_blocks(node: Node) -> Iterator[str]:
    """Yield one listing block per named node of the subtree, in document order."""
    for current in node.iter_nodes():
        if current.name is not None:
            yield _element_block(current)


def render_listing(node: Node) -> str:
    """Render the subtree as a listing of path, value and attributes.

    Each named node produces an ``Element:`` block; blocks are separated by
    a blank line. The synthetic root produces no block of its own.

    Example:
        >>> root = Node()
        >>> root.add_child("x").set_value("hello")
        >>> print(render_listing(root), end="")
        Element:
        path = x
        value = "hello"
    """
    return "\n".join(iter_blocks(node))


def render_json(node: Node, indent: int = 2) -> str:
    """Render the subtree as JSON built from ``Node.to_dict``."""
    return json.dumps(node.to_dict(), indent=indent)
