"""Tree model for converted documents.

Key Components:
    Node: generic node with name, value, ordered attributes and children
    render_listing: human-readable listing of path, value and attributes
    render_json: JSON rendering of the tree
"""

from .node import Node
from .render import iter_blocks, render_json, render_listing

__all__ = [
    "Node",
    "iter_blocks",
    "render_json",
    "render_listing",
]
