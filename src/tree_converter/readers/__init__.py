"""Format readers turning a text buffer into a ``Node`` tree.

Key Components:
    MarkupReader: element-based input (``<name attr="v">text</name>``)
    ObjectReader: object-notation input, with attribute reconciliation
    Reconciler: maps ``#``/``@`` key conventions back onto element shape
    ReaderRegistry: picks a reader by prefix probing
"""

from .base import ReaderRegistry, SourceFormat, TreeReader
from .markup import MarkupReader, looks_like_markup, read_markup
from .objects import ObjectReader, looks_like_object, read_object
from .reconcile import Reconciler, reconcile
from .scanner import Scanner, is_identifier

__all__ = [
    "MarkupReader",
    "ObjectReader",
    "ReaderRegistry",
    "Reconciler",
    "Scanner",
    "SourceFormat",
    "TreeReader",
    "is_identifier",
    "looks_like_markup",
    "looks_like_object",
    "read_markup",
    "read_object",
    "reconcile",
]
