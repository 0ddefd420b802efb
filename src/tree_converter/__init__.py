"""Tree Converter.

Converts a markup (XML-like) or object-notation (JSON-like) buffer into one
generic ordered tree of named nodes with values and attributes, and renders
that tree as a path/value/attribute listing.

Progressive API Disclosure:
- Level 1: Simple functions - convert(), convert_string(), convert_file()
- Level 2: Configured converter - TreeConverter class
- Level 3: Readers - MarkupReader, ObjectReader, Reconciler
"""

__version__ = "0.1.0"
__author__ = "Tree Converter Team"

from .api import (
    ConversionResult,
    TreeConverter,
    convert,
    convert_file,
    convert_string,
    detect_format,
)
from .readers import MarkupReader, ObjectReader, Reconciler, SourceFormat
from .shared import ConversionError, ConversionErrorKind, ConverterConfig
from .tree import Node, render_json, render_listing

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple conversion functions
    "convert",
    "convert_string",
    "convert_file",
    "detect_format",

    # Level 2: Configured converter
    "TreeConverter",
    "ConverterConfig",

    # Level 3: Readers
    "MarkupReader",
    "ObjectReader",
    "Reconciler",

    # Results and data structures
    "ConversionResult",
    "ConversionError",
    "ConversionErrorKind",
    "Node",
    "SourceFormat",
    "render_json",
    "render_listing",
]
