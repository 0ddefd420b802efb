"""Public conversion API.

Level 1: ``convert``, ``convert_string``, ``convert_file``, ``detect_format``
Level 2: ``TreeConverter`` bound to a ``ConverterConfig``
"""

from .converter import (
    TreeConverter,
    build_registry,
    convert,
    convert_file,
    convert_string,
    detect_format,
)
from .result import ConversionResult

__all__ = [
    "ConversionResult",
    "TreeConverter",
    "build_registry",
    "convert",
    "convert_file",
    "convert_string",
    "detect_format",
]
