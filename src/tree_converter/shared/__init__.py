"""Shared utilities for tree conversion.

Configuration objects, error types, diagnostics and structured logging used
across the readers, the API and the command line.
"""

from .config import (
    ApiConfig,
    ConfigError,
    ConfigValidationError,
    ConverterConfig,
    GlobalConfig,
    MarkupReaderConfig,
    ObjectReaderConfig,
)
from .errors import (
    ConversionError,
    ConversionErrorKind,
    InputTooLargeError,
    InvalidValueError,
    NestingTooDeepError,
    UnterminatedElementError,
    UnterminatedObjectError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "ApiConfig",
    "ConfigError",
    "ConfigValidationError",
    "ConverterConfig",
    "GlobalConfig",
    "MarkupReaderConfig",
    "ObjectReaderConfig",
    "ConversionError",
    "ConversionErrorKind",
    "InputTooLargeError",
    "InvalidValueError",
    "NestingTooDeepError",
    "UnterminatedElementError",
    "UnterminatedObjectError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
]
