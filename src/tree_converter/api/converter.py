"""Conversion API: format dispatch and result wrapping.

Module-level functions cover one-off conversions; ``TreeConverter`` keeps a
configuration and readers for repeated use. By default conversion never
raises for bad input: failures are reported through ``ConversionResult``.
"""

import time
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, TextIO, Union

import psutil

from ..readers import (
    MarkupReader,
    ObjectReader,
    ReaderRegistry,
    SourceFormat,
)
from ..shared import (
    ConversionError,
    ConverterConfig,
    DiagnosticSeverity,
    InputTooLargeError,
    get_logger,
)
from .result import ConversionResult

InputType = Union[str, bytes, Path, TextIO, BinaryIO]

PREVIEW_LENGTH = 80  # Max length for content preview in logs
MS_PER_SECOND = 1000


def build_registry(
    config: ConverterConfig,
    correlation_id: Optional[str] = None
) -> ReaderRegistry:
    """Create the reader registry; markup is probed before objects."""
    registry = ReaderRegistry()
    registry.register(MarkupReader(config.markup, correlation_id))
    registry.register(ObjectReader(config.objects, correlation_id))
    return registry


def _memory_usage() -> int:
    return psutil.Process().memory_info().rss


class TreeConverter:
    """Reusable converter bound to one configuration.

    Examples:
        >>> converter = TreeConverter()
        >>> result = converter.convert('<x a="1">hello</x>')
        >>> result.tree.children[0].value
        'hello'

        Errors propagate with the strict preset:
        >>> TreeConverter(ConverterConfig.strict()).convert('{"x": true}')
        Traceback (most recent call last):
        ...
        tree_converter.shared.errors.InvalidValueError: Attribute value expected. (at offset 6)
    """

    def __init__(
        self,
        config: Optional[ConverterConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ConverterConfig.default()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "converter")
        self._registry = build_registry(self.config, correlation_id)

        self._conversion_count = 0
        self._successful_conversions = 0
        self._total_processing_time = 0.0

    def detect(self, text: str) -> SourceFormat:
        """Return the format of ``text`` without parsing it."""
        reader = self._registry.detect(text)
        return reader.format if reader is not None else SourceFormat.UNKNOWN

    def convert(self, input_data: InputType) -> ConversionResult:
        """Convert a string, bytes, path or readable object.

        Raises:
            ConversionError: only when ``api.never_fail_mode`` is off
        """
        if isinstance(input_data, Path):
            return self.convert_file(input_data)
        if isinstance(input_data, (str, bytes)):
            content = input_data
        elif hasattr(input_data, "read"):
            content = input_data.read()
        else:
            raise TypeError(
                f"Unsupported input type: {type(input_data).__name__}"
            )

        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")
        return self._convert_text(content)

    def convert_file(
        self,
        file_path: Union[str, Path],
        encoding: str = "utf-8"
    ) -> ConversionResult:
        """Read a whole file and convert its content.

        A file that cannot be read yields a failed result (or an ``OSError``
        when ``api.never_fail_mode`` is off).
        """
        path = Path(file_path)
        self.logger.info(
            "Starting file conversion",
            extra={"file_path": str(path), "encoding": encoding}
        )
        try:
            content = path.read_text(encoding=encoding, errors="replace")
        except OSError as e:
            if not self.config.api.never_fail_mode:
                raise
            self.logger.error(
                "Could not read input file",
                extra={"file_path": str(path)},
                exc_info=self.logger.is_debug_enabled()
            )
            result = ConversionResult(
                success=False, correlation_id=self.correlation_id, source=str(path)
            )
            result.add_diagnostic(
                DiagnosticSeverity.CRITICAL,
                f"Cannot read file {path}: {e.strerror or e}",
                "converter",
                details={"file_path": str(path)}
            )
            self._record(result)
            return result

        result = self._convert_text(content)
        result.source = str(path)
        return result

    def _convert_text(self, text: str) -> ConversionResult:
        start_time = time.perf_counter()
        track_memory = self.config.api.track_memory
        memory_before = _memory_usage() if track_memory else 0

        self.logger.info(
            "Starting conversion",
            extra={
                "content_length": len(text),
                "preview": (
                    text[:PREVIEW_LENGTH] + "..."
                    if len(text) > PREVIEW_LENGTH else text
                ),
            }
        )

        result = ConversionResult(correlation_id=self.correlation_id)
        result.performance.characters_processed = len(text)

        try:
            limit = self.config.global_.max_input_size_bytes
            if limit is not None and len(text.encode("utf-8")) > limit:
                raise InputTooLargeError(
                    f"Input exceeds the maximum allowed size of {limit} bytes."
                )

            reader = self._registry.detect(text)
            if reader is None:
                result.success = False
                result.add_diagnostic(
                    DiagnosticSeverity.WARNING,
                    "Input is neither markup nor object notation",
                    "converter"
                )
                self.logger.warning("Unrecognized input format")
            else:
                result.format = reader.format
                result.tree = reader.read(text)
                result.performance.nodes_created = result.node_count

        except ConversionError as e:
            self.logger.error(
                "Conversion failed",
                extra={
                    "format": result.format.value,
                    "kind": e.kind.value,
                    "position": e.position,
                }
            )
            if not self.config.api.never_fail_mode:
                self._record(result, failed=True)
                raise
            result.success = False
            result.error = e
            result.tree = None
            result.add_diagnostic(
                DiagnosticSeverity.CRITICAL,
                str(e),
                (
                    "converter" if result.format is SourceFormat.UNKNOWN
                    else f"{result.format.value}_reader"
                ),
                position=e.position,
                details={"kind": e.kind.value}
            )

        if self.config.api.include_timing_info:
            result.performance.processing_time_ms = (
                (time.perf_counter() - start_time) * MS_PER_SECOND
            )
        if track_memory:
            result.performance.memory_used_bytes = max(0, _memory_usage() - memory_before)

        self._record(result)
        self.logger.info(
            "Conversion completed",
            extra={
                "success": result.success,
                "format": result.format.value,
                "node_count": result.node_count,
                "processing_time_ms": result.performance.processing_time_ms,
            }
        )
        return result

    def _record(self, result: ConversionResult, failed: bool = False) -> None:
        self._conversion_count += 1
        self._total_processing_time += result.performance.processing_time_ms
        if result.success and not failed:
            self._successful_conversions += 1

    def reconfigure(self, config: ConverterConfig) -> None:
        """Switch to a new configuration, rebuilding the readers."""
        self.config = config
        self._registry = build_registry(config, self.correlation_id)
        self.logger.info("Converter reconfigured", extra={"preset": config.name})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Usage statistics across all conversions made by this converter."""
        return {
            "total_conversions": self._conversion_count,
            "successful_conversions": self._successful_conversions,
            "success_rate": (
                self._successful_conversions / self._conversion_count
                if self._conversion_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        self._conversion_count = 0
        self._successful_conversions = 0
        self._total_processing_time = 0.0


def detect_format(text: str) -> SourceFormat:
    """Return the format ``text`` would be converted as."""
    return TreeConverter().detect(text)


def convert(
    input_data: InputType,
    config: Optional[ConverterConfig] = None,
    correlation_id: Optional[str] = None
) -> ConversionResult:
    """Convert markup or object input of any supported type.

    Examples:
        >>> result = convert('{"x": {"@a": "1", "#x": "hello"}}')
        >>> node = result.tree.children[0]
        >>> (node.name, node.value, node.attributes)
        ('x', 'hello', {'a': '1'})
    """
    return TreeConverter(config, correlation_id).convert(input_data)


def convert_string(
    text: str,
    config: Optional[ConverterConfig] = None,
    correlation_id: Optional[str] = None
) -> ConversionResult:
    """Convert a string buffer."""
    return TreeConverter(config, correlation_id).convert(text)


def convert_file(
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    config: Optional[ConverterConfig] = None,
    correlation_id: Optional[str] = None
) -> ConversionResult:
    """Convert the content of a file."""
    return TreeConverter(config, correlation_id).convert_file(file_path, encoding)
