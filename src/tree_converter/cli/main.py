"""Main CLI entry point for the tree-converter command-line tool.

Converts markup or object-notation files into the path/value/attribute
listing (or JSON) and reports which format a file would be read as.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Iterator, List, Optional

from tree_converter import __version__
from tree_converter.api import ConversionResult, TreeConverter
from tree_converter.readers import SourceFormat
from tree_converter.shared import (
    ConfigError,
    ConfigValidationError,
    ConversionError,
    ConverterConfig,
    configure_logging,
    get_logger,
)

STDIN_PATH = "-"
INPUT_SUFFIXES = {".xml", ".json"}
PRESETS = ["default", "strict", "raw_objects"]


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.converter_config = ConverterConfig.default()
        self.output_format = "text"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        Recognized keys: ``preset``, ``output_format`` and ``converter``
        (a ``ConverterConfig.to_dict`` document, overriding the preset).
        """
        config = cls()
        if not config_path.exists():
            return config
        try:
            with config_path.open() as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ConfigValidationError(
                    "Configuration file must contain a JSON object"
                )
            if "preset" in data:
                config.converter_config = ConverterConfig.preset(data["preset"])
            if "converter" in data:
                config.converter_config = ConverterConfig.from_dict(data["converter"])
            config.output_format = data.get("output_format", config.output_format)
        except (OSError, ValueError, ConfigError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)
        return config


class ConversionProcessor:
    """Runs conversions for the CLI commands."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.converter = TreeConverter(config.converter_config)
        self.logger = get_logger(__name__, None, "cli_processor")

    def find_input_files(self, path: Path, recursive: bool = False) -> Iterator[Path]:
        """Yield ``path`` itself, or the markup/object files of a directory."""
        if path.is_dir():
            pattern = "**/*" if recursive else "*"
            for candidate in sorted(path.glob(pattern)):
                if candidate.is_file() and candidate.suffix.lower() in INPUT_SUFFIXES:
                    yield candidate
        else:
            yield path

    def collect(self, paths: List[Path], recursive: bool = False) -> List[Path]:
        files: List[Path] = []
        for path in paths:
            if str(path) == STDIN_PATH:
                files.append(path)
            else:
                files.extend(self.find_input_files(path, recursive))
        return files

    def process(self, path: Path) -> ConversionResult:
        """Convert one file, or standard input for ``-``."""
        if str(path) == STDIN_PATH:
            result = self.converter.convert(sys.stdin.read())
            result.source = "<stdin>"
            return result
        return self.converter.convert_file(path)

    def detect(self, path: Path) -> SourceFormat:
        if str(path) == STDIN_PATH:
            return self.converter.detect(sys.stdin.read())
        try:
            content = path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            self.logger.warning("Could not read file", extra={"file_path": str(path)})
            return SourceFormat.UNKNOWN
        return self.converter.detect(content)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="tree-converter",
        description="Convert markup or object notation into a generic node tree"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert files to a tree listing")
    convert_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files or directories to convert ('-' reads standard input)"
    )
    convert_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    convert_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        help="Output format (default: text)"
    )
    convert_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    convert_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    convert_parser.add_argument(
        "--preset",
        choices=PRESETS,
        help="Converter configuration preset"
    )

    # Detect command
    detect_parser = subparsers.add_parser("detect", help="Report the format of files")
    detect_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Files to inspect ('-' reads standard input)"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def format_results(results: List[ConversionResult], format_type: str) -> str:
    """Format conversion results for output."""
    if format_type == "json":
        return json.dumps([result.to_dict() for result in results], indent=2)

    sections = []
    for result in results:
        lines = []
        if len(results) > 1:
            lines.append(f"# {result.source}")
        if result.success:
            lines.append(result.render())
        elif result.error is not None:
            lines.append(f"error: {result.error}")
        else:
            messages = [diag.message for diag in result.diagnostics]
            lines.append(f"error: {'; '.join(messages) or 'conversion failed'}")
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def cmd_convert(args: argparse.Namespace) -> int:
    """Handle convert command."""
    config = CLIConfig()
    if args.config:
        config = CLIConfig.from_file(args.config)
    if args.preset:
        config.converter_config = ConverterConfig.preset(args.preset)
    if args.format:
        config.output_format = args.format

    processor = ConversionProcessor(config)
    files = processor.collect(args.paths, args.recursive)
    if not files:
        print("No input files found", file=sys.stderr)
        return 1

    try:
        results = [processor.process(path) for path in files]
    except (ConversionError, OSError) as e:
        # Only reachable when the preset disables never-fail mode
        print(f"Conversion aborted: {e}", file=sys.stderr)
        return 1
    formatted_output = format_results(results, config.output_format)

    if args.output:
        try:
            args.output.write_text(formatted_output + "\n")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    return 0 if all(result.success for result in results) else 1


def cmd_detect(args: argparse.Namespace) -> int:
    """Handle detect command."""
    processor = ConversionProcessor(CLIConfig())
    formats = []
    for path in args.paths:
        source_format = processor.detect(path)
        formats.append(source_format)
        print(f"{path}: {source_format.value}")
    return 0 if SourceFormat.UNKNOWN not in formats else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging("WARNING")

    try:
        if args.command == "convert":
            return cmd_convert(args)
        if args.command == "detect":
            return cmd_detect(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
