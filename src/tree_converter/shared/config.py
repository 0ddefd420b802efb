"""Configuration classes for tree conversion.

This module provides configuration objects for the readers and the API layer.
Component configurations validate themselves in ``__post_init__``; the
aggregate ``ConverterConfig`` is frozen and can be shared between converters.
"""

import json
import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
COMPONENT_FIELDS = ["markup", "objects", "api", "global_"]

_PREFIX_PATTERN = re.compile(r"[^\w\s\"]")


@dataclass
class MarkupReaderConfig:
    """Configuration for the markup reader."""

    max_depth: int = 500

    def __post_init__(self) -> None:
        """Validate markup reader configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass
class ObjectReaderConfig:
    """Configuration for the object reader and attribute reconciliation."""

    reconcile: bool = True
    text_prefix: str = "#"
    attribute_prefix: str = "@"
    max_depth: int = 500

    def __post_init__(self) -> None:
        """Validate object reader configuration."""
        for field_name in ("text_prefix", "attribute_prefix"):
            prefix = getattr(self, field_name)
            if len(prefix) != 1 or not _PREFIX_PATTERN.fullmatch(prefix):
                raise ValueError(
                    f"{field_name} must be a single punctuation character"
                )
        if self.text_prefix == self.attribute_prefix:
            raise ValueError("text_prefix and attribute_prefix must differ")
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass
class ApiConfig:
    """Configuration for API layer behavior."""

    never_fail_mode: bool = True
    include_timing_info: bool = True
    track_memory: bool = True


@dataclass
class GlobalConfig:
    """Settings that apply across all components."""

    logging_level: str = "INFO"
    max_input_size_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")
        if self.max_input_size_bytes is not None and self.max_input_size_bytes <= 0:
            raise ValueError("max_input_size_bytes must be > 0 or None")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ConverterConfig:
    """Complete configuration for readers and API.

    Immutable; use ``override`` to derive variants.
    """

    markup: MarkupReaderConfig = field(default_factory=MarkupReaderConfig)
    objects: ObjectReaderConfig = field(default_factory=ObjectReaderConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Re-validate components, they may have been mutated after creation."""
        try:
            self.markup.__post_init__()
            self.objects.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "ConverterConfig":
        """Create a new configuration with specific overrides.

        Component fields are addressed as ``component__field``.

        Example:
            >>> config = ConverterConfig().override(
            ...     objects__reconcile=False,
            ...     api__never_fail_mode=False,
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            # "global___field" belongs to the "global_" component
            component = next(
                (name for name in COMPONENT_FIELDS if key.startswith(name + "__")),
                None
            )
            if component is not None:
                field_name = key[len(component) + 2:]
                nested_overrides.setdefault(component, {})[field_name] = value
            elif "__" in key:
                raise ConfigValidationError(
                    f"Unknown configuration component: {key.split('__', 1)[0]}",
                    field_name=key,
                    suggestions=list(COMPONENT_FIELDS),
                )
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in COMPONENT_FIELDS:
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except TypeError as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
                except ValueError as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        result: Dict[str, Any] = {}
        for field_name in COMPONENT_FIELDS:
            component = getattr(self, field_name)
            result[field_name] = {
                name: getattr(component, name)
                for name in component.__dataclass_fields__
            }
        result["name"] = self.name
        result["description"] = self.description
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConverterConfig":
        """Create configuration from dictionary.

        Unknown keys inside a component raise ``ConfigValidationError``.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a mapping")
        component_types = {
            "markup": MarkupReaderConfig,
            "objects": ObjectReaderConfig,
            "api": ApiConfig,
            "global_": GlobalConfig,
        }
        field_values: Dict[str, Any] = {}
        for field_name, component_type in component_types.items():
            if field_name not in data:
                continue
            try:
                field_values[field_name] = component_type(**data[field_name])
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=field_name) from e

        for field_name in ("name", "description"):
            if field_name in data:
                field_values[field_name] = data[field_name]

        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "ConverterConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ConverterConfig":
        """Default configuration: reconciliation on, never-fail API."""
        return cls(name="default")

    @classmethod
    def strict(cls) -> "ConverterConfig":
        """Configuration that re-raises conversion errors to the caller."""
        return cls(
            api=ApiConfig(never_fail_mode=False),
            name="strict",
            description="Conversion errors propagate as exceptions",
        )

    @classmethod
    def raw_objects(cls) -> "ConverterConfig":
        """Configuration that keeps object input exactly as parsed."""
        return cls(
            objects=ObjectReaderConfig(reconcile=False),
            name="raw_objects",
            description="Object keys are kept verbatim, no markup reconciliation",
        )

    @classmethod
    def preset(cls, name: str) -> "ConverterConfig":
        """Look up a preset by name."""
        presets = {
            "default": cls.default,
            "strict": cls.strict,
            "raw_objects": cls.raw_objects,
        }
        if name not in presets:
            raise ConfigValidationError(
                f"Unknown preset: {name}", suggestions=sorted(presets)
            )
        return presets[name]()
