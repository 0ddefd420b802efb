"""Tests for the configuration system."""

import json

import pytest

from tree_converter.shared.config import (
    ApiConfig,
    ConfigError,
    ConfigValidationError,
    ConverterConfig,
    GlobalConfig,
    MarkupReaderConfig,
    ObjectReaderConfig,
)


class TestComponentConfigs:
    """Test validation of the component configurations."""

    def test_defaults(self):
        """Test default component values."""
        assert MarkupReaderConfig().max_depth == 500
        objects = ObjectReaderConfig()
        assert objects.reconcile is True
        assert (objects.text_prefix, objects.attribute_prefix) == ("#", "@")
        assert ApiConfig().never_fail_mode is True
        assert GlobalConfig().max_input_size_bytes is None

    @pytest.mark.parametrize("depth", [0, -1])
    def test_invalid_depth(self, depth):
        with pytest.raises(ValueError, match="max_depth"):
            MarkupReaderConfig(max_depth=depth)
        with pytest.raises(ValueError, match="max_depth"):
            ObjectReaderConfig(max_depth=depth)

    @pytest.mark.parametrize("prefix", ["", "##", "a", "1", " ", '"'])
    def test_invalid_prefix(self, prefix):
        with pytest.raises(ValueError, match="single punctuation character"):
            ObjectReaderConfig(text_prefix=prefix)

    def test_prefixes_must_differ(self):
        with pytest.raises(ValueError, match="must differ"):
            ObjectReaderConfig(text_prefix="@", attribute_prefix="@")

    def test_invalid_global_settings(self):
        with pytest.raises(ValueError, match="logging_level"):
            GlobalConfig(logging_level="LOUD")
        with pytest.raises(ValueError, match="max_input_size_bytes"):
            GlobalConfig(max_input_size_bytes=0)


class TestConverterConfig:
    """Test the aggregate configuration."""

    def test_is_frozen(self):
        config = ConverterConfig()

        with pytest.raises(AttributeError):
            config.name = "changed"  # type: ignore

    def test_override_component_fields(self):
        """Test overrides produce a new config and leave the original alone."""
        base = ConverterConfig.default()
        config = base.override(
            objects__reconcile=False,
            global___max_input_size_bytes=10,
            name="custom",
        )

        assert config.objects.reconcile is False
        assert config.global_.max_input_size_bytes == 10
        assert config.name == "custom"
        assert base.objects.reconcile is True
        assert base.global_.max_input_size_bytes is None

    def test_override_unknown_component(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            ConverterConfig().override(parser__strict=True)

        assert "global_" in exc_info.value.suggestions

    def test_override_unknown_field(self):
        with pytest.raises(ConfigValidationError):
            ConverterConfig().override(api__missing=True)

    def test_override_invalid_value(self):
        with pytest.raises(ConfigValidationError):
            ConverterConfig().override(markup__max_depth=0)

    def test_post_init_revalidates_mutated_components(self):
        markup = MarkupReaderConfig()
        markup.max_depth = -5

        with pytest.raises(ConfigValidationError):
            ConverterConfig(markup=markup)

    def test_dict_round_trip(self):
        config = ConverterConfig.raw_objects().override(markup__max_depth=20)

        restored = ConverterConfig.from_dict(config.to_dict())

        assert restored == config

    def test_json_serialization(self):
        data = json.loads(ConverterConfig.strict().to_json())

        assert data["name"] == "strict"
        assert data["api"]["never_fail_mode"] is False
        assert data["global_"]["logging_level"] == "INFO"

    def test_from_dict_partial(self):
        config = ConverterConfig.from_dict({"objects": {"text_prefix": "$"}})

        assert config.objects.text_prefix == "$"
        assert config.markup.max_depth == 500

    def test_from_dict_unknown_field(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            ConverterConfig.from_dict({"objects": {"unknown": 1}})

        assert exc_info.value.field_name == "objects"

    @pytest.mark.parametrize("data", [[], "markup", 5])
    def test_from_dict_requires_mapping(self, data):
        with pytest.raises(ConfigValidationError, match="mapping"):
            ConverterConfig.from_dict(data)

    @pytest.mark.parametrize("text", ["{broken", "[1, 2]"])
    def test_from_json_invalid(self, text):
        with pytest.raises(ConfigError):
            ConverterConfig.from_json(text)

    def test_presets(self):
        assert ConverterConfig.preset("default").name == "default"
        assert ConverterConfig.preset("strict").api.never_fail_mode is False
        assert ConverterConfig.preset("raw_objects").objects.reconcile is False

    def test_unknown_preset(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            ConverterConfig.preset("fastest")

        assert exc_info.value.suggestions == ["default", "raw_objects", "strict"]
