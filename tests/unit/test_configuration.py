"""Unit tests for MapperConfiguration."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from json_mapper.core.configuration import MapperConfiguration
from json_mapper.core.context import (
    ISO_8601_FORMAT,
    OPTION_IGNORE_UNKNOWN_PROPERTIES,
    OPTION_STRICT_MODE,
    MappingContext,
)


class TestMapperConfiguration:
    def test_defaults_are_lenient(self) -> None:
        config = MapperConfiguration()
        assert config.strict_mode is False
        assert config.collect_errors is True
        assert config.empty_string_is_null is False
        assert config.ignore_unknown_properties is False
        assert config.treat_null_as_empty_collection is False
        assert config.default_date_format == ISO_8601_FORMAT
        assert config.allow_scalar_to_object_casting is False
        assert config == MapperConfiguration.lenient()

    def test_strict_preset(self) -> None:
        assert MapperConfiguration.strict().strict_mode is True

    def test_frozen(self) -> None:
        config = MapperConfiguration()
        with pytest.raises(ValidationError):
            config.strict_mode = True  # type: ignore[misc]

    def test_with_methods_return_copies(self) -> None:
        base = MapperConfiguration()
        changed = (
            base.with_strict_mode()
            .with_error_collection(False)
            .with_empty_string_as_null()
            .with_ignore_unknown_properties()
            .with_treat_null_as_empty_collection()
            .with_scalar_to_object_casting()
            .with_default_date_format("%Y-%m-%d")
        )
        assert base == MapperConfiguration()
        assert changed.strict_mode is True
        assert changed.collect_errors is False
        assert changed.empty_string_is_null is True
        assert changed.ignore_unknown_properties is True
        assert changed.treat_null_as_empty_collection is True
        assert changed.allow_scalar_to_object_casting is True
        assert changed.default_date_format == "%Y-%m-%d"

    def test_with_strict_mode_disable(self) -> None:
        config = MapperConfiguration.strict().with_strict_mode(False)
        assert config.strict_mode is False

    def test_empty_date_format_falls_back(self) -> None:
        assert MapperConfiguration(default_date_format="").default_date_format == ISO_8601_FORMAT
        assert MapperConfiguration().with_default_date_format("").default_date_format == (
            ISO_8601_FORMAT
        )

    def test_to_options_keys(self) -> None:
        options = MapperConfiguration.strict().to_options()
        assert options[OPTION_STRICT_MODE] is True
        assert options[OPTION_IGNORE_UNKNOWN_PROPERTIES] is False

    def test_from_options_restores_configuration(self) -> None:
        config = MapperConfiguration(strict_mode=True, empty_string_is_null=True)
        assert MapperConfiguration.from_options(config.to_options()) == config

    def test_from_options_defaults_for_missing_keys(self) -> None:
        assert MapperConfiguration.from_options({}) == MapperConfiguration()

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = MapperConfiguration.from_dict({"strict_mode": 1, "unknown": True})
        assert config.strict_mode is True

    def test_to_dict_uses_field_names(self) -> None:
        data = MapperConfiguration().to_dict()
        assert data["strict_mode"] is False
        assert data["default_date_format"] == ISO_8601_FORMAT

    def test_from_context(self) -> None:
        config = MapperConfiguration(ignore_unknown_properties=True)
        ctx = MappingContext({}, config.to_options())
        assert MapperConfiguration.from_context(ctx) == config
