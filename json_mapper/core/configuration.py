"""Mapper configuration.

MapperConfiguration is a frozen Pydantic model. ``with_*`` methods return
modified copies, so one instance can safely be reused across calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from json_mapper.core.context import (
    ISO_8601_FORMAT,
    OPTION_ALLOW_SCALAR_TO_OBJECT_CASTING,
    OPTION_COLLECT_ERRORS,
    OPTION_DEFAULT_DATE_FORMAT,
    OPTION_IGNORE_UNKNOWN_PROPERTIES,
    OPTION_STRICT_MODE,
    OPTION_TREAT_EMPTY_STRING_AS_NULL,
    OPTION_TREAT_NULL_AS_EMPTY_COLLECTION,
    MappingContext,
)


class MapperConfiguration(BaseModel):
    """Options controlling a mapping run."""

    model_config = ConfigDict(frozen=True)

    strict_mode: bool = False
    collect_errors: bool = True
    empty_string_is_null: bool = False
    ignore_unknown_properties: bool = False
    treat_null_as_empty_collection: bool = False
    default_date_format: str = ISO_8601_FORMAT
    allow_scalar_to_object_casting: bool = False

    @field_validator("default_date_format", mode="before")
    @classmethod
    def _fallback_date_format(cls, value: Any) -> Any:
        if not isinstance(value, str) or value == "":
            return ISO_8601_FORMAT
        return value

    # --- Presets ---

    @classmethod
    def lenient(cls) -> MapperConfiguration:
        """Defaults: errors are collected, nothing is raised."""
        return cls()

    @classmethod
    def strict(cls) -> MapperConfiguration:
        """Unknown, missing and mistyped properties raise immediately."""
        return cls(strict_mode=True)

    # --- Conversions ---

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MapperConfiguration:
        """Build a configuration from public field names, ignoring unknown keys."""
        known = {name: data[name] for name in cls.model_fields if name in data}
        for name, value in known.items():
            if name != "default_date_format":
                known[name] = bool(value)
        return cls(**known)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> MapperConfiguration:
        """Build a configuration from a MappingContext option bag."""
        return cls.from_dict(
            {
                "strict_mode": options.get(OPTION_STRICT_MODE, False),
                "collect_errors": options.get(OPTION_COLLECT_ERRORS, True),
                "empty_string_is_null": options.get(OPTION_TREAT_EMPTY_STRING_AS_NULL, False),
                "ignore_unknown_properties": options.get(OPTION_IGNORE_UNKNOWN_PROPERTIES, False),
                "treat_null_as_empty_collection": options.get(
                    OPTION_TREAT_NULL_AS_EMPTY_COLLECTION, False
                ),
                "default_date_format": options.get(OPTION_DEFAULT_DATE_FORMAT, ISO_8601_FORMAT),
                "allow_scalar_to_object_casting": options.get(
                    OPTION_ALLOW_SCALAR_TO_OBJECT_CASTING, False
                ),
            }
        )

    @classmethod
    def from_context(cls, context: MappingContext) -> MapperConfiguration:
        return cls(
            strict_mode=context.is_strict_mode,
            collect_errors=context.should_collect_errors,
            empty_string_is_null=context.should_treat_empty_string_as_null,
            ignore_unknown_properties=context.should_ignore_unknown_properties,
            treat_null_as_empty_collection=context.should_treat_null_as_empty_collection,
            default_date_format=context.default_date_format,
            allow_scalar_to_object_casting=context.should_allow_scalar_to_object_casting,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    def to_options(self) -> dict[str, Any]:
        """Flat option bag consumed by MappingContext."""
        return {
            OPTION_STRICT_MODE: self.strict_mode,
            OPTION_COLLECT_ERRORS: self.collect_errors,
            OPTION_TREAT_EMPTY_STRING_AS_NULL: self.empty_string_is_null,
            OPTION_IGNORE_UNKNOWN_PROPERTIES: self.ignore_unknown_properties,
            OPTION_TREAT_NULL_AS_EMPTY_COLLECTION: self.treat_null_as_empty_collection,
            OPTION_DEFAULT_DATE_FORMAT: self.default_date_format,
            OPTION_ALLOW_SCALAR_TO_OBJECT_CASTING: self.allow_scalar_to_object_casting,
        }

    # --- Copies ---

    def with_strict_mode(self, enabled: bool = True) -> MapperConfiguration:
        return self.model_copy(update={"strict_mode": enabled})

    def with_error_collection(self, collect: bool = True) -> MapperConfiguration:
        return self.model_copy(update={"collect_errors": collect})

    def with_empty_string_as_null(self, enabled: bool = True) -> MapperConfiguration:
        return self.model_copy(update={"empty_string_is_null": enabled})

    def with_ignore_unknown_properties(self, enabled: bool = True) -> MapperConfiguration:
        return self.model_copy(update={"ignore_unknown_properties": enabled})

    def with_treat_null_as_empty_collection(self, enabled: bool = True) -> MapperConfiguration:
        return self.model_copy(update={"treat_null_as_empty_collection": enabled})

    def with_default_date_format(self, date_format: str) -> MapperConfiguration:
        # model_copy skips validation, so route through the constructor
        return self.model_validate({**self.model_dump(), "default_date_format": date_format})

    def with_scalar_to_object_casting(self, enabled: bool = True) -> MapperConfiguration:
        return self.model_copy(update={"allow_scalar_to_object_casting": enabled})
