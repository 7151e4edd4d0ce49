"""Unit tests for MappingContext."""

from __future__ import annotations

import pytest

from json_mapper.core.context import (
    ISO_8601_FORMAT,
    OPTION_COLLECT_ERRORS,
    OPTION_DEFAULT_DATE_FORMAT,
    OPTION_STRICT_MODE,
    MappingContext,
)
from json_mapper.core.exceptions import TypeMismatchError, UnknownPropertyError


class TestPath:
    def test_root_path(self) -> None:
        ctx = MappingContext({"a": 1})
        assert ctx.path == "$"

    def test_nested_segments(self) -> None:
        ctx = MappingContext({})
        seen = ctx.with_path_segment(
            "items", lambda c: c.with_path_segment(0, lambda inner: inner.path)
        )
        assert seen == "$.items.0"
        assert ctx.path == "$"

    def test_segment_popped_on_exception(self) -> None:
        ctx = MappingContext({})

        def boom(c: MappingContext) -> None:
            raise RuntimeError("abort")

        with pytest.raises(RuntimeError):
            ctx.with_path_segment("broken", boom)
        assert ctx.path == "$"

    def test_returns_callback_result(self) -> None:
        ctx = MappingContext({})
        assert ctx.with_path_segment("x", lambda c: 42) == 42


class TestErrors:
    def test_add_error_records_current_path(self) -> None:
        ctx = MappingContext({})
        ctx.with_path_segment("name", lambda c: c.add_error("bad value"))
        [error] = ctx.errors
        assert error.path == "$.name"
        assert error.message == "bad value"
        assert error.cause is None

    def test_add_error_noop_when_collection_disabled(self) -> None:
        ctx = MappingContext({}, {OPTION_COLLECT_ERRORS: False})
        ctx.add_error("ignored")
        assert ctx.errors == []

    def test_record_exception_keeps_cause(self) -> None:
        ctx = MappingContext({})
        exc = TypeMismatchError("$.age", "int", "str")
        ctx.record_exception(exc)
        [error] = ctx.errors
        assert error.cause is exc
        assert error.message == "Type mismatch at $.age: expected int, got str."

    def test_errors_is_a_copy(self) -> None:
        ctx = MappingContext({})
        ctx.add_error("one")
        ctx.errors.clear()
        assert len(ctx.errors) == 1

    def test_report_lenient_records_only(self) -> None:
        ctx = MappingContext({})
        ctx.report(UnknownPropertyError("$.x", "x", "Person"))
        assert len(ctx.errors) == 1

    def test_report_strict_records_and_raises(self) -> None:
        ctx = MappingContext({}, {OPTION_STRICT_MODE: True})
        with pytest.raises(UnknownPropertyError, match=r"Unknown property \$\.x on Person\."):
            ctx.report(UnknownPropertyError("$.x", "x", "Person"))
        assert len(ctx.errors) == 1


class TestOptions:
    def test_defaults(self) -> None:
        ctx = MappingContext({})
        assert ctx.is_strict_mode is False
        assert ctx.should_collect_errors is True
        assert ctx.should_treat_empty_string_as_null is False
        assert ctx.should_ignore_unknown_properties is False
        assert ctx.should_treat_null_as_empty_collection is False
        assert ctx.should_allow_scalar_to_object_casting is False
        assert ctx.default_date_format == ISO_8601_FORMAT

    def test_get_option_default(self) -> None:
        ctx = MappingContext({}, {"custom": None})
        assert ctx.get_option("custom", "fallback") == "fallback"
        assert ctx.get_option("missing") is None

    def test_date_format_falls_back_when_empty(self) -> None:
        ctx = MappingContext({}, {OPTION_DEFAULT_DATE_FORMAT: ""})
        assert ctx.default_date_format == ISO_8601_FORMAT

    def test_date_format_falls_back_when_not_string(self) -> None:
        ctx = MappingContext({}, {OPTION_DEFAULT_DATE_FORMAT: 123})
        assert ctx.default_date_format == ISO_8601_FORMAT

    def test_custom_date_format(self) -> None:
        ctx = MappingContext({}, {OPTION_DEFAULT_DATE_FORMAT: "%d.%m.%Y"})
        assert ctx.default_date_format == "%d.%m.%Y"

    def test_options_is_a_copy(self) -> None:
        ctx = MappingContext({}, {OPTION_STRICT_MODE: True})
        ctx.options[OPTION_STRICT_MODE] = False
        assert ctx.is_strict_mode is True

    def test_root_input_kept(self) -> None:
        payload = {"a": [1, 2]}
        assert MappingContext(payload).root_input is payload
