"""Unit tests for exceptions, MappingReport and MappingResult."""

from __future__ import annotations

import pytest

from json_mapper.core.exceptions import (
    CollectionMappingError,
    ConfigurationError,
    JsonMapperError,
    MappingViolation,
    MissingPropertyError,
    PropertyNotWritable,
    ReadonlyPropertyError,
    TypeMismatchError,
    UnknownPropertyError,
)
from json_mapper.core.report import MappingError, MappingReport, MappingResult


class Person:
    pass


class TestExceptionMessages:
    def test_unknown_property(self) -> None:
        exc = UnknownPropertyError("$.unknown", "unknown", Person)
        assert str(exc) == "Unknown property $.unknown on Person."
        assert exc.path == "$.unknown"
        assert exc.property_name == "unknown"

    def test_missing_property(self) -> None:
        exc = MissingPropertyError("$.name", "name", Person)
        assert str(exc) == "Missing property $.name on Person."

    def test_type_mismatch(self) -> None:
        exc = TypeMismatchError("$.simple.int", "int", "str")
        assert str(exc) == "Type mismatch at $.simple.int: expected int, got str."
        assert exc.expected_type == "int"
        assert exc.actual_type == "str"

    def test_collection_mapping(self) -> None:
        exc = CollectionMappingError("$.tags", "str")
        assert str(exc) == "Expected iterable value at $.tags but received str."
        assert isinstance(exc, TypeMismatchError)
        assert exc.expected_type == "iterable"

    def test_readonly_property(self) -> None:
        exc = ReadonlyPropertyError("$.id", "id", "ReadonlyEntity")
        assert str(exc) == "Readonly property ReadonlyEntity.id cannot be written at $.id."

    def test_hierarchy(self) -> None:
        for exc in (
            UnknownPropertyError("$", "x", Person),
            MissingPropertyError("$", "x", Person),
            TypeMismatchError("$", "int", "str"),
            ReadonlyPropertyError("$", "x", Person),
        ):
            assert isinstance(exc, MappingViolation)
            assert isinstance(exc, JsonMapperError)
        assert not issubclass(ConfigurationError, MappingViolation)
        assert not issubclass(PropertyNotWritable, MappingViolation)


class TestMappingReport:
    def test_empty_report(self) -> None:
        report = MappingReport()
        assert report.has_errors() is False
        assert report.error_count() == 0
        assert report.count() == 0
        assert list(report) == []

    def test_report_accessors(self) -> None:
        first = MappingError("$.a", "first")
        second = MappingError("$.b", "second")
        third = MappingError("$.a", "third")
        report = MappingReport((first, second, third))

        assert report.has_errors() is True
        assert report.error_count() == 3
        assert report.count() == 3
        assert len(report) == 3
        assert report.messages() == ["first", "second", "third"]
        assert report.by_path() == {"$.a": third, "$.b": second}

    def test_report_frozen(self) -> None:
        report = MappingReport()
        with pytest.raises(AttributeError):
            report.errors = ()  # type: ignore[misc]

    def test_result_pairs_value_and_report(self) -> None:
        report = MappingReport((MappingError("$", "oops"),))
        result = MappingResult(value={"a": 1}, report=report)
        assert result.value == {"a": 1}
        assert result.report.error_count() == 1
