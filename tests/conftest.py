"""Shared test fixtures."""

from __future__ import annotations

import pytest

from json_mapper.core.configuration import MapperConfiguration
from json_mapper.core.context import MappingContext
from json_mapper.mapping.mapper import JsonMapper


@pytest.fixture
def mapper() -> JsonMapper:
    """Mapper with default (lenient) configuration."""
    return JsonMapper()


@pytest.fixture
def strict() -> MapperConfiguration:
    """Strict mode configuration."""
    return MapperConfiguration.strict()


@pytest.fixture
def context() -> MappingContext:
    """Lenient context over an empty payload."""
    return MappingContext({}, MapperConfiguration.lenient().to_options())


@pytest.fixture
def strict_context() -> MappingContext:
    """Strict context over an empty payload."""
    return MappingContext({}, MapperConfiguration.strict().to_options())


@pytest.fixture
def make_context():
    """Helper to build a context with option overrides.

    Usage:
        ctx = make_context(treat_null_as_empty_collection=True)
    """

    def _make(**overrides: object) -> MappingContext:
        config = MapperConfiguration.from_dict(overrides)
        return MappingContext({}, config.to_options())

    return _make
