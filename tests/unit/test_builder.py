"""Unit tests for the JsonMapperBuilder DSL."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from json_mapper.core.context import MappingContext
from json_mapper.core.exceptions import ConfigurationError, UnknownPropertyError
from json_mapper.mapping.builder import JsonMapperBuilder, mapper_builder
from json_mapper.mapping.mapper import JsonMapper
from json_mapper.mapping.naming import SnakeCasePropertyNameConverter
from json_mapper.types.cache import CachedTypeProvider, InMemoryTypeCache
from json_mapper.types.descriptor import ObjectType, TypeDescriptor


@dataclass
class Point:
    x: int = 0
    y: int = 0


@dataclass
class Shape:
    name: str = ""


@dataclass
class Circle(Shape):
    radius: float = 0.0


@dataclass
class Drawing:
    origin: Point | None = None
    line_width: int = 1


class PointHandler:
    """Parses ``"x,y"`` strings into points."""

    def supports(self, type_: TypeDescriptor, value: Any) -> bool:
        return isinstance(type_, ObjectType) and type_.cls is Point and isinstance(value, str)

    def convert(self, type_: TypeDescriptor, value: Any, context: MappingContext) -> Any:
        x, y = value.split(",")
        return Point(int(x), int(y))


class TestMapperBuilder:
    def test_entry_point(self) -> None:
        assert isinstance(mapper_builder(), JsonMapperBuilder)

    def test_methods_chain(self) -> None:
        builder = mapper_builder()
        assert builder.strict() is builder
        assert builder.class_map(Shape, Circle) is builder
        assert builder.name_converter(SnakeCasePropertyNameConverter()) is builder

    def test_build_defaults(self) -> None:
        mapper = mapper_builder().build()
        assert isinstance(mapper, JsonMapper)
        assert mapper.configuration.strict_mode is False
        assert mapper.map({"x": "3"}, Point) == Point(3, 0)

    def test_strict(self) -> None:
        mapper = mapper_builder().strict().build()
        assert mapper.configuration.strict_mode is True
        with pytest.raises(UnknownPropertyError):
            mapper.map({"z": 1}, Point)

    def test_strict_toggled_off(self) -> None:
        mapper = mapper_builder().strict().strict(False).build()
        assert mapper.configuration.strict_mode is False

    def test_ignore_unknown_properties(self) -> None:
        mapper = mapper_builder().ignore_unknown_properties().build()
        assert mapper.map_with_report({"z": 1}, Point).report.has_errors() is False

    def test_class_map(self) -> None:
        mapper = mapper_builder().class_map(Shape, Circle).build()
        shape = mapper.map({"name": "c", "radius": 2}, Shape)
        assert shape == Circle(name="c", radius=2.0)

    def test_class_map_validated_on_build(self) -> None:
        builder = mapper_builder().class_map(Shape, "no_such_module.Circle")
        with pytest.raises(ConfigurationError, match="does not exist"):
            builder.build()

    def test_custom_type(self) -> None:
        mapper = mapper_builder().custom_type(Point, lambda value: Point(*value)).build()
        assert mapper.map({"origin": [1, 2]}, Drawing).origin == Point(1, 2)

    def test_custom_type_with_context(self) -> None:
        seen: list[str] = []

        def convert(value: Any, context: MappingContext) -> Point:
            seen.append(context.path)
            return Point(value, value)

        mapper = mapper_builder().custom_type(Point, convert).build()
        assert mapper.map({"origin": 4}, Drawing).origin == Point(4, 4)
        assert seen == ["$.origin"]

    def test_uncallable_converter(self) -> None:
        builder = mapper_builder().custom_type(Point, "not callable")  # type: ignore[arg-type]
        with pytest.raises(ConfigurationError, match="Converter for Point must be callable"):
            builder.build()

    def test_type_handler(self) -> None:
        mapper = mapper_builder().type_handler(PointHandler()).build()
        assert mapper.map({"origin": "5,6"}, Drawing).origin == Point(5, 6)
        assert mapper.map({"origin": {"x": 1}}, Drawing).origin == Point(1, 0)

    def test_name_converter(self) -> None:
        mapper = mapper_builder().name_converter(SnakeCasePropertyNameConverter()).build()
        assert mapper.map({"lineWidth": 3}, Drawing).line_width == 3

    def test_type_cache(self) -> None:
        cache = InMemoryTypeCache()
        mapper = mapper_builder().type_cache(cache).build()
        assert isinstance(mapper.type_provider, CachedTypeProvider)
        mapper.map({"x": 1}, Point)
        assert len(cache) == 1
