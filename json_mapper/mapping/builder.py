"""Mapper builder.

Provides a fluent builder for assembling a configured JsonMapper.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from json_mapper.core.configuration import MapperConfiguration
from json_mapper.core.exceptions import ConfigurationError
from json_mapper.core.registry import TypeHandlerRegistry
from json_mapper.core.resolver import ClassMapEntry, ClassTarget
from json_mapper.mapping.mapper import JsonMapper
from json_mapper.mapping.protocol import (
    Instantiator,
    PropertyNameConverter,
    PropertyWriter,
    TypeHandler,
)
from json_mapper.types.protocol import TypeCache, TypeProvider


def mapper_builder() -> JsonMapperBuilder:
    """Entry point for the mapper builder DSL.

    Returns:
        A builder for chaining mapper declarations.
    """
    return JsonMapperBuilder()


class JsonMapperBuilder:
    """Fluent builder for JsonMapper instances."""

    def __init__(self) -> None:
        self._type_provider: TypeProvider | None = None
        self._type_cache: TypeCache | None = None
        self._class_map: dict[ClassTarget, ClassMapEntry] = {}
        self._custom_types: list[tuple[type, Callable[..., Any]]] = []
        self._handlers: list[TypeHandler] = []
        self._name_converter: PropertyNameConverter | None = None
        self._writer: PropertyWriter | None = None
        self._instantiator: Instantiator | None = None
        self._configuration = MapperConfiguration()

    def type_provider(self, provider: TypeProvider) -> JsonMapperBuilder:
        """Replace the annotation based type provider."""
        self._type_provider = provider
        return self

    def type_cache(self, cache: TypeCache) -> JsonMapperBuilder:
        """Cache resolved property types in *cache*."""
        self._type_cache = cache
        return self

    def class_map(self, declared: ClassTarget, target: ClassMapEntry) -> JsonMapperBuilder:
        """Map *declared* to a class, dotted path, or resolver callable."""
        self._class_map[declared] = target
        return self

    def custom_type(self, target_class: type, converter: Callable[..., Any]) -> JsonMapperBuilder:
        """Convert *target_class* values with *converter*."""
        self._custom_types.append((target_class, converter))
        return self

    def type_handler(self, handler: TypeHandler) -> JsonMapperBuilder:
        self._handlers.append(handler)
        return self

    def name_converter(self, converter: PropertyNameConverter) -> JsonMapperBuilder:
        self._name_converter = converter
        return self

    def writer(self, writer: PropertyWriter) -> JsonMapperBuilder:
        self._writer = writer
        return self

    def instantiator(self, instantiator: Instantiator) -> JsonMapperBuilder:
        self._instantiator = instantiator
        return self

    def configuration(self, configuration: MapperConfiguration) -> JsonMapperBuilder:
        self._configuration = configuration
        return self

    def strict(self, enabled: bool = True) -> JsonMapperBuilder:
        """Enable or disable strict mode for the built mapper."""
        self._configuration = self._configuration.with_strict_mode(enabled)
        return self

    def ignore_unknown_properties(self, enabled: bool = True) -> JsonMapperBuilder:
        self._configuration = self._configuration.with_ignore_unknown_properties(enabled)
        return self

    def build(self) -> JsonMapper:
        """Validate the declarations and build the mapper.

        Raises:
            ConfigurationError: On an unloadable class map entry or a
                custom type registered for a non-class.
        """
        registry = TypeHandlerRegistry()
        for target_class, converter in self._custom_types:
            if not callable(converter):
                raise ConfigurationError(
                    f"Converter for {getattr(target_class, '__qualname__', target_class)} "
                    "must be callable"
                )
            registry.register(target_class, converter)
        for handler in self._handlers:
            registry.add_handler(handler)

        return JsonMapper(
            self._type_provider,
            self._class_map,
            self._name_converter,
            writer=self._writer,
            instantiator=self._instantiator,
            configuration=self._configuration,
            type_cache=self._type_cache,
            custom_types=registry,
        )
