"""JSON to object mapper.

JsonMapper walks decoded JSON (dicts, lists and scalars) together with the
declared property types of a target class and hydrates instances of it.

Usage::

    mapper = JsonMapper()
    person = mapper.map({"name": "Ada", "age": "36"}, Person)

    result = mapper.map_with_report(payload, Person)
    if result.report.has_errors():
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from json_mapper.core.configuration import MapperConfiguration
from json_mapper.core.context import MappingContext
from json_mapper.core.enums import ScalarKind
from json_mapper.core.exceptions import (
    MappingViolation,
    MissingPropertyError,
    PropertyNotWritable,
    ReadonlyPropertyError,
    TypeMismatchError,
    UnknownPropertyError,
)
from json_mapper.core.registry import TypeHandlerRegistry
from json_mapper.core.report import MappingError, MappingReport, MappingResult
from json_mapper.core.resolver import ClassMapEntry, ClassResolver, ClassTarget, load_class
from json_mapper.mapping.access import AttributePropertyWriter, DefaultInstantiator
from json_mapper.mapping.collection import CollectionFactory
from json_mapper.mapping.converter import UNMAPPED, ValueConverter
from json_mapper.mapping.protocol import (
    Instantiator,
    PropertyNameConverter,
    PropertyWriter,
    TypeHandler,
)
from json_mapper.mapping.strategies import (
    BuiltinValueConversionStrategy,
    CollectionValueConversionStrategy,
    CustomTypeValueConversionStrategy,
    DateTimeValueConversionStrategy,
    EnumValueConversionStrategy,
    NullValueConversionStrategy,
    ObjectValueConversionStrategy,
    PassthroughValueConversionStrategy,
    UnionValueConversionStrategy,
)
from json_mapper.types.cache import CachedTypeProvider
from json_mapper.types.descriptor import CollectionType, ObjectType, ScalarType, TypeDescriptor
from json_mapper.types.metadata import class_renames, replaces_null_with_default
from json_mapper.types.protocol import TypeCache, TypeProvider
from json_mapper.types.provider import AnnotationTypeProvider

logger = logging.getLogger(__name__)

_INT_KEY = ScalarType(ScalarKind.INT)
_STRING_KEY = ScalarType(ScalarKind.STRING)


def _is_composite_iterable(json: Any) -> bool:
    """True for a list or mapping whose every element is a dict or list."""
    if isinstance(json, Mapping):
        values: Any = json.values()
    elif isinstance(json, (list, tuple)):
        values = json
    else:
        return False
    return all(isinstance(value, (Mapping, list, tuple)) for value in values)


def _is_sequential(json: Any) -> bool:
    if isinstance(json, (list, tuple)):
        return True
    return any(isinstance(key, int) and not isinstance(key, bool) for key in json)


@dataclass(frozen=True)
class _Pipeline:
    """Strategy chain bound to one class resolver."""

    class_resolver: ClassResolver
    converter: ValueConverter
    collection_factory: CollectionFactory


class JsonMapper:
    """Maps decoded JSON onto typed objects.

    Args:
        type_provider: Source of declared property types. Defaults to an
            AnnotationTypeProvider.
        class_map: Declared class → target class, dotted path, or resolver
            callable. Validated eagerly.
        name_converter: Optional converter applied to every incoming key.
        writer: Property writer. Defaults to AttributePropertyWriter.
        instantiator: Object factory. Defaults to DefaultInstantiator.
        configuration: Default configuration for calls that pass none.
        type_cache: When given, wraps the provider in a CachedTypeProvider.
        custom_types: Pre-populated custom type registry.

    Raises:
        ConfigurationError: If the class map references unloadable classes.
    """

    def __init__(
        self,
        type_provider: TypeProvider | None = None,
        class_map: Mapping[ClassTarget, ClassMapEntry] | None = None,
        name_converter: PropertyNameConverter | None = None,
        *,
        writer: PropertyWriter | None = None,
        instantiator: Instantiator | None = None,
        configuration: MapperConfiguration | None = None,
        type_cache: TypeCache | None = None,
        custom_types: TypeHandlerRegistry | None = None,
    ) -> None:
        provider: TypeProvider = (
            type_provider if type_provider is not None else AnnotationTypeProvider()
        )
        if type_cache is not None:
            provider = CachedTypeProvider(provider, type_cache)

        self._type_provider = provider
        self._class_resolver = ClassResolver(class_map)
        self._name_converter = name_converter
        self._writer: PropertyWriter = writer if writer is not None else AttributePropertyWriter()
        self._instantiator: Instantiator = (
            instantiator if instantiator is not None else DefaultInstantiator()
        )
        self._configuration = configuration if configuration is not None else MapperConfiguration()
        self._custom_types = custom_types if custom_types is not None else TypeHandlerRegistry()
        self._pipeline = self._build_pipeline(self._class_resolver)

    @property
    def configuration(self) -> MapperConfiguration:
        return self._configuration

    @property
    def type_provider(self) -> TypeProvider:
        return self._type_provider

    # --- Registration ---

    def add_type(self, target_class: type, converter: Any) -> JsonMapper:
        """Register a converter ``(value)`` or ``(value, context)`` for *target_class*."""
        self._custom_types.register(target_class, converter)
        return self

    def add_type_handler(self, handler: TypeHandler) -> JsonMapper:
        self._custom_types.add_handler(handler)
        return self

    def add_custom_class_map_entry(
        self, declared: ClassTarget, resolver: ClassMapEntry
    ) -> JsonMapper:
        """Add a class map rule (class, dotted path, or resolver callable)."""
        self._class_resolver.add(declared, resolver)
        return self

    # --- Mapping ---

    def map(
        self,
        json: Any,
        target: ClassTarget | None = None,
        collection_class: ClassTarget | None = None,
        class_map: Mapping[ClassTarget, ClassMapEntry] | None = None,
        configuration: MapperConfiguration | None = None,
    ) -> Any:
        """Map *json* onto *target*.

        Without a target the input is returned unchanged. A list of objects
        yields a list of instances, or an instance of *collection_class*
        when one is given.

        Raises:
            MappingViolation: In strict mode, on the first data error.
            ConfigurationError: On an unloadable class or misconfigured chain.
        """
        context = self._create_context(json, configuration)
        value = self._map_root(json, target, collection_class, class_map, context)

        if context.errors:
            logger.debug(
                "Mapping to %s finished with %d unreported error(s)", target, len(context.errors)
            )
        return value

    def map_with_report(
        self,
        json: Any,
        target: ClassTarget | None = None,
        collection_class: ClassTarget | None = None,
        class_map: Mapping[ClassTarget, ClassMapEntry] | None = None,
        configuration: MapperConfiguration | None = None,
    ) -> MappingResult:
        """Map *json* and return the value together with its error report.

        Data errors never raise here. When strict mode aborts the run the
        value is None and the report holds the violation.

        Raises:
            ConfigurationError: On an unloadable class or misconfigured chain.
        """
        context = self._create_context(json, configuration)
        errors: list[MappingError]

        try:
            value = self._map_root(json, target, collection_class, class_map, context)
            errors = context.errors
        except MappingViolation as e:
            value = None
            errors = context.errors
            if not any(error.cause is e for error in errors):
                errors.append(MappingError(path=e.path, message=str(e), cause=e))

        return MappingResult(value=value, report=MappingReport(tuple(errors)))

    def _create_context(
        self, json: Any, configuration: MapperConfiguration | None
    ) -> MappingContext:
        config = configuration if configuration is not None else self._configuration
        return MappingContext(json, config.to_options())

    def _map_root(
        self,
        json: Any,
        target: ClassTarget | None,
        collection_class: ClassTarget | None,
        class_map: Mapping[ClassTarget, ClassMapEntry] | None,
        context: MappingContext,
    ) -> Any:
        if target is None:
            return json

        target_class = load_class(target)
        wrapper = load_class(collection_class) if collection_class is not None else None
        pipeline = self._pipeline
        if class_map:
            pipeline = self._build_pipeline(self._class_resolver.merged(class_map))

        if json is None:
            return None

        if _is_composite_iterable(json):
            element_type = ObjectType(target_class)
            if wrapper is not None:
                if isinstance(json, Mapping):
                    root_type = CollectionType(
                        _STRING_KEY, element_type, wrapped_class=wrapper, container=dict
                    )
                else:
                    root_type = CollectionType(_INT_KEY, element_type, wrapped_class=wrapper)
                return pipeline.collection_factory.from_collection_type(root_type, json, context)

            if _is_sequential(json):
                return pipeline.collection_factory.from_collection_type(
                    CollectionType(_INT_KEY, element_type), json, context
                )
            # A string keyed mapping without collection class is one object

        resolved = pipeline.class_resolver.resolve(target_class, json, context)
        if not isinstance(json, Mapping):
            context.report(TypeMismatchError(context.path, resolved.__name__, type(json).__name__))
        return self._map_object(json, resolved, context, pipeline)

    # --- Object hydration ---

    def _map_object(
        self, json: Any, cls: type, context: MappingContext, pipeline: _Pipeline
    ) -> Any:
        entity = self._instantiator.create(cls)
        if not isinstance(json, Mapping):
            return entity

        properties = self._type_provider.get_properties(cls)
        declared = set(properties)
        renames = {rename.replaces: rename.value for rename in class_renames(cls)}
        provided: set[str] = set()

        for key, raw in json.items():
            name = renames.get(str(key), str(key))
            if self._name_converter is not None:
                name = self._name_converter.convert(name)

            if name not in declared:
                context.with_path_segment(
                    name, lambda ctx, name=name: self._unknown_property(ctx, name, cls)
                )
                continue

            provided.add(name)
            type_ = self._type_provider.get_property_type(cls, name)
            context.with_path_segment(
                name,
                lambda ctx, name=name, raw=raw, type_=type_: self._map_property(
                    entity, cls, name, raw, type_, ctx, pipeline
                ),
            )

        if context.is_strict_mode:
            self._check_missing(cls, properties, provided, context)

        return entity

    def _unknown_property(self, context: MappingContext, name: str, cls: type) -> None:
        if not context.is_strict_mode and context.should_ignore_unknown_properties:
            return
        context.report(UnknownPropertyError(context.path, name, cls))

    def _map_property(
        self,
        entity: Any,
        cls: type,
        name: str,
        raw: Any,
        type_: TypeDescriptor,
        context: MappingContext,
        pipeline: _Pipeline,
    ) -> None:
        value = raw
        if value == "" and isinstance(value, str) and context.should_treat_empty_string_as_null:
            value = None

        converted = pipeline.converter.convert(value, type_, context)
        if converted is UNMAPPED:
            return

        if converted is None and replaces_null_with_default(cls, name):
            return

        try:
            self._writer.write(entity, name, converted)
        except PropertyNotWritable:
            context.report(ReadonlyPropertyError(context.path, name, cls))
        except (TypeError, ValueError) as e:
            violation = TypeMismatchError(context.path, str(type_), type(converted).__name__)
            context.record_exception(violation)
            if context.is_strict_mode:
                raise violation from e
            logger.debug("Write of %s.%s rejected: %s", cls.__qualname__, name, e)

    def _check_missing(
        self, cls: type, properties: list[str], provided: set[str], context: MappingContext
    ) -> None:
        for name in properties:
            if name in provided or self._type_provider.has_default(cls, name):
                continue
            if self._type_provider.get_property_type(cls, name).nullable:
                continue
            context.with_path_segment(
                name,
                lambda ctx, name=name: ctx.report(MissingPropertyError(ctx.path, name, cls)),
            )

    # --- Chain assembly ---

    def _build_pipeline(self, class_resolver: ClassResolver) -> _Pipeline:
        converter = ValueConverter()
        factory = CollectionFactory(converter, class_resolver, self._instantiator)

        def map_object(json: Any, cls: type, context: MappingContext) -> Any:
            return self._map_object(json, cls, context, pipeline)

        for strategy in (
            NullValueConversionStrategy(),
            UnionValueConversionStrategy(converter),
            CustomTypeValueConversionStrategy(self._custom_types),
            EnumValueConversionStrategy(),
            DateTimeValueConversionStrategy(),
            CollectionValueConversionStrategy(factory),
            ObjectValueConversionStrategy(class_resolver, map_object),
            BuiltinValueConversionStrategy(),
            PassthroughValueConversionStrategy(),
        ):
            converter.add_strategy(strategy)

        pipeline = _Pipeline(class_resolver, converter, factory)
        return pipeline
