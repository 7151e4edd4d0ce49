"""json_mapper - map decoded JSON onto typed Python objects."""

from __future__ import annotations

from json_mapper.core.configuration import MapperConfiguration
from json_mapper.core.context import ISO_8601_FORMAT, MappingContext
from json_mapper.core.enums import ScalarKind
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
from json_mapper.core.registry import CallableTypeHandler, TypeHandlerRegistry
from json_mapper.core.report import MappingError, MappingReport, MappingResult
from json_mapper.core.resolver import ClassResolver
from json_mapper.mapping.builder import JsonMapperBuilder, mapper_builder
from json_mapper.mapping.mapper import JsonMapper
from json_mapper.mapping.naming import (
    CamelCasePropertyNameConverter,
    SnakeCasePropertyNameConverter,
)
from json_mapper.types.cache import CachedTypeProvider, InMemoryTypeCache
from json_mapper.types.metadata import (
    DateFormat,
    ReplaceNullWithDefault,
    ReplaceProperty,
    replace_property,
)
from json_mapper.types.provider import AnnotationTypeProvider

__all__ = [
    # Mapper
    "JsonMapper",
    "JsonMapperBuilder",
    "mapper_builder",
    # Configuration
    "MapperConfiguration",
    "MappingContext",
    "ISO_8601_FORMAT",
    # Reports
    "MappingError",
    "MappingReport",
    "MappingResult",
    # Resolution
    "ClassResolver",
    "TypeHandlerRegistry",
    "CallableTypeHandler",
    # Types
    "AnnotationTypeProvider",
    "CachedTypeProvider",
    "InMemoryTypeCache",
    "ScalarKind",
    # Markers
    "DateFormat",
    "ReplaceNullWithDefault",
    "ReplaceProperty",
    "replace_property",
    # Naming
    "CamelCasePropertyNameConverter",
    "SnakeCasePropertyNameConverter",
    # Exceptions
    "JsonMapperError",
    "ConfigurationError",
    "MappingViolation",
    "UnknownPropertyError",
    "MissingPropertyError",
    "TypeMismatchError",
    "CollectionMappingError",
    "ReadonlyPropertyError",
    "PropertyNotWritable",
]
