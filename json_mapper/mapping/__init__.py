"""Mapping layer - hydrate typed objects from decoded JSON."""

from __future__ import annotations

from json_mapper.mapping.access import AttributePropertyWriter, DefaultInstantiator
from json_mapper.mapping.builder import JsonMapperBuilder, mapper_builder
from json_mapper.mapping.collection import CollectionFactory
from json_mapper.mapping.converter import UNMAPPED, ValueConverter
from json_mapper.mapping.mapper import JsonMapper
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

__all__ = [
    "JsonMapper",
    "JsonMapperBuilder",
    "mapper_builder",
    "ValueConverter",
    "UNMAPPED",
    "CollectionFactory",
    "DefaultInstantiator",
    "AttributePropertyWriter",
    "NullValueConversionStrategy",
    "UnionValueConversionStrategy",
    "CustomTypeValueConversionStrategy",
    "EnumValueConversionStrategy",
    "DateTimeValueConversionStrategy",
    "CollectionValueConversionStrategy",
    "ObjectValueConversionStrategy",
    "BuiltinValueConversionStrategy",
    "PassthroughValueConversionStrategy",
]
