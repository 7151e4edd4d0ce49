"""Type layer - property type descriptors and their providers."""

from __future__ import annotations

from json_mapper.types.cache import CachedTypeProvider, InMemoryTypeCache
from json_mapper.types.descriptor import (
    DEFAULT_TYPE,
    CollectionType,
    MixedType,
    ObjectType,
    ScalarType,
    TypeDescriptor,
    UnionType,
)
from json_mapper.types.provider import AnnotationTypeProvider

__all__ = [
    "AnnotationTypeProvider",
    "CachedTypeProvider",
    "InMemoryTypeCache",
    "TypeDescriptor",
    "ScalarType",
    "ObjectType",
    "CollectionType",
    "UnionType",
    "MixedType",
    "DEFAULT_TYPE",
]
