"""Collection hydration.

Converts every element of a list or mapping through the strategy chain
and reshapes the result into the declared container, optionally wrapped
in a collection class.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from json_mapper.core.context import MappingContext
from json_mapper.core.exceptions import CollectionMappingError, TypeMismatchError
from json_mapper.core.resolver import ClassResolver
from json_mapper.mapping.converter import UNMAPPED, ValueConverter
from json_mapper.mapping.protocol import Instantiator
from json_mapper.types.descriptor import CollectionType, TypeDescriptor


class CollectionFactory:
    """Builds collections from iterable JSON fragments.

    Args:
        value_converter: Chain used to convert each element.
        class_resolver: Resolves wrapping collection classes.
        instantiator: Creates wrapping collection instances.
    """

    def __init__(
        self,
        value_converter: ValueConverter,
        class_resolver: ClassResolver,
        instantiator: Instantiator,
    ) -> None:
        self._value_converter = value_converter
        self._class_resolver = class_resolver
        self._instantiator = instantiator

    def map_iterable(
        self, json: Any, value_type: TypeDescriptor, context: MappingContext
    ) -> dict[Any, Any] | None:
        """Convert every element of *json*, keyed like the input.

        List indices become int keys; mapping keys are kept verbatim and in
        input order. Elements that fail conversion are left out. Returns None
        for null input (an empty dict when null is treated as an empty
        collection) and for non-iterable input, which is reported as a
        CollectionMappingError.
        """
        if json is None:
            return {} if context.should_treat_null_as_empty_collection else None

        if isinstance(json, Mapping):
            items = list(json.items())
        elif isinstance(json, (list, tuple)):
            items = list(enumerate(json))
        else:
            context.report(CollectionMappingError(context.path, type(json).__name__))
            return None

        result: dict[Any, Any] = {}
        for key, item in items:
            converted = context.with_path_segment(
                key, lambda ctx, item=item: self._value_converter.convert(item, value_type, ctx)
            )
            if converted is not UNMAPPED:
                result[key] = converted
        return result

    def from_collection_type(
        self, collection_type: CollectionType, json: Any, context: MappingContext
    ) -> Any:
        """Hydrate *json* as *collection_type*.

        The converted elements are delivered in the declared container. A
        wrapping collection class receives that container as its only
        constructor argument. Non-iterable input comes back as UNMAPPED.
        """
        mapped = self.map_iterable(json, collection_type.value_type, context)
        if mapped is None:
            return None if json is None else UNMAPPED

        shaped = self._shape(mapped, collection_type, context)

        if collection_type.wrapped_class is None:
            return shaped

        wrapper = self._class_resolver.resolve(collection_type.wrapped_class, json, context)
        return self._instantiator.create(wrapper, shaped)

    def _shape(
        self, mapped: dict[Any, Any], collection_type: CollectionType, context: MappingContext
    ) -> Any:
        if collection_type.is_mapping:
            return mapped
        try:
            return collection_type.container(mapped.values())
        except TypeError:
            # Unhashable elements cannot go into a set
            context.report(TypeMismatchError(context.path, str(collection_type), "list"))
            return list(mapped.values())
