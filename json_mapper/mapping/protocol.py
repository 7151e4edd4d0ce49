"""Mapping protocols.

The conversion chain is built from ValueConversionStrategy objects; custom
types plug in as TypeHandler objects. PropertyWriter, Instantiator and
PropertyNameConverter are the seams to object construction and naming.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from json_mapper.core.context import MappingContext
from json_mapper.types.descriptor import TypeDescriptor


@runtime_checkable
class ValueConversionStrategy(Protocol):
    """One link of the conversion chain."""

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        """Return True when this strategy should convert *value*."""
        ...

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        """Convert *value* into a representation of *type_*."""
        ...


@runtime_checkable
class TypeHandler(Protocol):
    """User supplied converter for specific target types."""

    def supports(self, type_: TypeDescriptor, value: Any) -> bool: ...

    def convert(self, type_: TypeDescriptor, value: Any, context: MappingContext) -> Any: ...


@runtime_checkable
class PropertyWriter(Protocol):
    """Assigns converted values to entity properties."""

    def write(self, entity: Any, property_name: str, value: Any) -> None:
        """Write *value*.

        Raises:
            PropertyNotWritable: If the property is read-only.
            TypeError | ValueError: If the write layer rejects the value.
        """
        ...

    def is_initialized(self, entity: Any, property_name: str) -> bool:
        """True when the property already holds a value."""
        ...


@runtime_checkable
class Instantiator(Protocol):
    """Creates target instances."""

    def create(self, cls: type, *args: Any) -> Any: ...


@runtime_checkable
class PropertyNameConverter(Protocol):
    """Maps an incoming JSON key to a property name. Must be total."""

    def convert(self, name: str) -> str: ...
