"""Type metadata protocols.

A TypeProvider answers "which properties does this class declare and what
is their type". A TypeCache memoises those answers across mapping runs.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from json_mapper.types.descriptor import TypeDescriptor


@runtime_checkable
class TypeProvider(Protocol):
    """Source of declared property types.

    Must be deterministic for a given (class, property) pair within one
    process, which is what makes caching safe.
    """

    def get_properties(self, cls: type) -> list[str]:
        """Names of all writable properties declared on *cls*, in declaration order."""
        ...

    def get_property_type(self, cls: type, property_name: str) -> TypeDescriptor:
        """Declared type of *property_name*, or the provider's default type."""
        ...

    def has_default(self, cls: type, property_name: str) -> bool:
        """True when the property carries a class-declared default value."""
        ...


@runtime_checkable
class TypeCache(Protocol):
    """Key/value store for resolved type descriptors."""

    def get(self, key: str) -> TypeDescriptor | None:
        """Return the cached descriptor, or None on a miss."""
        ...

    def put(self, key: str, descriptor: TypeDescriptor) -> None:
        """Store *descriptor* under *key*."""
        ...
