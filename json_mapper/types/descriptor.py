"""Type descriptor data classes.

Frozen dataclasses describing the declared type of a target property.
Produced by a TypeProvider, consumed read-only by the conversion strategies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from json_mapper.core.enums import ScalarKind


@dataclass(frozen=True)
class ScalarType:
    """A builtin int, float, bool or str property."""

    kind: ScalarKind
    nullable: bool = False

    def __str__(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class ObjectType:
    """A class-typed property (nested object, enum, date/time, custom type)."""

    cls: type
    nullable: bool = False
    date_format: str | None = None  # Only consulted for date/time targets

    def __str__(self) -> str:
        return self.cls.__name__


@dataclass(frozen=True)
class CollectionType:
    """A keyed or sequential grouping of a uniform element type.

    ``container`` is the shape the hydrated values are delivered in
    (list, tuple, set, frozenset or dict). ``wrapped_class`` names a
    collection class that receives that structure as its only constructor
    argument.
    """

    key_type: TypeDescriptor
    value_type: TypeDescriptor
    wrapped_class: type | None = None
    container: type = list
    nullable: bool = False

    @property
    def is_mapping(self) -> bool:
        return issubclass(self.container, dict)

    def __str__(self) -> str:
        if self.is_mapping:
            shape = f"dict[{self.key_type}, {self.value_type}]"
        else:
            shape = f"{self.container.__name__}[{self.value_type}]"
        if self.wrapped_class is not None:
            return f"{self.wrapped_class.__name__}<{shape}>"
        return shape


@dataclass(frozen=True)
class UnionType:
    """An ordered list of alternative descriptors."""

    alternatives: tuple[TypeDescriptor, ...] = field(default_factory=tuple)
    nullable: bool = False

    def __str__(self) -> str:
        return " | ".join(str(alternative) for alternative in self.alternatives)


@dataclass(frozen=True)
class MixedType:
    """An untyped property (``Any`` or no annotation at all)."""

    nullable: bool = True

    def __str__(self) -> str:
        return "mixed"


TypeDescriptor = Union[ScalarType, ObjectType, CollectionType, UnionType, MixedType]

# Fallback used by providers when a property carries no usable declaration
DEFAULT_TYPE = ScalarType(ScalarKind.STRING, nullable=True)
