"""Declarative mapping markers.

Property markers are attached through ``typing.Annotated``::

    @dataclass
    class Settings:
        retries: Annotated[int, ReplaceNullWithDefault()] = 10
        since: Annotated[datetime, DateFormat("%d.%m.%Y")] | None = None

Class markers are applied with a decorator::

    @replace_property("full_name", replaces="name")
    @dataclass
    class Person:
        full_name: str = ""
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, TypeVar, get_args, get_origin, get_type_hints

T = TypeVar("T", bound=type)

_RENAMES_ATTRIBUTE = "__json_replace_properties__"


@dataclass(frozen=True)
class ReplaceNullWithDefault:
    """Keep the class-declared default when the input value maps to None."""


@dataclass(frozen=True)
class DateFormat:
    """strptime format used for this date/time property instead of the default."""

    format: str


@dataclass(frozen=True)
class ReplaceProperty:
    """Treat incoming key ``replaces`` as if it were key ``value``."""

    value: str
    replaces: str


def replace_property(value: str, *, replaces: str) -> Callable[[T], T]:
    """Class decorator renaming the incoming key *replaces* to *value*.

    May be applied several times to the same class.
    """

    def decorator(cls: T) -> T:
        # Copy so subclasses do not append to the parent's list
        renames = list(cls.__dict__.get(_RENAMES_ATTRIBUTE, ()))
        renames.append(ReplaceProperty(value=value, replaces=replaces))
        setattr(cls, _RENAMES_ATTRIBUTE, tuple(renames))
        return cls

    return decorator


@lru_cache(maxsize=256)
def class_renames(cls: type) -> tuple[ReplaceProperty, ...]:
    """All ReplaceProperty markers declared on *cls* and its bases."""
    renames: list[ReplaceProperty] = []
    for klass in reversed(cls.__mro__):
        renames.extend(klass.__dict__.get(_RENAMES_ATTRIBUTE, ()))
    return tuple(renames)


def annotation_markers(annotation: Any) -> tuple[Any, ...]:
    """Return the ``Annotated`` extras of *annotation*, looking through ``X | None``."""
    if get_origin(annotation) is Annotated:
        return tuple(annotation.__metadata__)
    markers: list[Any] = []
    for arg in get_args(annotation):
        if get_origin(arg) is Annotated:
            markers.extend(arg.__metadata__)
    return tuple(markers)


@lru_cache(maxsize=256)
def class_hints(cls: type) -> dict[str, Any]:
    """Resolved annotations of *cls* and its bases, ``Annotated`` extras kept.

    When resolution fails the raw annotations are returned. Pydantic model
    fields always use the annotation Pydantic resolved for them. Results are
    cached per class and shared between callers, so never mutate them.
    """
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(klass.__dict__.get("__annotations__", {}))

    fields = getattr(cls, "model_fields", None)
    if isinstance(fields, dict):
        for name, info in fields.items():
            hints[name] = info.rebuild_annotation()
    return hints


@lru_cache(maxsize=1024)
def property_markers(cls: type, property_name: str) -> tuple[Any, ...]:
    hints = class_hints(cls)
    if property_name not in hints:
        return ()
    return annotation_markers(hints[property_name])


def replaces_null_with_default(cls: type, property_name: str) -> bool:
    return any(
        isinstance(marker, ReplaceNullWithDefault)
        for marker in property_markers(cls, property_name)
    )
