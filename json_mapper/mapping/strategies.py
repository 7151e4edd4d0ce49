"""Value conversion strategies.

Each strategy declares ``supports`` and ``convert``. The ValueConverter
tries them in a fixed order and the first supporting strategy wins:

    Null → Union → CustomType → Enum → DateTime → Collection → Object
    → Builtin → Passthrough

Data errors are handed to ``MappingContext.report`` which records them and
raises in strict mode. A lenient failure returns ``UNMAPPED`` so nothing is
written for the value, and traversal continues.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, cast

from json_mapper.core.context import MappingContext
from json_mapper.core.enums import ScalarKind
from json_mapper.core.exceptions import TypeMismatchError
from json_mapper.core.registry import TypeHandlerRegistry
from json_mapper.core.resolver import ClassResolver
from json_mapper.mapping.converter import UNMAPPED
from json_mapper.types.descriptor import (
    CollectionType,
    MixedType,
    ObjectType,
    ScalarType,
    TypeDescriptor,
    UnionType,
)

if TYPE_CHECKING:
    from json_mapper.mapping.collection import CollectionFactory
    from json_mapper.mapping.converter import ValueConverter

ObjectMapper = Callable[[Any, type, MappingContext], Any]

_DATE_TYPES = (datetime, date, time, timedelta)
_SCALAR_VALUES = (str, int, float, bool)
_BOOL_STRINGS = {"1": True, "true": True, "0": False, "false": False}

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_DURATION_PATTERN = re.compile(
    r"^(?P<sign>[-+])?P"
    r"(?:(?P<years>\d+)Y)?(?:(?P<months>\d+)M)?(?:(?P<weeks>\d+)W)?(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+(?:[.,]\d+)?)S)?)?$"
)
_DURATION_UNITS = ("years", "months", "weeks", "days", "hours", "minutes", "seconds")


def parse_iso_duration(text: str) -> timedelta:
    """Parse an ISO-8601 duration such as ``P1DT2H30M`` or ``PT0.5S``.

    Years count as 365 days and months as 30 days, since timedelta has no
    calendar aware units.

    Raises:
        ValueError: If *text* is not a valid duration.
    """
    match = _DURATION_PATTERN.match(text.strip())
    if match is None or text.strip().endswith("T"):
        raise ValueError(f"Invalid ISO-8601 duration: {text!r}")

    parts = {unit: match.group(unit) for unit in _DURATION_UNITS}
    if all(part is None for part in parts.values()):
        raise ValueError(f"Invalid ISO-8601 duration: {text!r}")

    values = {unit: float(part.replace(",", ".")) if part else 0.0 for unit, part in parts.items()}
    duration = timedelta(
        days=values["years"] * 365 + values["months"] * 30 + values["days"],
        weeks=values["weeks"],
        hours=values["hours"],
        minutes=values["minutes"],
        seconds=values["seconds"],
    )
    return -duration if match.group("sign") == "-" else duration


def _type_name(value: Any) -> str:
    return type(value).__name__


def _guard_null(value: Any, type_: ObjectType, context: MappingContext) -> bool:
    """Return True when *value* is None, reporting it for non-nullable targets."""
    if value is not None:
        return False
    if not type_.nullable:
        context.report(TypeMismatchError(context.path, type_.cls.__name__, _type_name(None)))
    return True


def _is_date_class(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, _DATE_TYPES)


def _is_enum_class(cls: type) -> bool:
    return isinstance(cls, type) and issubclass(cls, Enum)


# --- Null ---


class NullValueConversionStrategy:
    """Short-circuits None for every target type.

    Collection targets are left to the collection strategy when null should
    become an empty collection.
    """

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        if value is not None:
            return False
        return not (
            isinstance(type_, CollectionType) and context.should_treat_null_as_empty_collection
        )

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        return None


# --- Union ---


class UnionValueConversionStrategy:
    """Selects the union alternative matching the value and re-dispatches.

    Selection order: an alternative of exactly the value's scalar type or
    class, then the first object alternative for mappings, the first
    collection alternative for lists, the first scalar-like alternative for
    scalars, and finally the first alternative.
    """

    def __init__(self, converter: ValueConverter) -> None:
        self._converter = converter

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        return isinstance(type_, UnionType)

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        return self._converter.convert(value, self.select(value, cast(UnionType, type_)), context)

    def select(self, value: Any, type_: UnionType) -> TypeDescriptor:
        alternatives = type_.alternatives
        if not alternatives:
            return MixedType()

        for alternative in alternatives:
            if isinstance(alternative, ScalarType) and type(value) is alternative.kind.python_type:
                return alternative
            if isinstance(alternative, ObjectType) and isinstance(value, alternative.cls):
                return alternative

        if isinstance(value, Mapping):
            for alternative in alternatives:
                if isinstance(alternative, ObjectType) and not (
                    _is_enum_class(alternative.cls) or _is_date_class(alternative.cls)
                ):
                    return alternative
            for alternative in alternatives:
                if isinstance(alternative, CollectionType) and alternative.is_mapping:
                    return alternative

        if isinstance(value, (list, tuple)):
            for alternative in alternatives:
                if isinstance(alternative, CollectionType):
                    return alternative

        if isinstance(value, _SCALAR_VALUES):
            for alternative in alternatives:
                if isinstance(alternative, ScalarType):
                    return alternative
                if isinstance(alternative, ObjectType) and (
                    _is_enum_class(alternative.cls) or _is_date_class(alternative.cls)
                ):
                    return alternative

        return alternatives[0]


# --- Custom types ---


class CustomTypeValueConversionStrategy:
    """Delegates to user registered type handlers."""

    def __init__(self, registry: TypeHandlerRegistry) -> None:
        self._registry = registry

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        return self._registry.supports(type_, value)

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        return self._registry.convert(type_, value, context)


# --- Enums ---


class EnumValueConversionStrategy:
    """Converts int/str values to enum members by value."""

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        return isinstance(type_, ObjectType) and _is_enum_class(type_.cls)

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        object_type = cast(ObjectType, type_)
        if _guard_null(value, object_type, context):
            return None

        cls = object_type.cls
        if isinstance(value, cls):
            return value

        if isinstance(value, (int, str)) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass

        context.report(TypeMismatchError(context.path, cls.__name__, _type_name(value)))
        return UNMAPPED


# --- Dates and durations ---


class DateTimeValueConversionStrategy:
    """Parses datetime, date, time and timedelta targets.

    Strings are parsed with the property's DateFormat, or the configured
    default format, falling back to ISO-8601. Integers are UNIX timestamps
    (UTC). Durations accept the ISO-8601 duration grammar only.
    """

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        return isinstance(type_, ObjectType) and _is_date_class(type_.cls)

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        object_type = cast(ObjectType, type_)
        if _guard_null(value, object_type, context):
            return None

        cls = object_type.cls
        if isinstance(value, cls):
            return value

        date_format = object_type.date_format or context.default_date_format
        try:
            parsed = self._parse(cls, value, date_format)
        except (ValueError, OverflowError, OSError):
            parsed = None

        if parsed is None:
            context.report(TypeMismatchError(context.path, cls.__name__, _type_name(value)))
            return UNMAPPED
        return parsed

    def _parse(self, cls: type, value: Any, date_format: str) -> Any:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            return None

        if issubclass(cls, timedelta):
            return parse_iso_duration(value) if isinstance(value, str) else None

        if issubclass(cls, datetime):
            if isinstance(value, int):
                return cls.fromtimestamp(value, tz=timezone.utc)
            try:
                return cls.strptime(value, date_format)
            except ValueError:
                return cls.fromisoformat(value)

        if issubclass(cls, date):
            if isinstance(value, int):
                return datetime.fromtimestamp(value, tz=timezone.utc).date()
            try:
                return datetime.strptime(value, date_format).date()
            except ValueError:
                return cls.fromisoformat(value)

        # time
        if isinstance(value, int):
            return None
        try:
            return datetime.strptime(value, date_format).timetz()
        except ValueError:
            return cls.fromisoformat(value)


# --- Collections ---


class CollectionValueConversionStrategy:
    """Delegates collection targets to the CollectionFactory."""

    def __init__(self, factory: CollectionFactory) -> None:
        self._factory = factory

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        return isinstance(type_, CollectionType)

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        return self._factory.from_collection_type(cast(CollectionType, type_), value, context)


# --- Objects ---


class ObjectValueConversionStrategy:
    """Resolves the concrete class and recurses into the mapper.

    Args:
        class_resolver: Applies class map rules to the declared class.
        mapper: Callback ``(json, cls, context)`` hydrating one object.
    """

    def __init__(self, class_resolver: ClassResolver, mapper: ObjectMapper) -> None:
        self._class_resolver = class_resolver
        self._mapper = mapper

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        return isinstance(type_, ObjectType)

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        object_type = cast(ObjectType, type_)
        if _guard_null(value, object_type, context):
            return None

        resolved = self._class_resolver.resolve(object_type.cls, value, context)

        if isinstance(value, resolved):
            return value

        if not isinstance(value, Mapping):
            if context.should_allow_scalar_to_object_casting and isinstance(value, _SCALAR_VALUES):
                return self._cast(resolved, value, context)
            context.report(TypeMismatchError(context.path, resolved.__name__, _type_name(value)))
            return UNMAPPED

        return self._mapper(value, resolved, context)

    def _cast(self, cls: type, value: Any, context: MappingContext) -> Any:
        try:
            return cls(value)
        except (TypeError, ValueError):
            context.report(TypeMismatchError(context.path, cls.__name__, _type_name(value)))
            return UNMAPPED


# --- Builtin scalars ---


class BuiltinValueConversionStrategy:
    """Narrowing coercion for int, float, bool and str targets.

    - int: numeric strings and floats are converted, bools are rejected
    - float: ints and numeric strings are converted
    - bool: ``"true"``/``"1"`` and 1 → True, ``"false"``/``"0"`` and 0 →
      False; strings are trimmed and compared case-insensitively
    - str: only strings are accepted

    Any other value is reported as a mismatch and comes back as UNMAPPED.
    """

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        return isinstance(type_, ScalarType)

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        scalar_type = cast(ScalarType, type_)
        kind = scalar_type.kind

        if value is None:
            if scalar_type.nullable:
                return None
            context.report(TypeMismatchError(context.path, kind.value, _type_name(value)))
            return UNMAPPED

        normalized = self._normalize(value, kind)
        if normalized is not None:
            return normalized

        context.report(TypeMismatchError(context.path, kind.value, _type_name(value)))
        return UNMAPPED

    def _normalize(self, value: Any, kind: ScalarKind) -> Any:
        """Return the coerced value, or None when *value* is incompatible."""
        if kind is ScalarKind.STRING:
            return value if isinstance(value, str) else None

        if kind is ScalarKind.BOOL:
            if isinstance(value, bool):
                return value
            if isinstance(value, str):
                return _BOOL_STRINGS.get(value.strip().lower())
            if isinstance(value, int) and value in (0, 1):
                return value == 1
            return None

        if isinstance(value, bool):
            return None

        if kind is ScalarKind.INT:
            if isinstance(value, int):
                return value
            if isinstance(value, float):
                return int(value)
            if isinstance(value, str) and _INT_PATTERN.match(value.strip()):
                return int(value.strip())
            return None

        # float
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str) and _FLOAT_PATTERN.match(value.strip()):
            return float(value.strip())
        return None


# --- Fallback ---


class PassthroughValueConversionStrategy:
    """Catch-all returning the value unchanged."""

    def supports(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> bool:
        return True

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        return value
