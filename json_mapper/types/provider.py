"""Annotation based type provider.

Builds type descriptors from class annotations. Supports dataclasses,
Pydantic models and plain annotated classes, plus writable properties and
``set_<name>`` setter methods.
"""

from __future__ import annotations

import dataclasses
import inspect
import types
from collections import UserDict, UserList
from collections.abc import (
    Collection,
    Iterable,
    Mapping,
    MutableMapping,
    MutableSequence,
    MutableSet,
    Sequence,
)
from collections.abc import Set as AbstractSet
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    ClassVar,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from json_mapper.core.enums import ScalarKind
from json_mapper.types.descriptor import (
    DEFAULT_TYPE,
    CollectionType,
    MixedType,
    ObjectType,
    ScalarType,
    TypeDescriptor,
    UnionType,
)
from json_mapper.types.metadata import DateFormat, class_hints

_SEQUENCE_CONTAINERS: dict[Any, type] = {
    list: list,
    tuple: tuple,
    set: set,
    frozenset: frozenset,
    Sequence: list,
    MutableSequence: list,
    Iterable: list,
    Collection: list,
    AbstractSet: set,
    MutableSet: set,
}
_MAPPING_CONTAINERS = (dict, Mapping, MutableMapping)
_WRAPPABLE_SEQUENCES = (list, UserList, Sequence)
_WRAPPABLE_MAPPINGS = (dict, UserDict, Mapping)

_INT_KEY = ScalarType(ScalarKind.INT)
_STRING_KEY = ScalarType(ScalarKind.STRING)

SETTER_PREFIX = "set_"


def _is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    try:
        from pydantic import BaseModel

        return isinstance(cls, type) and issubclass(cls, BaseModel)
    except ImportError:
        return False


def _is_class_var(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


@lru_cache(maxsize=256)
def _settable_properties(cls: type) -> dict[str, property]:
    found: dict[str, property] = {}
    for name, member in inspect.getmembers(cls, lambda m: isinstance(m, property)):
        if member.fset is not None and not name.startswith("_"):
            found[name] = member
    return found


@lru_cache(maxsize=256)
def _setter_methods(cls: type) -> dict[str, Any]:
    found: dict[str, Any] = {}
    for name, member in inspect.getmembers(cls, inspect.isfunction):
        if name.startswith(SETTER_PREFIX) and len(name) > len(SETTER_PREFIX):
            found[name[len(SETTER_PREFIX) :]] = member
    return found


@lru_cache(maxsize=256)
def _declared_properties(cls: type) -> tuple[str, ...]:
    names: list[str] = []

    if _is_pydantic_model(cls):
        names.extend(cls.model_fields)  # type: ignore[attr-defined]
    elif dataclasses.is_dataclass(cls):
        names.extend(f.name for f in dataclasses.fields(cls))

    for name, annotation in class_hints(cls).items():
        if name.startswith("_") or _is_class_var(annotation):
            continue
        names.append(name)

    names.extend(_settable_properties(cls))
    names.extend(_setter_methods(cls))

    # Preserve declaration order, drop duplicates and private names
    return tuple(name for name in dict.fromkeys(names) if not name.startswith("_"))


class AnnotationTypeProvider:
    """TypeProvider reading ``typing`` annotations.

    Args:
        default_type: Descriptor returned for properties without a usable
            annotation. Defaults to a nullable ``str``.
    """

    def __init__(self, default_type: TypeDescriptor = DEFAULT_TYPE) -> None:
        self._default_type = default_type

    @property
    def default_type(self) -> TypeDescriptor:
        return self._default_type

    # --- TypeProvider protocol ---

    def get_properties(self, cls: type) -> list[str]:
        return list(_declared_properties(cls))

    def get_property_type(self, cls: type, property_name: str) -> TypeDescriptor:
        hints = class_hints(cls)
        if property_name in hints:
            return self.describe(hints[property_name])

        prop = _settable_properties(cls).get(property_name)
        if prop is not None:
            return self._describe_property(prop)

        setter = _setter_methods(cls).get(property_name)
        if setter is not None:
            return self._describe_setter(setter)

        return self._default_type

    def has_default(self, cls: type, property_name: str) -> bool:
        if _is_pydantic_model(cls):
            field = cls.model_fields.get(property_name)  # type: ignore[attr-defined]
            if field is not None:
                return not field.is_required()

        if dataclasses.is_dataclass(cls):
            for f in dataclasses.fields(cls):
                if f.name == property_name:
                    return (
                        f.default is not dataclasses.MISSING
                        or f.default_factory is not dataclasses.MISSING
                    )

        # Plain classes: a class attribute, a property or a setter all count
        for klass in cls.__mro__:
            if property_name in klass.__dict__:
                return True
        return property_name in _setter_methods(cls)

    # --- Annotation conversion ---

    def describe(self, annotation: Any, nullable: bool = False) -> TypeDescriptor:
        """Convert a type annotation into a descriptor."""
        if get_origin(annotation) is Annotated:
            markers = annotation.__metadata__
            annotation = get_args(annotation)[0]
            date_format = next((m.format for m in markers if isinstance(m, DateFormat)), None)
            described = self.describe(annotation, nullable)
            if date_format is not None and isinstance(described, ObjectType):
                return dataclasses.replace(described, date_format=date_format)
            return described

        if annotation is Any or annotation is object or isinstance(annotation, TypeVar):
            return MixedType()
        if annotation is None or annotation is type(None):
            return MixedType()
        if isinstance(annotation, str):
            # Unresolvable forward reference
            return self._default_type

        origin = get_origin(annotation)

        if origin is Union or origin is types.UnionType:
            return self._describe_union(get_args(annotation), nullable)

        kind = ScalarKind.from_python_type(annotation)
        if kind is not None:
            return ScalarType(kind, nullable=nullable)

        if origin is not None:
            return self._describe_generic(origin, get_args(annotation), nullable)

        if isinstance(annotation, type):
            if annotation in _SEQUENCE_CONTAINERS:
                container = _SEQUENCE_CONTAINERS[annotation]
                return CollectionType(_INT_KEY, MixedType(), container=container, nullable=nullable)
            if annotation in _MAPPING_CONTAINERS:
                return CollectionType(_STRING_KEY, MixedType(), container=dict, nullable=nullable)
            wrapped = self._describe_collection_subclass(annotation, nullable)
            if wrapped is not None:
                return wrapped
            return ObjectType(annotation, nullable=nullable)

        return MixedType()

    def _describe_union(self, args: tuple[Any, ...], nullable: bool) -> TypeDescriptor:
        non_none = [arg for arg in args if arg is not type(None)]
        is_nullable = nullable or len(non_none) < len(args)
        if len(non_none) == 1:
            return self.describe(non_none[0], is_nullable)
        return UnionType(
            tuple(self.describe(arg) for arg in non_none),
            nullable=is_nullable,
        )

    def _describe_generic(
        self, origin: Any, args: tuple[Any, ...], nullable: bool
    ) -> TypeDescriptor:
        if origin in _SEQUENCE_CONTAINERS:
            if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
                value_annotation: Any = args[0]
            elif origin is tuple and len(args) != 1:
                value_annotation = Any
            else:
                value_annotation = args[0] if args else Any
            return CollectionType(
                _INT_KEY,
                self.describe(value_annotation),
                container=_SEQUENCE_CONTAINERS[origin],
                nullable=nullable,
            )

        if origin in _MAPPING_CONTAINERS:
            key_annotation, value_annotation = args if len(args) == 2 else (str, Any)
            return CollectionType(
                self.describe(key_annotation),
                self.describe(value_annotation),
                container=dict,
                nullable=nullable,
            )

        if isinstance(origin, type):
            # Generic collection class, e.g. ItemCollection[Item]
            return self._wrapped(origin, args, nullable)

        return MixedType()

    def _wrapped(self, cls: type, args: tuple[Any, ...], nullable: bool) -> TypeDescriptor:
        if issubclass(cls, _WRAPPABLE_MAPPINGS):
            if len(args) == 2:
                key_annotation, value_annotation = args
            else:
                key_annotation, value_annotation = str, (args[-1] if args else Any)
            return CollectionType(
                self.describe(key_annotation),
                self.describe(value_annotation),
                wrapped_class=cls,
                container=dict,
                nullable=nullable,
            )
        value_annotation = args[-1] if args else Any
        return CollectionType(
            _INT_KEY,
            self.describe(value_annotation),
            wrapped_class=cls,
            container=list,
            nullable=nullable,
        )

    def _describe_collection_subclass(self, cls: type, nullable: bool) -> TypeDescriptor | None:
        """Describe ``class Items(UserList[Item])`` style collection classes."""
        if not issubclass(cls, _WRAPPABLE_SEQUENCES + _WRAPPABLE_MAPPINGS):
            return None
        if issubclass(cls, (str, bytes, tuple)):
            return None
        for klass in cls.__mro__:
            for base in getattr(klass, "__orig_bases__", ()):
                args = get_args(base)
                if args and not any(isinstance(arg, TypeVar) for arg in args):
                    return self._wrapped(cls, args, nullable)
        return self._wrapped(cls, (), nullable)

    def _describe_property(self, prop: property) -> TypeDescriptor:
        setter_hints = _callable_hints(prop.fset)
        setter_params = [name for name in setter_hints if name != "return"]
        if setter_params:
            return self.describe(setter_hints[setter_params[0]])
        getter_hints = _callable_hints(prop.fget)
        if "return" in getter_hints:
            return self.describe(getter_hints["return"])
        return self._default_type

    def _describe_setter(self, setter: Any) -> TypeDescriptor:
        hints = _callable_hints(setter)
        params = [p for p in inspect.signature(setter).parameters.values() if p.name != "self"]
        if not params:
            return self._default_type
        first = params[0]
        annotation = hints.get(first.name, Any)
        if first.kind is inspect.Parameter.VAR_POSITIONAL:
            return CollectionType(_INT_KEY, self.describe(annotation), container=list)
        if first.name not in hints:
            return self._default_type
        return self.describe(annotation)


def _callable_hints(func: Any) -> dict[str, Any]:
    if func is None:
        return {}
    try:
        return get_type_hints(func, include_extras=True)
    except (NameError, TypeError):
        return dict(getattr(func, "__annotations__", {}))
