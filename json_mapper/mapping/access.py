"""Default instantiation and property write mechanics.

Supports dataclasses (including frozen ones), Pydantic models and plain
classes. Read-only properties (frozen dataclass fields, frozen Pydantic
fields, properties without a setter) may be initialised once and are
rejected afterwards.
"""

from __future__ import annotations

import dataclasses
import inspect
from typing import Any

from json_mapper.core.exceptions import ConfigurationError, PropertyNotWritable
from json_mapper.types.provider import SETTER_PREFIX, _is_pydantic_model


def _construct_dataclass(cls: type) -> Any:
    """Create a dataclass instance holding only its declared defaults."""
    instance = cls.__new__(cls)
    for f in dataclasses.fields(cls):
        if f.default is not dataclasses.MISSING:
            object.__setattr__(instance, f.name, f.default)
        elif f.default_factory is not dataclasses.MISSING:
            object.__setattr__(instance, f.name, f.default_factory())
    return instance


class DefaultInstantiator:
    """Best-effort instantiation.

    Detection order (no constructor arguments):
    1. Pydantic BaseModel -> model_construct()
    2. dataclass -> defaults only, __init__ is bypassed
    3. Plain class -> cls()

    With arguments the class is always called directly.
    """

    def create(self, cls: type, *args: Any) -> Any:
        try:
            if args:
                return cls(*args)
            if _is_pydantic_model(cls):
                return cls.model_construct()  # type: ignore[attr-defined]
            if dataclasses.is_dataclass(cls):
                return _construct_dataclass(cls)
            return cls()
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Unable to instantiate {cls.__qualname__}: {e}") from e


def _setter_method(entity: Any, property_name: str) -> Any:
    setter = getattr(type(entity), SETTER_PREFIX + property_name, None)
    if not inspect.isfunction(setter):
        return None
    return getattr(entity, SETTER_PREFIX + property_name)


def _is_variadic(method: Any) -> bool:
    params = list(inspect.signature(method).parameters.values())
    return len(params) == 1 and params[0].kind is inspect.Parameter.VAR_POSITIONAL


class AttributePropertyWriter:
    """PropertyWriter using setter methods, properties and attributes."""

    def is_readonly(self, cls: type, property_name: str) -> bool:
        if _is_pydantic_model(cls):
            field = cls.model_fields.get(property_name)  # type: ignore[attr-defined]
            if cls.model_config.get("frozen"):  # type: ignore[attr-defined]
                return True
            if field is not None and field.frozen:
                return True

        params = getattr(cls, "__dataclass_params__", None)
        if dataclasses.is_dataclass(cls) and params is not None and params.frozen:
            if any(f.name == property_name for f in dataclasses.fields(cls)):
                return True

        attribute = inspect.getattr_static(cls, property_name, None)
        return isinstance(attribute, property) and attribute.fset is None

    def is_initialized(self, entity: Any, property_name: str) -> bool:
        try:
            object.__getattribute__(entity, property_name)
        except AttributeError:
            return False
        return True

    def write(self, entity: Any, property_name: str, value: Any) -> None:
        setter = _setter_method(entity, property_name)
        if setter is not None:
            if _is_variadic(setter) and isinstance(value, (list, tuple)):
                setter(*value)
            else:
                setter(value)
            return

        cls = type(entity)
        if self.is_readonly(cls, property_name):
            if self.is_initialized(entity, property_name):
                raise PropertyNotWritable(cls, property_name)
            # First assignment of a frozen field
            object.__setattr__(entity, property_name, value)
            return

        setattr(entity, property_name, value)
