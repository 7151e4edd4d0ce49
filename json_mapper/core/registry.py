"""Custom type handler registry.

Holds user supplied converters for specific classes. The registry is
consulted by the conversion chain before any builtin object, enum or
date/time handling, so user overrides always win.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from json_mapper.core.context import MappingContext
from json_mapper.core.exceptions import ConfigurationError
from json_mapper.types.descriptor import ObjectType, TypeDescriptor

if TYPE_CHECKING:
    from json_mapper.mapping.protocol import TypeHandler


def _normalize_converter(converter: Callable[..., Any]) -> Callable[[Any, MappingContext], Any]:
    """Adapt ``(value)`` converters to the ``(value, context)`` signature."""
    try:
        params = [
            p
            for p in inspect.signature(converter).parameters.values()
            if p.kind
            in (
                inspect.Parameter.POSITIONAL_ONLY,
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
                inspect.Parameter.VAR_POSITIONAL,
            )
        ]
    except (TypeError, ValueError):
        params = []

    if len(params) >= 2 or any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return converter
    return lambda value, context: converter(value)


class CallableTypeHandler:
    """Type handler backed by a plain converter callable.

    Matches ``ObjectType`` descriptors whose class is exactly ``target_class``.
    """

    def __init__(self, target_class: type, converter: Callable[..., Any]) -> None:
        self._target_class = target_class
        self._converter = _normalize_converter(converter)

    @property
    def target_class(self) -> type:
        return self._target_class

    def supports(self, type_: TypeDescriptor, value: Any) -> bool:
        return isinstance(type_, ObjectType) and type_.cls is self._target_class

    def convert(self, type_: TypeDescriptor, value: Any, context: MappingContext) -> Any:
        if not self.supports(type_, value):
            raise ConfigurationError(
                f"Handler for {self._target_class.__qualname__} does not support type {type_}."
            )
        return self._converter(value, context)


class TypeHandlerRegistry:
    """Ordered collection of custom type handlers.

    Handlers are tried in registration order; the first one whose
    ``supports`` returns True converts the value.
    """

    def __init__(self) -> None:
        self._handlers: list[TypeHandler] = []

    def register(self, target_class: type, converter: Callable[..., Any]) -> None:
        """Register a converter callable for *target_class*.

        The callable may accept ``(value)`` or ``(value, context)``.
        """
        if not isinstance(target_class, type):
            raise ConfigurationError(
                f"Custom types must be registered for a class, {type(target_class).__name__} given."
            )
        self._handlers.append(CallableTypeHandler(target_class, converter))

    def add_handler(self, handler: TypeHandler) -> None:
        self._handlers.append(handler)

    def supports(self, type_: TypeDescriptor, value: Any) -> bool:
        return any(handler.supports(type_, value) for handler in self._handlers)

    def convert(self, type_: TypeDescriptor, value: Any, context: MappingContext) -> Any:
        """Convert *value* with the first supporting handler.

        Raises:
            ConfigurationError: If no registered handler supports the type.
        """
        for handler in self._handlers:
            if handler.supports(type_, value):
                return handler.convert(type_, value, context)
        raise ConfigurationError(f"No custom type handler registered for type {type_}.")

    def has(self, target_class: type) -> bool:
        return self.supports(ObjectType(target_class), None)

    def __len__(self) -> int:
        return len(self._handlers)
