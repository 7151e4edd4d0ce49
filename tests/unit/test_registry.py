"""Unit tests for TypeHandlerRegistry."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

import pytest

from json_mapper.core.context import MappingContext
from json_mapper.core.enums import ScalarKind
from json_mapper.core.exceptions import ConfigurationError
from json_mapper.core.registry import CallableTypeHandler, TypeHandlerRegistry
from json_mapper.types.descriptor import ObjectType, ScalarType, TypeDescriptor


class Money:
    def __init__(self, amount: Decimal) -> None:
        self.amount = amount


class Euro(Money):
    pass


class UpperHandler:
    """Handler object matching every str scalar."""

    def supports(self, type_: TypeDescriptor, value: Any) -> bool:
        return isinstance(type_, ScalarType) and type_.kind is ScalarKind.STRING

    def convert(self, type_: TypeDescriptor, value: Any, context: MappingContext) -> Any:
        return str(value).upper()


class TestTypeHandlerRegistry:
    def test_single_argument_converter(self, context: MappingContext) -> None:
        registry = TypeHandlerRegistry()
        registry.register(Money, lambda value: Money(Decimal(str(value))))

        result = registry.convert(ObjectType(Money), "9.99", context)
        assert isinstance(result, Money)
        assert result.amount == Decimal("9.99")

    def test_context_aware_converter(self, context: MappingContext) -> None:
        registry = TypeHandlerRegistry()
        registry.register(Money, lambda value, ctx: ctx.path)

        path = context.with_path_segment(
            "price", lambda c: registry.convert(ObjectType(Money), 1, c)
        )
        assert path == "$.price"

    def test_exact_class_match_only(self) -> None:
        registry = TypeHandlerRegistry()
        registry.register(Money, lambda value: value)
        assert registry.supports(ObjectType(Money), 1) is True
        assert registry.supports(ObjectType(Euro), 1) is False
        assert registry.supports(ScalarType(ScalarKind.INT), 1) is False

    def test_first_registration_wins(self, context: MappingContext) -> None:
        registry = TypeHandlerRegistry()
        registry.register(Money, lambda value: "first")
        registry.register(Money, lambda value: "second")
        assert registry.convert(ObjectType(Money), 1, context) == "first"

    def test_no_handler_is_configuration_error(self, context: MappingContext) -> None:
        registry = TypeHandlerRegistry()
        with pytest.raises(ConfigurationError, match="No custom type handler"):
            registry.convert(ObjectType(Money), 1, context)

    def test_register_requires_class(self) -> None:
        registry = TypeHandlerRegistry()
        with pytest.raises(ConfigurationError, match="registered for a class"):
            registry.register("Money", lambda value: value)  # type: ignore[arg-type]

    def test_handler_object(self, context: MappingContext) -> None:
        registry = TypeHandlerRegistry()
        registry.add_handler(UpperHandler())
        assert registry.convert(ScalarType(ScalarKind.STRING), "abc", context) == "ABC"

    def test_has_and_len(self) -> None:
        registry = TypeHandlerRegistry()
        assert len(registry) == 0
        registry.register(Money, lambda value: value)
        assert registry.has(Money) is True
        assert registry.has(Euro) is False
        assert len(registry) == 1


class TestCallableTypeHandler:
    def test_rejects_unsupported_type(self, context: MappingContext) -> None:
        handler = CallableTypeHandler(Money, lambda value: value)
        assert handler.target_class is Money
        with pytest.raises(ConfigurationError, match="does not support"):
            handler.convert(ObjectType(Euro), 1, context)
