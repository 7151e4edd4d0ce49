"""Strategy chain dispatcher."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from json_mapper.core.context import MappingContext
from json_mapper.core.exceptions import ConfigurationError
from json_mapper.mapping.protocol import ValueConversionStrategy
from json_mapper.types.descriptor import TypeDescriptor


class _Unmapped(Enum):
    UNMAPPED = "unmapped"

    def __repr__(self) -> str:
        return "UNMAPPED"


# Returned by a strategy that reported a mismatch in lenient mode. The
# mapper skips the write and collections drop the element.
UNMAPPED = _Unmapped.UNMAPPED


class ValueConverter:
    """Chain of responsibility over ValueConversionStrategy objects.

    Strategies are tried in the order they were added; the first one whose
    ``supports`` returns True converts the value. A rejected value comes
    back as ``UNMAPPED``.
    """

    def __init__(self, strategies: Iterable[ValueConversionStrategy] = ()) -> None:
        self._strategies: list[ValueConversionStrategy] = list(strategies)

    def add_strategy(self, strategy: ValueConversionStrategy) -> None:
        self._strategies.append(strategy)

    @property
    def strategies(self) -> tuple[ValueConversionStrategy, ...]:
        return tuple(self._strategies)

    def convert(self, value: Any, type_: TypeDescriptor, context: MappingContext) -> Any:
        """Convert *value* with the first supporting strategy.

        Raises:
            ConfigurationError: If no strategy supports the value.
        """
        for strategy in self._strategies:
            if strategy.supports(value, type_, context):
                return strategy.convert(value, type_, context)
        raise ConfigurationError(f"No conversion strategy supports type {type_} at {context.path}.")
