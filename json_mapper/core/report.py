"""Mapping error records and reports."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from json_mapper.core.exceptions import MappingViolation


@dataclass(frozen=True)
class MappingError:
    """A single collected mapping error.

    Attributes:
        path: Dot-notation path starting at ``$``.
        message: Human-readable description.
        cause: The violation that triggered the record, when one exists.
    """

    path: str
    message: str
    cause: MappingViolation | None = None


@dataclass(frozen=True)
class MappingReport:
    """Ordered, immutable list of errors collected during one mapping run."""

    errors: tuple[MappingError, ...] = field(default_factory=tuple)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def error_count(self) -> int:
        return len(self.errors)

    def count(self) -> int:
        """Alias of ``error_count``."""
        return len(self.errors)

    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    def by_path(self) -> dict[str, MappingError]:
        """Index errors by path; later errors at the same path win."""
        return {error.path: error for error in self.errors}

    def __iter__(self) -> Iterator[MappingError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


@dataclass(frozen=True)
class MappingResult:
    """A mapped value paired with its error report."""

    value: Any
    report: MappingReport
