"""Mapping context.

Carries the root input, the current JSON path, collected errors and the
option flags through one recursive mapping run. A context is created per
top-level ``map()`` call and never shared between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from json_mapper.core.exceptions import MappingViolation
from json_mapper.core.report import MappingError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# strftime/strptime equivalent of an ATOM (RFC 3339) timestamp
ISO_8601_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

OPTION_STRICT_MODE = "strict_mode"
OPTION_COLLECT_ERRORS = "collect_errors"
OPTION_TREAT_EMPTY_STRING_AS_NULL = "empty_string_is_null"
OPTION_IGNORE_UNKNOWN_PROPERTIES = "ignore_unknown_properties"
OPTION_TREAT_NULL_AS_EMPTY_COLLECTION = "treat_null_as_empty_collection"
OPTION_DEFAULT_DATE_FORMAT = "default_date_format"
OPTION_ALLOW_SCALAR_TO_OBJECT_CASTING = "allow_scalar_to_object_casting"


class MappingContext:
    """Mutable state shared while mapping one JSON structure.

    Args:
        root_input: The original JSON value, kept for diagnostics.
        options: Flat option mapping, usually ``MapperConfiguration.to_options()``.
    """

    def __init__(self, root_input: Any, options: Mapping[str, Any] | None = None) -> None:
        self._root_input = root_input
        self._options: dict[str, Any] = dict(options or {})
        self._path_segments: list[str] = []
        self._errors: list[MappingError] = []

    @property
    def root_input(self) -> Any:
        return self._root_input

    @property
    def path(self) -> str:
        """Current position inside the input, ``$`` at the root."""
        if not self._path_segments:
            return "$"
        return "$." + ".".join(self._path_segments)

    def with_path_segment(self, segment: str | int, callback: Callable[[MappingContext], T]) -> T:
        """Run *callback* with *segment* appended to the path.

        The segment is removed again whether the callback returns or raises,
        so paths stay accurate when conversion aborts inside a subtree.
        """
        self._path_segments.append(str(segment))
        try:
            return callback(self)
        finally:
            self._path_segments.pop()

    def add_error(self, message: str, cause: MappingViolation | None = None) -> None:
        """Record an error at the current path, unless error collection is off."""
        if not self.should_collect_errors:
            return
        self._errors.append(MappingError(path=self.path, message=message, cause=cause))

    def record_exception(self, exc: MappingViolation) -> None:
        self.add_error(str(exc), exc)

    def report(self, exc: MappingViolation) -> None:
        """Record *exc*, then raise it when strict mode is on."""
        self.record_exception(exc)
        if self.is_strict_mode:
            raise exc
        logger.debug("Recorded %s at %s", type(exc).__name__, exc.path)

    @property
    def errors(self) -> list[MappingError]:
        return list(self._errors)

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    def get_option(self, name: str, default: Any = None) -> Any:
        value = self._options.get(name)
        return default if value is None else value

    # --- Option accessors ---

    @property
    def is_strict_mode(self) -> bool:
        return bool(self.get_option(OPTION_STRICT_MODE, False))

    @property
    def should_collect_errors(self) -> bool:
        return bool(self.get_option(OPTION_COLLECT_ERRORS, True))

    @property
    def should_treat_empty_string_as_null(self) -> bool:
        return bool(self.get_option(OPTION_TREAT_EMPTY_STRING_AS_NULL, False))

    @property
    def should_ignore_unknown_properties(self) -> bool:
        return bool(self.get_option(OPTION_IGNORE_UNKNOWN_PROPERTIES, False))

    @property
    def should_treat_null_as_empty_collection(self) -> bool:
        return bool(self.get_option(OPTION_TREAT_NULL_AS_EMPTY_COLLECTION, False))

    @property
    def should_allow_scalar_to_object_casting(self) -> bool:
        return bool(self.get_option(OPTION_ALLOW_SCALAR_TO_OBJECT_CASTING, False))

    @property
    def default_date_format(self) -> str:
        value = self._options.get(OPTION_DEFAULT_DATE_FORMAT)
        if not isinstance(value, str) or value == "":
            return ISO_8601_FORMAT
        return value
