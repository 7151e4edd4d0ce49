"""json_mapper exception hierarchy.

Data errors (MappingViolation subclasses) are path qualified and are either
raised (strict mode) or recorded in a MappingReport (lenient mode).
ConfigurationError signals a setup mistake and is always raised.
"""

from __future__ import annotations


def _class_label(cls: type | str) -> str:
    if isinstance(cls, str):
        return cls
    return cls.__qualname__


class JsonMapperError(Exception):
    """Base exception for all json_mapper errors."""


# --- Configuration ---


class ConfigurationError(JsonMapperError):
    """Raised for invalid class maps, unloadable classes or a misconfigured chain."""


# --- Mapping ---


class MappingViolation(JsonMapperError):
    """Base for data-dependent mapping errors.

    Attributes:
        path: Dot-notation JSON path of the offending value (``$.items.0.name``).
    """

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__(message)


class UnknownPropertyError(MappingViolation):
    """Raised when an input key has no matching declared target property."""

    def __init__(self, path: str, property_name: str, target_class: type | str) -> None:
        self.property_name = property_name
        self.target_class = target_class
        super().__init__(f"Unknown property {path} on {_class_label(target_class)}.", path)


class MissingPropertyError(MappingViolation):
    """Raised in strict mode when a required property is absent from the input."""

    def __init__(self, path: str, property_name: str, target_class: type | str) -> None:
        self.property_name = property_name
        self.target_class = target_class
        super().__init__(f"Missing property {path} on {_class_label(target_class)}.", path)


class TypeMismatchError(MappingViolation):
    """Raised when a value cannot be converted to the declared type."""

    def __init__(self, path: str, expected_type: str, actual_type: str) -> None:
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f"Type mismatch at {path}: expected {expected_type}, got {actual_type}.", path
        )


class CollectionMappingError(TypeMismatchError):
    """Raised when a non-iterable value is presented to a collection type."""

    def __init__(self, path: str, actual_type: str) -> None:
        self.expected_type = "iterable"
        self.actual_type = actual_type
        MappingViolation.__init__(
            self, f"Expected iterable value at {path} but received {actual_type}.", path
        )


class ReadonlyPropertyError(MappingViolation):
    """Raised when writing to an already initialised read-only property."""

    def __init__(self, path: str, property_name: str, target_class: type | str) -> None:
        self.property_name = property_name
        self.target_class = target_class
        super().__init__(
            f"Readonly property {_class_label(target_class)}.{property_name} "
            f"cannot be written at {path}.",
            path,
        )


# --- Property access ---


class PropertyNotWritable(JsonMapperError):
    """Raised by a PropertyWriter when a property cannot be assigned."""

    def __init__(self, target_class: type | str, property_name: str) -> None:
        self.target_class = target_class
        self.property_name = property_name
        super().__init__(f"Property {_class_label(target_class)}.{property_name} is not writable")
