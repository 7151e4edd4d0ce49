"""Scalar kind enumeration."""

from __future__ import annotations

from enum import Enum


class ScalarKind(Enum):
    """Builtin scalar kinds a property can be declared with."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "str"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]

    @classmethod
    def from_python_type(cls, tp: object) -> ScalarKind | None:
        """Return the kind for a builtin type, or None when it is not a scalar."""
        for kind, python_type in _PYTHON_TYPES.items():
            if tp is python_type:
                return kind
        return None


_PYTHON_TYPES: dict[ScalarKind, type] = {
    ScalarKind.INT: int,
    ScalarKind.FLOAT: float,
    ScalarKind.BOOL: bool,
    ScalarKind.STRING: str,
}
