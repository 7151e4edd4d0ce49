"""Class resolution.

Maps a declared target class to the concrete class that is instantiated,
either through a literal class map entry or a resolver callable that
inspects the payload (polymorphic discrimination).
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any, Union

from json_mapper.core.context import MappingContext
from json_mapper.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ClassTarget = Union[type, str]
ClassResolverCallable = Callable[..., Any]
ClassMapEntry = Union[type, str, ClassResolverCallable]


def load_class(target: ClassTarget) -> type:
    """Return *target* as a class, importing dotted ``module.Class`` paths.

    Raises:
        ConfigurationError: If the target is empty, not importable or not a class.
    """
    if isinstance(target, type):
        return target
    if not isinstance(target, str):
        raise ConfigurationError(
            f"Class target must be a class or a dotted path, {type(target).__name__} given."
        )
    if target == "":
        raise ConfigurationError("Resolved class name must not be empty.")

    module_path, _, class_name = target.rpartition(".")
    if not module_path:
        raise ConfigurationError(f"Resolved class {target} does not exist.")
    try:
        module = importlib.import_module(module_path)
        resolved = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Resolved class {target} does not exist.") from e

    if not isinstance(resolved, type):
        raise ConfigurationError(f"Resolved class {target} does not exist.")
    return resolved


def _accepts_context(resolver: ClassResolverCallable) -> bool:
    """True when *resolver* declares a second positional parameter (or *args)."""
    try:
        sig = inspect.signature(resolver)
    except (TypeError, ValueError):
        return False
    positional = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return positional >= 2


def _normalize_resolver(
    resolver: ClassResolverCallable,
) -> Callable[[Any, MappingContext], Any]:
    if _accepts_context(resolver):
        return resolver
    return lambda payload, context: resolver(payload)


class ClassResolver:
    """Resolves class names using a class map.

    Entries are validated eagerly: every key and every literal target must be
    loadable when the resolver is built, not when a payload is mapped.

    Args:
        class_map: Declared class → target class, dotted path, or resolver
            callable ``(payload)`` / ``(payload, context)``.

    Raises:
        ConfigurationError: If any entry references an unloadable class.
    """

    def __init__(self, class_map: Mapping[ClassTarget, ClassMapEntry] | None = None) -> None:
        self._class_map: dict[type, type | Callable[[Any, MappingContext], Any]] = {}
        for declared, entry in (class_map or {}).items():
            self._register(declared, entry)

    def _register(self, declared: ClassTarget, entry: ClassMapEntry) -> None:
        declared_class = load_class(declared)
        if isinstance(entry, (type, str)):
            self._class_map[declared_class] = load_class(entry)
        elif callable(entry):
            self._class_map[declared_class] = _normalize_resolver(entry)
        else:
            raise ConfigurationError(
                f"Class map entry for {declared_class.__qualname__} must be a class, "
                f"a dotted path or a callable, {type(entry).__name__} given."
            )

    def add(self, declared: ClassTarget, resolver: ClassMapEntry) -> None:
        """Add or replace a resolution rule."""
        self._register(declared, resolver)

    def has(self, declared: type) -> bool:
        return declared in self._class_map

    def merged(self, class_map: Mapping[ClassTarget, ClassMapEntry] | None) -> ClassResolver:
        """Return a new resolver with *class_map* layered over this one."""
        if not class_map:
            return self
        resolver = ClassResolver()
        resolver._class_map = dict(self._class_map)
        for declared, entry in class_map.items():
            resolver._register(declared, entry)
        return resolver

    def resolve(self, declared: ClassTarget, payload: Any, context: MappingContext) -> type:
        """Resolve the concrete class for *payload*.

        Raises:
            ConfigurationError: If the result is not a loadable class.
        """
        declared_class = load_class(declared)
        mapped = self._class_map.get(declared_class)

        if mapped is None:
            return declared_class

        if isinstance(mapped, type):
            logger.debug("Class map redirects %s to %s", declared_class.__qualname__, mapped)
            return mapped

        resolved = mapped(payload, context)
        if not isinstance(resolved, (type, str)):
            raise ConfigurationError(
                f"Class resolver for {declared_class.__qualname__} must return a class, "
                f"{type(resolved).__name__} given."
            )

        resolved_class = load_class(resolved)
        logger.debug(
            "Class resolver for %s selected %s", declared_class.__qualname__, resolved_class
        )
        return resolved_class
