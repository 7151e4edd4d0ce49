"""Property name converters for incoming JSON keys."""

from __future__ import annotations

import re

_WORD_SEPARATORS = re.compile(r"[\s_\-]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class CamelCasePropertyNameConverter:
    """``snake_case``, ``kebab-case`` and ``UPPER_CASE`` keys → ``camelCase``.

    Keys that are already camelCase are returned unchanged.
    """

    def convert(self, name: str) -> str:
        words = [word for word in _WORD_SEPARATORS.split(name) if word]
        if not words:
            return ""
        words = [word.lower() if word.isupper() else word for word in words]
        head, *tail = words
        return head[0].lower() + head[1:] + "".join(word[0].upper() + word[1:] for word in tail)


class SnakeCasePropertyNameConverter:
    """``camelCase``, ``PascalCase`` and ``kebab-case`` keys → ``snake_case``."""

    def convert(self, name: str) -> str:
        split = _CAMEL_BOUNDARY.sub("_", name.strip())
        return _WORD_SEPARATORS.sub("_", split).lower()
