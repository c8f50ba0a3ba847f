"""Naming utilities used when exporting registry names to GraphQL declarations."""
from __future__ import annotations

import re

__all__ = ["snake_to_camel", "type_name"]

_SEPARATORS = re.compile(r"[_\-\s]+")


def snake_to_camel(name: str, upper_first: bool = False) -> str:
    """Convert snake_case identifier to camelCase or PascalCase.

    upper_first=False returns lowerCamelCase (default), True returns UpperCamelCase.
    Idempotent for already camelCase strings without separators.
    """
    if not isinstance(name, str) or not name:
        return name  # type: ignore
    parts = [p for p in _SEPARATORS.split(name) if p]
    if not parts:
        return ''
    if len(parts) == 1:
        word = parts[0]
        return word[0].upper() + word[1:] if upper_first else word
    first = parts[0].capitalize() if upper_first else parts[0].lower()
    return first + ''.join(p.capitalize() for p in parts[1:])


def type_name(name: str) -> str:
    """GraphQL type name for a registry name: 'post_comment' -> 'PostComment'."""
    return snake_to_camel(name, upper_first=True)
