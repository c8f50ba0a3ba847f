"""Primitive scalars registered on every schema by default.

``parse_value`` validates client arguments and ``serialize`` validates (or
coerces) resolver output. Both signal an invalid value by raising; the pipeline
turns that into an ArgsError or ResultError naming the scalar.
"""
from __future__ import annotations
from typing import Any

from .core.types import ScalarType

__all__ = ['number', 'string', 'boolean', 'BASE_SCALARS']


def _validate_number(value: Any) -> Any:
    # bool is an int subclass but not a number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected number, got {type(value).__name__}")
    return value


def _validate_string(value: Any) -> Any:
    if not isinstance(value, str):
        raise TypeError(f"Expected string, got {type(value).__name__}")
    return value


def _validate_boolean(value: Any) -> Any:
    if not isinstance(value, bool):
        raise TypeError(f"Expected boolean, got {type(value).__name__}")
    return value


def _serialize_boolean(value: Any) -> bool:
    # stores such as MySQL keep booleans as tinyint; cast on truthiness
    return bool(value)


number = ScalarType(
    name='number',
    types=['number'],
    description='Numerical value',
    serialize=_validate_number,
    parse_value=_validate_number,
)

string = ScalarType(
    name='string',
    types=['string'],
    description='String value',
    serialize=_validate_string,
    parse_value=_validate_string,
)

boolean = ScalarType(
    name='boolean',
    types=['boolean'],
    description='True or False',
    serialize=_serialize_boolean,
    parse_value=_validate_boolean,
)

BASE_SCALARS = (number, string, boolean)
