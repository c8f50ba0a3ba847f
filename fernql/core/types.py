from __future__ import annotations
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Dict, List, Optional, Union

from .errors import InitializationError
from .fields import ArrayOptions, FieldDef, InputFieldType, ResolverInfo, ValidatorInfo

__all__ = [
    'ScalarType', 'ObjectType', 'InputType', 'ObjectTypeLookup', 'InputTypeLookup',
    'RestOptions', 'RootOperation', 'VALID_METHODS',
]

VALID_METHODS = ('all', 'get', 'post', 'put', 'delete', 'patch', 'options', 'head')


@dataclass
class ScalarType:
    name: str
    types: List[str] = dc_field(default_factory=list)
    description: Optional[str] = None
    serialize: Optional[Callable[[Any], Any]] = None
    parse_value: Optional[Callable[[Any], Any]] = None
    kind: str = dc_field(default='scalar', init=False)


@dataclass
class ObjectType:
    name: str
    fields: Dict[str, FieldDef]
    description: Optional[str] = None
    kind: str = dc_field(default='object', init=False)

    def __post_init__(self):
        if '__args' in self.fields:
            raise InitializationError(f"Object type '{self.name}' cannot declare a field named '__args'")


@dataclass
class InputType:
    name: str
    fields: Dict[str, InputFieldType]
    description: Optional[str] = None
    inputs_validator: Optional[Callable[[Dict[str, Any], List[str]], None]] = None
    kind: str = dc_field(default='input', init=False)


@dataclass(frozen=True)
class ObjectTypeLookup:
    """Forward reference to an object type registered under ``name``."""

    name: str
    kind: str = dc_field(default='object_lookup', init=False)


@dataclass(frozen=True)
class InputTypeLookup:
    """Forward reference to an input type registered under ``name``."""

    name: str
    kind: str = dc_field(default='input_lookup', init=False)


@dataclass
class RestOptions:
    """REST exposure of a root operation.

    Attributes:
        method: One of :data:`VALID_METHODS`.
        route: Route path, e.g. ``/users/{id}``.
        query: Static query template, used as the query document with the
            request arguments injected under ``__args``.
        args_transformer: Callable(request) -> args (sync or async) replacing the
            default of merged query-string and path parameters.
    """

    method: str
    route: str
    query: Any = None
    args_transformer: Optional[Callable[[Any], Any]] = None

    def __post_init__(self):
        self.method = str(self.method).lower()
        if self.method not in VALID_METHODS:
            raise InitializationError(f"Invalid REST method '{self.method}'")
        if not str(self.route).startswith('/'):
            raise InitializationError(f"Invalid route path '{self.route}'")


@dataclass
class RootOperation:
    """Named, top-level, independently invocable field."""

    name: str
    type: Union[ObjectType, ScalarType, ObjectTypeLookup]
    resolver: Callable[[ResolverInfo], Any]
    allow_null: bool = False
    array_options: Optional[ArrayOptions] = None
    args: Optional[InputFieldType] = None
    description: Optional[str] = None
    validator: Optional[Callable[[ValidatorInfo], Any]] = None
    rest_options: Optional[RestOptions] = None
    kind: str = dc_field(default='root', init=False)
    # Root operations are never deferred or hidden; kept for field-shaped access.
    defer: bool = dc_field(default=False, init=False)
    hidden: bool = dc_field(default=False, init=False)

    def __post_init__(self):
        if not callable(self.resolver):
            raise InitializationError(f"Root operation '{self.name}' requires a resolver")
