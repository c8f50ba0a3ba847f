"""fernql: a schema-driven query resolution engine.

Public API:
- FernSchema (the type registry and request pipeline), FernParams
- ScalarType, ObjectType, InputType, RootOperation, RestOptions
- ObjectTypeLookup, InputTypeLookup (forward references)
- field, input_field, FieldDef, InputFieldType, ArrayOptions
- ResolverInfo, ValidatorInfo, LOOKUP, UNSET
- BaseError, ArgsError, QueryError, ResultError, InitializationError, UnresolvedTypeError
- handle_request, handle_rest_request, create_router, initialize_fernql
- scalars (number, string, boolean)
"""
from . import scalars
from .config import FernParams
from .core import (
    ArgsError,
    ArrayOptions,
    BaseError,
    FieldDef,
    InitializationError,
    InputFieldType,
    InputType,
    InputTypeLookup,
    LOOKUP,
    ObjectType,
    ObjectTypeLookup,
    QueryError,
    ResolverInfo,
    ResolverNode,
    RestOptions,
    ResultError,
    RootOperation,
    ScalarType,
    UNSET,
    UnresolvedTypeError,
    ValidatorInfo,
    field,
    input_field,
)
from .registry import FernSchema
from .router import create_router, handle_request, handle_rest_request, initialize_fernql

__all__ = [
    'FernSchema', 'FernParams', 'scalars',
    'ScalarType', 'ObjectType', 'InputType', 'RootOperation', 'RestOptions',
    'ObjectTypeLookup', 'InputTypeLookup',
    'field', 'input_field', 'FieldDef', 'InputFieldType', 'ArrayOptions',
    'ResolverInfo', 'ValidatorInfo', 'ResolverNode', 'LOOKUP', 'UNSET',
    'BaseError', 'ArgsError', 'QueryError', 'ResultError', 'InitializationError', 'UnresolvedTypeError',
    'handle_request', 'handle_rest_request', 'create_router', 'initialize_fernql',
]
