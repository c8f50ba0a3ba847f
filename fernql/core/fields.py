from __future__ import annotations
from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Dict, List, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .types import ScalarType, ObjectType, InputType, ObjectTypeLookup, InputTypeLookup, RootOperation

__all__ = [
    'ArrayOptions', 'InputFieldType', 'FieldDef', 'ResolverInfo', 'ValidatorInfo', 'ResolverNode',
    'field', 'input_field',
]


@dataclass
class ArrayOptions:
    allow_null_element: bool = False


@dataclass
class InputFieldType:
    """A single argument slot.

    Attributes:
        type: Scalar, input type or an input lookup.
        required: The slot must be present (not merely non-null).
        allow_null: ``None`` is an acceptable value.
        array_options: When set the slot holds a list of ``type``.
    """

    type: Union['ScalarType', 'InputType', 'InputTypeLookup']
    required: bool = False
    allow_null: bool = False
    array_options: Optional[ArrayOptions] = None
    description: Optional[str] = None


@dataclass
class FieldDef:
    """Internal, normalized field description of an object type.

    Attributes:
        type: Result type (object type, scalar type or an object lookup).
        allow_null: ``None`` is an acceptable result.
        array_options: When set the field resolves to a list of ``type``.
        args: Argument slot accepted through ``__args``.
        resolver: Callable receiving a :class:`ResolverInfo`. It owns producing the
            complete nested value for this field.
        validator: Callable receiving a :class:`ValidatorInfo`, run while the
            resolver tree is being built.
        defer: Skip the resolver and resolve to ``None``.
        hidden: Invisible to queries.
    """

    type: Union['ObjectType', 'ScalarType', 'ObjectTypeLookup']
    allow_null: bool = False
    array_options: Optional[ArrayOptions] = None
    args: Optional[InputFieldType] = None
    description: Optional[str] = None
    resolver: Optional[Callable[['ResolverInfo'], Any]] = None
    validator: Optional[Callable[['ValidatorInfo'], Any]] = None
    defer: bool = False
    hidden: bool = False
    kind: str = dc_field(default='field', init=False)


@dataclass
class ResolverInfo:
    """Single argument handed to root and field resolvers."""

    context: Any
    field_path: List[str]
    args: Any
    query: Dict[str, Any]
    root_operation: 'RootOperation'
    field_value: Any = None
    parent_value: Any = None


@dataclass
class ValidatorInfo:
    """Single argument handed to per-field validators. ``args`` is the declared
    argument slot, not the client value."""

    context: Any
    field_path: List[str]
    args: Optional[InputFieldType]
    query: Any
    root_operation: Optional['RootOperation']


@dataclass(frozen=True)
class ResolverNode:
    type_def: Union[FieldDef, 'RootOperation']
    query: Dict[str, Any]
    args: Any = None
    nested: Optional[Dict[str, 'ResolverNode']] = None


def _array_options(array: bool | ArrayOptions, allow_null_element: bool) -> Optional[ArrayOptions]:
    if isinstance(array, ArrayOptions):
        return array
    return ArrayOptions(allow_null_element=allow_null_element) if array else None


def field(
    type_: Any,
    *,
    allow_null: bool = False,
    array: bool | ArrayOptions = False,
    allow_null_element: bool = False,
    args: Optional[InputFieldType] = None,
    **meta: Any,
) -> FieldDef:
    """Declare a field on an object type.

    Extra keyword arguments (``resolver``, ``validator``, ``defer``, ``hidden``,
    ``description``) are passed through to :class:`FieldDef`.

    Example:
        user = ObjectType('user', fields={
            'id': field(scalars.number),
            'tags': field(scalars.string, array=True, allow_null=True),
            'posts': field(ObjectTypeLookup('post'), array=True, resolver=load_posts),
        })
    """
    return FieldDef(
        type=type_,
        allow_null=allow_null,
        array_options=_array_options(array, allow_null_element),
        args=args,
        **meta,
    )


def input_field(
    type_: Any,
    *,
    required: bool = False,
    allow_null: bool = False,
    array: bool | ArrayOptions = False,
    allow_null_element: bool = False,
    description: Optional[str] = None,
) -> InputFieldType:
    """Declare an argument slot (the ``args`` of a field or a field of an input type)."""
    return InputFieldType(
        type=type_,
        required=required,
        allow_null=allow_null,
        array_options=_array_options(array, allow_null_element),
        description=description,
    )
