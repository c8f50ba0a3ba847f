"""Client-facing type declarations derived from a finalized registry.

The registry is mirrored into Strawberry runtime types so the standard GraphQL
SDL printer can describe every object type, reachable input type, custom scalar
and root operation (one ``Query`` field per operation, its arguments exposed as
a single ``args`` argument). This is a reporting artifact only; the request
pipeline never consults it.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, NewType, Optional, TYPE_CHECKING

import strawberry
from strawberry import UNSET
from strawberry.schema.config import StrawberryConfig
from strawberry.types import Info

from .core.errors import InitializationError
from .core.fields import InputFieldType
from .naming import type_name

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .registry import FernSchema

_logger = logging.getLogger(__name__)

# base scalars map onto the GraphQL built-ins
_BUILTIN_SCALARS: Dict[str, Any] = {'number': float, 'string': str, 'boolean': bool}


class StrawberrySchemaBuilder:
    def __init__(self, schema: 'FernSchema'):
        self.schema = schema
        self._objects: Dict[str, Any] = {}
        self._inputs: Dict[str, Any] = {}
        self._scalars: Dict[str, Any] = {}

    def build(self) -> strawberry.Schema:
        if not self.schema.root_operations:
            raise InitializationError("No root operations registered")
        object_names = {type_name(name) for name in self.schema.object_types}
        # Two-pass: create plain classes first so types can reference each other
        for name in self.schema.object_types:
            self._objects[name] = type(type_name(name), (), {})
        for name in self.schema.input_types:
            self._inputs[name] = type(type_name(name), (), {})
        # Second pass: add fields & annotations before decoration
        for name, object_type in self.schema.object_types.items():
            cls = self._objects[name]
            annotations: Dict[str, Any] = {}
            for field_name, field_def in object_type.fields.items():
                if field_def.hidden:
                    continue
                if field_def.args is not None:
                    setattr(cls, field_name, strawberry.field(
                        resolver=self._make_resolver(field_def),
                        description=field_def.description,
                    ))
                    continue
                annotations[field_name] = self._output_annotation(field_def)
                if field_def.description:
                    setattr(cls, field_name, strawberry.field(description=field_def.description))
            cls.__annotations__ = annotations
        for name, input_type in self.schema.input_types.items():
            cls = self._inputs[name]
            annotations = {}
            for field_name, slot in input_type.fields.items():
                annotations[field_name] = self._input_annotation(slot)
                setattr(cls, field_name, strawberry.field(default=UNSET, description=slot.description))
            cls.__annotations__ = annotations
        # Decorate all types now
        for name, object_type in self.schema.object_types.items():
            self._objects[name] = strawberry.type(
                self._objects[name], name=type_name(name), description=object_type.description,
            )
        for name, input_type in self.schema.input_types.items():
            gql_name = type_name(name)
            if gql_name in object_names:
                gql_name += 'Input'
            self._inputs[name] = strawberry.input(
                self._inputs[name], name=gql_name, description=input_type.description,
            )

        query_cls = type('Query', (), {})
        for name, root_operation in self.schema.root_operations.items():
            setattr(query_cls, name, strawberry.field(
                resolver=self._make_resolver(root_operation),
                description=root_operation.description,
            ))
        query = strawberry.type(query_cls, name='Query')
        _logger.debug(
            "fernql: exporting %d object types and %d root operations",
            len(self._objects), len(self.schema.root_operations),
        )
        return strawberry.Schema(
            query=query,
            types=list(self._objects.values()),
            config=StrawberryConfig(auto_camel_case=False),
        )

    # --- annotations ----------------------------------------------------------

    def _object_class(self, type_ref: Any) -> Any:
        resolved = self.schema.resolve_object_type(type_ref)
        if resolved.kind == 'scalar':
            return self._scalar_class(resolved)
        cls = self._objects.get(resolved.name)
        if cls is None or self.schema.object_types.get(resolved.name) is not resolved:
            raise InitializationError(f"Object type '{resolved.name}' is not registered")
        return cls

    def _input_class(self, type_ref: Any) -> Any:
        resolved = self.schema.resolve_input_type(type_ref)
        if resolved.kind == 'scalar':
            return self._scalar_class(resolved)
        cls = self._inputs.get(resolved.name)
        if cls is None or self.schema.input_types.get(resolved.name) is not resolved:
            raise InitializationError(f"Input type '{resolved.name}' is not registered")
        return cls

    def _scalar_class(self, scalar: Any) -> Any:
        if scalar.name in _BUILTIN_SCALARS:
            return _BUILTIN_SCALARS[scalar.name]
        cls = self._scalars.get(scalar.name)
        if cls is None:
            gql_name = type_name(scalar.name)
            options: Dict[str, Any] = {'name': gql_name, 'description': scalar.description}
            if scalar.serialize is not None:
                options['serialize'] = scalar.serialize
            if scalar.parse_value is not None:
                options['parse_value'] = scalar.parse_value
            cls = strawberry.scalar(NewType(gql_name, object), **options)
            self._scalars[scalar.name] = cls
        return cls

    def _output_annotation(self, type_def: Any) -> Any:
        annotation = self._object_class(type_def.type)
        if type_def.array_options:
            element = Optional[annotation] if type_def.array_options.allow_null_element else annotation
            annotation = List[element]  # type: ignore[valid-type]
        return Optional[annotation] if type_def.allow_null else annotation

    def _input_annotation(self, slot: InputFieldType) -> Any:
        annotation = self._input_class(slot.type)
        if slot.array_options:
            element = Optional[annotation] if slot.array_options.allow_null_element else annotation
            annotation = List[element]  # type: ignore[valid-type]
        if slot.allow_null or not slot.required:
            return Optional[annotation]
        return annotation

    def _make_resolver(self, type_def: Any) -> Callable[..., Any]:
        anns: Dict[str, Any] = {'info': Info}
        slot: Optional[InputFieldType] = type_def.args
        if slot is None:
            def _resolver(info):
                return None
        elif slot.allow_null or not slot.required:
            def _resolver(info, args=None):
                return None
            anns['args'] = self._input_annotation(slot)
        else:
            def _resolver(info, args):
                return None
            anns['args'] = self._input_annotation(slot)
        anns['return'] = self._output_annotation(type_def)
        _resolver.__annotations__ = anns
        return _resolver


__all__ = ['StrawberrySchemaBuilder']
