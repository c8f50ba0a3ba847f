from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Tuple, Union

from .config import FernParams
from .core.errors import InitializationError, QueryError, UnresolvedTypeError
from .core.executor import ResolverTreeProcessor
from .core.results import ResultValidator
from .core.tree import ResolverTreeBuilder
from .core.types import (
    InputType,
    InputTypeLookup,
    ObjectType,
    ObjectTypeLookup,
    RootOperation,
    ScalarType,
)
from .scalars import BASE_SCALARS

# Project logger
_logger = logging.getLogger("fernql")


class FernSchema:
    """Registry of scalars, object types, input types and root operations.

    Populate it once at start-up, then hand it to the request pipeline
    (:meth:`execute`) or the HTTP binding (:func:`fernql.router.create_router`).
    Types may reference each other through :class:`ObjectTypeLookup` /
    :class:`InputTypeLookup` regardless of registration order; lookups are
    resolved on first traversal and cached.

    Example:
        schema = FernSchema()
        schema.register_object_type(ObjectType('user', fields={
            'id': field(scalars.number),
            'friends': field(ObjectTypeLookup('user'), array=True, resolver=load_friends),
        }))
        schema.register_root_operation(RootOperation(
            name='getUser', type=ObjectTypeLookup('user'), resolver=get_user,
        ))
        data = await schema.execute('getUser', {'id': True, 'friends': {'id': True}})
    """

    def __init__(self, *, base_scalars: bool = True):
        self.scalars: Dict[str, ScalarType] = {}
        self.object_types: Dict[str, ObjectType] = {}
        self.input_types: Dict[str, InputType] = {}
        self.root_operations: Dict[str, RootOperation] = {}
        self._resolved: Dict[Tuple[str, str], Any] = {}
        if base_scalars:
            for scalar in BASE_SCALARS:
                self.register_scalar(scalar)

    # --- registration -------------------------------------------------------

    def register_scalar(self, definition: ScalarType, allow_override: bool = True) -> ScalarType:
        if definition.name in self.scalars:
            if not allow_override:
                raise InitializationError(f"Scalar type already registered for '{definition.name}'")
            _logger.info("fernql: overriding scalar type %s", definition.name)
        self.scalars[definition.name] = definition
        self._resolved.clear()
        _logger.debug("fernql: registered scalar type %s", definition.name)
        return definition

    def register_object_type(self, definition: ObjectType, allow_duplicate: bool = False) -> ObjectType:
        if definition.name in self.object_types:
            if not allow_duplicate:
                raise InitializationError(f"Object type already registered for '{definition.name}'")
            _logger.info("fernql: replacing object type %s", definition.name)
        self.object_types[definition.name] = definition
        self._resolved.clear()
        _logger.debug("fernql: registered object type %s", definition.name)
        return definition

    def register_input_type(self, definition: InputType, allow_duplicate: bool = False) -> InputType:
        if definition.name in self.input_types:
            if not allow_duplicate:
                raise InitializationError(f"Input type already registered for '{definition.name}'")
            _logger.info("fernql: replacing input type %s", definition.name)
        self.input_types[definition.name] = definition
        self._resolved.clear()
        _logger.debug("fernql: registered input type %s", definition.name)
        return definition

    def register_root_operation(self, definition: RootOperation) -> RootOperation:
        if definition.name in self.root_operations:
            raise InitializationError(f"Root operation already registered for '{definition.name}'")
        self.root_operations[definition.name] = definition
        _logger.debug("fernql: registered root operation %s", definition.name)
        return definition

    # --- lookups ------------------------------------------------------------

    def resolve_object_type(self, type_ref: Union[ObjectType, ScalarType, ObjectTypeLookup]) -> Union[ObjectType, ScalarType]:
        if type_ref.kind != 'object_lookup':
            return type_ref
        key = ('object', type_ref.name)
        resolved = self._resolved.get(key)
        if resolved is None:
            resolved = self.object_types.get(type_ref.name)
            if resolved is None:
                raise UnresolvedTypeError(f"TypeDef '{type_ref.name}' not found")
            self._resolved[key] = resolved
        return resolved

    def resolve_input_type(self, type_ref: Union[InputType, ScalarType, InputTypeLookup]) -> Union[InputType, ScalarType]:
        if type_ref.kind != 'input_lookup':
            return type_ref
        key = ('input', type_ref.name)
        resolved = self._resolved.get(key)
        if resolved is None:
            resolved = self.input_types.get(type_ref.name)
            if resolved is None:
                raise UnresolvedTypeError(f"Unknown inputDef '{type_ref.name}'")
            self._resolved[key] = resolved
        return resolved

    # --- execution ----------------------------------------------------------

    async def execute(
        self,
        operation_name: str,
        query: Any,
        *,
        context_value: Any = None,
        params: Optional[FernParams] = None,
    ) -> Any:
        """Build, execute and validate one root operation; returns the serialized data.

        Raises taxonomy errors (see :mod:`fernql.core.errors`); the transport layer
        is responsible for turning them into a response envelope.
        """
        params = params or FernParams()
        root_operation = self.root_operations.get(operation_name)
        if root_operation is None:
            raise QueryError(f"Unrecognized root operation '{operation_name}'")
        field_path = [operation_name]

        tree = await ResolverTreeBuilder(self, lookup_value=params.lookup_value).build(
            query,
            root_operation,
            field_path,
            context=context_value,
            root_operation=root_operation,
            full_tree=True,
            validate_args=True,
            run_validators=True,
        )
        results = await ResolverTreeProcessor(self).process(
            tree,
            context=context_value,
            root_operation=root_operation,
            field_path=field_path,
            full_tree=params.process_entire_tree,
        )
        return await ResultValidator(self).validate(results, tree, field_path)

    # --- derived declarations -------------------------------------------------

    def to_strawberry(self):
        """Build a Strawberry schema mirroring this registry (reporting only)."""
        from .declarations import StrawberrySchemaBuilder
        return StrawberrySchemaBuilder(self).build()

    def as_sdl(self) -> str:
        return self.to_strawberry().as_str()


__all__ = ['FernSchema']
