from __future__ import annotations
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

from .args import ArgsValidator
from .errors import ArgsError, QueryError
from .fields import FieldDef, ResolverNode, ValidatorInfo
from .utils import LOOKUP, UNSET, is_object, maybe_await, process_error

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..registry import FernSchema
    from .types import RootOperation


class ResolverTreeBuilder:
    """Turns a client query document into a tree of :class:`ResolverNode`.

    Responsibilities:
      - Enforce the query shape rules (leaf vs. nested, unknown and hidden fields)
      - Validate ``__args`` against each field's argument slot
      - Run per-field validators before descending into a field
    """

    def __init__(self, schema: 'FernSchema', *, lookup_value: Any = True):
        self.schema = schema
        self.lookup_value = lookup_value
        self.args_validator = ArgsValidator(schema)

    def is_lookup_marker(self, value: Any) -> bool:
        if value is LOOKUP:
            return True
        # compare by type as well so that 1 does not select like True
        return type(value) is type(self.lookup_value) and value == self.lookup_value

    async def build(
        self,
        field_value: Any,
        resolver_object: Union[FieldDef, 'RootOperation'],
        field_path: List[str],
        *,
        context: Any = None,
        root_operation: Optional['RootOperation'] = None,
        full_tree: bool = False,
        validate_args: bool = False,
        run_validators: bool = False,
    ) -> ResolverNode:
        try:
            if run_validators and resolver_object.validator is not None:
                await maybe_await(resolver_object.validator(ValidatorInfo(
                    context=context,
                    field_path=field_path,
                    args=resolver_object.args,
                    query=field_value,
                    root_operation=root_operation,
                )))

            field_type = self.schema.resolve_object_type(resolver_object.type)

            is_lookup_field = self.is_lookup_marker(field_value)
            is_leaf = field_type.kind != 'object'

            if not is_lookup_field and not is_object(field_value):
                raise QueryError("Invalid field RHS")

            if is_leaf and is_object(field_value) and any(key != '__args' for key in field_value):
                raise QueryError("Scalar node can only accept __args and no other field")

            if not is_leaf and is_lookup_field:
                raise QueryError("Resolved node must be an object with nested fields")

            if is_leaf and is_lookup_field and resolver_object.args is not None and resolver_object.args.required:
                raise ArgsError("Args is required", field_path=field_path + ['__args'])

            if not is_object(field_value):
                return ResolverNode(type_def=resolver_object, query={}, args=None, nested=None)

            args = field_value.get('__args', UNSET)
            query = {key: value for key, value in field_value.items() if key != '__args'}

            if validate_args:
                args = self.args_validator.validate(args, resolver_object.args, field_path + ['__args'])

            nested: Optional[Dict[str, ResolverNode]] = None
            if not is_leaf:
                nested = {}
                for name, sub_value in query.items():
                    sub_path = field_path + [name]
                    field_def = field_type.fields.get(name)
                    if field_def is None:
                        raise QueryError("Unknown field", field_path=sub_path)
                    if field_def.hidden:
                        raise QueryError("Hidden field", field_path=sub_path)
                    # a field with its own resolver builds its sub-results itself;
                    # the sub-tree is still needed to validate them in full-tree mode
                    if full_tree or resolver_object.resolver is None:
                        nested[name] = await self.build(
                            sub_value,
                            field_def,
                            sub_path,
                            context=context,
                            root_operation=root_operation,
                            full_tree=full_tree,
                            validate_args=validate_args,
                            run_validators=run_validators,
                        )

            return ResolverNode(
                type_def=resolver_object,
                query=query,
                args=None if args is UNSET else args,
                nested=nested,
            )
        except Exception as err:
            raise process_error(err, field_path)
