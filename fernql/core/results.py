from __future__ import annotations
import asyncio
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .errors import ResultError
from .fields import ArrayOptions, ResolverNode
from .utils import is_object, process_error

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..registry import FernSchema


def validate_result_nullish(value: Any, type_def: Any, field_path: List[str], array_options: Optional[ArrayOptions]) -> None:
    """Raise when ``value`` is null and the field (or its array element) disallows it."""
    try:
        is_null_allowed = array_options.allow_null_element if array_options else type_def.allow_null
        if value is None and not is_null_allowed:
            raise ResultError("Null value not allowed" + (" for array element" if array_options else ""))
    except Exception as err:
        raise process_error(err, field_path)


def validate_result_fields(value: Any, type_def: Any, field_path: List[str]) -> None:
    """Raise when an array field is not an array, or when nullability is violated."""
    try:
        array_options = type_def.array_options
        if array_options:
            if isinstance(value, list):
                for element in value:
                    validate_result_nullish(element, type_def, field_path, array_options)
            elif not type_def.allow_null:
                raise ResultError("Array expected")
            elif value is not None:
                raise ResultError("Array or null expected")
        else:
            validate_result_nullish(value, type_def, field_path, None)
    except Exception as err:
        raise process_error(err, field_path)


class ResultValidator:
    """Walks raw resolver output together with the resolver tree, enforcing the
    nullability and array invariants and applying scalar ``serialize`` functions.

    Only the fields present in the tree end up in the output.
    """

    def __init__(self, schema: 'FernSchema'):
        self.schema = schema

    async def validate(self, results: Any, node: ResolverNode, field_path: List[str]) -> Any:
        try:
            type_def = node.type_def
            if node.nested is not None:
                if results is None:
                    if not type_def.allow_null:
                        raise ResultError("Null output not allowed")
                    return None
                if type_def.array_options:
                    if not isinstance(results, list):
                        raise ResultError("Expecting array or null")
                    # elements are independent of each other
                    return list(await asyncio.gather(*(
                        self._validate_element(element, node, field_path) for element in results
                    )))
                if not node.nested:
                    return {} if is_object(results) else None
                if not is_object(results):
                    raise ResultError("Expecting object")
                return await self._validate_object(results, node.nested, field_path)

            validate_result_fields(results, type_def, field_path)

            field_type = self.schema.resolve_object_type(type_def.type)
            if field_type.kind == 'object':
                return results

            serialize = field_type.serialize
            if serialize is None or results is None:
                return results
            try:
                if type_def.array_options and isinstance(results, list):
                    return [None if element is None else serialize(element) for element in results]
                return serialize(results)
            except Exception:
                raise ResultError(f"Invalid scalar value for '{field_type.name}'")
        except Exception as err:
            raise process_error(err, field_path)

    async def _validate_element(self, element: Any, node: ResolverNode, field_path: List[str]) -> Any:
        assert node.nested is not None
        if element is None:
            validate_result_nullish(element, node.type_def, field_path, node.type_def.array_options)
            return None
        if not node.nested:
            return {} if is_object(element) else None
        if not is_object(element):
            raise ResultError("Expecting object", field_path=field_path)
        return await self._validate_object(element, node.nested, field_path)

    async def _validate_object(self, results: Dict[str, Any], nested: Dict[str, ResolverNode], field_path: List[str]) -> Dict[str, Any]:
        validated: Dict[str, Any] = {}
        for name, child in nested.items():
            validated[name] = await self.validate(results.get(name), child, field_path + [name])
        return validated


__all__ = ['ResultValidator', 'validate_result_fields', 'validate_result_nullish']
