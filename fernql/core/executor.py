from __future__ import annotations
import logging
from typing import Any, List, TYPE_CHECKING

from .fields import ResolverInfo, ResolverNode
from .utils import is_object, maybe_await, process_error

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from ..registry import FernSchema
    from .types import RootOperation

_logger = logging.getLogger(__name__)


class ResolverTreeProcessor:
    """Runs the resolvers of a built tree.

    Fields of one object are processed sequentially in query order so resolver
    side effects and error attribution are deterministic. The first error aborts
    the whole walk.
    """

    def __init__(self, schema: 'FernSchema'):
        self.schema = schema

    async def process(
        self,
        node: ResolverNode,
        *,
        context: Any,
        root_operation: 'RootOperation',
        field_path: List[str],
        results: Any = None,
        parent: Any = None,
        full_tree: bool = False,
    ) -> Any:
        try:
            type_def = node.type_def
            if type_def.kind == 'root':
                _logger.debug("Resolving root operation %s", type_def.name)
                results = await maybe_await(type_def.resolver(ResolverInfo(
                    context=context,
                    field_path=field_path,
                    args=node.args,
                    query=node.query,
                    root_operation=root_operation,
                )))
                # the root resolver is trusted to have produced the complete shape
                if not full_tree:
                    return results
            elif type_def.resolver is not None:
                if type_def.defer:
                    return None
                _logger.debug("Resolving field %s", '.'.join(field_path))
                return await maybe_await(type_def.resolver(ResolverInfo(
                    context=context,
                    field_path=field_path,
                    args=node.args,
                    query=node.query,
                    root_operation=root_operation,
                    field_value=results,
                    parent_value=parent,
                )))

            if not node.nested:
                return results
            if is_object(results):
                await self._process_nested(node, results, context=context, root_operation=root_operation, field_path=field_path)
            return results
        except Exception as err:
            raise process_error(err, field_path)

    async def _process_nested(
        self,
        node: ResolverNode,
        results: dict,
        *,
        context: Any,
        root_operation: 'RootOperation',
        field_path: List[str],
    ) -> None:
        assert node.nested is not None
        for name, child in node.nested.items():
            results[name] = await self.process(
                child,
                context=context,
                root_operation=root_operation,
                field_path=field_path + [name],
                results=results.get(name),
                parent=results,
            )


__all__ = ['ResolverTreeProcessor']
