"""Request handling: the generic endpoint, REST-style endpoints and a FastAPI binding.

``handle_request`` / ``handle_rest_request`` are transport-agnostic and return a
``(status_code, envelope)`` pair. ``create_router`` wires them into a FastAPI
``APIRouter``:

    app = FastAPI()
    initialize_fernql(app, schema, FernParams.from_env())
"""
from __future__ import annotations
import copy
import logging
from typing import Any, Callable, Dict, Optional, Tuple, TYPE_CHECKING

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from .config import FernParams
from .core.errors import InitializationError, QueryError
from .core.types import RestOptions, RootOperation
from .core.utils import LOOKUP, UNSET, is_object, maybe_await, process_error
from .response import generate_error_response, generate_normal_response

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .registry import FernSchema

_logger = logging.getLogger(__name__)

_ALL_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'PATCH', 'OPTIONS', 'HEAD']

Envelope = Tuple[int, Dict[str, Any]]


def _error_envelope(err: BaseException, params: FernParams) -> Envelope:
    error = process_error(err)
    if params.debug:
        _logger.error("fernql request failed: %s", error, exc_info=error)
    else:
        _logger.warning("fernql request failed: %s", error)
    return error.status_code, generate_error_response(error, debug=params.debug)


async def handle_request(
    schema: 'FernSchema',
    payload: Any,
    *,
    context_value: Any = None,
    params: Optional[FernParams] = None,
) -> Envelope:
    """Run a generic request: ``payload`` names exactly one root operation and maps
    it to its query document."""
    params = params or FernParams()
    try:
        if not is_object(payload):
            raise QueryError("Request body must be object")
        if len(payload) != 1:
            raise QueryError("Exactly 1 root operation required")
        operation_name, query = next(iter(payload.items()))
        data = await schema.execute(operation_name, query, context_value=context_value, params=params)
    except Exception as err:
        return _error_envelope(err, params)
    return 200, generate_normal_response(data)


def build_rest_query(schema: 'FernSchema', root_operation: RootOperation, args: Any) -> Any:
    """Derive the query document of a REST call from its arguments and the
    operation's static query template."""
    if is_object(args) and not args:
        args = UNSET
    rest_options = root_operation.rest_options
    preset = rest_options.query if rest_options is not None else None
    root_type = schema.resolve_object_type(root_operation.type)
    if root_type.kind == 'scalar':
        if args is not UNSET:
            return {'__args': args}
        return copy.deepcopy(preset) if preset is not None else LOOKUP
    if preset is None:
        # bare marker; the tree builder rejects it for object roots
        if args is UNSET:
            return LOOKUP
        query: Dict[str, Any] = {}
    elif is_object(preset):
        # templates are shared by every request; args validation normalizes in place
        query = copy.deepcopy(preset)
    else:
        return preset
    if args is not UNSET:
        query['__args'] = args
    return query


async def handle_rest_request(
    schema: 'FernSchema',
    operation_name: str,
    args: Any,
    *,
    context_value: Any = None,
    params: Optional[FernParams] = None,
) -> Envelope:
    params = params or FernParams()
    try:
        root_operation = schema.root_operations.get(operation_name)
        if root_operation is None:
            raise QueryError(f"Unrecognized root operation '{operation_name}'")
        query = build_rest_query(schema, root_operation, args)
        data = await schema.execute(operation_name, query, context_value=context_value, params=params)
    except Exception as err:
        return _error_envelope(err, params)
    return 200, generate_normal_response(data)


# --- FastAPI binding ----------------------------------------------------------

ContextGetter = Callable[[Request], Any]


async def _get_context(request: Request, context_getter: Optional[ContextGetter]) -> Any:
    if context_getter is None:
        return request
    return await maybe_await(context_getter(request))


def create_router(
    schema: 'FernSchema',
    params: Optional[FernParams] = None,
    *,
    context_getter: Optional[ContextGetter] = None,
) -> APIRouter:
    """Build an APIRouter exposing the generic endpoint at ``params.path`` and one
    route per root operation declaring ``rest_options``.

    ``context_getter(request)`` (sync or async) produces the context handed to
    resolvers; by default resolvers receive the request itself.
    """
    params = (params or FernParams()).validate()
    router = APIRouter()

    async def fernql_endpoint(request: Request):
        try:
            payload = await request.json()
        except ValueError:
            payload = None
        context_value = await _get_context(request, context_getter)
        status, body = await handle_request(schema, payload, context_value=context_value, params=params)
        return JSONResponse(body, status_code=status)

    router.add_api_route(params.path, fernql_endpoint, methods=['POST'])

    for name, root_operation in schema.root_operations.items():
        rest_options = root_operation.rest_options
        if rest_options is None:
            continue
        if rest_options.route == params.path:
            raise InitializationError(f"Duplicate route for fernql path: '{params.path}'")
        methods = _ALL_METHODS if rest_options.method == 'all' else [rest_options.method.upper()]
        router.add_api_route(
            rest_options.route,
            _make_rest_endpoint(schema, name, rest_options, params, context_getter),
            methods=methods,
            name=name,
        )
        _logger.debug("fernql: mounted %s %s -> %s", ','.join(methods), rest_options.route, name)
    return router


def _make_rest_endpoint(
    schema: 'FernSchema',
    operation_name: str,
    rest_options: RestOptions,
    params: FernParams,
    context_getter: Optional[ContextGetter],
):
    async def rest_endpoint(request: Request):
        try:
            if rest_options.args_transformer is not None:
                args = await maybe_await(rest_options.args_transformer(request))
            else:
                args = {**dict(request.query_params), **dict(request.path_params)}
        except Exception as err:
            status, body = _error_envelope(err, params)
            return JSONResponse(body, status_code=status)
        context_value = await _get_context(request, context_getter)
        status, body = await handle_rest_request(
            schema, operation_name, args, context_value=context_value, params=params,
        )
        return JSONResponse(body, status_code=status)

    return rest_endpoint


def initialize_fernql(
    app: FastAPI,
    schema: 'FernSchema',
    params: Optional[FernParams] = None,
    *,
    context_getter: Optional[ContextGetter] = None,
) -> APIRouter:
    """Mount the fernql routes on ``app``. Call once at start-up, after every type
    and root operation has been registered."""
    router = create_router(schema, params, context_getter=context_getter)
    app.include_router(router)
    return router


__all__ = [
    'handle_request', 'handle_rest_request', 'build_rest_query', 'create_router', 'initialize_fernql',
]
