import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fernql import (
    FernParams,
    InitializationError,
    LOOKUP,
    RestOptions,
    RootOperation,
    create_router,
    initialize_fernql,
    scalars,
)
from fernql.router import build_rest_query


def _client(schema, params=None, **kwargs):
    app = FastAPI()
    initialize_fernql(app, schema, params, **kwargs)
    return TestClient(app)


def test_generic_endpoint(fern_schema):
    client = _client(fern_schema)
    res = client.post('/fernql', json={'getUser': {'id': True, 'name': True}})
    assert res.status_code == 200
    assert res.json() == {'data': {'id': 1, 'name': 'Ann'}}


def test_generic_endpoint_error_envelope(fern_schema):
    client = _client(fern_schema)
    res = client.post('/fernql', json={'getUser': {'__args': {'bogus': 1}, 'id': True}})
    assert res.status_code == 400
    body = res.json()
    assert body['data'] is None
    assert body['error']['type'] == 'ArgsError'
    assert body['error']['fieldPath'] == ['getUser', '__args']


def test_invalid_json_body(fern_schema):
    client = _client(fern_schema)
    res = client.post('/fernql', content=b'not json', headers={'content-type': 'application/json'})
    assert res.status_code == 400
    assert res.json()['error']['message'] == "QueryError: Request body must be object"


def test_custom_path_and_context_getter(fern_schema):
    client = _client(
        fern_schema,
        FernParams(path='/api/query'),
        context_getter=lambda request: {'role': request.headers.get('x-role')},
    )
    assert client.post('/fernql', json={'getUserCount': True}).status_code in (404, 405)
    res = client.post('/api/query', json={'getStats': {'posts': True}}, headers={'x-role': 'admin'})
    assert res.json() == {'data': {'posts': 3}}
    res = client.post('/api/query', json={'getStats': {'posts': True}}, headers={'x-role': 'guest'})
    assert res.status_code == 400


def test_rest_route_with_args_transformer(fern_schema):
    client = _client(fern_schema)
    res = client.get('/users/2')
    assert res.status_code == 200
    assert res.json() == {'data': {'id': 2, 'name': 'Bob'}}


def test_rest_route_transformer_failure(fern_schema):
    client = _client(fern_schema)
    res = client.get('/users/abc')
    assert res.status_code == 500
    assert res.json()['error']['type'] == 'BaseError'


def test_rest_route_scalar(fern_schema):
    client = _client(fern_schema)
    res = client.get('/user-count')
    assert res.json() == {'data': 2}
    # single-method routes only answer their method
    assert client.post('/user-count').status_code == 405


def test_rest_route_all_methods_uses_query_params(fern_schema):
    client = _client(fern_schema)
    res = client.get('/posts', params={'title': 'Ops'})
    assert res.json() == {'data': [{'id': 12, 'title': 'Ops notes'}]}
    res = client.delete('/posts')
    assert res.status_code == 200
    assert len(res.json()['data']) == 3
    # query-string values stay strings
    res = client.get('/posts', params={'limit': '1'})
    assert res.status_code == 400
    assert res.json()['error']['fieldPath'] == ['getPosts', '__args', 'limit']


def test_rest_route_cannot_shadow_generic_path(fern_schema):
    fern_schema.register_root_operation(RootOperation(
        name='shadow',
        type=scalars.string,
        resolver=lambda info: 'x',
        rest_options=RestOptions(method='post', route='/fernql'),
    ))
    with pytest.raises(InitializationError) as exc:
        create_router(fern_schema)
    assert exc.value.message == "Duplicate route for fernql path: '/fernql'"


def test_invalid_path_rejected(fern_schema):
    with pytest.raises(InitializationError):
        create_router(fern_schema, FernParams(path='fernql'))


def test_rest_options_validation():
    assert RestOptions(method='GET', route='/x').method == 'get'
    with pytest.raises(InitializationError):
        RestOptions(method='fetch', route='/x')
    with pytest.raises(InitializationError):
        RestOptions(method='get', route='x')


def test_build_rest_query(fern_schema):
    get_user = fern_schema.root_operations['getUser']
    assert build_rest_query(fern_schema, get_user, {'id': 1}) == {'id': True, 'name': True, '__args': {'id': 1}}
    assert build_rest_query(fern_schema, get_user, {}) == {'id': True, 'name': True}

    echo = fern_schema.root_operations['echo']
    assert build_rest_query(fern_schema, echo, 'hi') == {'__args': 'hi'}
    assert build_rest_query(fern_schema, fern_schema.root_operations['getUserCount'], {}) is LOOKUP

    get_users = fern_schema.root_operations['getUsers']
    assert build_rest_query(fern_schema, get_users, {}) is LOOKUP
    assert build_rest_query(fern_schema, get_users, {'id': 1}) == {'__args': {'id': 1}}
