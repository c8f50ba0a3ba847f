import pytest

from fernql import (
    FernSchema,
    InitializationError,
    InputType,
    InputTypeLookup,
    ObjectType,
    ObjectTypeLookup,
    QueryError,
    RootOperation,
    ScalarType,
    UnresolvedTypeError,
    field,
    input_field,
    scalars,
)


def _user_type(**extra):
    return ObjectType('user', fields={'id': field(scalars.number), **extra})


def test_base_scalars_registered_by_default():
    schema = FernSchema()
    assert set(schema.scalars) == {'number', 'string', 'boolean'}
    assert FernSchema(base_scalars=False).scalars == {}


def test_duplicate_object_type_rejected():
    schema = FernSchema()
    schema.register_object_type(_user_type())
    with pytest.raises(InitializationError) as exc:
        schema.register_object_type(_user_type())
    assert exc.value.message == "Object type already registered for 'user'"


def test_duplicate_object_type_replaced_when_allowed():
    schema = FernSchema()
    first = schema.register_object_type(_user_type())
    assert schema.resolve_object_type(ObjectTypeLookup('user')) is first
    second = schema.register_object_type(_user_type(name=field(scalars.string)), allow_duplicate=True)
    assert schema.object_types['user'] is second
    # cached lookups are dropped on registration
    assert schema.resolve_object_type(ObjectTypeLookup('user')) is second


def test_duplicate_input_type():
    schema = FernSchema()
    schema.register_input_type(InputType('filter', fields={'id': input_field(scalars.number)}))
    with pytest.raises(InitializationError) as exc:
        schema.register_input_type(InputType('filter', fields={}))
    assert exc.value.message == "Input type already registered for 'filter'"
    replacement = schema.register_input_type(InputType('filter', fields={}), allow_duplicate=True)
    assert schema.resolve_input_type(InputTypeLookup('filter')) is replacement


def test_scalar_override_policy():
    schema = FernSchema()
    custom = ScalarType(name='number', description='Overridden')
    schema.register_scalar(custom)
    assert schema.scalars['number'] is custom
    with pytest.raises(InitializationError) as exc:
        schema.register_scalar(ScalarType(name='number'), allow_override=False)
    assert exc.value.message == "Scalar type already registered for 'number'"


def test_duplicate_root_operation_always_rejected():
    schema = FernSchema()
    op = RootOperation(name='ping', type=scalars.string, resolver=lambda info: 'pong')
    schema.register_root_operation(op)
    with pytest.raises(InitializationError):
        schema.register_root_operation(RootOperation(name='ping', type=scalars.string, resolver=lambda info: 'pong'))


def test_root_operation_requires_resolver():
    with pytest.raises(InitializationError):
        RootOperation(name='broken', type=scalars.string, resolver=None)


def test_object_type_cannot_declare_args_field():
    with pytest.raises(InitializationError):
        ObjectType('bad', fields={'__args': field(scalars.string)})


@pytest.mark.asyncio
async def test_unknown_root_operation():
    schema = FernSchema()
    with pytest.raises(QueryError) as exc:
        await schema.execute('nope', {})
    assert exc.value.message == "Unrecognized root operation 'nope'"
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_unresolved_lookup_fails_on_first_use():
    schema = FernSchema()
    schema.register_object_type(ObjectType('user', fields={
        'id': field(scalars.number),
        'team': field(ObjectTypeLookup('team'), allow_null=True),
    }))
    schema.register_root_operation(RootOperation(
        name='getUser',
        type=ObjectTypeLookup('user'),
        resolver=lambda info: {'id': 1, 'team': None},
    ))
    # registration succeeds; the dangling reference is only noticed when traversed
    assert await schema.execute('getUser', {'id': True}) == {'id': 1}
    with pytest.raises(UnresolvedTypeError) as exc:
        await schema.execute('getUser', {'id': True, 'team': {'name': True}})
    assert exc.value.message == "TypeDef 'team' not found"
    assert exc.value.field_path == ['getUser', 'team']
    assert isinstance(exc.value, InitializationError)


def test_unresolved_input_lookup():
    schema = FernSchema()
    with pytest.raises(UnresolvedTypeError) as exc:
        schema.resolve_input_type(InputTypeLookup('missing'))
    assert exc.value.message == "Unknown inputDef 'missing'"


@pytest.mark.asyncio
async def test_lookup_resolution_independent_of_registration_order():
    def build(order):
        schema = FernSchema()
        types = {
            'author': ObjectType('author', fields={
                'name': field(scalars.string),
                'book': field(ObjectTypeLookup('book'), allow_null=True),
            }),
            'book': ObjectType('book', fields={
                'title': field(scalars.string),
                'author': field(ObjectTypeLookup('author')),
            }),
        }
        for name in order:
            schema.register_object_type(types[name])
        schema.register_root_operation(RootOperation(
            name='getBook',
            type=ObjectTypeLookup('book'),
            resolver=lambda info: {'title': 'Dune', 'author': {'name': 'Herbert', 'book': None}},
        ))
        return schema

    query = {'title': True, 'author': {'name': True, 'book': {'title': True}}}
    expected = {'title': 'Dune', 'author': {'name': 'Herbert', 'book': None}}
    assert await build(['author', 'book']).execute('getBook', query) == expected
    assert await build(['book', 'author']).execute('getBook', query) == expected
