import pytest

from fernql import (
    FernSchema,
    InitializationError,
    InputType,
    InputTypeLookup,
    ObjectType,
    ObjectTypeLookup,
    RootOperation,
    UnresolvedTypeError,
    field,
    input_field,
    scalars,
)


def test_sdl_describes_registry(fern_schema):
    sdl = fern_schema.as_sdl()
    lines = sdl.splitlines()
    assert 'type User {' in lines
    assert 'type Post {' in lines
    assert 'scalar Timestamp' in sdl
    assert 'input UserFilter {' in lines
    assert 'input PostPage {' in lines
    assert '  created_at: Timestamp!' in lines
    assert '  author: User!' in lines
    assert '  tags: [String!]' in lines
    assert '  secret: String' in lines
    assert '  is_active: Boolean!' in lines
    assert '  limit: Float!' in lines
    assert '  getUsers: [User!]!' in lines
    assert '  getUserCount: Float!' in lines
    assert 'getUser(args: UserFilter' in sdl
    assert 'echo(args: String!): String!' in sdl
    assert 'posts(args: PostPage' in sdl
    # hidden fields never leak into the declarations
    assert 'email' not in sdl


def test_descriptions_exported(fern_schema):
    sdl = fern_schema.as_sdl()
    assert 'A registered user' in sdl
    assert 'Display name' in sdl
    assert 'ISO-8601 timestamp' in sdl


def test_to_strawberry_returns_schema(fern_schema):
    strawberry_schema = fern_schema.to_strawberry()
    assert strawberry_schema.get_type_by_name('User') is not None
    assert strawberry_schema.get_type_by_name('Query') is not None


def test_requires_root_operation():
    with pytest.raises(InitializationError) as exc:
        FernSchema().as_sdl()
    assert exc.value.message == "No root operations registered"


def test_input_name_collision_gets_suffix():
    schema = FernSchema()
    schema.register_object_type(ObjectType('user', fields={'id': field(scalars.number)}))
    schema.register_input_type(InputType('user', fields={'id': input_field(scalars.number)}))
    schema.register_root_operation(RootOperation(
        name='getUser',
        type=ObjectTypeLookup('user'),
        resolver=lambda info: None,
        allow_null=True,
        args=input_field(InputTypeLookup('user'), required=True),
    ))
    sdl = schema.as_sdl()
    assert 'input UserInput {' in sdl.splitlines()
    assert 'getUser(args: UserInput!): User' in sdl


def test_dangling_lookup_reported():
    schema = FernSchema()
    schema.register_object_type(ObjectType('user', fields={'team': field(ObjectTypeLookup('team'))}))
    schema.register_root_operation(RootOperation(name='getUser', type=ObjectTypeLookup('user'), resolver=lambda info: None))
    with pytest.raises(UnresolvedTypeError):
        schema.as_sdl()
