"""Tests for Relay connection type generation."""

import pytest

from gql_schemaflow.core.actions.connections import generate_connection_types
from gql_schemaflow.core.config import ConnectionConfig, PageArgsConfig, PageInfoConfig
from gql_schemaflow.core.directives import has_directive
from gql_schemaflow.core.errors import (
    ConflictingDefinitionKindError,
    DirectiveArgumentError,
    ReturnTypeShapeError,
)
from gql_schemaflow.core.nodes import ObjectTypeDefinition, type_to_string
from gql_schemaflow.core.parser import parse_sdl
from gql_schemaflow.core.printer import print_document


@pytest.fixture
def document():
    return parse_sdl(
        """
        type Query {
          users: UserConnection! @connection(for: "User")
        }
        type User {
          id: ID!
        }
        """
    )


def field_types(object_type):
    return {f.name: type_to_string(f.type) for f in object_type.fields}


class TestGenerateConnectionTypes:
    """Tests for generate_connection_types."""

    def test_end_to_end(self, document):
        generate_connection_types(document)

        connection = document.find_object_type("UserConnection")
        assert isinstance(connection, ObjectTypeDefinition)
        assert field_types(connection) == {
            "nodes": "[User!]!",
            "pageInfo": "PageInfo!",
        }
        assert connection.description == "A connection to a list of `User` values."

        page_info = document.find_object_type("PageInfo")
        assert field_types(page_info) == {
            "hasNextPage": "Boolean!",
            "hasPreviousPage": "Boolean!",
            "startCursor": "String",
            "endCursor": "String",
        }

        users = document.find_object_type("Query").find_field("users")
        assert not has_directive(users, "connection")
        assert [(a.name, type_to_string(a.type)) for a in users.arguments] == [
            ("first", "Int"),
            ("after", "String"),
        ]

    def test_edges_with_via(self):
        document = parse_sdl(
            """
            type Query { users: UserConnection! @connection(for: "User", via: "UserEdge") }
            type User { id: ID! }
            type UserEdge { cursor: String! node: User! }
            """
        )
        generate_connection_types(document)

        connection = document.find_object_type("UserConnection")
        assert [f.name for f in connection.fields] == ["edges", "nodes", "pageInfo"]
        assert type_to_string(connection.find_field("edges").type) == "[UserEdge!]!"

    def test_existing_members_are_kept(self):
        document = parse_sdl(
            """
            type Query { users(first: Int = 20): UserConnection! @connection(for: "User") }
            type User { id: ID! }
            type UserConnection { nodes: [User] }
            type PageInfo { hasNextPage: Boolean }
            """
        )
        generate_connection_types(document)

        connection = document.find_object_type("UserConnection")
        assert field_types(connection)["nodes"] == "[User]"
        assert field_types(document.find_object_type("PageInfo"))["hasNextPage"] == "Boolean"

        users = document.find_object_type("Query").find_field("users")
        assert [a.name for a in users.arguments] == ["first", "after"]
        assert users.find_argument("first").default_value is not None

    def test_shared_connection_type(self):
        document = parse_sdl(
            """
            type Query {
              users: UserConnection! @connection(for: "User")
              admins: UserConnection! @connection(for: "User")
            }
            type User { id: ID! }
            """
        )
        generate_connection_types(document)

        connections = [d for d in document.definitions if getattr(d, "name", None) == "UserConnection"]
        assert len(connections) == 1
        admins = document.find_object_type("Query").find_field("admins")
        assert [a.name for a in admins.arguments] == ["first", "after"]

    def test_no_directives_is_a_no_op(self):
        document = parse_sdl("type Query { id: ID }")
        printed = print_document(document)

        generate_connection_types(document)

        assert print_document(document) == printed
        assert document.find_object_type("PageInfo") is None

    def test_idempotent(self, document):
        generate_connection_types(document)
        printed = print_document(document)

        generate_connection_types(document)

        assert print_document(document) == printed

    def test_configuration(self, document):
        config = ConnectionConfig(
            page_args=PageArgsConfig(first=True, after=True, last=True, before=True),
            page_info=PageInfoConfig(type_name="PaginationInfo", start_cursor=False, end_cursor=False),
            add_total_count=True,
        )
        generate_connection_types(document, config)

        connection = document.find_object_type("UserConnection")
        assert field_types(connection) == {
            "nodes": "[User!]!",
            "pageInfo": "PaginationInfo!",
            "totalCount": "Int!",
        }
        assert document.find_object_type("PageInfo") is None
        assert [f.name for f in document.find_object_type("PaginationInfo").fields] == [
            "hasNextPage",
            "hasPreviousPage",
        ]
        users = document.find_object_type("Query").find_field("users")
        assert [a.name for a in users.arguments] == ["first", "after", "last", "before"]

    def test_output_is_a_valid_schema(self, document):
        from graphql import build_schema

        generate_connection_types(document)
        schema = build_schema(print_document(document))
        assert "UserConnection" in schema.type_map


class TestConnectionErrors:
    """Tests for invalid @connection usages."""

    def test_missing_for_argument(self):
        document = parse_sdl("type Query { users: UserConnection! @connection }")
        with pytest.raises(DirectiveArgumentError, match='missing the "for" argument'):
            generate_connection_types(document)

    def test_for_type_does_not_exist(self):
        document = parse_sdl('type Query { users: UserConnection! @connection(for: "User") }')
        with pytest.raises(DirectiveArgumentError, match='for type "User" which does not exist'):
            generate_connection_types(document)

    def test_via_type_does_not_exist(self):
        document = parse_sdl(
            'type Query { users: UserConnection! @connection(for: "User", via: "UserEdge") }',
            "type User { id: ID! }",
        )
        with pytest.raises(DirectiveArgumentError, match='via edge type "UserEdge"'):
            generate_connection_types(document)

    def test_for_must_be_a_string(self):
        document = parse_sdl(
            "type Query { users: UserConnection! @connection(for: User) }",
            "type User { id: ID! }",
        )
        with pytest.raises(DirectiveArgumentError, match="must be a string"):
            generate_connection_types(document)

    @pytest.mark.parametrize(
        "return_type",
        ["UserConnection", "[UserConnection]!", "Users!"],
    )
    def test_return_type_shape(self, return_type):
        document = parse_sdl(
            f'type Query {{ users: {return_type} @connection(for: "User") }}',
            "type User { id: ID! }",
        )
        with pytest.raises(ReturnTypeShapeError, match='field "Query.users"'):
            generate_connection_types(document)

    def test_connection_name_taken_by_other_kind(self):
        document = parse_sdl(
            'type Query { users: UserConnection! @connection(for: "User") }',
            "type User { id: ID! }",
            "enum UserConnection { A }",
        )
        with pytest.raises(ConflictingDefinitionKindError):
            generate_connection_types(document)
