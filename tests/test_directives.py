"""Tests for directive lookup and argument helpers."""

import pytest

from gql_schemaflow.core.directives import (
    extract_directives,
    find_directive,
    get_argument,
    get_string_argument,
    has_directive,
    remove_directive,
    value_to_python,
)
from gql_schemaflow.core.errors import DirectiveArgumentError
from gql_schemaflow.core.nodes import (
    Argument,
    BooleanValue,
    Directive,
    EnumValue,
    FieldDefinition,
    FloatValue,
    IntValue,
    ListValue,
    NullValue,
    ObjectField,
    ObjectTypeDefinition,
    ObjectValue,
    StringValue,
)
from gql_schemaflow.core.parser import parse_sdl


@pytest.fixture
def document():
    return parse_sdl(
        """
        type Query @cache(ttl: 60) {
          users: UserConnection! @connection(for: "User")
          posts(first: Int @connection): PostConnection! @connection(for: "Post", via: "PostEdge")
        }
        """
    )


class TestExtractDirectives:
    """Tests for extract_directives."""

    def test_finds_usages_in_document_order(self, document):
        usages = extract_directives(document, "connection")
        hosts = [usage.host.name for usage in usages]
        assert hosts == ["users", "first", "posts"]

    def test_parent_is_owner_of_host(self, document):
        usages = extract_directives(document, "connection", kinds=(FieldDefinition,))
        assert [usage.host.name for usage in usages] == ["users", "posts"]
        for usage in usages:
            assert isinstance(usage.parent, ObjectTypeDefinition)
            assert usage.parent.name == "Query"

    def test_no_strip_by_default(self, document):
        extract_directives(document, "connection")
        users = document.find_object_type("Query").find_field("users")
        assert has_directive(users, "connection")

    def test_strip_removes_only_matching_directives(self, document):
        usages = extract_directives(document, "connection", strip=True, kinds=(FieldDefinition,))
        query = document.find_object_type("Query")

        assert len(usages) == 2
        assert not has_directive(query.find_field("users"), "connection")
        assert not has_directive(query.find_field("posts"), "connection")
        # argument host was filtered out by kind
        assert has_directive(query.find_field("posts").find_argument("first"), "connection")
        assert has_directive(query, "cache")

    def test_stripped_usage_keeps_directive(self, document):
        usage = extract_directives(document, "connection", strip=True)[0]
        assert usage.directive.name == "connection"
        assert get_string_argument(usage.directive, "for") == "User"

    def test_no_usages(self, document):
        assert extract_directives(document, "deprecated") == []


class TestDirectiveHelpers:
    """Tests for find/remove helpers."""

    def test_find_directive(self):
        field = FieldDefinition("id", None, directives=[Directive("a"), Directive("b")])
        assert find_directive(field, "b") is field.directives[1]
        assert find_directive(field, "c") is None

    def test_remove_directive_by_identity(self):
        first = Directive("tag")
        second = Directive("tag")
        field = FieldDefinition("id", None, directives=[first, second])

        remove_directive(field, second)

        assert len(field.directives) == 1
        assert field.directives[0] is first


class TestArguments:
    """Tests for directive argument access."""

    def test_get_argument(self):
        directive = Directive("d", [Argument("n", IntValue("3"))])
        assert get_argument(directive, "n") == IntValue("3")
        assert get_argument(directive, "missing") is None

    def test_value_to_python(self):
        value = ObjectValue(
            [
                ObjectField("s", StringValue("x")),
                ObjectField("i", IntValue("2")),
                ObjectField("f", FloatValue("1.5")),
                ObjectField("b", BooleanValue(True)),
                ObjectField("e", EnumValue("ASC")),
                ObjectField("n", NullValue()),
                ObjectField("l", ListValue([IntValue("1"), IntValue("2")])),
            ]
        )
        assert value_to_python(value) == {
            "s": "x",
            "i": 2,
            "f": 1.5,
            "b": True,
            "e": "ASC",
            "n": None,
            "l": [1, 2],
        }

    def test_get_string_argument(self):
        directive = Directive("connection", [Argument("for", StringValue("User"))])
        assert get_string_argument(directive, "for", required=True) == "User"
        assert get_string_argument(directive, "via") is None

    def test_required_argument_missing(self):
        with pytest.raises(DirectiveArgumentError, match='missing the "for" argument'):
            get_string_argument(Directive("connection"), "for", required=True, where='field "Query.users"')

    def test_argument_of_wrong_kind(self):
        directive = Directive("connection", [Argument("for", EnumValue("User"))])
        with pytest.raises(DirectiveArgumentError, match="must be a string"):
            get_string_argument(directive, "for")
