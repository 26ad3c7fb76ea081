"""Mutable AST model for GraphQL schema documents.

This module defines dataclasses that represent a parsed SDL document. Unlike
graphql-core's AST, every collection is a plain list so passes can append,
splice and delete members in place.

Each node class carries two class-level constants:
    kind: discriminator string, matching graphql-core's ``kind`` names
    children: attribute names holding child nodes, in document order
"""

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Union


@dataclass
class Node:
    """Base class for all AST nodes."""
    kind: ClassVar[str] = "node"
    children: ClassVar[tuple[str, ...]] = ()


# =============================================================================
# Values
# =============================================================================


@dataclass
class StringValue(Node):
    value: str
    block: bool = False
    kind = "string_value"


@dataclass
class EnumValue(Node):
    value: str
    kind = "enum_value"


@dataclass
class IntValue(Node):
    # kept as source text so printing round-trips exactly
    value: str
    kind = "int_value"


@dataclass
class FloatValue(Node):
    value: str
    kind = "float_value"


@dataclass
class BooleanValue(Node):
    value: bool
    kind = "boolean_value"


@dataclass
class NullValue(Node):
    kind = "null_value"


@dataclass
class ListValue(Node):
    values: list["Value"] = field(default_factory=list)
    kind = "list_value"
    children = ("values",)


@dataclass
class ObjectField(Node):
    name: str
    value: "Value"
    kind = "object_field"
    children = ("value",)


@dataclass
class ObjectValue(Node):
    fields: list[ObjectField] = field(default_factory=list)
    kind = "object_value"
    children = ("fields",)


Value = Union[
    StringValue, EnumValue, IntValue, FloatValue, BooleanValue, NullValue, ListValue, ObjectValue
]


# =============================================================================
# Type references
# =============================================================================


@dataclass
class NamedType(Node):
    name: str
    kind = "named_type"


@dataclass
class ListType(Node):
    type: "TypeRef"
    kind = "list_type"
    children = ("type",)


@dataclass
class NonNullType(Node):
    type: Union[NamedType, ListType]
    kind = "non_null_type"
    children = ("type",)


TypeRef = Union[NamedType, ListType, NonNullType]


def named(name: str, non_null: bool = False) -> TypeRef:
    """Build a named type reference, optionally wrapped in non-null."""
    type_ref = NamedType(name)
    return NonNullType(type_ref) if non_null else type_ref


def non_null_list_of(name: str) -> NonNullType:
    """Build ``[name!]!``."""
    return NonNullType(ListType(NonNullType(NamedType(name))))


def unwrap_type(type_ref: TypeRef) -> NamedType:
    """Strip list and non-null wrappers down to the named type."""
    while not isinstance(type_ref, NamedType):
        type_ref = type_ref.type
    return type_ref


def type_to_string(type_ref: TypeRef) -> str:
    """Render a type reference the way it is written in SDL."""
    if isinstance(type_ref, NonNullType):
        return f"{type_to_string(type_ref.type)}!"
    if isinstance(type_ref, ListType):
        return f"[{type_to_string(type_ref.type)}]"
    return type_ref.name


# =============================================================================
# Directives and members
# =============================================================================


@dataclass
class Argument(Node):
    name: str
    value: Value
    kind = "argument"
    children = ("value",)


@dataclass
class Directive(Node):
    name: str
    arguments: list[Argument] = field(default_factory=list)
    kind = "directive"
    children = ("arguments",)


@dataclass
class InputValueDefinition(Node):
    """An argument definition or an input object field."""
    name: str
    type: TypeRef
    description: str | None = None
    default_value: Value | None = None
    directives: list[Directive] = field(default_factory=list)
    kind = "input_value_definition"
    children = ("type", "default_value", "directives")


@dataclass
class FieldDefinition(Node):
    """A field on an object or interface type."""
    name: str
    type: TypeRef
    description: str | None = None
    arguments: list[InputValueDefinition] = field(default_factory=list)
    directives: list[Directive] = field(default_factory=list)
    kind = "field_definition"
    children = ("arguments", "type", "directives")

    def find_argument(self, name: str) -> InputValueDefinition | None:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None


@dataclass
class EnumValueDefinition(Node):
    name: str
    description: str | None = None
    directives: list[Directive] = field(default_factory=list)
    kind = "enum_value_definition"
    children = ("directives",)


@dataclass
class OperationTypeDefinition(Node):
    """One ``query: Query`` entry of a schema definition."""
    operation: str
    type: NamedType
    kind = "operation_type_definition"
    children = ("type",)


# =============================================================================
# Definitions
# =============================================================================


@dataclass
class Definition(Node):
    """Base class for top-level document definitions."""
    pass


@dataclass
class DirectiveDefinition(Definition):
    name: str
    locations: list[str] = field(default_factory=list)
    description: str | None = None
    arguments: list[InputValueDefinition] = field(default_factory=list)
    repeatable: bool = False
    kind = "directive_definition"
    children = ("arguments",)


@dataclass
class SchemaNode(Definition):
    description: str | None = None
    directives: list[Directive] = field(default_factory=list)
    operation_types: list[OperationTypeDefinition] = field(default_factory=list)
    children = ("directives", "operation_types")


@dataclass
class SchemaDefinition(SchemaNode):
    kind = "schema_definition"


@dataclass
class SchemaExtension(SchemaNode):
    kind = "schema_extension"


@dataclass
class TypeNode(Definition):
    """Base class for every named type definition or extension."""
    name: str
    description: str | None = None
    directives: list[Directive] = field(default_factory=list)
    children = ("directives",)


@dataclass
class ScalarTypeDefinition(TypeNode):
    kind = "scalar_type_definition"


@dataclass
class ScalarTypeExtension(TypeNode):
    kind = "scalar_type_extension"


@dataclass
class FieldsTypeNode(TypeNode):
    """Shared shape of object and interface types."""
    interfaces: list[NamedType] = field(default_factory=list)
    fields: list[FieldDefinition] = field(default_factory=list)
    children = ("interfaces", "directives", "fields")

    def find_field(self, name: str) -> FieldDefinition | None:
        for type_field in self.fields:
            if type_field.name == name:
                return type_field
        return None


@dataclass
class ObjectTypeDefinition(FieldsTypeNode):
    kind = "object_type_definition"


@dataclass
class ObjectTypeExtension(FieldsTypeNode):
    kind = "object_type_extension"


@dataclass
class InterfaceTypeDefinition(FieldsTypeNode):
    kind = "interface_type_definition"


@dataclass
class InterfaceTypeExtension(FieldsTypeNode):
    kind = "interface_type_extension"


@dataclass
class UnionTypeNode(TypeNode):
    types: list[NamedType] = field(default_factory=list)
    children = ("directives", "types")


@dataclass
class UnionTypeDefinition(UnionTypeNode):
    kind = "union_type_definition"


@dataclass
class UnionTypeExtension(UnionTypeNode):
    kind = "union_type_extension"


@dataclass
class EnumTypeNode(TypeNode):
    values: list[EnumValueDefinition] = field(default_factory=list)
    children = ("directives", "values")


@dataclass
class EnumTypeDefinition(EnumTypeNode):
    kind = "enum_type_definition"


@dataclass
class EnumTypeExtension(EnumTypeNode):
    kind = "enum_type_extension"


@dataclass
class InputObjectTypeNode(TypeNode):
    fields: list[InputValueDefinition] = field(default_factory=list)
    children = ("directives", "fields")


@dataclass
class InputObjectTypeDefinition(InputObjectTypeNode):
    kind = "input_object_type_definition"


@dataclass
class InputObjectTypeExtension(InputObjectTypeNode):
    kind = "input_object_type_extension"


# Each extension kind and the base definition kind it merges into.
EXTENSION_TO_DEFINITION: dict[type[Definition], type[Definition]] = {
    ObjectTypeExtension: ObjectTypeDefinition,
    InterfaceTypeExtension: InterfaceTypeDefinition,
    InputObjectTypeExtension: InputObjectTypeDefinition,
    EnumTypeExtension: EnumTypeDefinition,
    UnionTypeExtension: UnionTypeDefinition,
    ScalarTypeExtension: ScalarTypeDefinition,
    SchemaExtension: SchemaDefinition,
}

BASE_DEFINITION_KINDS: tuple[type[Definition], ...] = tuple(EXTENSION_TO_DEFINITION.values())

# Collections an extension contributes to its base definition.
MERGEABLE_FIELDS_BY_KIND: dict[type[Definition], tuple[str, ...]] = {
    ObjectTypeDefinition: ("fields", "interfaces", "directives"),
    InterfaceTypeDefinition: ("fields", "directives"),
    InputObjectTypeDefinition: ("fields", "directives"),
    EnumTypeDefinition: ("values", "directives"),
    UnionTypeDefinition: ("types", "directives"),
    ScalarTypeDefinition: ("directives",),
    SchemaDefinition: ("directives", "operation_types"),
    ObjectTypeExtension: ("fields", "interfaces", "directives"),
    InterfaceTypeExtension: ("fields", "directives"),
    InputObjectTypeExtension: ("fields", "directives"),
    EnumTypeExtension: ("values", "directives"),
    UnionTypeExtension: ("types", "directives"),
    ScalarTypeExtension: ("directives",),
    SchemaExtension: ("directives", "operation_types"),
}


def is_extension(node: Node) -> bool:
    """Check if a node is one of the ``extend ...`` definition kinds."""
    return type(node) in EXTENSION_TO_DEFINITION


@dataclass
class Document(Node):
    """Root container of a schema: an ordered list of definitions."""
    definitions: list[Definition] = field(default_factory=list)
    kind = "document"
    children = ("definitions",)

    def find_definition(
        self,
        name: str,
        kind: type[Definition] | tuple[type[Definition], ...] = BASE_DEFINITION_KINDS,
    ) -> Definition | None:
        """Look up the first definition with the given name and kind."""
        for definition in self.definitions:
            if isinstance(definition, kind) and getattr(definition, "name", None) == name:
                return definition
        return None

    def find_object_type(self, name: str) -> ObjectTypeDefinition | None:
        return self.find_definition(name, ObjectTypeDefinition)

    def base_definitions(self) -> Iterator[Definition]:
        """Yield every non-extension type or schema definition."""
        for definition in self.definitions:
            if isinstance(definition, BASE_DEFINITION_KINDS):
                yield definition

    def extensions(self) -> Iterator[Definition]:
        """Yield every extension definition."""
        for definition in self.definitions:
            if is_extension(definition):
                yield definition
