"""Serialize the node model back to SDL.

The document is converted back into graphql-core AST nodes and printed with
``graphql.print_ast``, so the output is exactly what graphql-core would
print for the same schema. Definition and member order is preserved.

A schema definition without operation types cannot be written in SDL: its
directives are printed as ``extend schema @...`` and an empty one is dropped.
"""

from graphql import (
    ArgumentNode,
    BooleanValueNode,
    DefinitionNode,
    DirectiveDefinitionNode,
    DirectiveNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    EnumValueDefinitionNode,
    EnumValueNode,
    FieldDefinitionNode,
    FloatValueNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    IntValueNode,
    ListTypeNode,
    ListValueNode,
    NamedTypeNode,
    NameNode,
    NonNullTypeNode,
    NullValueNode,
    ObjectFieldNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ObjectValueNode,
    OperationType,
    OperationTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    StringValueNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    print_ast,
)

from .nodes import (
    BooleanValue,
    Definition,
    Directive,
    DirectiveDefinition,
    Document,
    EnumTypeDefinition,
    EnumTypeExtension,
    EnumValue,
    FieldDefinition,
    FloatValue,
    InputObjectTypeDefinition,
    InputObjectTypeExtension,
    InputValueDefinition,
    InterfaceTypeDefinition,
    InterfaceTypeExtension,
    IntValue,
    ListType,
    ListValue,
    NamedType,
    NonNullType,
    NullValue,
    ObjectTypeDefinition,
    ObjectTypeExtension,
    ObjectValue,
    ScalarTypeDefinition,
    ScalarTypeExtension,
    SchemaDefinition,
    SchemaExtension,
    StringValue,
    TypeRef,
    UnionTypeDefinition,
    UnionTypeExtension,
    Value,
)

# node model class -> graphql-core class, for the definition kinds that share a shape
_OBJECT_LIKE = {
    ObjectTypeDefinition: ObjectTypeDefinitionNode,
    ObjectTypeExtension: ObjectTypeExtensionNode,
    InterfaceTypeDefinition: InterfaceTypeDefinitionNode,
    InterfaceTypeExtension: InterfaceTypeExtensionNode,
}
_SCALAR = {
    ScalarTypeDefinition: ScalarTypeDefinitionNode,
    ScalarTypeExtension: ScalarTypeExtensionNode,
}
_UNION = {
    UnionTypeDefinition: UnionTypeDefinitionNode,
    UnionTypeExtension: UnionTypeExtensionNode,
}
_ENUM = {
    EnumTypeDefinition: EnumTypeDefinitionNode,
    EnumTypeExtension: EnumTypeExtensionNode,
}
_INPUT_OBJECT = {
    InputObjectTypeDefinition: InputObjectTypeDefinitionNode,
    InputObjectTypeExtension: InputObjectTypeExtensionNode,
}


def print_document(document: Document) -> str:
    """Render the document as SDL text."""
    return print_ast(to_graphql(document))


def to_graphql(document: Document) -> DocumentNode:
    """Convert the document into a graphql-core DocumentNode."""
    definitions = [_definition(d) for d in document.definitions]
    return DocumentNode(definitions=[d for d in definitions if d is not None])


def _name(value: str) -> NameNode:
    return NameNode(value=value)


def _description(description: str | None) -> StringValueNode | None:
    if description is None:
        return None
    return StringValueNode(value=description, block="\n" in description)


def _definition(definition: Definition) -> DefinitionNode | None:
    cls = type(definition)
    if isinstance(definition, (SchemaDefinition, SchemaExtension)):
        operation_types = [
            OperationTypeDefinitionNode(
                operation=OperationType(op.operation), type=_type(op.type)
            )
            for op in definition.operation_types
        ]
        # SDL only allows a schema definition with at least one operation type
        if not operation_types:
            if not definition.directives:
                return None
            return SchemaExtensionNode(
                directives=_directives(definition.directives), operation_types=[]
            )
        if cls is SchemaDefinition:
            return SchemaDefinitionNode(
                description=_description(definition.description),
                directives=_directives(definition.directives),
                operation_types=operation_types,
            )
        return SchemaExtensionNode(
            directives=_directives(definition.directives),
            operation_types=operation_types,
        )
    if cls in _SCALAR:
        return _SCALAR[cls](
            name=_name(definition.name),
            description=_description(definition.description),
            directives=_directives(definition.directives),
        )
    if cls in _OBJECT_LIKE:
        return _OBJECT_LIKE[cls](
            name=_name(definition.name),
            description=_description(definition.description),
            interfaces=[_type(i) for i in definition.interfaces],
            directives=_directives(definition.directives),
            fields=[_field(f) for f in definition.fields],
        )
    if cls in _UNION:
        return _UNION[cls](
            name=_name(definition.name),
            description=_description(definition.description),
            directives=_directives(definition.directives),
            types=[_type(t) for t in definition.types],
        )
    if cls in _ENUM:
        return _ENUM[cls](
            name=_name(definition.name),
            description=_description(definition.description),
            directives=_directives(definition.directives),
            values=[
                EnumValueDefinitionNode(
                    name=_name(v.name),
                    description=_description(v.description),
                    directives=_directives(v.directives),
                )
                for v in definition.values
            ],
        )
    if cls in _INPUT_OBJECT:
        return _INPUT_OBJECT[cls](
            name=_name(definition.name),
            description=_description(definition.description),
            directives=_directives(definition.directives),
            fields=[_input_value(f) for f in definition.fields],
        )
    if isinstance(definition, DirectiveDefinition):
        return DirectiveDefinitionNode(
            name=_name(definition.name),
            description=_description(definition.description),
            arguments=[_input_value(a) for a in definition.arguments],
            repeatable=definition.repeatable,
            locations=[_name(location) for location in definition.locations],
        )
    raise TypeError(f"Cannot print definition of kind {definition.kind}")


def _field(node: FieldDefinition) -> FieldDefinitionNode:
    return FieldDefinitionNode(
        name=_name(node.name),
        description=_description(node.description),
        arguments=[_input_value(a) for a in node.arguments],
        type=_type(node.type),
        directives=_directives(node.directives),
    )


def _input_value(node: InputValueDefinition) -> InputValueDefinitionNode:
    return InputValueDefinitionNode(
        name=_name(node.name),
        description=_description(node.description),
        type=_type(node.type),
        default_value=_value(node.default_value) if node.default_value is not None else None,
        directives=_directives(node.directives),
    )


def _directives(directives: list[Directive]) -> list[DirectiveNode]:
    return [
        DirectiveNode(
            name=_name(d.name),
            arguments=[ArgumentNode(name=_name(a.name), value=_value(a.value)) for a in d.arguments],
        )
        for d in directives
    ]


def _type(type_ref: TypeRef):
    if isinstance(type_ref, NonNullType):
        return NonNullTypeNode(type=_type(type_ref.type))
    if isinstance(type_ref, ListType):
        return ListTypeNode(type=_type(type_ref.type))
    assert isinstance(type_ref, NamedType), f"Expected NamedType, got {type(type_ref)}"
    return NamedTypeNode(name=_name(type_ref.name))


def _value(value: Value):
    if isinstance(value, StringValue):
        return StringValueNode(value=value.value, block=value.block)
    if isinstance(value, IntValue):
        return IntValueNode(value=value.value)
    if isinstance(value, FloatValue):
        return FloatValueNode(value=value.value)
    if isinstance(value, BooleanValue):
        return BooleanValueNode(value=value.value)
    if isinstance(value, NullValue):
        return NullValueNode()
    if isinstance(value, EnumValue):
        return EnumValueNode(value=value.value)
    if isinstance(value, ListValue):
        return ListValueNode(values=[_value(v) for v in value.values])
    if isinstance(value, ObjectValue):
        return ObjectValueNode(
            fields=[ObjectFieldNode(name=_name(f.name), value=_value(f.value)) for f in value.fields]
        )
    raise TypeError(f"Cannot print value of kind {value.kind}")
