"""GraphQL schema parser using graphql-core.

Collects .graphqls files, concatenates them into one SDL document, parses it
with graphql-core and converts the result into the mutable node model.
"""

import logging
import os
from dataclasses import dataclass

from graphql import (
    BooleanValueNode,
    DirectiveDefinitionNode,
    DirectiveNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    EnumValueDefinitionNode,
    EnumValueNode,
    FieldDefinitionNode,
    FloatValueNode,
    GraphQLSyntaxError,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    IntValueNode,
    ListTypeNode,
    ListValueNode,
    NamedTypeNode,
    NonNullTypeNode,
    NullValueNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ObjectValueNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    StringValueNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    ValueNode,
    parse,
)

from .errors import SchemaLoadError, SchemaParseError
from .nodes import (
    Argument,
    BooleanValue,
    Definition,
    Directive,
    DirectiveDefinition,
    Document,
    EnumTypeDefinition,
    EnumTypeExtension,
    EnumValue,
    EnumValueDefinition,
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
    ObjectField,
    ObjectTypeDefinition,
    ObjectTypeExtension,
    ObjectValue,
    OperationTypeDefinition,
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

LOG = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphqls", ".graphql")


@dataclass
class _SourceSpan:
    """Where one source starts inside the concatenated SDL text."""
    name: str
    first_line: int
    line_count: int


class SchemaParser:
    """Parses GraphQL schema files into a single Document."""

    def __init__(self, schema_path: str):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.schema_files: list[str] = []

    def parse_all(self) -> Document:
        """Load every schema file and return the combined document."""
        self.schema_files = self._collect_schema_files()
        if not self.schema_files:
            raise SchemaLoadError(f'No schema files were found in "{self.schema_path}".')

        sources = []
        for file_path in self.schema_files:
            with open(file_path, encoding="utf-8") as f:
                sources.append((file_path, f.read()))

        LOG.debug("Loaded %d schema file(s) from %s", len(sources), self.schema_path)
        return parse_sources(sources)

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)


def parse_sdl(*sources: str) -> Document:
    """Parse one or more in-memory SDL strings as a single document."""
    return parse_sources([(f"<source {i + 1}>", text) for i, text in enumerate(sources)])


def parse_sources(sources: list[tuple[str, str]]) -> Document:
    """Concatenate ``(name, text)`` sources, newline separated, and parse them.

    Raises:
        SchemaLoadError: If the combined text is empty
        SchemaParseError: If the SDL is malformed; the location is reported
            relative to the source that contains it
    """
    spans = []
    chunks = []
    line = 1
    for name, text in sources:
        chunk = text + "\n"
        line_count = chunk.count("\n")
        spans.append(_SourceSpan(name=name, first_line=line, line_count=line_count))
        chunks.append(chunk)
        line += line_count

    schema = "".join(chunks)
    if not schema.strip():
        raise SchemaLoadError("The schema sources were empty.")

    try:
        ast = parse(schema)
    except GraphQLSyntaxError as e:
        raise _located_parse_error(e, spans) from e

    return convert_document(ast)


def _located_parse_error(error: GraphQLSyntaxError, spans: list[_SourceSpan]) -> SchemaParseError:
    if not error.locations:
        return SchemaParseError(error.message)

    location = error.locations[0]
    for span in spans:
        if span.first_line <= location.line < span.first_line + span.line_count:
            return SchemaParseError(
                f"{span.name}: {error.message}",
                line=location.line - span.first_line + 1,
                column=location.column,
            )
    return SchemaParseError(error.message, line=location.line, column=location.column)


# =============================================================================
# graphql-core AST -> node model
# =============================================================================


def convert_document(ast: DocumentNode) -> Document:
    """Convert a graphql-core DocumentNode into a mutable Document."""
    document = Document()
    for definition in ast.definitions:
        converted = _convert_definition(definition)
        if converted is None:
            LOG.debug("Skipping unsupported definition %s", definition.kind)
            continue
        document.definitions.append(converted)
    return document


def _convert_definition(node) -> Definition | None:
    if isinstance(node, SchemaDefinitionNode):
        return SchemaDefinition(
            description=_description(node),
            directives=_directives(node.directives),
            operation_types=_operation_types(node.operation_types),
        )
    if isinstance(node, SchemaExtensionNode):
        return SchemaExtension(
            directives=_directives(node.directives),
            operation_types=_operation_types(node.operation_types),
        )
    if isinstance(node, (ScalarTypeDefinitionNode, ScalarTypeExtensionNode)):
        cls = ScalarTypeDefinition if isinstance(node, ScalarTypeDefinitionNode) else ScalarTypeExtension
        return cls(
            name=node.name.value,
            description=_description(node),
            directives=_directives(node.directives),
        )
    if isinstance(node, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
        cls = ObjectTypeDefinition if isinstance(node, ObjectTypeDefinitionNode) else ObjectTypeExtension
        return cls(
            name=node.name.value,
            description=_description(node),
            interfaces=_named_types(node.interfaces),
            directives=_directives(node.directives),
            fields=_fields(node.fields),
        )
    if isinstance(node, (InterfaceTypeDefinitionNode, InterfaceTypeExtensionNode)):
        cls = (
            InterfaceTypeDefinition
            if isinstance(node, InterfaceTypeDefinitionNode)
            else InterfaceTypeExtension
        )
        return cls(
            name=node.name.value,
            description=_description(node),
            interfaces=_named_types(node.interfaces),
            directives=_directives(node.directives),
            fields=_fields(node.fields),
        )
    if isinstance(node, (UnionTypeDefinitionNode, UnionTypeExtensionNode)):
        cls = UnionTypeDefinition if isinstance(node, UnionTypeDefinitionNode) else UnionTypeExtension
        return cls(
            name=node.name.value,
            description=_description(node),
            directives=_directives(node.directives),
            types=_named_types(node.types),
        )
    if isinstance(node, (EnumTypeDefinitionNode, EnumTypeExtensionNode)):
        cls = EnumTypeDefinition if isinstance(node, EnumTypeDefinitionNode) else EnumTypeExtension
        return cls(
            name=node.name.value,
            description=_description(node),
            directives=_directives(node.directives),
            values=[_enum_value(v) for v in node.values or []],
        )
    if isinstance(node, (InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode)):
        cls = (
            InputObjectTypeDefinition
            if isinstance(node, InputObjectTypeDefinitionNode)
            else InputObjectTypeExtension
        )
        return cls(
            name=node.name.value,
            description=_description(node),
            directives=_directives(node.directives),
            fields=[_input_value(f) for f in node.fields or []],
        )
    if isinstance(node, DirectiveDefinitionNode):
        return DirectiveDefinition(
            name=node.name.value,
            description=_description(node),
            arguments=[_input_value(a) for a in node.arguments or []],
            repeatable=bool(node.repeatable),
            locations=[location.value for location in node.locations or []],
        )
    return None


def _description(node) -> str | None:
    description = getattr(node, "description", None)
    return description.value if description else None


def _named_types(nodes) -> list[NamedType]:
    return [NamedType(n.name.value) for n in nodes or []]


def _operation_types(nodes) -> list[OperationTypeDefinition]:
    return [
        OperationTypeDefinition(operation=n.operation.value, type=NamedType(n.type.name.value))
        for n in nodes or []
    ]


def _fields(nodes) -> list[FieldDefinition]:
    fields = []
    for node in nodes or []:
        assert isinstance(node, FieldDefinitionNode), f"Expected FieldDefinitionNode, got {type(node)}"
        fields.append(
            FieldDefinition(
                name=node.name.value,
                type=convert_type(node.type),
                description=_description(node),
                arguments=[_input_value(a) for a in node.arguments or []],
                directives=_directives(node.directives),
            )
        )
    return fields


def _input_value(node: InputValueDefinitionNode) -> InputValueDefinition:
    return InputValueDefinition(
        name=node.name.value,
        type=convert_type(node.type),
        description=_description(node),
        default_value=convert_value(node.default_value) if node.default_value else None,
        directives=_directives(node.directives),
    )


def _enum_value(node: EnumValueDefinitionNode) -> EnumValueDefinition:
    return EnumValueDefinition(
        name=node.name.value,
        description=_description(node),
        directives=_directives(node.directives),
    )


def _directives(nodes) -> list[Directive]:
    directives = []
    for node in nodes or []:
        assert isinstance(node, DirectiveNode), f"Expected DirectiveNode, got {type(node)}"
        directives.append(
            Directive(
                name=node.name.value,
                arguments=[
                    Argument(name=a.name.value, value=convert_value(a.value))
                    for a in node.arguments or []
                ],
            )
        )
    return directives


def convert_type(node: TypeNode) -> TypeRef:
    """Convert a (possibly wrapped) graphql-core type node."""
    if isinstance(node, NonNullTypeNode):
        return NonNullType(convert_type(node.type))
    if isinstance(node, ListTypeNode):
        return ListType(convert_type(node.type))
    assert isinstance(node, NamedTypeNode), f"Expected NamedTypeNode, got {type(node)}"
    return NamedType(node.name.value)


def convert_value(node: ValueNode) -> Value:
    """Convert a constant graphql-core value node."""
    if isinstance(node, StringValueNode):
        return StringValue(node.value, block=bool(node.block))
    if isinstance(node, IntValueNode):
        return IntValue(node.value)
    if isinstance(node, FloatValueNode):
        return FloatValue(node.value)
    if isinstance(node, BooleanValueNode):
        return BooleanValue(node.value)
    if isinstance(node, NullValueNode):
        return NullValue()
    if isinstance(node, EnumValueNode):
        return EnumValue(node.value)
    if isinstance(node, ListValueNode):
        return ListValue([convert_value(v) for v in node.values])
    if isinstance(node, ObjectValueNode):
        return ObjectValue([ObjectField(f.name.value, convert_value(f.value)) for f in node.fields])
    raise SchemaParseError(f"Unsupported value in schema: {node.kind}")
