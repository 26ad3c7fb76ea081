"""Generates Relay-style connection types from ``@connection`` directives.

    type Query {
        users: UserConnection! @connection(for: "User", via: "UserEdge")
    }

The directive requires a ``for`` argument naming the node type of the
connection, and accepts an optional ``via`` argument naming an edge type. For
every annotated field this action:

- creates the page info type (``PageInfo`` by default) and its fields if missing
- creates the returned ``...Connection`` type if missing, and adds its
  ``edges`` (only with ``via``), ``nodes``, ``pageInfo`` and optionally
  ``totalCount`` fields if missing
- adds the configured pagination arguments (``first``/``after`` by default)
  to the annotated field if missing
- removes the ``@connection`` directive

Everything is added only when absent, so running it again is a no-op.
"""

import logging

from ..config import ConnectionConfig, PageArgsConfig, PageInfoConfig
from ..directives import DirectiveUsage, extract_directives, get_string_argument
from ..errors import ConflictingDefinitionKindError, DirectiveArgumentError, ReturnTypeShapeError
from ..nodes import (
    Document,
    FieldDefinition,
    InputValueDefinition,
    NamedType,
    NonNullType,
    ObjectTypeDefinition,
    TypeNode,
    named,
    non_null_list_of,
)
from ..pipeline import BaseAction, PipelineContext, ensure_action_is_unique, ensure_action_runs_after
from .flatten_extensions import FlattenExtensionTypes
from .normalize import NormalizeSchema

LOG = logging.getLogger(__name__)

CONNECTION_DIRECTIVE = "connection"
CONNECTION_SUFFIX = "Connection"

# config attribute, field name, type name, non-null, description
PAGE_INFO_FIELDS = (
    ("has_next_page", "hasNextPage", "Boolean", True,
     "When paginating forwards, are there more items?"),
    ("has_previous_page", "hasPreviousPage", "Boolean", True,
     "When paginating backwards, are there more items?"),
    ("start_cursor", "startCursor", "String", False,
     "When paginating backwards, the cursor to continue."),
    ("end_cursor", "endCursor", "String", False,
     "When paginating forwards, the cursor to continue."),
)

# argument name, type name, description
PAGE_ARGS = (
    ("first", "Int", "Returns the first n elements from the list."),
    ("after", "String", "Returns the elements in the list that come after the specified cursor."),
    ("last", "Int", "Returns the last n elements from the list."),
    ("before", "String", "Returns the elements in the list that come before the specified cursor."),
)


def generate_connection_types(document: Document, config: ConnectionConfig | None = None) -> None:
    """Expand every ``@connection`` field directive in the document.

    Raises:
        DirectiveArgumentError: If ``for`` is missing or not a string, or if
            ``for``/``via`` do not name an existing object type
        ReturnTypeShapeError: If the field does not return a non-null named
            type ending in "Connection"
    """
    config = config or ConnectionConfig()

    usages = extract_directives(
        document, CONNECTION_DIRECTIVE, strip=True, kinds=(FieldDefinition,)
    )
    if not usages:
        return

    page_info_type = _ensure_page_info_type(document, config.page_info)
    seen_connection_types: set[str] = set()

    for usage in usages:
        field = usage.host
        where = f'field "{_qualified_name(usage)}"'

        for_type_name = get_string_argument(usage.directive, "for", required=True, where=where)

        return_type = field.type
        if (
            not isinstance(return_type, NonNullType)
            or not isinstance(return_type.type, NamedType)
            or not return_type.type.name.endswith(CONNECTION_SUFFIX)
        ):
            raise ReturnTypeShapeError(
                f"The @connection directive on {where} must return a non-nullable "
                f'type that ends with "{CONNECTION_SUFFIX}".'
            )
        connection_type_name = return_type.type.name

        for_type = document.find_object_type(for_type_name)
        if for_type is None:
            raise DirectiveArgumentError(
                f'The @connection directive on {where} is for type "{for_type_name}" '
                f"which does not exist."
            )

        via_type_name = get_string_argument(usage.directive, "via", where=where)
        via_type = None
        if via_type_name is not None:
            via_type = document.find_object_type(via_type_name)
            if via_type is None:
                raise DirectiveArgumentError(
                    f'The @connection directive on {where} is via edge type "{via_type_name}" '
                    f"which does not exist."
                )

        _add_page_args(field, config.page_args)

        if connection_type_name in seen_connection_types:
            continue
        seen_connection_types.add(connection_type_name)

        connection_type = _ensure_object_type(
            document,
            connection_type_name,
            description=f"A connection to a list of `{for_type.name}` values.",
        )
        if via_type is not None:
            _add_field(
                connection_type, "edges", non_null_list_of(via_type.name), "A list of edges."
            )
        _add_field(connection_type, "nodes", non_null_list_of(for_type.name), "A list of nodes.")
        _add_field(
            connection_type,
            "pageInfo",
            named(page_info_type.name, non_null=True),
            "Information to aid in pagination.",
        )
        if config.add_total_count:
            _add_field(
                connection_type,
                "totalCount",
                named("Int", non_null=True),
                "The total count of nodes in this connection, ignoring pagination.",
            )


def _qualified_name(usage: DirectiveUsage) -> str:
    owner = usage.parent
    if isinstance(owner, TypeNode):
        return f"{owner.name}.{usage.host.name}"
    return usage.host.name


def _ensure_object_type(
    document: Document, name: str, description: str | None = None
) -> ObjectTypeDefinition:
    existing = document.find_definition(name)
    if isinstance(existing, ObjectTypeDefinition):
        return existing
    if existing is not None:
        raise ConflictingDefinitionKindError(name, existing.kind, ObjectTypeDefinition.kind)

    LOG.debug('Adding object type "%s"', name)
    object_type = ObjectTypeDefinition(name=name, description=description)
    document.definitions.append(object_type)
    return object_type


def _ensure_page_info_type(document: Document, config: PageInfoConfig) -> ObjectTypeDefinition:
    page_info_type = _ensure_object_type(document, config.type_name)
    for option, field_name, type_name, non_null, description in PAGE_INFO_FIELDS:
        if getattr(config, option):
            _add_field(page_info_type, field_name, named(type_name, non_null), description)
    return page_info_type


def _add_field(object_type: ObjectTypeDefinition, name: str, type_ref, description: str) -> None:
    if object_type.find_field(name) is not None:
        return
    LOG.debug('Adding field "%s.%s"', object_type.name, name)
    object_type.fields.append(FieldDefinition(name=name, type=type_ref, description=description))


def _add_page_args(field: FieldDefinition, config: PageArgsConfig) -> None:
    for arg_name, type_name, description in PAGE_ARGS:
        if getattr(config, arg_name) and field.find_argument(arg_name) is None:
            field.arguments.append(
                InputValueDefinition(name=arg_name, type=named(type_name), description=description)
            )


class GenerateRelayConnectionTypes(BaseAction):
    """Pipeline action wrapping ``generate_connection_types``."""

    name = "Generate Relay Connection Types"

    def __init__(self, config: ConnectionConfig | None = None):
        self.config = config or ConnectionConfig()

    def validate(self, ctx: PipelineContext) -> None:
        ensure_action_is_unique(ctx)
        ensure_action_runs_after(ctx, NormalizeSchema, FlattenExtensionTypes)

    def execute(self, ctx: PipelineContext) -> None:
        generate_connection_types(ctx.document, self.config)
