"""Flattens extension definitions into their base definitions."""

import logging

from ..errors import (
    DuplicateFieldTypeConflictError,
    KindMismatchError,
    MissingBaseDefinitionError,
)
from ..nodes import (
    BASE_DEFINITION_KINDS,
    EXTENSION_TO_DEFINITION,
    MERGEABLE_FIELDS_BY_KIND,
    Definition,
    Directive,
    Document,
    NamedType,
    Node,
    OperationTypeDefinition,
    SchemaDefinition,
    SchemaExtension,
    type_to_string,
)
from ..pipeline import BaseAction, PipelineContext, ensure_action_runs_after
from .base_declarations import ImplementMissingBaseDeclarations

LOG = logging.getLogger(__name__)

SCHEMA_LABEL = "schema"


def flatten_extension_types(document: Document) -> None:
    """Merge every extension into its base definition and remove it.

    Members are matched by name. A member that already exists on the base is
    kept as is when both have the same outer type shape (and the same name
    for named types); otherwise the merge fails. Directives are appended
    unless an identical directive (same name and arguments) is already there.

    Raises:
        MissingBaseDefinitionError: If an extension has no base definition
        KindMismatchError: If the base definition is of another kind
        DuplicateFieldTypeConflictError: If a member is redefined with a
            different type
    """
    base_types: dict[str, Definition] = {}
    schema_base: SchemaDefinition | None = None

    for definition in document.definitions:
        if isinstance(definition, SchemaDefinition):
            schema_base = schema_base or definition
        elif isinstance(definition, BASE_DEFINITION_KINDS):
            base_types.setdefault(definition.name, definition)

    definitions = document.definitions
    for i in range(len(definitions) - 1, -1, -1):
        extension = definitions[i]
        expected_kind = EXTENSION_TO_DEFINITION.get(type(extension))
        if expected_kind is None:
            continue

        if isinstance(extension, SchemaExtension):
            label = SCHEMA_LABEL
            base = schema_base
        else:
            label = extension.name
            base = base_types.get(label)

        if base is None:
            raise MissingBaseDefinitionError(label)
        if type(base) is not expected_kind:
            raise KindMismatchError(label, base.kind, extension.kind)

        _merge(base, extension, label)

        LOG.debug('Flattened %s "%s"', extension.kind, label)
        del definitions[i]


def _merge(base: Definition, extension: Definition, label: str) -> None:
    for attr in MERGEABLE_FIELDS_BY_KIND[type(extension)]:
        items = getattr(extension, attr)
        if not items:
            continue

        target = getattr(base, attr)
        if target is None:
            target = []
            setattr(base, attr, target)

        for item in items:
            # directives carry their arguments, so only exact repeats are dropped
            if isinstance(item, Directive):
                if item not in target:
                    target.append(item)
                continue

            key = member_key(item)
            existing = next((m for m in target if member_key(m) == key), None)
            if existing is None:
                target.append(item)
            elif not types_compatible(existing, item):
                raise DuplicateFieldTypeConflictError(
                    label, key, _describe_type(existing), _describe_type(item)
                )


def member_key(member: Node) -> str:
    """Name used to match members of a mergeable collection."""
    if isinstance(member, OperationTypeDefinition):
        return member.operation
    return member.name


def types_compatible(existing: Node, incoming: Node) -> bool:
    """Shallow type comparison of two members sharing a name.

    Only the outermost type node is compared, plus the name when both are
    named types; ``[String]`` and ``[Int]`` are considered compatible.
    """
    existing_type = getattr(existing, "type", None)
    incoming_type = getattr(incoming, "type", None)
    if existing_type is None or incoming_type is None:
        return existing_type is incoming_type
    if type(existing_type) is not type(incoming_type):
        return False
    if isinstance(existing_type, NamedType):
        return existing_type.name == incoming_type.name
    return True


def _describe_type(member: Node) -> str:
    member_type = getattr(member, "type", None)
    return type_to_string(member_type) if member_type is not None else member.kind


class FlattenExtensionTypes(BaseAction):
    """Pipeline action wrapping ``flatten_extension_types``."""

    name = "Flatten Extension Types"

    def validate(self, ctx: PipelineContext) -> None:
        ensure_action_runs_after(ctx, ImplementMissingBaseDeclarations)

    def execute(self, ctx: PipelineContext) -> None:
        flatten_extension_types(ctx.document)
