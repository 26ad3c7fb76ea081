"""Implements missing base definitions for types that are only extended."""

import logging

from ..errors import ConflictingDefinitionKindError, DuplicateDefinitionError
from ..nodes import (
    BASE_DEFINITION_KINDS,
    EXTENSION_TO_DEFINITION,
    Definition,
    Document,
    SchemaDefinition,
    SchemaExtension,
)
from ..pipeline import BaseAction, PipelineContext

LOG = logging.getLogger(__name__)


def implement_missing_base_declarations(document: Document) -> None:
    """Append an empty base definition for every extension without one.

    After this runs, every ``extend type Foo`` (and the other extension kinds)
    has a ``type Foo`` of the matching kind somewhere in the document, so
    extensions can be flattened. Several extensions of the same undeclared
    type produce a single base definition.

    Raises:
        DuplicateDefinitionError: If two base definitions share a name
        ConflictingDefinitionKindError: If a name is used for two different
            kinds of definition
    """
    seen: dict[str, type[Definition]] = {}
    schema_base_seen = False

    for definition in document.definitions:
        if isinstance(definition, SchemaDefinition):
            schema_base_seen = True
        elif isinstance(definition, BASE_DEFINITION_KINDS):
            name = definition.name
            seen_kind = seen.get(name)
            if seen_kind is type(definition):
                raise DuplicateDefinitionError(name)
            if seen_kind is not None:
                raise ConflictingDefinitionKindError(name, seen_kind.kind, definition.kind)
            seen[name] = type(definition)

    definitions = document.definitions
    for i in range(len(definitions) - 1, -1, -1):
        definition = definitions[i]

        # schema extensions have no name
        if isinstance(definition, SchemaExtension):
            if not schema_base_seen:
                LOG.debug("Adding missing schema base definition")
                definitions.append(SchemaDefinition())
                schema_base_seen = True
            continue

        expected_kind = EXTENSION_TO_DEFINITION.get(type(definition))
        if expected_kind is None:
            continue

        name = definition.name
        seen_kind = seen.get(name)
        if seen_kind is expected_kind:
            continue
        if seen_kind is not None:
            raise ConflictingDefinitionKindError(name, seen_kind.kind, definition.kind)

        LOG.debug('Adding missing base definition for "%s"', name)
        seen[name] = expected_kind
        definitions.append(expected_kind(name=name))


class ImplementMissingBaseDeclarations(BaseAction):
    """Pipeline action wrapping ``implement_missing_base_declarations``."""

    name = "Implement Missing Base Declarations"

    def execute(self, ctx: PipelineContext) -> None:
        implement_missing_base_declarations(ctx.document)
