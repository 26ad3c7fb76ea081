"""Copies interface fields onto the object types that implement them."""

import copy
import logging
import warnings

from ..errors import MissingInterfaceWarning
from ..nodes import Document, InterfaceTypeDefinition, ObjectTypeDefinition
from ..pipeline import BaseAction, PipelineContext, ensure_action_is_unique

LOG = logging.getLogger(__name__)


def implement_missing_interface_fields(document: Document) -> None:
    """Add every interface field an implementing object type does not declare.

    Fields are matched by name only. An object field that shares a name with
    an interface field is left alone even when the types differ.

    Unknown interfaces are not an error: the interface may live in SDL this
    pipeline never sees. A MissingInterfaceWarning is issued instead.
    """
    interface_map: dict[str, InterfaceTypeDefinition] = {}
    for definition in document.definitions:
        if isinstance(definition, InterfaceTypeDefinition):
            interface_map.setdefault(definition.name, definition)

    for definition in document.definitions:
        if not isinstance(definition, ObjectTypeDefinition) or not definition.interfaces:
            continue

        for iface in definition.interfaces:
            interface_definition = interface_map.get(iface.name)
            if interface_definition is None:
                warnings.warn(
                    MissingInterfaceWarning(
                        f'Interface "{iface.name}" implemented by "{definition.name}" does not exist.'
                    ),
                    stacklevel=2,
                )
                continue

            for field in interface_definition.fields:
                if definition.find_field(field.name) is None:
                    LOG.debug('Adding interface field "%s.%s"', definition.name, field.name)
                    definition.fields.append(copy.deepcopy(field))


class ImplementMissingInterfaceFields(BaseAction):
    """Pipeline action wrapping ``implement_missing_interface_fields``."""

    name = "Implement Missing Interface Fields"

    def validate(self, ctx: PipelineContext) -> None:
        ensure_action_is_unique(ctx)

    def execute(self, ctx: PipelineContext) -> None:
        implement_missing_interface_fields(ctx.document)
