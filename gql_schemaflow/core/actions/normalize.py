"""Schema normalization as a single pipeline action."""

from ..pipeline import BaseAction, PipelineContext, ensure_action_is_unique
from .base_declarations import ImplementMissingBaseDeclarations
from .flatten_extensions import FlattenExtensionTypes
from .interface_fields import ImplementMissingInterfaceFields


class NormalizeSchema(BaseAction):
    """Runs base-declaration completion, extension flattening and
    interface-field completion, in that order."""

    name = "Normalize Schema"

    def __init__(self):
        self.actions = [
            ImplementMissingBaseDeclarations(),
            FlattenExtensionTypes(),
            ImplementMissingInterfaceFields(),
        ]

    def validate(self, ctx: PipelineContext) -> None:
        ensure_action_is_unique(ctx)

    def execute(self, ctx: PipelineContext) -> None:
        for action in self.actions:
            action.execute(ctx)
