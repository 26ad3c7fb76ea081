"""Runs user-supplied document transform functions."""

from typing import Callable, Optional

from ..nodes import Document
from ..pipeline import BaseAction, PipelineContext

TransformFn = Callable[[Document], Optional[Document]]


class RunTransformers(BaseAction):
    """Applies transform functions to the document, in order.

    A transform may mutate the document in place and return None, or return a
    document that replaces the shared one for the rest of the pipeline.

    Example:
        def drop_deprecated(document):
            for definition in document.definitions:
                ...

        RunTransformers([drop_deprecated])
    """

    name = "Transform Schema"

    def __init__(self, transformers: TransformFn | list[TransformFn]):
        if callable(transformers):
            transformers = [transformers]
        self.transformers = list(transformers)

    def execute(self, ctx: PipelineContext) -> None:
        for transform in self.transformers:
            result = transform(ctx.document)
            if result is not None:
                ctx.document = result
