"""Writes the current schema back to disk as a single SDL file."""

import logging
from pathlib import Path

from ..pipeline import BaseAction, PipelineContext
from ..printer import print_document

LOG = logging.getLogger(__name__)


class SaveSchema(BaseAction):
    """Outputs the current state of the document as SDL.

    The result is a standard GraphQL schema file that other tools can consume.
    """

    name = "Save Schema"

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def execute(self, ctx: PipelineContext) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(print_document(ctx.document), encoding="utf-8")
        LOG.info("Wrote schema to %s", self.path)
