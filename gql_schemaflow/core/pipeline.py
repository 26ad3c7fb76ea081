"""Pipeline orchestration for schema build actions.

A pipeline is an ordered list of actions. Every action has a name, an
optional ``validate`` step and an ``execute`` step. All ``validate`` steps
run before the first ``execute`` so actions can check their position in the
pipeline up front. The schema document is shared by reference: each action
mutates it in place for the next one.

Example usage:
    from gql_schemaflow.core.pipeline import BaseAction, Pipeline

    class DropInternalTypes(BaseAction):
        name = "Drop Internal Types"

        def execute(self, ctx):
            ctx.document.definitions = [
                d for d in ctx.document.definitions
                if not getattr(d, "name", "").startswith("_")
            ]

    pipeline = Pipeline([NormalizeSchema(), DropInternalTypes()])
    document = pipeline.run_schema("./schema")
"""

import logging
import textwrap
import warnings
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .errors import PipelineConfigError, PipelineError, PipelineOrderingWarning
from .nodes import Document
from .parser import SchemaParser

LOG = logging.getLogger(__name__)

LOADER_STAGE = "Schema Loader"
CONFIG_STAGE = "Invalid Action Configuration"


@runtime_checkable
class PipelineAction(Protocol):
    """Protocol for pipeline actions.

    Actions may also define ``validate(ctx)``, which is called for every
    action before any action executes.

    Example:
        class CountTypes:
            name = "Count Types"

            def execute(self, ctx: PipelineContext) -> None:
                print(len(ctx.document.definitions))
    """

    name: str

    def execute(self, ctx: "PipelineContext") -> None:
        """Run the action against the shared document.

        Args:
            ctx: The pipeline context; ``ctx.document`` may be mutated in place
        """
        ...


class BaseAction:
    """Convenience base class with a no-op ``validate``."""

    name = ""

    def validate(self, ctx: "PipelineContext") -> None:
        pass

    def execute(self, ctx: "PipelineContext") -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


@dataclass
class PipelineContext:
    """State handed to every action."""
    document: Document
    actions: tuple[PipelineAction, ...] = ()
    schema_files: tuple[str, ...] = ()
    action: PipelineAction | None = None

    @property
    def index(self) -> int:
        """Position of the current action in the pipeline."""
        return self.position(self.action)

    def position(self, action: PipelineAction | None) -> int:
        for i, candidate in enumerate(self.actions):
            if candidate is action:
                return i
        return -1


class Pipeline:
    """Runs a collection of actions in order."""

    def __init__(self, actions: list[PipelineAction] | None = None):
        self.actions: list[PipelineAction] = [a for a in actions or [] if a is not None]

    def add(self, action: PipelineAction) -> "Pipeline":
        """Append an action to the pipeline."""
        self.actions.append(action)
        return self

    def run_schema(self, schema_path: str) -> Document:
        """Load schema files from ``schema_path`` and run the pipeline on them.

        Raises:
            PipelineError: If loading, validation or any action fails
        """
        parser = SchemaParser(schema_path)
        try:
            document = parser.parse_all()
        except Exception as e:
            raise PipelineError(LOADER_STAGE, e) from e
        return self.run(document, schema_files=parser.schema_files)

    def run(self, document: Document, schema_files: list[str] | tuple[str, ...] = ()) -> Document:
        """Validate and execute every action against ``document``.

        Returns:
            The final document (an action may replace the shared reference)

        Raises:
            PipelineError: Wrapping the first exception raised by any action
        """
        ctx = PipelineContext(
            document=document,
            actions=tuple(self.actions),
            schema_files=tuple(schema_files),
        )

        for action in ctx.actions:
            ctx.action = action
            if not getattr(action, "name", None):
                error = PipelineConfigError(
                    f"Pipeline action {action!r} is missing a name. Every action "
                    f'must define a non-empty "name" attribute.'
                )
                raise PipelineError(CONFIG_STAGE, error)

        for action in ctx.actions:
            ctx.action = action
            validate = getattr(action, "validate", None)
            if validate is None:
                continue
            stage = f"Validation Error: {action.name}"
            try:
                validate(ctx)
            except Exception as e:
                raise PipelineError(stage, e) from e

        for action in ctx.actions:
            ctx.action = action
            stage = f"Execution Error: {action.name}"
            LOG.info("Running %s", action.name)
            try:
                action.execute(ctx)
            except Exception as e:
                raise PipelineError(stage, e) from e

        ctx.action = None
        return ctx.document


def ensure_action_is_unique(ctx: PipelineContext) -> None:
    """Fail if the current action's type appears more than once in the pipeline."""
    action_type = type(ctx.action)
    count = sum(1 for action in ctx.actions if type(action) is action_type)
    if count > 1:
        raise PipelineConfigError(
            f'The "{ctx.action.name}" action can only be used once in the pipeline, '
            f"but it was found {count} times."
        )


def ensure_action_runs_after(ctx: PipelineContext, *action_types: type) -> bool:
    """Warn unless one of ``action_types`` runs before the current action.

    Returns:
        True if a matching action precedes the current one
    """
    for action in ctx.actions[: ctx.index]:
        if isinstance(action, action_types):
            return True

    expected = " or ".join(f'"{getattr(t, "name", t.__name__)}"' for t in action_types)
    warnings.warn(
        PipelineOrderingWarning(
            f'The "{ctx.action.name}" action should run after {expected}.'
        ),
        stacklevel=2,
    )
    return False


def format_diagnostic(stage: str, message: str, width: int = 80) -> str:
    """Format an error as a header line naming the stage plus a wrapped message."""
    header = f"-- {stage} "
    header += "-" * max(width - len(header), 3)
    lines = [header]
    for paragraph in message.splitlines() or [""]:
        lines.extend(textwrap.wrap(paragraph, width=width, break_long_words=False) or [""])
    return "\n".join(lines)
