"""Standard schema build pipeline."""

from .actions import GenerateRelayConnectionTypes, NormalizeSchema, SaveSchema
from .config import PipelineConfig
from .errors import PipelineConfigError
from .nodes import Document
from .pipeline import Pipeline, PipelineAction


def default_actions(config: PipelineConfig) -> list[PipelineAction]:
    """Build the standard ordered action list for a configuration."""
    actions: list[PipelineAction] = []
    if config.normalize:
        actions.append(NormalizeSchema())
    actions.append(GenerateRelayConnectionTypes(config.connections))
    if config.output:
        actions.append(SaveSchema(config.output))
    return actions


def build_schema(config: PipelineConfig) -> Document:
    """Load the configured schema and run the standard pipeline on it.

    Raises:
        PipelineConfigError: If no schema path is configured
        PipelineError: If any stage of the pipeline fails
    """
    if not config.schema_path:
        raise PipelineConfigError("No schema path was configured.")
    return Pipeline(default_actions(config)).run_schema(config.schema_path)
