"""Pipeline configuration models.

Configuration can be built in code or loaded from a JSON file:

    {
        "schema": "./schema",
        "output": "./build/schema.graphqls",
        "connections": {
            "page_args": {"first": true, "after": true, "last": true, "before": true},
            "add_total_count": true
        }
    }
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import PipelineConfigError


class PageArgsConfig(BaseModel):
    """Pagination arguments added to every ``@connection`` field when missing."""
    model_config = ConfigDict(extra="forbid")

    first: bool = True
    after: bool = True
    last: bool = False
    before: bool = False


class PageInfoConfig(BaseModel):
    """Name and fields of the Relay page info type."""
    model_config = ConfigDict(extra="forbid")

    type_name: str = "PageInfo"
    has_next_page: bool = True
    has_previous_page: bool = True
    start_cursor: bool = True
    end_cursor: bool = True


class ConnectionConfig(BaseModel):
    """Options for Relay connection type generation."""
    model_config = ConfigDict(extra="forbid")

    page_args: PageArgsConfig = Field(default_factory=PageArgsConfig)
    page_info: PageInfoConfig = Field(default_factory=PageInfoConfig)
    add_total_count: bool = False


class PipelineConfig(BaseModel):
    """Top-level configuration for a schema build."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_path: str | None = Field(default=None, alias="schema")
    output: str | None = None
    normalize: bool = True
    connections: ConnectionConfig = Field(default_factory=ConnectionConfig)


def load_config(path: str | Path) -> PipelineConfig:
    """Load and validate a JSON configuration file.

    Raises:
        PipelineConfigError: If the file cannot be read or does not validate
    """
    config_path = Path(path)
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise PipelineConfigError(f'Cannot read configuration file "{config_path}": {e}') from e

    try:
        return PipelineConfig.model_validate_json(content)
    except ValidationError as e:
        raise PipelineConfigError(f'Invalid configuration in "{config_path}": {e}') from e
