"""Core modules for the GraphQL schema build pipeline."""

from .actions import (
    FlattenExtensionTypes,
    GenerateRelayConnectionTypes,
    ImplementMissingBaseDeclarations,
    ImplementMissingInterfaceFields,
    NormalizeSchema,
    RunTransformers,
    SaveSchema,
)
from .build import build_schema, default_actions
from .config import (
    ConnectionConfig,
    PageArgsConfig,
    PageInfoConfig,
    PipelineConfig,
    load_config,
)
from .directives import DirectiveUsage, extract_directives
from .errors import (
    ConflictingDefinitionKindError,
    DirectiveArgumentError,
    DuplicateDefinitionError,
    DuplicateFieldTypeConflictError,
    KindMismatchError,
    MissingBaseDefinitionError,
    MissingInterfaceWarning,
    PipelineConfigError,
    PipelineError,
    PipelineOrderingWarning,
    ReturnTypeShapeError,
    SchemaFlowError,
    SchemaFlowWarning,
    SchemaLoadError,
    SchemaParseError,
)
from .nodes import Document
from .parser import SchemaParser, parse_sdl
from .pipeline import (
    BaseAction,
    Pipeline,
    PipelineAction,
    PipelineContext,
    format_diagnostic,
)
from .printer import print_document
from .walker import walk

__all__ = [
    # Actions
    "FlattenExtensionTypes",
    "GenerateRelayConnectionTypes",
    "ImplementMissingBaseDeclarations",
    "ImplementMissingInterfaceFields",
    "NormalizeSchema",
    "RunTransformers",
    "SaveSchema",
    # Build
    "build_schema",
    "default_actions",
    # Config
    "ConnectionConfig",
    "PageArgsConfig",
    "PageInfoConfig",
    "PipelineConfig",
    "load_config",
    # AST
    "Document",
    "DirectiveUsage",
    "extract_directives",
    "walk",
    # Parsing and printing
    "SchemaParser",
    "parse_sdl",
    "print_document",
    # Pipeline
    "BaseAction",
    "Pipeline",
    "PipelineAction",
    "PipelineContext",
    "format_diagnostic",
    # Errors
    "ConflictingDefinitionKindError",
    "DirectiveArgumentError",
    "DuplicateDefinitionError",
    "DuplicateFieldTypeConflictError",
    "KindMismatchError",
    "MissingBaseDefinitionError",
    "MissingInterfaceWarning",
    "PipelineConfigError",
    "PipelineError",
    "PipelineOrderingWarning",
    "ReturnTypeShapeError",
    "SchemaFlowError",
    "SchemaFlowWarning",
    "SchemaLoadError",
    "SchemaParseError",
]
