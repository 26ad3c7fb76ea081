"""Built-in pipeline actions."""

from .base_declarations import ImplementMissingBaseDeclarations, implement_missing_base_declarations
from .connections import GenerateRelayConnectionTypes, generate_connection_types
from .flatten_extensions import FlattenExtensionTypes, flatten_extension_types
from .interface_fields import ImplementMissingInterfaceFields, implement_missing_interface_fields
from .normalize import NormalizeSchema
from .save_schema import SaveSchema
from .transformers import RunTransformers

__all__ = [
    "FlattenExtensionTypes",
    "GenerateRelayConnectionTypes",
    "ImplementMissingBaseDeclarations",
    "ImplementMissingInterfaceFields",
    "NormalizeSchema",
    "RunTransformers",
    "SaveSchema",
    "flatten_extension_types",
    "generate_connection_types",
    "implement_missing_base_declarations",
    "implement_missing_interface_fields",
]
