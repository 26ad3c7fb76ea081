"""Exceptions and warnings raised by the schema pipeline.

Every fatal condition is a subclass of SchemaFlowError so callers can catch
the whole family at once. Non-fatal advisories are UserWarning subclasses
issued through the warnings module.
"""


class SchemaFlowError(Exception):
    """Base exception for all schema pipeline errors."""
    pass


class SchemaLoadError(SchemaFlowError):
    """Raised when no schema source could be found or the sources are empty."""
    pass


class SchemaParseError(SchemaFlowError):
    """Raised when the SDL input is malformed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"{message}{location}")


class DuplicateDefinitionError(SchemaFlowError):
    """Raised when the same type name is declared more than once."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f'Duplicate definition for type "{name}".')


class ConflictingDefinitionKindError(DuplicateDefinitionError):
    """Raised when the same name is declared as two different definition kinds."""

    def __init__(self, name: str, first_kind: str, second_kind: str):
        self.first_kind = first_kind
        self.second_kind = second_kind
        super().__init__(
            name,
            f'Duplicate definition for type "{name}" of different kind '
            f"({first_kind} and {second_kind}).",
        )


class MissingBaseDefinitionError(SchemaFlowError):
    """Raised when an extension has no base definition to merge into."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Cannot extend type "{name}" because it does not exist.')


class KindMismatchError(SchemaFlowError):
    """Raised when an extension targets a base definition of another kind."""

    def __init__(self, name: str, base_kind: str, extension_kind: str):
        self.name = name
        self.base_kind = base_kind
        self.extension_kind = extension_kind
        super().__init__(
            f'Cannot extend type "{name}" because it is not the same kind '
            f"({extension_kind} cannot extend {base_kind})."
        )


class DuplicateFieldTypeConflictError(SchemaFlowError):
    """Raised when a merged member has the same name but a different type."""

    def __init__(self, type_name: str, field_name: str, existing_type: str, new_type: str):
        self.type_name = type_name
        self.field_name = field_name
        self.existing_type = existing_type
        self.new_type = new_type
        super().__init__(
            f'Cannot extend type "{type_name}" because it has a duplicate field '
            f'"{field_name}" with a different type ({existing_type} vs {new_type}).'
        )


class DirectiveArgumentError(SchemaFlowError):
    """Raised when a directive argument is missing, malformed or unresolvable."""
    pass


class ReturnTypeShapeError(SchemaFlowError):
    """Raised when an annotated field's return type does not have the required shape."""
    pass


class PipelineConfigError(SchemaFlowError):
    """Raised when the pipeline itself is misconfigured."""
    pass


class PipelineError(SchemaFlowError):
    """Raised by the orchestrator when any stage fails.

    The failing exception is kept both as ``error`` and as ``__cause__``.
    """

    def __init__(self, stage: str, error: BaseException):
        self.stage = stage
        self.error = error
        super().__init__(f"{stage}: {error}")


class SchemaFlowWarning(UserWarning):
    """Base class for non-fatal pipeline advisories."""
    pass


class PipelineOrderingWarning(SchemaFlowWarning):
    """Issued when an action runs in an order it was not designed for."""
    pass


class MissingInterfaceWarning(SchemaFlowWarning):
    """Issued when an object type implements an interface that is not defined."""
    pass
