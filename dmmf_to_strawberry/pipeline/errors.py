"""
Exceptions raised by the generation pipeline.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for every error raised while generating code."""


class SchemaInconsistencyError(GeneratorError):
    """Raised when the raw schema document is inconsistent.

    This can happen when:
    - A field type cannot be resolved to a known type reference
    - An operation mapping points to a field no output type declares
    - A composite key or unique index names a field the model does not have
    - A relation resolver has no id, unique field or composite key to filter on

    Generation is aborted: skipping the element would leave dangling
    references in the output tree.
    """

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        field: str | None = None,
        type_name: str | None = None,
    ):
        self.entity = entity
        self.field = field
        self.type_name = type_name
        context = [
            f"{label}={value!r}"
            for label, value in (("entity", entity), ("field", field), ("type", type_name))
            if value is not None
        ]
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class ConfigurationError(GeneratorError, ValueError):
    """Raised when a configuration option has an invalid value."""


class FormatterError(GeneratorError):
    """Raised when the post-processing formatter fails."""


class GeneratedCodeError(GeneratorError):
    """Raised when an emitted source unit is not valid Python."""
