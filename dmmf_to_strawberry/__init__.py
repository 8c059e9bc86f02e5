"""DMMF to Strawberry Generator

Generates a strawberry GraphQL API (object, input and enum types, CRUD and
relation resolvers backed by Prisma Client Python) from a Prisma DMMF
document.
"""

__version__ = "0.1.0"

from .pipeline import (
    CodeGenerator,
    EmitBlockKind,
    FormatterConfig,
    FormatterKind,
    GeneratorConfig,
    GeneratorError,
    SchemaInconsistencyError,
    SimpleMetricsCollector,
    generate_code,
)

__all__ = [
    "CodeGenerator",
    "GeneratorConfig",
    "FormatterConfig",
    "FormatterKind",
    "EmitBlockKind",
    "GeneratorError",
    "SchemaInconsistencyError",
    "SimpleMetricsCollector",
    "generate_code",
]
