"""
Node definitions for the raw DMMF document.

These nodes mirror the JSON emitted by the Prisma toolchain before any
name resolution or aliasing. They are read-only for the whole run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RawTypeRef:
    """A (location, type, isList) reference as found in input/output fields."""

    type: str = ""
    location: str = "scalar"  # "scalar", "enumTypes", "inputObjectTypes", "outputObjectTypes", "fieldRefTypes"
    is_list: bool = False
    namespace: str | None = None


@dataclass
class RawField:
    """A field of a datamodel model."""

    name: str = ""
    kind: str = "scalar"  # "scalar", "object", "enum", "unsupported"
    type: str = ""
    is_list: bool = False
    is_required: bool = False
    is_id: bool = False
    is_unique: bool = False
    is_read_only: bool = False
    has_default_value: bool = False
    relation_name: str | None = None
    documentation: str | None = None


@dataclass
class RawKey:
    """A primary key or a unique index."""

    name: str | None = None
    fields: list[str] = field(default_factory=list)


@dataclass
class RawModel:
    name: str = ""
    db_name: str | None = None
    fields: list[RawField] = field(default_factory=list)
    primary_key: RawKey | None = None
    unique_indexes: list[RawKey] = field(default_factory=list)
    documentation: str | None = None


@dataclass
class RawEnum:
    name: str = ""
    values: list[str] = field(default_factory=list)
    documentation: str | None = None


@dataclass
class RawSchemaArg:
    """An input object field or an output field argument."""

    name: str = ""
    is_required: bool = False
    is_nullable: bool = False
    input_types: list[RawTypeRef] = field(default_factory=list)
    deprecation: dict[str, Any] | None = None


@dataclass
class RawInputType:
    name: str = ""
    fields: list[RawSchemaArg] = field(default_factory=list)


@dataclass
class RawOutputField:
    name: str = ""
    is_nullable: bool = False
    output_type: RawTypeRef = field(default_factory=RawTypeRef)
    args: list[RawSchemaArg] = field(default_factory=list)
    deprecation: dict[str, Any] | None = None


@dataclass
class RawOutputType:
    name: str = ""
    fields: list[RawOutputField] = field(default_factory=list)


@dataclass
class RawModelMapping:
    """Per model table of available actions: action kind -> root field name."""

    model: str = ""
    actions: dict[str, str | None] = field(default_factory=dict)


@dataclass
class RawDocument:
    """Root of the parsed DMMF document."""

    models: list[RawModel] = field(default_factory=list)
    types: list[RawModel] = field(default_factory=list)  # composite types (MongoDB)
    datamodel_enums: list[RawEnum] = field(default_factory=list)
    schema_enums: list[RawEnum] = field(default_factory=list)
    input_types: list[RawInputType] = field(default_factory=list)
    output_types: list[RawOutputType] = field(default_factory=list)
    model_mappings: list[RawModelMapping] = field(default_factory=list)
    root_query_type: str = "Query"
    root_mutation_type: str = "Mutation"

    # Raw document for reference (dumped with emit_dmmf)
    raw: dict[str, Any] = field(default_factory=dict)
