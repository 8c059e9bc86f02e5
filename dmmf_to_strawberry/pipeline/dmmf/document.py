"""
Semantic schema model.

`DmmfDocument` turns the raw DMMF document into indexed records in a fixed
order. Model display names are all known before any field type is
resolved, and enums are transformed twice so that per model enum values
can follow field aliases.
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import EmitBlockKind, GeneratorConfig
from .name_resolver import NameRegistry, TypeNameCache, claim_output_type_name
from .nodes import RawDocument
from .parser import DmmfParser
from .transform import (
    generate_relation_model,
    get_relation_fields,
    keep_input_type,
    transform_bare_models,
    transform_enum,
    transform_input_type,
    transform_mapping,
    transform_model_fields,
    transform_output_type,
)
from .types import EnumDef, InputType, Model, ModelField, ModelMapping, OutputField, OutputType, RelationModel

logger = logging.getLogger(__name__)


class DmmfDocument:
    """Enriched, cross indexed view of one raw schema document."""

    def __init__(self, dmmf: dict[str, Any] | RawDocument, config: GeneratorConfig):
        self.config = config
        self.raw = dmmf if isinstance(dmmf, RawDocument) else DmmfParser().parse(dmmf)

        # Owned by this document only, reset for every run
        self.type_names = TypeNameCache()
        self.type_names.clear()
        self.registry = NameRegistry()

        self.models: list[Model] = []
        self.enums: list[EnumDef] = []
        self.datamodel_enums: list[EnumDef] = []
        self.input_types: list[InputType] = []
        self.output_types: list[OutputType] = []
        self.model_mappings: list[ModelMapping] = []
        self.relation_models: list[RelationModel] = []
        self.root_query_type = self.raw.root_query_type
        self.root_mutation_type = self.raw.root_mutation_type

        self._models_cache: dict[str, Model] = {}
        self._models_by_lower_name: dict[str, Model] = {}
        self._models_by_type_name: dict[str, Model] = {}
        self._model_fields_cache: dict[str, dict[str, ModelField]] = {}
        self._field_alias_cache: dict[str, dict[str, str]] = {}
        self._enums_cache: dict[str, EnumDef] = {}
        self._output_type_cache: dict[str, OutputType] = {}
        self._output_type_fields_cache: dict[str, dict[str, OutputField]] = {}
        self._input_type_names: set[str] = set()

        self._build()

    def _build(self) -> None:
        raw = self.raw
        self._input_type_names = {t.name for t in raw.input_types if keep_input_type(self, t)}
        raw_models = raw.models + raw.types
        raw_enums = raw.schema_enums + [e for e in raw.datamodel_enums if e.name not in {s.name for s in raw.schema_enums}]

        # Stage 1: bare models seed every display name lookup
        self.models = transform_bare_models(raw_models, self.registry)
        for model in self.models:
            self._models_cache[model.name] = model
            self._models_by_lower_name.setdefault(model.name.lower(), model)
            self._models_by_type_name[model.type_name] = model

        # Enums are referenced by field types
        self.enums = [transform_enum(self, self.registry, raw_enum) for raw_enum in raw_enums]
        self._index_enums()

        # Stage 2: fields
        for raw_model, model in zip(raw_models, self.models):
            transform_model_fields(self, raw_model, model)
            self._model_fields_cache[model.name] = {f.name: f for f in model.fields}
            aliases = {f.name: f.type_field_alias for f in model.fields if f.type_field_alias}
            if aliases:
                self._field_alias_cache[model.name] = aliases

        # Enum values can now follow field aliases
        self.enums = [transform_enum(self, self.registry, raw_enum) for raw_enum in raw.schema_enums]
        self.datamodel_enums = [transform_enum(self, self.registry, raw_enum) for raw_enum in raw.datamodel_enums]
        self._index_enums()

        for raw_output_type in raw.output_types:
            claim_output_type_name(self, self.registry, raw_output_type.name)

        self.input_types = [transform_input_type(self, t) for t in raw.input_types if keep_input_type(self, t)]

        self.output_types = [transform_output_type(self, t) for t in raw.output_types]
        for output_type in self.output_types:
            self._output_type_cache[output_type.name] = output_type
            self._output_type_fields_cache[output_type.name] = {f.name: f for f in output_type.fields}

        self.model_mappings = [transform_mapping(self, mapping) for mapping in raw.model_mappings]

        self.relation_models = [
            generate_relation_model(self, model)
            for model in self.models
            if get_relation_fields(model, self._output_type_cache.get(model.name))
        ]

        logger.debug(
            f"Built semantic model: {len(self.models)} models, {len(self.enums)} enums, "
            f"{len(self.input_types)} input types, {len(self.output_types)} output types, "
            f"{len(self.relation_models)} relation models"
        )

    def _index_enums(self) -> None:
        self._enums_cache = {}
        for enum_def in self.enums + self.datamodel_enums:
            self._enums_cache[enum_def.name] = enum_def
        for enum_def in self.enums + self.datamodel_enums:
            self._enums_cache.setdefault(enum_def.type_name, enum_def)

    @property
    def model_names(self) -> list[str]:
        return list(self._models_cache)

    def get_model(self, name: str) -> Model | None:
        """Model by source name or display name."""
        return self._models_cache.get(name) or self._models_by_type_name.get(name)

    def get_model_type_name(self, model_name: str) -> str | None:
        """Display name of a model, looked up by source name first."""
        model = self._models_cache.get(model_name) or self._models_by_lower_name.get(model_name.lower())
        if model is None:
            model = self._models_by_type_name.get(model_name)
        return model.type_name if model else None

    def is_model_name(self, type_name: str) -> bool:
        return type_name in self._models_cache

    def is_model_type_name(self, type_name: str) -> bool:
        return type_name in self._models_by_type_name

    def get_model_field(self, model_name: str, field_name: str) -> ModelField | None:
        return self._model_fields_cache.get(model_name, {}).get(field_name)

    def get_model_field_alias(self, model_name: str, field_name: str) -> str | None:
        return self._field_alias_cache.get(model_name, {}).get(field_name)

    def get_enum_by_type_name(self, type_name: str) -> EnumDef | None:
        """Enum by raw or display name."""
        return self._enums_cache.get(type_name)

    def get_enum_type_name(self, enum_name: str) -> str:
        enum_def = self._enums_cache.get(enum_name)
        return enum_def.type_name if enum_def else enum_name

    def get_relation_model(self, model_name: str) -> RelationModel | None:
        """Relation fields of a model, looked up by source name."""
        for relation_model in self.relation_models:
            if relation_model.model.name == model_name:
                return relation_model
        return None

    def is_input_type_name(self, name: str) -> bool:
        """Whether `name` is the raw name of an emitted input type."""
        return name in self._input_type_names

    def get_output_type(self, name: str) -> OutputType | None:
        return self._output_type_cache.get(name)

    def get_output_type_field(self, output_type_name: str, field_name: str) -> OutputField | None:
        return self._output_type_fields_cache.get(output_type_name, {}).get(field_name)

    def find_output_type_with_field(self, field_name: str) -> OutputType | None:
        """Output type declaring `field_name`, root operation types first."""
        for name in (self.root_query_type, self.root_mutation_type):
            if field_name in self._output_type_fields_cache.get(name, {}):
                return self._output_type_cache[name]
        for name, fields in self._output_type_fields_cache.items():
            if field_name in fields:
                return self._output_type_cache[name]
        return None

    def is_root_type(self, output_type_name: str) -> bool:
        return output_type_name in (self.root_query_type, self.root_mutation_type)

    def should_generate_block(self, block: EmitBlockKind) -> bool:
        return block in self.config.blocks_to_emit

    @property
    def all_enums(self) -> list[EnumDef]:
        """Schema and datamodel enums, de-duplicated by display name."""
        seen: set[str] = set()
        result = []
        for enum_def in self.enums + self.datamodel_enums:
            if enum_def.type_name not in seen:
                seen.add(enum_def.type_name)
                result.append(enum_def)
        return result
