"""
DMMF parser that builds the raw document nodes.

Phase 1 of the pipeline: read the JSON produced by the Prisma toolchain
into typed nodes without resolving any names.
"""

from __future__ import annotations

from typing import Any

from ..errors import SchemaInconsistencyError
from .nodes import (
    RawDocument,
    RawEnum,
    RawField,
    RawInputType,
    RawKey,
    RawModel,
    RawModelMapping,
    RawOutputField,
    RawOutputType,
    RawSchemaArg,
    RawTypeRef,
)


class DmmfParser:
    """Parses a DMMF dictionary into a RawDocument."""

    def parse(self, dmmf: dict[str, Any]) -> RawDocument:
        """
        Parse a DMMF document.

        Args:
            dmmf: The document with "datamodel", "schema" and "mappings" keys

        Returns:
            RawDocument with every section parsed
        """
        datamodel = dmmf.get("datamodel") or {}
        schema = dmmf.get("schema") or {}
        mappings = dmmf.get("mappings") or {}

        return RawDocument(
            models=[self._parse_model(m) for m in datamodel.get("models", [])],
            types=[self._parse_model(t) for t in datamodel.get("types", [])],
            datamodel_enums=[self._parse_enum(e) for e in datamodel.get("enums", [])],
            schema_enums=[self._parse_enum(e) for e in self._namespaced(schema.get("enumTypes"))],
            input_types=[self._parse_input_type(t) for t in self._namespaced(schema.get("inputObjectTypes"))],
            output_types=[self._parse_output_type(t) for t in self._namespaced(schema.get("outputObjectTypes"))],
            model_mappings=[self._parse_mapping(m) for m in mappings.get("modelOperations", [])],
            root_query_type=schema.get("rootQueryType") or "Query",
            root_mutation_type=schema.get("rootMutationType") or "Mutation",
            raw=dmmf,
        )

    def _namespaced(self, section: dict[str, list[Any]] | None) -> list[Any]:
        """Concatenate the "prisma" and "model" namespaces of a schema section."""
        if not section:
            return []
        return list(section.get("prisma") or []) + list(section.get("model") or [])

    def _parse_model(self, model: dict[str, Any]) -> RawModel:
        primary_key = model.get("primaryKey")
        return RawModel(
            name=model["name"],
            db_name=model.get("dbName"),
            fields=[self._parse_field(model["name"], f) for f in model.get("fields", [])],
            primary_key=self._parse_key(primary_key) if primary_key else None,
            unique_indexes=[self._parse_key(index) for index in model.get("uniqueIndexes") or []],
            documentation=model.get("documentation"),
        )

    def _parse_field(self, model_name: str, field: dict[str, Any]) -> RawField:
        field_type = field.get("type")
        if not isinstance(field_type, str):
            raise SchemaInconsistencyError(
                f"Unexpected field type value {field_type!r}",
                entity=model_name,
                field=field.get("name"),
            )
        return RawField(
            name=field["name"],
            kind=field.get("kind", "scalar"),
            type=field_type,
            is_list=bool(field.get("isList")),
            is_required=bool(field.get("isRequired")),
            is_id=bool(field.get("isId")),
            is_unique=bool(field.get("isUnique")),
            is_read_only=bool(field.get("isReadOnly")),
            has_default_value=bool(field.get("hasDefaultValue")),
            relation_name=field.get("relationName") or None,
            documentation=field.get("documentation"),
        )

    def _parse_key(self, key: dict[str, Any]) -> RawKey:
        return RawKey(name=key.get("name") or None, fields=list(key.get("fields") or []))

    def _parse_enum(self, enum: dict[str, Any]) -> RawEnum:
        # Datamodel enums carry {"name": ...} values, schema enums plain strings
        values = [value if isinstance(value, str) else value["name"] for value in enum.get("values", [])]
        return RawEnum(name=enum["name"], values=values, documentation=enum.get("documentation"))

    def _parse_type_ref(self, ref: dict[str, Any]) -> RawTypeRef:
        ref_type = ref.get("type")
        if isinstance(ref_type, dict):
            # Older documents embed the referenced type instead of naming it
            ref_type = ref_type.get("name")
        if not isinstance(ref_type, str):
            raise SchemaInconsistencyError(f"Unresolvable type reference {ref!r}")
        return RawTypeRef(
            type=ref_type,
            location=ref.get("location", "scalar"),
            is_list=bool(ref.get("isList")),
            namespace=ref.get("namespace"),
        )

    def _parse_schema_arg(self, arg: dict[str, Any]) -> RawSchemaArg:
        return RawSchemaArg(
            name=arg["name"],
            is_required=bool(arg.get("isRequired")),
            is_nullable=bool(arg.get("isNullable")),
            input_types=[self._parse_type_ref(ref) for ref in arg.get("inputTypes", [])],
            deprecation=arg.get("deprecation"),
        )

    def _parse_input_type(self, input_type: dict[str, Any]) -> RawInputType:
        return RawInputType(
            name=input_type["name"],
            fields=[self._parse_schema_arg(f) for f in input_type.get("fields", [])],
        )

    def _parse_output_type(self, output_type: dict[str, Any]) -> RawOutputType:
        return RawOutputType(
            name=output_type["name"],
            fields=[
                RawOutputField(
                    name=f["name"],
                    is_nullable=bool(f.get("isNullable")),
                    output_type=self._parse_type_ref(f["outputType"]),
                    args=[self._parse_schema_arg(a) for a in f.get("args", [])],
                    deprecation=f.get("deprecation"),
                )
                for f in output_type.get("fields", [])
            ],
        )

    def _parse_mapping(self, mapping: dict[str, Any]) -> RawModelMapping:
        actions = {key: value for key, value in mapping.items() if key not in ("model", "plural")}
        return RawModelMapping(model=mapping["model"], actions=actions)
