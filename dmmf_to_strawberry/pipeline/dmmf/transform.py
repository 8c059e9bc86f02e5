"""
Transformations from raw DMMF nodes to semantic model records.

Each function reads the partially built `DmmfDocument` for lookups, so the
caller controls the order: bare models, enums, model fields, enums again,
input types, output types, mappings and finally relation models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...utils import camel_case, pascal_case, pluralize, snake_case
from ..errors import SchemaInconsistencyError
from .attributes import clean_docs, parse_documentation_attributes, parse_input_omission
from .input_selector import is_unchecked_input, select_input_type_variant
from .name_resolver import (
    MODEL_COLLISION_SUFFIX,
    NameRegistry,
    compute_model_type_name,
    find_model_prefix,
    get_enum_model_name,
    resolve_enum_type_name,
    resolve_input_type_name,
    resolve_output_type_name,
)
from .nodes import RawEnum, RawField, RawInputType, RawModel, RawModelMapping, RawOutputType, RawSchemaArg
from .types import (
    SUPPORTED_MUTATION_ACTIONS,
    SUPPORTED_QUERY_ACTIONS,
    Action,
    EnumDef,
    EnumValue,
    FieldOmission,
    InputType,
    Model,
    ModelAction,
    ModelField,
    ModelKey,
    ModelMapping,
    OperationKind,
    OutputField,
    OutputType,
    RelationField,
    RelationModel,
    SchemaArg,
    TypeInfo,
    TypeLocation,
)

if TYPE_CHECKING:
    from .document import DmmfDocument

# Client method names that differ from the action name
_PRISMA_METHOD_NAMES = {
    ModelAction.CREATE_ONE: "create",
    ModelAction.UPDATE_ONE: "update",
    ModelAction.UPSERT_ONE: "upsert",
    ModelAction.DELETE_ONE: "delete",
    ModelAction.FIND_UNIQUE_OR_THROW: "findUniqueOrRaise",
    ModelAction.FIND_FIRST_OR_THROW: "findFirstOrRaise",
}


def transform_bare_models(raw_models: list[RawModel], registry: NameRegistry) -> list[Model]:
    """Stage 1: models with their display names and no fields.

    Explicit aliases are claimed before computed names so that an alias
    always wins a collision.
    """
    aliases: dict[str, str | None] = {}
    for raw in raw_models:
        attribute_args = parse_documentation_attributes(raw.documentation, "type", "model")
        alias = attribute_args.get("name")
        aliases[raw.name] = alias
        if alias:
            registry.claim_explicit(f"model:{raw.name}", alias)

    models = []
    for raw in raw_models:
        attribute_args = parse_documentation_attributes(raw.documentation, "type", "model")
        omit_args = parse_documentation_attributes(raw.documentation, "omit", "model")
        alias = aliases[raw.name]
        if alias:
            type_name = alias
        else:
            type_name = registry.claim(f"model:{raw.name}", compute_model_type_name(raw.name, None), MODEL_COLLISION_SUFFIX)
        models.append(
            Model(
                name=raw.name,
                type_name=type_name,
                docs=clean_docs(raw.documentation),
                plural=attribute_args.get("plural"),
                is_output_omitted=bool(omit_args.get("output", False)),
                is_input_omitted=bool(omit_args.get("input", False)),
            )
        )
    return models


def transform_model_fields(document: DmmfDocument, raw: RawModel, model: Model) -> None:
    """Stage 2: resolve the fields and keys of a bare model in place."""
    model.fields = [transform_model_field(document, model, raw_field) for raw_field in raw.fields]
    if raw.primary_key is not None:
        model.primary_key = ModelKey(name=raw.primary_key.name, fields=list(raw.primary_key.fields))
    model.unique_indexes = [ModelKey(name=index.name, fields=list(index.fields)) for index in raw.unique_indexes]
    field_names = {model_field.name for model_field in model.fields}
    for key in ([model.primary_key] if model.primary_key else []) + model.unique_indexes:
        for key_field in key.fields:
            if key_field not in field_names:
                raise SchemaInconsistencyError(
                    "Composite key names a field the model does not have", entity=model.name, field=key_field
                )


def transform_model_field(document: DmmfDocument, model: Model, raw: RawField) -> ModelField:
    config = document.config
    attribute_args = parse_documentation_attributes(raw.documentation, "field", "field")
    omit_args = parse_documentation_attributes(raw.documentation, "omit", "field")

    if raw.kind == "enum":
        location = TypeLocation.ENUM_TYPES
    elif raw.kind == "object":
        location = TypeLocation.OUTPUT_OBJECT_TYPES
    else:
        location = TypeLocation.SCALAR

    if location is TypeLocation.OUTPUT_OBJECT_TYPES and not document.is_model_name(raw.type):
        raise SchemaInconsistencyError("Relation field points to an unknown model", entity=model.name, field=raw.name, type_name=raw.type)

    output_omitted = omit_args.get("output")
    if output_omitted is None:
        output_omitted = raw.name in config.omit_output_fields_by_default
    input_omitted = parse_input_omission(omit_args.get("input"))
    if input_omitted is None:
        input_omitted = model.is_input_omitted or raw.name in config.omit_input_fields_by_default

    return ModelField(
        name=raw.name,
        kind=raw.kind,
        type=raw.type,
        type_info=resolve_type_info(document, raw.type, location, raw.is_list),
        is_list=raw.is_list,
        is_required=raw.is_required,
        is_id=raw.is_id,
        is_unique=raw.is_unique,
        is_read_only=raw.is_read_only,
        has_default_value=raw.has_default_value,
        relation_name=raw.relation_name,
        type_field_alias=attribute_args.get("name"),
        docs=clean_docs(raw.documentation),
        is_omitted=FieldOmission(output=bool(output_omitted), input=input_omitted),
    )


def resolve_type_info(document: DmmfDocument, type_name: str, location: str, is_list: bool) -> TypeInfo:
    """Resolve a (location, type, isList) reference to display names."""
    try:
        type_location = TypeLocation(location)
    except ValueError:
        raise SchemaInconsistencyError(f"Unknown type location '{location}'", type_name=type_name) from None

    if type_location is TypeLocation.ENUM_TYPES:
        if document.get_enum_by_type_name(type_name) is None:
            raise SchemaInconsistencyError("Type reference points to an unknown enum", type_name=type_name)
        resolved = document.get_enum_type_name(type_name)
    elif type_location is TypeLocation.INPUT_OBJECT_TYPES:
        if not document.is_input_type_name(type_name):
            raise SchemaInconsistencyError("Type reference points to an unknown input type", type_name=type_name)
        resolved = resolve_input_type_name(document, type_name)
    elif type_location is TypeLocation.OUTPUT_OBJECT_TYPES:
        resolved = resolve_output_type_name(document, type_name)
    else:
        resolved = type_name
    return TypeInfo(type=resolved, location=type_location, is_list=is_list)


def transform_enum(document: DmmfDocument, registry: NameRegistry, raw: RawEnum) -> EnumDef:
    """Build an enum, naming per model enum values after the field aliases."""
    type_name = resolve_enum_type_name(document, registry, raw.name)
    model_name = get_enum_model_name(document, raw.name)
    values = []
    for value in raw.values:
        alias = document.get_model_field_alias(model_name, value) if model_name else None
        values.append(EnumValue(name=alias or value, value=value))
    return EnumDef(name=raw.name, type_name=type_name, values=values, docs=clean_docs(raw.documentation))


def keep_input_type(document: DmmfDocument, raw: RawInputType) -> bool:
    """Unchecked input variants are only emitted in relaxed scalar input mode."""
    return document.config.use_unchecked_scalar_inputs or not is_unchecked_input(raw.name)


def transform_input_type(document: DmmfDocument, raw: RawInputType) -> InputType:
    model_name = find_model_prefix(document, raw.name)
    fields = []
    for raw_field in raw.fields:
        if raw_field.deprecation is not None:
            continue
        model_field = document.get_model_field(model_name, raw_field.name) if model_name else None
        arg = transform_schema_arg(document, raw_field)
        if model_field is not None:
            arg.type_name = model_field.type_field_alias or raw_field.name
            arg.is_omitted = model_field.is_omitted.is_omitted_from_input(raw.name)
        fields.append(arg)
    return InputType(name=raw.name, type_name=resolve_input_type_name(document, raw.name), fields=fields)


def transform_schema_arg(document: DmmfDocument, raw: RawSchemaArg) -> SchemaArg:
    selected = select_input_type_variant(
        raw.input_types,
        use_simple_inputs=document.config.use_simple_inputs,
        use_unchecked_scalar_inputs=document.config.use_unchecked_scalar_inputs,
    )
    return SchemaArg(
        name=raw.name,
        type_name=raw.name,
        selected_input_type=resolve_type_info(document, selected.type, selected.location, selected.is_list),
        is_required=raw.is_required,
        is_nullable=raw.is_nullable,
    )


def transform_output_type(document: DmmfDocument, raw: RawOutputType) -> OutputType:
    type_name = resolve_output_type_name(document, raw.name)
    fields = []
    for raw_field in raw.fields:
        if raw_field.deprecation is not None:
            continue
        args = [transform_schema_arg(document, arg) for arg in raw_field.args]
        fields.append(
            OutputField(
                name=raw_field.name,
                output_type=resolve_type_info(
                    document,
                    raw_field.output_type.type,
                    raw_field.output_type.location,
                    raw_field.output_type.is_list,
                ),
                # Relation counts are only computed when requested
                is_required=not raw_field.is_nullable and raw_field.name != "_count",
                args=args,
                args_type_name=f"{type_name}{pascal_case(raw_field.name)}Args" if args else None,
            )
        )
    return OutputType(name=raw.name, type_name=type_name, fields=fields)


def get_operation_kind(action_name: str) -> OperationKind | None:
    if action_name in {action.value for action in SUPPORTED_QUERY_ACTIONS}:
        return OperationKind.QUERY
    if action_name in {action.value for action in SUPPORTED_MUTATION_ACTIONS}:
        return OperationKind.MUTATION
    return None


def map_default_action_name(action: ModelAction, type_name: str) -> str:
    """`findUniqueOrThrow` + `User` -> `findUniqueUserOrThrow`."""
    if "OrThrow" in action.value:
        return f"{action.value.replace('OrThrow', '')}{type_name}OrThrow"
    return f"{action.value}{type_name}"


def get_mapped_action_name(action: ModelAction, type_name: str, overridden_plural: str | None, use_original_mapping: bool) -> str:
    """Public operation name of an action."""
    default_name = map_default_action_name(action, type_name)
    if use_original_mapping:
        return default_name

    has_no_plural = not overridden_plural and pluralize(type_name) == type_name
    if has_no_plural:
        return default_name

    if action is ModelAction.FIND_UNIQUE:
        return camel_case(type_name)
    if action is ModelAction.FIND_UNIQUE_OR_THROW:
        return f"get{type_name}"
    if action is ModelAction.FIND_MANY:
        return camel_case(overridden_plural or pluralize(type_name))
    return default_name


def get_mapped_args_type_name(action: ModelAction, type_name: str) -> str:
    return f"{pascal_case(map_default_action_name(action, type_name))}Args"


def get_mapped_action_resolver_name(action: ModelAction, type_name: str) -> str:
    return f"{pascal_case(map_default_action_name(action, type_name))}Resolver"


def get_prisma_method_name(action: ModelAction) -> str:
    """Client method called by an action (`createOne` -> `create`), snake cased."""
    return snake_case(_PRISMA_METHOD_NAMES.get(action, action.value))


def transform_mapping(document: DmmfDocument, raw: RawModelMapping) -> ModelMapping:
    model = document.get_model(raw.model)
    if model is None:
        raise SchemaInconsistencyError("Cannot find model in root types definitions", entity=raw.model)

    actions = []
    for action_name, field_name in sorted(raw.actions.items(), key=lambda item: item[0].lower()):
        operation = get_operation_kind(action_name)
        if not field_name or operation is None:
            continue

        output_type = document.find_output_type_with_field(field_name)
        if output_type is None:
            raise SchemaInconsistencyError(
                "Cannot find type with field in root types definitions",
                entity=raw.model,
                field=field_name,
            )
        method = document.get_output_type_field(output_type.name, field_name)
        kind = ModelAction(action_name)

        actions.append(
            Action(
                name=get_mapped_action_name(kind, model.type_name, model.plural, document.config.use_original_mapping),
                field_name=field_name,
                kind=kind,
                operation=operation,
                prisma_method=get_prisma_method_name(kind),
                method=method,
                output_type_name=method.output_type.type,
                action_resolver_name=get_mapped_action_resolver_name(kind, model.type_name),
                args_type_name=get_mapped_args_type_name(kind, model.type_name) if method.args else None,
            )
        )

    return ModelMapping(
        model_name=model.name,
        model_type_name=model.type_name,
        collection_name=model.name.lower(),
        resolver_name=f"{model.type_name}CrudResolver",
        actions=actions,
    )


def get_relation_fields(model: Model, output_type: OutputType | None) -> list[ModelField]:
    """Relation fields of a model that are exposed in its output type."""
    if output_type is None:
        return []
    exposed = {output_field.name for output_field in output_type.fields}
    return [
        model_field
        for model_field in model.fields
        if model_field.relation_name and not model_field.is_omitted.output and model_field.name in exposed
    ]


def generate_relation_model(document: DmmfDocument, model: Model) -> RelationModel:
    output_type = document.get_output_type(model.name)
    relation_fields = []
    for model_field in get_relation_fields(model, output_type):
        output_type_field = document.get_output_type_field(output_type.name, model_field.name)
        relation_fields.append(
            RelationField(
                field=model_field,
                output_type_field=output_type_field,
                type=document.get_model_type_name(model_field.type),
                args_type_name=f"{model.type_name}{pascal_case(model_field.name)}Args" if output_type_field.args else None,
            )
        )
    return RelationModel(
        model=model,
        output_type=output_type,
        resolver_name=f"{model.type_name}RelationsResolver",
        relation_fields=relation_fields,
    )
