"""
Relation resolver emitter.

Each model with exposed relations gets a relations resolver that its model
type inherits, so the resolver methods receive the parent record as `self`.
A relation is resolved by loading the parent record again through its
unique filter and including the relation, forwarding the field arguments
to the include.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from ....utils import safe_identifier, snake_case
from ...dmmf.types import Model, RelationField, RelationModel
from ...errors import SchemaInconsistencyError
from ...source import SourceProject
from ..args_class import render_bundle_call, render_parameters
from ..ast_helpers import call, class_def, parse_expr
from ..layout import module_file, relation_resolver_dir
from ..type_rendering import TypeRenderer
from .helpers import import_resolver_helpers

if TYPE_CHECKING:
    from ...dmmf.document import DmmfDocument


def get_unique_filter(model: Model, parent_name: str) -> str:
    """Expression of the unique filter identifying the parent record.

    A single id field wins, then the first unique field, then the
    composite primary key or the first composite unique index.

    Raises:
        SchemaInconsistencyError: If the model has no way to be identified
    """
    id_fields = [f for f in model.fields if f.is_id]
    if len(id_fields) == 1:
        return _single_field_filter(parent_name, id_fields[0].name)

    unique_fields = [f for f in model.fields if f.is_unique]
    if unique_fields:
        return _single_field_filter(parent_name, unique_fields[0].name)

    composite = model.primary_key or (model.unique_indexes[0] if model.unique_indexes else None)
    if composite is None or not composite.fields:
        raise SchemaInconsistencyError("Unexpected error happened on generating 'whereUnique' for relation resolver", entity=model.name)

    field_names = {f.name for f in model.fields}
    for name in composite.fields:
        if name not in field_names:
            raise SchemaInconsistencyError("Composite key names a field the model does not have", entity=model.name, field=name)

    key_name = composite.name or "_".join(composite.fields)
    values = ", ".join(f'"{name}": {parent_name}.{safe_identifier(name)}' for name in composite.fields)
    return f'{{"{key_name}": {{{values}}}}}'


def _single_field_filter(parent_name: str, field_name: str) -> str:
    return f'{{"{field_name}": {parent_name}.{safe_identifier(field_name)}}}'


def generate_relations_resolver_class(project: SourceProject, document: DmmfDocument, relation_model: RelationModel) -> None:
    """Emit `resolvers/relations/<Model>/<Model>RelationsResolver.py`."""
    model = relation_model.model
    parts = relation_resolver_dir(model.type_name) + (relation_model.resolver_name,)
    source_file = project.create_source_file(module_file(parts))
    renderer = TypeRenderer(document, source_file, parts)
    import_resolver_helpers(renderer)

    unique_filter = get_unique_filter(model, "self")
    collection_name = safe_identifier(model.name.lower())

    methods = [
        _generate_relation_method(renderer, relation_model, relation_field, unique_filter, collection_name)
        for relation_field in relation_model.relation_fields
    ]
    source_file.add_statement(class_def(relation_model.resolver_name, methods, decorators=[parse_expr("strawberry.type")]))


def _generate_relation_method(
    renderer: TypeRenderer,
    relation_model: RelationModel,
    relation_field: RelationField,
    unique_filter: str,
    collection_name: str,
) -> ast.stmt:
    model = relation_model.model
    model_field = relation_field.field
    output_field = relation_field.output_type_field
    return_annotation = renderer.render(output_field.output_type, is_required=output_field.is_required)
    parameters = ["self", "info: Info"]
    parameters += render_parameters(renderer, output_field.args)

    lines = []
    if relation_field.args_type_name:
        args_parts = relation_resolver_dir(model.type_name) + ("args", relation_field.args_type_name)
        renderer.import_eager(args_parts, relation_field.args_type_name)
        lines.append(f"args = {render_bundle_call(relation_field.args_type_name, output_field.args)}")
        spread_args = "**transform_args(args), "
    else:
        spread_args = ""

    lines.extend(
        [
            'count = transform_info_into_prisma_args(info).get("_count")',
            f"relation_args = {{{spread_args}**(transform_count_field_into_select_relations_count(count) if count else {{}})}}",
            f"record = await get_prisma_from_context(info).{collection_name}.find_unique_or_raise(",
            f"    where={unique_filter},",
            f'    include={{"{model_field.name}": relation_args or True}},',
            ")",
            f"return record.{safe_identifier(model_field.name)}",
        ]
    )

    method_name = safe_identifier(snake_case(model_field.output_name))
    code = f"async def {method_name}({', '.join(parameters)}) -> {return_annotation}:\n"
    code += "".join(f"    {line}\n" for line in lines)
    function = ast.parse(code).body[0]
    function.decorator_list = [call("strawberry.field", name=model_field.output_name, description=model_field.docs)]
    return function
