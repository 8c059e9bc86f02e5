"""
Model type emitter.

A model becomes a strawberry object type. When relation resolvers are
generated the type inherits the relations resolver of its model, which
contributes one resolver field per exposed relation. Other relation fields,
aliased fields and fields hidden from the output are kept as
`strawberry.Private` storage so that records returned by the client can
populate the type directly; aliased scalar fields are then exposed through a
getter named after the alias.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from ...utils import safe_identifier, snake_case
from ..config import EmitBlockKind
from ..dmmf.types import Model, ModelField, RelationModel, TypeInfo, TypeLocation
from ..source import SourceProject
from .ast_helpers import ann_assign, call, class_def, explicit_name
from .layout import model_module, module_file, relation_resolver_dir
from .type_rendering import TypeRenderer

if TYPE_CHECKING:
    from ..dmmf.document import DmmfDocument


def is_optional_field(model_field: ModelField) -> bool:
    """Whether the field may be left unset when the type is instantiated."""
    return (
        bool(model_field.relation_name)
        or model_field.is_omitted.output
        or (not model_field.is_required and not model_field.type_field_alias)
    )


def is_private_field(model_field: ModelField) -> bool:
    return bool(model_field.relation_name) or bool(model_field.type_field_alias) or model_field.is_omitted.output


def generate_model_type_class(project: SourceProject, document: DmmfDocument, model: Model) -> None:
    """Emit `models/<Name>.py`.

    Args:
        project: Project the unit is added to
        document: Semantic model, used to resolve type references
        model: Model to emit
    """
    parts = model_module(model.type_name)
    source_file = project.create_source_file(module_file(parts))
    renderer = TypeRenderer(document, source_file, parts)
    is_exposed = not model.is_output_omitted

    if is_exposed:
        source_file.add_import("strawberry")
    else:
        source_file.add_import("dataclasses", "dataclass")

    # Required storage first so that instances can be built positionally
    ordered_fields = [f for f in model.fields if not is_optional_field(f)] + [f for f in model.fields if is_optional_field(f)]

    relation_model = _get_relation_model(document, model) if is_exposed else None
    resolved_relations = set()
    bases = []
    if relation_model is not None:
        resolver_parts = relation_resolver_dir(model.type_name) + (relation_model.resolver_name,)
        bases.append(renderer.import_eager(resolver_parts, relation_model.resolver_name))
        resolved_relations = {relation_field.field.name for relation_field in relation_model.relation_fields}

    body: list[ast.stmt] = []
    getters: list[ast.stmt] = []
    for model_field in ordered_fields:
        if model_field.name in resolved_relations:
            continue
        body.append(_generate_field(renderer, model_field, is_exposed))
        if is_exposed and model_field.type_field_alias and not model_field.relation_name and not model_field.is_omitted.output:
            getters.append(_generate_alias_getter(renderer, model_field))

    count_field = _get_count_field(document, model)
    if is_exposed and count_field is not None:
        annotation = renderer.render(count_field, is_required=False)
        body.append(ann_assign("_count", annotation, call("strawberry.field", name="_count", default=ast.Constant(value=None))))

    if is_exposed:
        decorator = call("strawberry.type", name=model.type_name, description=model.docs)
    else:
        decorator = call("dataclass", kw_only=True)
    source_file.add_statement(class_def(model.type_name, body + getters, decorators=[decorator], bases=bases))


def _get_relation_model(document: DmmfDocument, model: Model) -> RelationModel | None:
    """Relations resolver the model type inherits, if they are generated."""
    if not document.should_generate_block(EmitBlockKind.RELATION_RESOLVERS):
        return None
    relation_model = document.get_relation_model(model.name)
    if relation_model is None or not relation_model.relation_fields:
        return None
    return relation_model


def _generate_field(renderer: TypeRenderer, model_field: ModelField, is_exposed: bool) -> ast.stmt:
    python_name = safe_identifier(model_field.name)
    is_optional = is_optional_field(model_field)
    annotation = renderer.render(
        model_field.type_info,
        is_required=model_field.is_required and not model_field.relation_name,
        is_id=model_field.is_id,
    )

    if not is_exposed:
        return ann_assign(python_name, annotation, ast.Constant(value=None) if is_optional else None)

    if is_private_field(model_field):
        return ann_assign(
            python_name,
            f"strawberry.Private[{annotation}]",
            ast.Constant(value=None) if is_optional else None,
        )

    name = explicit_name(python_name, model_field.name)
    if name is None and model_field.docs is None:
        return ann_assign(python_name, annotation, ast.Constant(value=None) if is_optional else None)

    value = call(
        "strawberry.field",
        name=name,
        description=model_field.docs,
        default=ast.Constant(value=None) if is_optional else None,
    )
    return ann_assign(python_name, annotation, value)


def _generate_alias_getter(renderer: TypeRenderer, model_field: ModelField) -> ast.stmt:
    alias = model_field.type_field_alias
    annotation = renderer.render(model_field.type_info, is_required=model_field.is_required, is_id=model_field.is_id)
    decorator = call("strawberry.field", name=alias, description=model_field.docs)
    code = (
        f"def resolve_{snake_case(alias)}(self) -> {annotation}:\n"
        f"    return self.{safe_identifier(model_field.name)}\n"
    )
    function = ast.parse(code).body[0]
    function.decorator_list = [decorator]
    return function


def _get_count_field(document: DmmfDocument, model: Model) -> TypeInfo | None:
    """Type of the relation count field, only exposed alongside the CRUD resolvers."""
    if not document.should_generate_block(EmitBlockKind.CRUD_RESOLVERS):
        return None
    count_field = document.get_output_type_field(model.name, "_count")
    if count_field is None or count_field.output_type.location is not TypeLocation.OUTPUT_OBJECT_TYPES:
        return None
    return count_field.output_type
