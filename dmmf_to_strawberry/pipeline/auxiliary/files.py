"""
Support modules emitted next to the generated types: the resolver helpers,
the custom scalars and the enhancement map.
"""

from __future__ import annotations

import ast
import logging
from typing import TYPE_CHECKING

from ..dmmf.types import InputType, ModelMapping, OutputType, RelationModel
from ..emitters.ast_helpers import all_assign, assign, literal, tuple_of_names
from ..emitters.layout import CRUD_FOLDER, ENHANCE_MODULE, HELPERS_MODULE, RELATIONS_FOLDER, RESOLVERS_FOLDER, SCALARS_MODULE, module_file
from ..emitters.type_rendering import CUSTOM_SCALARS
from ..source import SourceProject
from .templates import render_template

if TYPE_CHECKING:
    from ..config import GeneratorConfig
    from ..dmmf.document import DmmfDocument

logger = logging.getLogger(__name__)


def generate_helpers_file(project: SourceProject, config: GeneratorConfig) -> None:
    """Emit `helpers.py`: client lookup and argument/selection conversions."""
    content = render_template(
        "helpers.py.jinja2",
        header=project.header,
        client_import_path=config.client_import_path,
        context_prisma_key=config.context_prisma_key,
    )
    project.create_raw_file(module_file(HELPERS_MODULE), content)


def generate_custom_scalars(project: SourceProject, config: GeneratorConfig) -> None:
    """Emit `scalars.py`. The content does not depend on the schema."""
    content = render_template("scalars.py.jinja2", header=project.header, scalars=CUSTOM_SCALARS)
    project.create_raw_file(module_file(SCALARS_MODULE), content)


def _names_dict(mapping: dict[str, str]) -> ast.Dict:
    """`{"key": Name}` with the values referencing imported classes."""
    return ast.Dict(
        keys=[ast.Constant(value=key) for key in mapping],
        values=[ast.Name(id=value, ctx=ast.Load()) for value in mapping.values()],
    )


def generate_enhance_map(
    project: SourceProject,
    document: DmmfDocument,
    *,
    mappings: list[ModelMapping],
    relation_models: list[RelationModel],
    input_types: list[InputType],
    output_types: list[OutputType],
) -> None:
    """Emit `enhance.py`.

    The module cross references every generated entity: resolver classes
    by model, the operations and relation fields of each model, the fields
    of argument bundles, input and output types. Resolver categories that
    were not generated are left out.

    Args:
        project: Project the unit is added to
        document: Semantic model
        mappings: Model mappings whose CRUD resolvers were generated
        relation_models: Models whose relation resolvers were generated
        input_types: Generated input types
        output_types: Generated output types
    """
    source_file = project.create_source_file(module_file(ENHANCE_MODULE))
    exported: list[str] = []
    args_info: dict[str, list[str]] = {}

    def add_table(name: str, value: ast.expr) -> None:
        source_file.add_statement(assign(name, value))
        exported.append(name)

    if mappings:
        crud_package = ".".join((RESOLVERS_FOLDER, CRUD_FOLDER))
        crud_resolvers: dict[str, ast.expr] = {}
        actions_resolvers: dict[str, ast.expr] = {}
        for mapping in mappings:
            grouped_names = mapping.root_resolver_names()
            for name in grouped_names:
                source_file.add_import(crud_package, name, level=1)
            crud_resolvers[mapping.model_type_name] = tuple_of_names(grouped_names)
            action_resolvers = {}
            for action in mapping.actions:
                source_file.add_import(crud_package, action.action_resolver_name, level=1)
                action_resolvers[action.name] = action.action_resolver_name
                if action.args_type_name:
                    args_info[action.args_type_name] = [arg.type_name for arg in action.method.args]
            actions_resolvers[mapping.model_type_name] = _names_dict(action_resolvers)

        add_table(
            "crud_resolvers_map",
            ast.Dict(keys=[ast.Constant(value=k) for k in crud_resolvers], values=list(crud_resolvers.values())),
        )
        add_table(
            "actions_resolvers_map",
            ast.Dict(keys=[ast.Constant(value=k) for k in actions_resolvers], values=list(actions_resolvers.values())),
        )
        add_table(
            "crud_resolvers_info",
            literal({m.model_type_name: {a.name: a.operation.value for a in m.actions} for m in mappings}),
        )

    if relation_models:
        relations_package = ".".join((RESOLVERS_FOLDER, RELATIONS_FOLDER))
        relation_resolvers = {}
        for relation_model in relation_models:
            source_file.add_import(relations_package, relation_model.resolver_name, level=1)
            relation_resolvers[relation_model.model.type_name] = relation_model.resolver_name
            for relation_field in relation_model.relation_fields:
                if relation_field.args_type_name:
                    args_info[relation_field.args_type_name] = [
                        arg.type_name for arg in relation_field.output_type_field.args
                    ]

        add_table("relation_resolvers_map", _names_dict(relation_resolvers))
        add_table(
            "relation_resolvers_info",
            literal(
                {
                    r.model.type_name: [f.field.output_name for f in r.relation_fields]
                    for r in relation_models
                }
            ),
        )

    if args_info:
        add_table("args_info", literal(args_info))

    add_table(
        "model_fields_info",
        literal(
            {
                model.type_name: [f.output_name for f in model.fields if not f.is_omitted.output]
                for model in document.models
                if not model.is_output_omitted
            }
        ),
    )
    if input_types:
        add_table(
            "input_types_info",
            literal({t.type_name: [f.type_name for f in t.fields if not f.is_omitted] for t in input_types}),
        )
    if output_types:
        add_table(
            "output_types_info",
            literal({t.type_name: [f.name for f in t.fields] for t in output_types}),
        )

    if mappings:
        exported.append("apply_resolvers_enhance_map")
    if relation_models:
        exported.append("apply_relation_resolvers_enhance_map")
    source_file.add_statement(all_assign(exported))

    if mappings or relation_models:
        source_file.add_import("functools")
        source_file.add_import("collections.abc", "Callable")
        source_file.add_statement(
            render_template(
                "enhance.py.jinja2",
                has_crud_resolvers=bool(mappings),
                has_relation_resolvers=bool(relation_models),
            )
        )
    logger.debug(f"Enhance map references {len(mappings)} CRUD and {len(relation_models)} relation resolvers")
