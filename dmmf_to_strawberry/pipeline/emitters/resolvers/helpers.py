"""
Bodies of the generated resolver methods.

Every method collects its arguments into the field's bundle, converts the
bundle with `transform_args` and calls the client found in the GraphQL
context. The selection set is read back with
`transform_info_into_prisma_args` to request aggregates and relation
counts only when the query asks for them.
"""

from __future__ import annotations

import ast

from ....utils import safe_identifier, snake_case
from ...dmmf.types import Action, ModelAction, ModelMapping, OperationKind
from ..args_class import render_bundle_call, render_parameters
from ..ast_helpers import call
from ..layout import HELPERS_MODULE, crud_resolver_dir
from ..type_rendering import TypeRenderer

GROUP_BY_AGGREGATES = ("_count", "_avg", "_sum", "_min", "_max")

HELPER_FUNCTIONS = (
    "get_prisma_from_context",
    "transform_args",
    "transform_count_field_into_select_relations_count",
    "transform_info_into_prisma_args",
)


def import_resolver_helpers(renderer: TypeRenderer) -> None:
    """Register the imports every resolver module needs."""
    source_file = renderer.source_file
    source_file.add_import("strawberry")
    source_file.add_import("strawberry.types", "Info")
    for name in HELPER_FUNCTIONS:
        renderer.import_eager(HELPERS_MODULE, name)


def args_call_arguments(has_args: bool) -> str:
    return "**transform_args(args), " if has_args else ""


def generate_action_method(renderer: TypeRenderer, mapping: ModelMapping, action: Action) -> ast.stmt:
    """Async resolver method of one CRUD action.

    Args:
        renderer: Renderer of the unit the method is added to
        mapping: Mapping of the model owning the action
        action: Action to expose

    Returns:
        The decorated method definition
    """
    method = action.method
    return_annotation = renderer.render(action.return_type, is_required=action.is_required)
    parameters = ["self", "info: Info"] + render_parameters(renderer, method.args)

    lines = []
    if action.args_type_name:
        args_parts = crud_resolver_dir(mapping.model_type_name) + ("args", action.args_type_name)
        renderer.import_eager(args_parts, action.args_type_name)
        lines.append(f"args = {render_bundle_call(action.args_type_name, method.args)}")

    client_call = f"get_prisma_from_context(info).{safe_identifier(mapping.collection_name)}.{action.prisma_method}"
    spread_args = args_call_arguments(bool(action.args_type_name))

    if action.kind is ModelAction.AGGREGATE:
        lines.append(f"return await {client_call}({spread_args}**transform_info_into_prisma_args(info))")
    elif action.kind is ModelAction.GROUP_BY:
        lines.extend(
            [
                "selection = transform_info_into_prisma_args(info)",
                "aggregates = {key: value for key, value in selection.items() "
                f"if key in {GROUP_BY_AGGREGATES!r} and value is not None}}",
                f"return await {client_call}({spread_args}**aggregates)",
            ]
        )
    else:
        lines.extend(
            [
                'count = transform_info_into_prisma_args(info).get("_count")',
                f"return await {client_call}(",
                f"    {spread_args}**(transform_count_field_into_select_relations_count(count) if count else {{}}),",
                ")",
            ]
        )

    method_name = safe_identifier(snake_case(action.name))
    code = f"async def {method_name}({', '.join(parameters)}) -> {return_annotation}:\n"
    code += "".join(f"    {line}\n" for line in lines)
    function = ast.parse(code).body[0]

    decorator_name = "strawberry.mutation" if action.operation is OperationKind.MUTATION else "strawberry.field"
    function.decorator_list = [call(decorator_name, name=action.name)]
    return function
