"""
Argument bundle emitter and rendering of resolver parameters.

An argument bundle is a keyword-only dataclass collecting the arguments of
one field. Resolvers receive the arguments as parameters, build the bundle
and hand it to `transform_args` to obtain the client call arguments.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from ...utils import safe_identifier
from ..dmmf.types import SchemaArg
from ..source import SourceProject
from .ast_helpers import ann_assign, call, class_def, explicit_name, parse_expr
from .layout import ModuleParts, module_file
from .type_rendering import TypeRenderer

if TYPE_CHECKING:
    from ..dmmf.document import DmmfDocument


def render_arg_annotation(renderer: TypeRenderer, arg: SchemaArg) -> str:
    return renderer.render(arg.selected_input_type, is_required=arg.is_required and not arg.is_nullable)


def generate_args_type_class(
    project: SourceProject,
    document: DmmfDocument,
    module_parts: ModuleParts,
    args_type_name: str,
    args: list[SchemaArg],
) -> None:
    """Emit the bundle `args_type_name` at `module_parts`."""
    source_file = project.create_source_file(module_file(module_parts))
    renderer = TypeRenderer(document, source_file, module_parts)
    source_file.add_import("dataclasses", "dataclass")

    body: list[ast.stmt] = []
    for arg in args:
        annotation = render_arg_annotation(renderer, arg)
        if arg.is_required:
            body.append(ann_assign(safe_identifier(arg.name), annotation))
        else:
            source_file.add_import("strawberry")
            body.append(ann_assign(safe_identifier(arg.name), annotation, parse_expr("strawberry.UNSET")))

    decorator = call("dataclass", kw_only=True)
    source_file.add_statement(class_def(args_type_name, body, decorators=[decorator]))


def render_parameters(renderer: TypeRenderer, args: list[SchemaArg]) -> list[str]:
    """Resolver parameters for `args`, required ones first.

    Returns:
        Parameter declarations such as `take: int | None = strawberry.UNSET`
    """
    required = []
    optional = []
    for arg in args:
        python_name = safe_identifier(arg.name)
        annotation = render_arg_annotation(renderer, arg)
        graphql_name = explicit_name(python_name, arg.type_name)
        if graphql_name is not None:
            renderer.source_file.add_import("typing", "Annotated")
            renderer.source_file.add_import("strawberry")
            annotation = f'Annotated[{annotation}, strawberry.argument(name="{graphql_name}")]'

        if arg.is_required:
            required.append(f"{python_name}: {annotation}")
        else:
            renderer.source_file.add_import("strawberry")
            optional.append(f"{python_name}: {annotation} = strawberry.UNSET")
    return required + optional


def render_bundle_call(args_type_name: str, args: list[SchemaArg]) -> str:
    """`FindManyUserArgs(where=where, take=take)`."""
    keywords = ", ".join(f"{safe_identifier(arg.name)}={safe_identifier(arg.name)}" for arg in args)
    return f"{args_type_name}({keywords})"
