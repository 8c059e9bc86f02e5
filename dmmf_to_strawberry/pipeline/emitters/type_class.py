"""
Input and output type emitters.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from ...utils import safe_identifier
from ..dmmf.types import InputType, OutputField, OutputType
from ..source import SourceProject
from .args_class import render_parameters
from .ast_helpers import ann_assign, call, class_def, explicit_name, parse_expr
from .layout import input_module, module_file, output_module
from .type_rendering import TypeRenderer

if TYPE_CHECKING:
    from ..dmmf.document import DmmfDocument


def generate_input_type_class(project: SourceProject, document: DmmfDocument, input_type: InputType) -> None:
    """Emit `resolvers/inputs/<Name>.py`. Fields hidden from this input are skipped."""
    parts = input_module(input_type.type_name)
    source_file = project.create_source_file(module_file(parts))
    renderer = TypeRenderer(document, source_file, parts)
    source_file.add_import("strawberry")

    fields = [f for f in input_type.fields if not f.is_omitted]
    fields = [f for f in fields if f.is_required] + [f for f in fields if not f.is_required]

    body: list[ast.stmt] = []
    for input_field in fields:
        python_name = safe_identifier(input_field.name)
        annotation = renderer.render(
            input_field.selected_input_type,
            is_required=input_field.is_required and not input_field.is_nullable,
        )
        name = explicit_name(python_name, input_field.type_name)
        default = None if input_field.is_required else parse_expr("strawberry.UNSET")
        if name is not None:
            value = call("strawberry.field", name=name, default=default)
        else:
            value = default
        body.append(ann_assign(python_name, annotation, value))

    decorator = call("strawberry.input", name=input_type.type_name)
    source_file.add_statement(class_def(input_type.type_name, body, decorators=[decorator]))


def generate_output_type_class(project: SourceProject, document: DmmfDocument, output_type: OutputType) -> None:
    """Emit `resolvers/outputs/<Name>.py`.

    Fields taking arguments are stored privately and exposed through a
    resolver method accepting those arguments.
    """
    parts = output_module(output_type.type_name)
    source_file = project.create_source_file(module_file(parts))
    renderer = TypeRenderer(document, source_file, parts)
    source_file.add_import("strawberry")

    fields = [f for f in output_type.fields if f.is_required] + [f for f in output_type.fields if not f.is_required]

    body: list[ast.stmt] = []
    resolvers: list[ast.stmt] = []
    for output_field in fields:
        python_name = safe_identifier(output_field.name)
        annotation = renderer.render(output_field.output_type, is_required=output_field.is_required)
        default = None if output_field.is_required else ast.Constant(value=None)

        if output_field.args:
            body.append(ann_assign(python_name, f"strawberry.Private[{annotation}]", default))
            resolvers.append(_generate_field_resolver(renderer, output_field, annotation))
            continue

        name = explicit_name(python_name, output_field.name)
        value = call("strawberry.field", name=name, default=default) if name is not None else default
        body.append(ann_assign(python_name, annotation, value))

    decorator = call("strawberry.type", name=output_type.type_name)
    source_file.add_statement(class_def(output_type.type_name, body + resolvers, decorators=[decorator]))


def _generate_field_resolver(renderer: TypeRenderer, output_field: OutputField, annotation: str) -> ast.stmt:
    parameters = ", ".join(["self"] + render_parameters(renderer, output_field.args))
    code = (
        f"def resolve_{safe_identifier(output_field.name).lstrip('_')}({parameters}) -> {annotation}:\n"
        f"    return self.{safe_identifier(output_field.name)}\n"
    )
    function = ast.parse(code).body[0]
    function.decorator_list = [call("strawberry.field", name=output_field.name)]
    return function
