"""
Enum emitter.
"""

from __future__ import annotations

import ast

from ...utils import safe_identifier
from ..dmmf.types import EnumDef
from ..source import SourceProject
from .ast_helpers import assign, call, class_def
from .layout import enum_module, module_file


def generate_enum_from_def(project: SourceProject, enum_def: EnumDef) -> None:
    """Emit `enums/<Name>.py` holding one `str` based strawberry enum."""
    source_file = project.create_source_file(module_file(enum_module(enum_def.type_name)))
    source_file.add_import("enum", "Enum")
    source_file.add_import("strawberry")

    body: list[ast.stmt] = [
        assign(safe_identifier(value.name), ast.Constant(value=value.value)) for value in enum_def.values
    ]
    decorator = call("strawberry.enum", name=enum_def.type_name, description=enum_def.docs)
    source_file.add_statement(class_def(enum_def.type_name, body, decorators=[decorator], bases=["str", "Enum"]))
