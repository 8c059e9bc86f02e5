"""
Single action resolver emitter, so that applications can expose only part
of the API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...dmmf.types import Action, ModelMapping
from ...source import SourceProject
from ..ast_helpers import class_def, parse_expr
from ..layout import crud_resolver_dir, module_file
from ..type_rendering import TypeRenderer
from .helpers import generate_action_method, import_resolver_helpers

if TYPE_CHECKING:
    from ...dmmf.document import DmmfDocument


def generate_action_resolver_class(project: SourceProject, document: DmmfDocument, mapping: ModelMapping, action: Action) -> None:
    """Emit `resolvers/crud/<Model>/<Action>Resolver.py`."""
    parts = crud_resolver_dir(mapping.model_type_name) + (action.action_resolver_name,)
    source_file = project.create_source_file(module_file(parts))
    renderer = TypeRenderer(document, source_file, parts)
    import_resolver_helpers(renderer)

    method = generate_action_method(renderer, mapping, action)
    source_file.add_statement(class_def(action.action_resolver_name, [method], decorators=[parse_expr("strawberry.type")]))
