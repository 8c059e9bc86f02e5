"""
CRUD resolver emitter.

Each model gets one module grouping all its actions in two classes, one for
the query actions and one for the mutation actions, so that they can be
merged into the matching root types. See `action` for the resolvers
exposing a single action.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...dmmf.types import ModelMapping
from ...source import SourceProject
from ..ast_helpers import class_def, parse_expr
from ..layout import crud_resolver_dir, module_file
from ..type_rendering import TypeRenderer
from .helpers import generate_action_method, import_resolver_helpers

if TYPE_CHECKING:
    from ...dmmf.document import DmmfDocument


def generate_crud_resolver_class(project: SourceProject, document: DmmfDocument, mapping: ModelMapping) -> None:
    """Emit `resolvers/crud/<Model>/<Model>CrudResolver.py` with every action of the model."""
    parts = crud_resolver_dir(mapping.model_type_name) + (mapping.resolver_name,)
    source_file = project.create_source_file(module_file(parts))
    renderer = TypeRenderer(document, source_file, parts)
    import_resolver_helpers(renderer)

    for class_name, actions in (
        (mapping.query_resolver_name, mapping.query_actions),
        (mapping.mutation_resolver_name, mapping.mutation_actions),
    ):
        if not actions:
            continue
        methods = [generate_action_method(renderer, mapping, action) for action in actions]
        source_file.add_statement(class_def(class_name, methods, decorators=[parse_expr("strawberry.type")]))
