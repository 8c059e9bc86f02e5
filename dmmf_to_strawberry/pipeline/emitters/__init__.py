"""
Emitters turning semantic model records into source units.
"""

from __future__ import annotations

from .args_class import generate_args_type_class
from .enum import generate_enum_from_def
from .imports import (
    generate_crud_resolvers_barrel,
    generate_enums_barrel,
    generate_index_file,
    generate_inputs_barrel,
    generate_models_barrel,
    generate_outputs_barrel,
    generate_relation_resolvers_barrel,
    generate_resolvers_barrel,
)
from .model_type import generate_model_type_class
from .resolvers import generate_action_resolver_class, generate_crud_resolver_class, generate_relations_resolver_class
from .type_class import generate_input_type_class, generate_output_type_class
from .type_rendering import TypeRenderer

__all__ = [
    "TypeRenderer",
    "generate_action_resolver_class",
    "generate_args_type_class",
    "generate_crud_resolver_class",
    "generate_crud_resolvers_barrel",
    "generate_enum_from_def",
    "generate_enums_barrel",
    "generate_index_file",
    "generate_input_type_class",
    "generate_inputs_barrel",
    "generate_model_type_class",
    "generate_models_barrel",
    "generate_output_type_class",
    "generate_outputs_barrel",
    "generate_relation_resolvers_barrel",
    "generate_relations_resolver_class",
    "generate_resolvers_barrel",
]
