"""
Block generators, one per artifact category.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ..config import EmitBlockKind
from ..dmmf.types import OutputType
from ..emitters import (
    generate_action_resolver_class,
    generate_args_type_class,
    generate_crud_resolver_class,
    generate_crud_resolvers_barrel,
    generate_enum_from_def,
    generate_enums_barrel,
    generate_input_type_class,
    generate_inputs_barrel,
    generate_model_type_class,
    generate_models_barrel,
    generate_output_type_class,
    generate_outputs_barrel,
    generate_relation_resolvers_barrel,
    generate_relations_resolver_class,
    generate_resolvers_barrel,
)
from ..emitters.layout import ARGS_FOLDER, crud_resolver_dir, output_args_module, relation_resolver_dir
from ..source import SourceProject
from .base import BaseBlockGenerator, GenerationMetrics

if TYPE_CHECKING:
    from ..dmmf.document import DmmfDocument

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class EnumBlockGenerator(BaseBlockGenerator):
    block = EmitBlockKind.ENUMS

    def should_generate(self) -> bool:
        return self.document.should_generate_block(self.block)

    def generate(self) -> GenerationMetrics:
        if not self.should_generate():
            return GenerationMetrics(items_generated=0)

        start = time.perf_counter()
        # Datamodel enums win over schema enums of the same name
        datamodel_names = {e.type_name for e in self.document.datamodel_enums}
        enums = self.document.datamodel_enums + [e for e in self.document.enums if e.type_name not in datamodel_names]
        for enum_def in enums:
            generate_enum_from_def(self.project, enum_def)

        generate_enums_barrel(self.project, [e.type_name for e in self.document.all_enums])
        return GenerationMetrics(items_generated=len(enums), time_elapsed=_elapsed_ms(start))


class ModelBlockGenerator(BaseBlockGenerator):
    block = EmitBlockKind.MODELS

    def should_generate(self) -> bool:
        return self.document.should_generate_block(self.block)

    def generate(self) -> GenerationMetrics:
        if not self.should_generate():
            return GenerationMetrics(items_generated=0)

        start = time.perf_counter()
        for model in self.document.models:
            generate_model_type_class(self.project, self.document, model)

        generate_models_barrel(self.project, [model.type_name for model in self.document.models])
        return GenerationMetrics(items_generated=len(self.document.models), time_elapsed=_elapsed_ms(start))


class InputBlockGenerator(BaseBlockGenerator):
    block = EmitBlockKind.INPUTS

    def should_generate(self) -> bool:
        return self.document.should_generate_block(self.block)

    def generate(self) -> GenerationMetrics:
        if not self.should_generate():
            return GenerationMetrics(items_generated=0)

        start = time.perf_counter()
        for input_type in self.document.input_types:
            generate_input_type_class(self.project, self.document, input_type)

        generate_inputs_barrel(self.project, [t.type_name for t in self.document.input_types])
        return GenerationMetrics(items_generated=len(self.document.input_types), time_elapsed=_elapsed_ms(start))


class OutputBlockGenerator(BaseBlockGenerator):
    """Output types other than the root operation types and the model types."""

    block = EmitBlockKind.OUTPUTS

    def __init__(self, project: SourceProject, document: DmmfDocument):
        super().__init__(project, document)
        self.generated_output_types: list[OutputType] = []

    def should_generate(self) -> bool:
        return self.document.should_generate_block(self.block)

    def generate(self) -> GenerationMetrics:
        if not self.should_generate():
            return GenerationMetrics(items_generated=0)

        start = time.perf_counter()
        self.generated_output_types = [
            t
            for t in self.document.output_types
            if not self.document.is_model_name(t.name) and not self.document.is_root_type(t.name)
        ]

        args_type_names = []
        for output_type in self.generated_output_types:
            generate_output_type_class(self.project, self.document, output_type)
            for output_field in output_type.fields:
                if output_field.args_type_name:
                    generate_args_type_class(
                        self.project,
                        self.document,
                        output_args_module(output_field.args_type_name),
                        output_field.args_type_name,
                        output_field.args,
                    )
                    args_type_names.append(output_field.args_type_name)

        generate_outputs_barrel(self.project, [t.type_name for t in self.generated_output_types], args_type_names)
        return GenerationMetrics(items_generated=len(self.generated_output_types), time_elapsed=_elapsed_ms(start))


class RelationResolverBlockGenerator(BaseBlockGenerator):
    block = EmitBlockKind.RELATION_RESOLVERS

    def should_generate(self) -> bool:
        return bool(self.document.relation_models) and self.document.should_generate_block(self.block)

    def generate(self) -> GenerationMetrics:
        if not self.should_generate():
            return GenerationMetrics(items_generated=0)

        start = time.perf_counter()
        relation_resolvers: dict[str, str] = {}
        args_type_names: dict[str, list[str]] = {}
        for relation_model in self.document.relation_models:
            model_type_name = relation_model.model.type_name
            resolver_dir = relation_resolver_dir(model_type_name)
            generate_relations_resolver_class(self.project, self.document, relation_model)

            model_args = []
            for relation_field in relation_model.relation_fields:
                if relation_field.args_type_name:
                    generate_args_type_class(
                        self.project,
                        self.document,
                        resolver_dir + (ARGS_FOLDER, relation_field.args_type_name),
                        relation_field.args_type_name,
                        relation_field.output_type_field.args,
                    )
                    model_args.append(relation_field.args_type_name)

            generate_resolvers_barrel(
                self.project, resolver_dir, [(relation_model.resolver_name, relation_model.resolver_name)], model_args
            )
            relation_resolvers[model_type_name] = relation_model.resolver_name
            args_type_names[model_type_name] = model_args

        generate_relation_resolvers_barrel(self.project, relation_resolvers, args_type_names)
        return GenerationMetrics(items_generated=len(self.document.relation_models), time_elapsed=_elapsed_ms(start))


class CrudResolverBlockGenerator(BaseBlockGenerator):
    """Grouped query and mutation resolvers per model plus one resolver per action."""

    block = EmitBlockKind.CRUD_RESOLVERS

    def should_generate(self) -> bool:
        return self.document.should_generate_block(self.block)

    def generate(self) -> GenerationMetrics:
        if not self.should_generate():
            return GenerationMetrics(items_generated=0)

        start = time.perf_counter()
        items_generated = 0
        crud_resolvers: dict[str, list[str]] = {}
        action_resolvers: dict[str, list[str]] = {}
        query_resolvers: list[str] = []
        mutation_resolvers: list[str] = []
        args_type_names: dict[str, list[str]] = {}

        for mapping in self.document.model_mappings:
            resolver_dir = crud_resolver_dir(mapping.model_type_name)
            generate_crud_resolver_class(self.project, self.document, mapping)
            items_generated += 1

            model_args = []
            for action in mapping.actions:
                generate_action_resolver_class(self.project, self.document, mapping, action)
                items_generated += 1
                if action.args_type_name:
                    generate_args_type_class(
                        self.project,
                        self.document,
                        resolver_dir + (ARGS_FOLDER, action.args_type_name),
                        action.args_type_name,
                        action.method.args,
                    )
                    model_args.append(action.args_type_name)

            grouped_names = mapping.root_resolver_names()
            action_names = [action.action_resolver_name for action in mapping.actions]
            resolver_exports = [(mapping.resolver_name, name) for name in grouped_names]
            resolver_exports += [(name, name) for name in action_names]
            generate_resolvers_barrel(self.project, resolver_dir, resolver_exports, model_args)
            crud_resolvers[mapping.model_type_name] = grouped_names
            action_resolvers[mapping.model_type_name] = action_names
            if mapping.query_actions:
                query_resolvers.append(mapping.query_resolver_name)
            if mapping.mutation_actions:
                mutation_resolvers.append(mapping.mutation_resolver_name)
            args_type_names[mapping.model_type_name] = model_args

        generate_crud_resolvers_barrel(
            self.project,
            crud_resolvers,
            action_resolvers,
            args_type_names,
            query_resolvers=query_resolvers,
            mutation_resolvers=mutation_resolvers,
        )
        logger.debug(f"Generated {items_generated} CRUD resolvers for {len(self.document.model_mappings)} models")
        return GenerationMetrics(items_generated=items_generated, time_elapsed=_elapsed_ms(start))
