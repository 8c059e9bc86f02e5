"""
Orchestration of the block generators.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..config import EmitBlockKind
from ..dmmf.types import OutputType
from ..source import SourceProject
from .base import BaseBlockGenerator, GenerationMetrics
from .generators import (
    CrudResolverBlockGenerator,
    EnumBlockGenerator,
    InputBlockGenerator,
    ModelBlockGenerator,
    OutputBlockGenerator,
    RelationResolverBlockGenerator,
)

if TYPE_CHECKING:
    from ..dmmf.document import DmmfDocument

logger = logging.getLogger(__name__)

# Outputs run before inputs so that the generated output types are known early
BLOCK_ORDER: tuple[EmitBlockKind, ...] = (
    EmitBlockKind.ENUMS,
    EmitBlockKind.MODELS,
    EmitBlockKind.OUTPUTS,
    EmitBlockKind.INPUTS,
    EmitBlockKind.RELATION_RESOLVERS,
    EmitBlockKind.CRUD_RESOLVERS,
)

MetricsCallback = Callable[[str, GenerationMetrics], None]


class BlockGeneratorFactory:
    """Creates one generator per block and runs them in a fixed order."""

    def __init__(self, project: SourceProject, document: DmmfDocument):
        self.project = project
        self.document = document
        self.generators: dict[EmitBlockKind, BaseBlockGenerator] = {
            generator.block: generator
            for generator in (
                EnumBlockGenerator(project, document),
                ModelBlockGenerator(project, document),
                InputBlockGenerator(project, document),
                OutputBlockGenerator(project, document),
                RelationResolverBlockGenerator(project, document),
                CrudResolverBlockGenerator(project, document),
            )
        }

    def generate_all_blocks(self, metrics_callback: MetricsCallback | None = None) -> list[OutputType]:
        """Run every generator.

        Args:
            metrics_callback: Called with the block name and its metrics for
                every block that emitted at least one item

        Returns:
            The output types emitted by the outputs block
        """
        generated_output_types: list[OutputType] = []
        for block in BLOCK_ORDER:
            generator = self.generators[block]
            logger.debug(f"Generating {generator.block_name}...")
            metrics = generator.generate()

            if metrics_callback is not None and metrics.items_generated > 0:
                metrics_callback(generator.block_name, metrics)

            if isinstance(generator, OutputBlockGenerator):
                generated_output_types = generator.generated_output_types

        return generated_output_types

    def get_generator(self, block: EmitBlockKind) -> BaseBlockGenerator | None:
        return self.generators.get(block)

    def was_generated(self, block: EmitBlockKind) -> bool:
        generator = self.generators.get(block)
        return generator is not None and generator.should_generate()
