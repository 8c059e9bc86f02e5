"""
Base class for block generators.

A block is one category of generated artifacts (enums, models, inputs,
outputs, relation resolvers, CRUD resolvers). Each generator decides on its
own whether its block is enabled and reports how many items it emitted.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..config import EmitBlockKind
from ..source import SourceProject

if TYPE_CHECKING:
    from ..dmmf.document import DmmfDocument


@dataclass
class GenerationMetrics:
    items_generated: int
    time_elapsed: float | None = None  # milliseconds


class BaseBlockGenerator(ABC):
    """Abstract base class for block generators."""

    block: EmitBlockKind

    def __init__(self, project: SourceProject, document: DmmfDocument):
        """
        Initialize the generator.

        Args:
            project: Project receiving the generated units
            document: Semantic model of the schema
        """
        self.project = project
        self.document = document

    @property
    def block_name(self) -> str:
        """Name of the block, for logging and metrics."""
        return self.block.value

    @abstractmethod
    def should_generate(self) -> bool:
        """
        Check whether this block is enabled for the current configuration.

        Returns:
            True if the block must be generated
        """

    @abstractmethod
    def generate(self) -> GenerationMetrics:
        """
        Generate the block.

        Returns:
            Metrics about the generation, zero items when the block is disabled
        """
