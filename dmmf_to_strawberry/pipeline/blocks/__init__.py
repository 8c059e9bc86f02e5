"""
Block generators and their orchestrator.
"""

from __future__ import annotations

from .base import BaseBlockGenerator, GenerationMetrics
from .factory import BLOCK_ORDER, BlockGeneratorFactory
from .generators import (
    CrudResolverBlockGenerator,
    EnumBlockGenerator,
    InputBlockGenerator,
    ModelBlockGenerator,
    OutputBlockGenerator,
    RelationResolverBlockGenerator,
)

__all__ = [
    "BLOCK_ORDER",
    "BaseBlockGenerator",
    "BlockGeneratorFactory",
    "CrudResolverBlockGenerator",
    "EnumBlockGenerator",
    "GenerationMetrics",
    "InputBlockGenerator",
    "ModelBlockGenerator",
    "OutputBlockGenerator",
    "RelationResolverBlockGenerator",
]
