"""
Resolver emitters.
"""

from __future__ import annotations

from .action import generate_action_resolver_class
from .crud import generate_crud_resolver_class
from .relations import generate_relations_resolver_class, get_unique_filter

__all__ = [
    "generate_action_resolver_class",
    "generate_crud_resolver_class",
    "generate_relations_resolver_class",
    "get_unique_filter",
]
