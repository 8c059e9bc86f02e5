"""
Raw DMMF parsing and the semantic schema model built from it.
"""

from __future__ import annotations

from .document import DmmfDocument
from .input_selector import select_input_type_variant
from .name_resolver import NameRegistry, TypeNameCache, resolve_input_type_name, resolve_output_type_name
from .nodes import RawDocument, RawTypeRef
from .parser import DmmfParser

__all__ = [
    "DmmfDocument",
    "DmmfParser",
    "NameRegistry",
    "RawDocument",
    "RawTypeRef",
    "TypeNameCache",
    "resolve_input_type_name",
    "resolve_output_type_name",
    "select_input_type_variant",
]
