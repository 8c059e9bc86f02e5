"""
AST based source builder used to materialize the output tree.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .project import SourceProject
from .source_file import ImportSpec, SourceFile

__all__ = [
    "AtomicWriter",
    "ImportSpec",
    "SourceFile",
    "SourceProject",
]
