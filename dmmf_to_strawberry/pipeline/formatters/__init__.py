"""
Post-processing formatters for generated code.
"""

from __future__ import annotations

from ..config import FormatterKind
from .base import Formatter
from .black_formatter import BlackFormatter
from .compile_formatter import CompileFormatter
from .ruff_formatter import RuffFormatter

_FORMATTERS: dict[FormatterKind, type[Formatter]] = {
    FormatterKind.RUFF: RuffFormatter,
    FormatterKind.BLACK: BlackFormatter,
    FormatterKind.COMPILE: CompileFormatter,
}


def get_formatter(kind: FormatterKind) -> Formatter:
    """Formatter implementing the given strategy."""
    return _FORMATTERS[kind]()


__all__ = [
    "BlackFormatter",
    "CompileFormatter",
    "Formatter",
    "RuffFormatter",
    "get_formatter",
]
