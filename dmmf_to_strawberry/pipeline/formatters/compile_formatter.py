"""
Compilation check of the generated code.
"""

from __future__ import annotations

from pathlib import Path

from ..config import FormatterConfig
from ..errors import FormatterError
from .base import Formatter


class CompileFormatter(Formatter):
    """Compiles every unit to surface errors; the code is left unchanged."""

    name = "compile"

    def is_available(self) -> bool:
        return True

    def format(self, code: str, config: FormatterConfig, filename: str = "<generated>") -> str:
        try:
            compile(code, filename, "exec")
        except SyntaxError as e:
            raise FormatterError(f"{filename}:{e.lineno}: {e.msg}") from e
        return code

    def format_tree(self, paths: list[Path], config: FormatterConfig) -> None:
        for path in paths:
            if path.suffix == ".py":
                self.format(path.read_text(encoding="utf-8"), config, filename=str(path))
