"""
Base class for code formatters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ..config import FormatterConfig
from ..errors import FormatterError


class Formatter(ABC):
    """Abstract base class for code formatters."""

    name: str = ""

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Args:
            code: The source code to format
            config: Formatter configuration

        Returns:
            Formatted code

        Raises:
            FormatterError: If the code cannot be formatted
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the formatter is available (dependencies installed).

        Returns:
            True if the formatter can be used
        """

    def format_tree(self, paths: list[Path], config: FormatterConfig) -> None:
        """
        Format the given Python files in place.

        Args:
            paths: Files to format, other files are ignored
            config: Formatter configuration

        Raises:
            FormatterError: If the formatter is unavailable or fails on a file
        """
        self.ensure_available()
        for path in paths:
            if path.suffix != ".py":
                continue
            code = path.read_text(encoding="utf-8")
            formatted = self.format(code, config)
            if formatted != code:
                path.write_text(formatted, encoding="utf-8")

    def ensure_available(self) -> None:
        if not self.is_available():
            raise FormatterError(f"Formatter '{self.name}' is not available")
