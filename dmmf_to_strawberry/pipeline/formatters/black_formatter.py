"""
Black formatter for Python code.
"""

from __future__ import annotations

from ..config import FormatterConfig
from ..errors import FormatterError
from .base import Formatter


class BlackFormatter(Formatter):
    """Formatter using black for Python code."""

    name = "black"

    def __init__(self):
        self._black = None
        self._available = None

    def is_available(self) -> bool:
        """Check if black is installed."""
        if self._available is None:
            try:
                import black

                self._black = black
                self._available = True
            except ImportError:
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Python code using black.

        Args:
            code: Python source code to format
            config: Formatter configuration

        Returns:
            Formatted code
        """
        self.ensure_available()
        black = self._black

        target_versions = set()
        if config.target_version:
            target_version = getattr(black.TargetVersion, config.target_version.upper(), None)
            if target_version is not None:
                target_versions.add(target_version)

        mode = black.Mode(
            target_versions=target_versions,
            line_length=config.line_length,
            string_normalization=config.string_normalization,
            magic_trailing_comma=config.magic_trailing_comma,
        )

        try:
            return black.format_str(code, mode=mode)
        except black.InvalidInput as e:
            raise FormatterError(f"black could not format the code: {e}") from e
        except Exception as e:
            raise FormatterError(f"black failed: {e!r}") from e
