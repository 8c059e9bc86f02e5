"""
Ruff formatter for Python code.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..config import FormatterConfig
from ..errors import FormatterError
from .base import Formatter


class RuffFormatter(Formatter):
    """Formatter using ruff for Python code."""

    name = "ruff"

    def __init__(self):
        self._available = None

    def is_available(self) -> bool:
        """Check if ruff is installed."""
        if self._available is None:
            try:
                result = subprocess.run(
                    ["ruff", "--version"],
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    def _options(self, config: FormatterConfig) -> list[str]:
        options = []
        if config.line_length:
            options.extend(["--line-length", str(config.line_length)])
        if config.target_version:
            options.extend(["--target-version", config.target_version])
        return options

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Python code using ruff.

        Args:
            code: Python source code to format
            config: Formatter configuration

        Returns:
            Formatted code
        """
        self.ensure_available()
        cmd = ["ruff", "format", "--stdin-filename", "code.py"] + self._options(config)
        result = self._run(cmd, input=code)
        return result.stdout

    def format_tree(self, paths: list[Path], config: FormatterConfig) -> None:
        """Format every file with a single ruff invocation."""
        self.ensure_available()
        files = [str(path) for path in paths if path.suffix == ".py"]
        if not files:
            return
        self._run(["ruff", "format"] + self._options(config) + files)

    def _run(self, cmd: list[str], input: str | None = None) -> subprocess.CompletedProcess:
        try:
            result = subprocess.run(cmd, input=input, capture_output=True, text=True, timeout=120)
        except subprocess.SubprocessError as e:
            raise FormatterError(f"ruff format failed: {e}") from e
        if result.returncode != 0:
            raise FormatterError(f"ruff format failed: {result.stderr.strip()}")
        return result
