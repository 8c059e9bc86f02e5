"""
Atomic file writer for generated source units.

Ensures that file writes are atomic so that an interrupted run never leaves
a truncated module behind.
"""

from __future__ import annotations

import ast
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import GeneratedCodeError


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_python: Callable[[str, Path], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_python: Optional validation function for Python code
        """
        self._validate_python = validate_python or self._default_validate_python

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate Python sources before finalizing

        Raises:
            GeneratedCodeError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate and path.suffix == ".py":
                self._validate_python(content, path)

            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

    def _default_validate_python(self, content: str, path: Path) -> None:
        """Default Python validation.

        Raises:
            GeneratedCodeError: If the content does not parse
        """
        try:
            ast.parse(content, filename=str(path))
        except SyntaxError as e:
            raise GeneratedCodeError(f"Generated Python code is not valid ({path}): {e}") from e
