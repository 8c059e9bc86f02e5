"""
Collection of source units making up the output tree.
"""

from __future__ import annotations

import compileall
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..errors import GeneratedCodeError
from .atomic_writer import AtomicWriter
from .source_file import SourceFile

logger = logging.getLogger(__name__)


class SourceProject:
    """Creates source units and persists them under a base directory."""

    def __init__(self, base_dir: Path, header: str = "", max_workers: int | None = None):
        self.base_dir = Path(base_dir)
        self.header = header
        self.max_workers = max_workers
        self._files: dict[Path, SourceFile] = {}
        self._raw_files: dict[Path, str] = {}
        self._writer = AtomicWriter()

    def create_source_file(self, path: str | Path) -> SourceFile:
        """Create the unit at `path`, replacing any unit previously created there."""
        resolved = self._resolve(path)
        source_file = SourceFile(resolved, header=self.header)
        self._files[resolved] = source_file
        return source_file

    def create_raw_file(self, path: str | Path, content: str) -> None:
        """Register a non Python file (for instance a JSON dump)."""
        self._raw_files[self._resolve(path)] = content

    def get_source_file(self, path: str | Path) -> SourceFile | None:
        return self._files.get(self._resolve(path))

    @property
    def source_files(self) -> list[SourceFile]:
        return list(self._files.values())

    def _resolve(self, path: str | Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.base_dir / path

    def _add_missing_packages(self) -> None:
        """Every directory holding a unit must be an importable package."""
        for path in list(self._files):
            directory = path.parent
            while directory == self.base_dir or self.base_dir in directory.parents:
                init_path = directory / "__init__.py"
                if init_path not in self._files:
                    self.create_source_file(init_path)
                directory = directory.parent

    def save(self) -> list[Path]:
        """Render and write every unit. Blocks until all writes are done.

        Returns:
            The written paths

        Raises:
            GeneratedCodeError: If a unit renders to invalid Python
        """
        self._add_missing_packages()
        rendered = [(source_file.path, source_file.render()) for source_file in self._files.values()]
        rendered.extend(self._raw_files.items())

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self._writer.write, path, content) for path, content in rendered]
            for future in futures:
                future.result()

        logger.debug(f"Wrote {len(rendered)} files to {self.base_dir}")
        return [path for path, _ in rendered]

    def emit(self) -> list[Path]:
        """Save the units, then byte-compile the tree.

        Raises:
            GeneratedCodeError: If compilation fails
        """
        paths = self.save()
        if not compileall.compile_dir(str(self.base_dir), quiet=1):
            raise GeneratedCodeError(f"Byte-compilation of {self.base_dir} failed")
        return paths
