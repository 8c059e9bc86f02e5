"""
Pipeline driver.

`CodeGenerator` runs the generation as a sequence of states:

    IDLE -> DIRECTORY_SETUP -> SEMANTIC_MODEL_BUILT -> BLOCKS_EMITTED
         -> AUXILIARY_EMITTED -> PERSISTED -> FORMATTED -> DONE

Any exception moves the generator to FAILED and is re-raised. Formatter
failures are the exception: they are logged and the run completes with the
unformatted code.
"""

from __future__ import annotations

import json
import logging
import shutil
import time
from enum import Enum
from pathlib import Path
from typing import Any

from .. import __version__
from .auxiliary import generate_custom_scalars, generate_enhance_map, generate_helpers_file
from .blocks import BlockGeneratorFactory, GenerationMetrics
from .config import EmitBlockKind, GeneratorConfig
from .dmmf import DmmfDocument
from .emitters import generate_index_file
from .emitters.imports import (
    CRUD_MUTATION_RESOLVERS_COLLECTION,
    CRUD_QUERY_RESOLVERS_COLLECTION,
    MUTATION_RESOLVERS_COLLECTION,
    QUERY_RESOLVERS_COLLECTION,
)
from .emitters.layout import CRUD_FOLDER, ENUMS_FOLDER, INPUTS_FOLDER, MODELS_FOLDER, OUTPUTS_FOLDER, RELATIONS_FOLDER, RESOLVERS_FOLDER
from .errors import FormatterError
from .formatters import get_formatter
from .metrics import MetricsListener
from .source import SourceProject

logger = logging.getLogger(__name__)

# Category packages re-exported by the index, in import order
_INDEX_PACKAGES: tuple[tuple[EmitBlockKind, tuple[str, ...]], ...] = (
    (EmitBlockKind.ENUMS, (ENUMS_FOLDER,)),
    (EmitBlockKind.MODELS, (MODELS_FOLDER,)),
    (EmitBlockKind.INPUTS, (RESOLVERS_FOLDER, INPUTS_FOLDER)),
    (EmitBlockKind.OUTPUTS, (RESOLVERS_FOLDER, OUTPUTS_FOLDER)),
    (EmitBlockKind.RELATION_RESOLVERS, (RESOLVERS_FOLDER, RELATIONS_FOLDER)),
    (EmitBlockKind.CRUD_RESOLVERS, (RESOLVERS_FOLDER, CRUD_FOLDER)),
)


class PipelineState(str, Enum):
    IDLE = "idle"
    DIRECTORY_SETUP = "directory_setup"
    SEMANTIC_MODEL_BUILT = "semantic_model_built"
    BLOCKS_EMITTED = "blocks_emitted"
    AUXILIARY_EMITTED = "auxiliary_emitted"
    PERSISTED = "persisted"
    FORMATTED = "formatted"
    DONE = "done"
    FAILED = "failed"


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


def generation_header(config: GeneratorConfig) -> str:
    """Comment placed at the top of every generated unit."""
    if not config.add_generation_comment:
        return ""
    command = config.generation_command or "dmmf_to_strawberry"
    return f"# Generated by dmmf_to_strawberry v{__version__} : {command}"


class CodeGenerator:
    """Generates a strawberry API package from a raw schema document."""

    def __init__(self, config: GeneratorConfig, metrics: MetricsListener | None = None):
        """
        Initialize the generator.

        Args:
            config: Generation options
            metrics: Optional listener receiving phase timings
        """
        self.config = config
        self.metrics = metrics
        self.state = PipelineState.IDLE
        self.written_files: list[Path] = []

    @property
    def output_dir(self) -> Path:
        return Path(self.config.output_dir)

    @property
    def emit_compiled_code(self) -> bool:
        """Byte-compile the tree; by default only for outputs installed in site-packages."""
        if self.config.emit_compiled_code is not None:
            return self.config.emit_compiled_code
        return "site-packages" in str(self.output_dir.resolve())

    def _emit_metric(self, phase: str, duration: float, count: int | None = None) -> None:
        if self.metrics is not None:
            self.metrics.emit_metric(phase, duration, count)

    def _transition(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state

    def generate(self, dmmf: dict[str, Any]) -> list[Path]:
        """Run the whole pipeline.

        Args:
            dmmf: Raw schema document (parsed JSON)

        Returns:
            The written files

        Raises:
            SchemaInconsistencyError: If the document is inconsistent
            GeneratedCodeError: If an emitted unit is not valid Python
        """
        try:
            return self._generate(dmmf)
        except Exception:
            self._transition(PipelineState.FAILED)
            raise

    def _generate(self, dmmf: dict[str, Any]) -> list[Path]:
        total_start = time.perf_counter()
        logger.info(f"Generating code into {self.output_dir}")

        self._setup_directory()
        self._transition(PipelineState.DIRECTORY_SETUP)

        start = time.perf_counter()
        document = DmmfDocument(dmmf, self.config)
        self._emit_metric("dmmf-document-creation", _elapsed_ms(start))
        self._transition(PipelineState.SEMANTIC_MODEL_BUILT)

        project = SourceProject(self.output_dir, header=generation_header(self.config))
        factory = BlockGeneratorFactory(project, document)

        def on_block_generated(block_name: str, metrics: GenerationMetrics) -> None:
            if metrics.time_elapsed is not None:
                self._emit_metric(f"{block_name}-generation", metrics.time_elapsed, metrics.items_generated)

        generated_output_types = factory.generate_all_blocks(on_block_generated)
        self._transition(PipelineState.BLOCKS_EMITTED)

        logger.debug("Generating auxiliary files")
        start = time.perf_counter()
        crud_generated = factory.was_generated(EmitBlockKind.CRUD_RESOLVERS)
        relations_generated = factory.was_generated(EmitBlockKind.RELATION_RESOLVERS)
        generate_enhance_map(
            project,
            document,
            mappings=document.model_mappings if crud_generated else [],
            relation_models=document.relation_models if relations_generated else [],
            input_types=document.input_types if factory.was_generated(EmitBlockKind.INPUTS) else [],
            output_types=generated_output_types,
        )
        generate_custom_scalars(project, self.config)
        generate_helpers_file(project, self.config)

        packages = [parts for block, parts in _INDEX_PACKAGES if factory.was_generated(block)]
        # Relation resolvers are inherited by the model types, not merged into a root type
        root_collections = {}
        if crud_generated:
            root_collections[QUERY_RESOLVERS_COLLECTION] = [CRUD_QUERY_RESOLVERS_COLLECTION]
            root_collections[MUTATION_RESOLVERS_COLLECTION] = [CRUD_MUTATION_RESOLVERS_COLLECTION]
        generate_index_file(project, packages, root_collections)

        if self.config.emit_dmmf:
            project.create_raw_file("dmmf.json", json.dumps(dmmf, indent=2))
        self._emit_metric("auxiliary-files", _elapsed_ms(start))
        self._transition(PipelineState.AUXILIARY_EMITTED)

        emit_start = time.perf_counter()
        if self.emit_compiled_code:
            logger.debug("Saving and byte-compiling generated code")
            self.written_files = project.emit()
        else:
            logger.debug("Saving generated code")
            start = time.perf_counter()
            self.written_files = project.save()
            self._emit_metric("save-files", _elapsed_ms(start))
        self._transition(PipelineState.PERSISTED)

        self._format(self.written_files)
        self._transition(PipelineState.FORMATTED)

        self._emit_metric("code-emission", _elapsed_ms(emit_start))
        self._emit_metric("total-generation", _elapsed_ms(total_start))
        if self.metrics is not None:
            self.metrics.on_complete()

        self._transition(PipelineState.DONE)
        logger.info(f"Generated {len(self.written_files)} files in {_elapsed_ms(total_start):.0f}ms")
        return self.written_files

    def _setup_directory(self) -> None:
        """Create the output directory and clear what a previous run left in it."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        for child in self.output_dir.iterdir():
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()

    def _format(self, paths: list[Path]) -> None:
        kind = self.config.formatter
        if kind is None:
            return

        formatter = get_formatter(kind)
        logger.debug(f"Formatting generated code with {kind.value}")
        start = time.perf_counter()
        try:
            formatter.format_tree(paths, self.config.formatter_options)
        except FormatterError as e:
            logger.warning(f"Code formatting failed: {e}")
            return

        duration = _elapsed_ms(start)
        self._emit_metric(f"{kind.value}-formatting", duration)
        self._emit_metric("code-formatting", duration)


def generate_code(dmmf: dict[str, Any], config: GeneratorConfig, metrics: MetricsListener | None = None) -> list[Path]:
    """Convenience wrapper around `CodeGenerator`."""
    return CodeGenerator(config, metrics).generate(dmmf)
