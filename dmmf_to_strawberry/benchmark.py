"""
Generation benchmark.

Runs the generator several times on the same DMMF document and logs the
schema statistics and the timings of every iteration.
"""

import json
import logging
import shutil
import time
from pathlib import Path
from typing import Any

import click

from .cli_utils import configure_logging
from .pipeline import CodeGenerator, GeneratorConfig, SimpleMetricsCollector
from .pipeline.config import FormatterKind

logger = logging.getLogger(__name__)


def analyze_schema(dmmf: dict[str, Any]) -> dict[str, int]:
    """Counts of the main schema elements and a rough complexity score."""
    datamodel = dmmf.get("datamodel", {})
    schema = dmmf.get("schema", {})
    input_namespaces = schema.get("inputObjectTypes", {})
    output_namespaces = schema.get("outputObjectTypes", {})

    stats = {
        "models": len(datamodel.get("models", [])),
        "enums": len(datamodel.get("enums", [])),
        "input_types": sum(len(input_namespaces.get(ns) or []) for ns in ("prisma", "model")),
        "output_types": sum(len(output_namespaces.get(ns) or []) for ns in ("prisma", "model")),
    }
    stats["complexity"] = stats["models"] * 10 + stats["enums"] * 2 + stats["input_types"] + stats["output_types"] * 3
    return stats


def run_benchmark(dmmf: dict[str, Any], config: GeneratorConfig, iterations: int) -> list[float]:
    """Run the generator `iterations` times.

    Returns:
        The duration of each iteration in milliseconds
    """
    timings = []
    for iteration in range(1, iterations + 1):
        logger.info(f"Running iteration {iteration}/{iterations}...")
        metrics = SimpleMetricsCollector(verbose=True)
        start = time.perf_counter()
        CodeGenerator(config, metrics).generate(dmmf)
        duration = (time.perf_counter() - start) * 1000
        timings.append(duration)
        logger.info(f"Iteration {iteration} completed in {duration:.2f}ms")
    return timings


@click.command()
@click.option("--iterations", "-i", default=1, type=click.IntRange(min=1))
@click.option(
    "--format",
    "format_",
    default="none",
    type=click.Choice([kind.value for kind in FormatterKind] + ["none"]),
)
@click.option("--no-cleanup", is_flag=True, default=False, help="Keep the generated files")
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
def benchmark(iterations, format_, no_cleanup, path, output):
    configure_logging(verbose=False)

    with open(path) as f:
        content = f.read()
    dmmf = json.loads(content)

    logger.info(f"Schema: {path} ({round(len(content) / 1024)}KB)")
    logger.info(f"Output: {output}")
    for name, value in analyze_schema(dmmf).items():
        logger.info(f"  {name}: {value}")

    config = GeneratorConfig(
        output_dir=output,
        formatter=None if format_ == "none" else FormatterKind(format_),
        emit_compiled_code=False,
        verbose_logging=True,
        generation_command="dmmf_to_strawberry_benchmark",
    )
    timings = run_benchmark(dmmf, config, iterations)

    logger.info(f"min: {min(timings):.2f}ms, avg: {sum(timings) / len(timings):.2f}ms, max: {max(timings):.2f}ms")
    files = [p for p in Path(output).rglob("*.py")]
    logger.info(f"Generated {len(files)} Python files")

    if not no_cleanup:
        shutil.rmtree(output, ignore_errors=True)
