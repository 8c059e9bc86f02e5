import json
from pathlib import Path

import click

from .cli_utils import configure_logging, reconstruct_command_line
from .pipeline import CodeGenerator, GeneratorConfig, SimpleMetricsCollector
from .pipeline.config import ALL_EMIT_BLOCK_KINDS, EmitBlockKind, FormatterKind

FORMAT_CHOICES = [kind.value for kind in FormatterKind] + ["none"]


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--emit-only",
    "-e",
    multiple=True,
    type=click.Choice([block.value for block in ALL_EMIT_BLOCK_KINDS]),
    help="Only emit these blocks (and the blocks they depend on)",
)
@click.option("--format", "format_", default=None, type=click.Choice(FORMAT_CHOICES), help="Post-processing of the generated code")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging and metrics summary")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def dmmf_to_strawberry(config, emit_only, format_, verbose, path, output):
    with open(path) as f:
        dmmf = json.load(f)

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI options override the config file
    config.output_dir = output
    if emit_only:
        config.emit_only = [EmitBlockKind(block) for block in emit_only]
    if format_ is not None:
        config.formatter = None if format_ == "none" else FormatterKind(format_)
    if verbose:
        config.verbose_logging = True
    config.generation_command = reconstruct_command_line(dmmf_to_strawberry)

    configure_logging(config.verbose_logging)

    metrics = SimpleMetricsCollector(verbose=config.verbose_logging)
    written = CodeGenerator(config, metrics).generate(dmmf)
    click.echo(f"Generated {len(written)} files in {Path(output)}")
