"""
CLI utilities for command line reconstruction and logging setup.
"""

import logging
from pathlib import Path

import click

DEFAULT_COMMAND = "dmmf_to_strawberry"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def reconstruct_command_line(click_command: click.Command, program: str = DEFAULT_COMMAND) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection
        program: Name the command line starts with

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return program

    if not cli_args:
        return program

    cmd_parts = [program]
    arguments = []  # For positional arguments
    options = []  # For optional arguments

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        value = cli_args[param_name]
        if value is None or value is False or value == ():
            continue

        # File paths are shown by name only
        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        elif isinstance(value, (list, tuple)):
            formatted_value = ",".join(str(item) for item in value)
        else:
            formatted_value = str(value)

        if isinstance(param, click.Argument):
            arguments.append(formatted_value)

        elif isinstance(param, click.Option):
            # Skip if it's the default value
            if hasattr(param, "default") and value == param.default:
                continue

            flag = param.opts[0] if param.opts else f"--{param_name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, formatted_value])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)


def configure_logging(verbose: bool) -> None:
    """Route pipeline logs to stderr, DEBUG level when verbose."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)
