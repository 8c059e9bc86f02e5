"""
Layout of the generated package.

Module locations are expressed as tuples of path parts relative to the
output directory, e.g. ("resolvers", "inputs", "UserWhereInput").
"""

from __future__ import annotations

from pathlib import Path

ENUMS_FOLDER = "enums"
MODELS_FOLDER = "models"
RESOLVERS_FOLDER = "resolvers"
INPUTS_FOLDER = "inputs"
OUTPUTS_FOLDER = "outputs"
ARGS_FOLDER = "args"
RELATIONS_FOLDER = "relations"
CRUD_FOLDER = "crud"

HELPERS_MODULE = ("helpers",)
SCALARS_MODULE = ("scalars",)
ENHANCE_MODULE = ("enhance",)
INDEX_MODULE = ("__init__",)

ModuleParts = tuple[str, ...]


def enum_module(type_name: str) -> ModuleParts:
    return (ENUMS_FOLDER, type_name)


def model_module(type_name: str) -> ModuleParts:
    return (MODELS_FOLDER, type_name)


def input_module(type_name: str) -> ModuleParts:
    return (RESOLVERS_FOLDER, INPUTS_FOLDER, type_name)


def output_module(type_name: str) -> ModuleParts:
    return (RESOLVERS_FOLDER, OUTPUTS_FOLDER, type_name)


def output_args_module(args_type_name: str) -> ModuleParts:
    return (RESOLVERS_FOLDER, OUTPUTS_FOLDER, ARGS_FOLDER, args_type_name)


def crud_resolver_dir(model_type_name: str) -> ModuleParts:
    return (RESOLVERS_FOLDER, CRUD_FOLDER, model_type_name)


def relation_resolver_dir(model_type_name: str) -> ModuleParts:
    return (RESOLVERS_FOLDER, RELATIONS_FOLDER, model_type_name)


def module_file(parts: ModuleParts) -> Path:
    """Relative file path of a module."""
    return Path(*parts[:-1], f"{parts[-1]}.py")


def package_file(parts: ModuleParts) -> Path:
    """Relative path of the `__init__.py` of a package."""
    return Path(*parts, "__init__.py")


def relative_level(parts: ModuleParts) -> int:
    """Number of leading dots that reach the output root from a module."""
    return len(parts)


def lazy_module_path(from_parts: ModuleParts, target: ModuleParts) -> str:
    """Relative dotted path of `target` as seen from the module `from_parts`."""
    return "." * relative_level(from_parts) + ".".join(target)
