"""
Configuration for the code generator pipeline.

Values usually arrive as a flat key/value mapping (a JSON config file or the
generator block of a Prisma schema), so `from_dict` accepts both snake_case and
camelCase keys and string encoded booleans and lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from ..utils import snake_case
from .errors import ConfigurationError


class EmitBlockKind(str, Enum):
    """Categories of generated artifacts."""

    ENUMS = "enums"
    MODELS = "models"
    INPUTS = "inputs"
    OUTPUTS = "outputs"
    RELATION_RESOLVERS = "relationResolvers"
    CRUD_RESOLVERS = "crudResolvers"


ALL_EMIT_BLOCK_KINDS: tuple[EmitBlockKind, ...] = tuple(EmitBlockKind)

# Blocks whose output imports the listed blocks
_BLOCK_DEPENDENCIES: dict[EmitBlockKind, tuple[EmitBlockKind, ...]] = {
    EmitBlockKind.CRUD_RESOLVERS: (
        EmitBlockKind.INPUTS,
        EmitBlockKind.OUTPUTS,
        EmitBlockKind.MODELS,
        EmitBlockKind.ENUMS,
    ),
    EmitBlockKind.RELATION_RESOLVERS: (
        EmitBlockKind.INPUTS,
        EmitBlockKind.OUTPUTS,
        EmitBlockKind.MODELS,
        EmitBlockKind.ENUMS,
    ),
    EmitBlockKind.OUTPUTS: (EmitBlockKind.INPUTS, EmitBlockKind.ENUMS),
    EmitBlockKind.INPUTS: (EmitBlockKind.ENUMS,),
    EmitBlockKind.MODELS: (EmitBlockKind.ENUMS,),
}


class FormatterKind(str, Enum):
    """Post-processing strategy applied to the output tree."""

    RUFF = "ruff"
    BLACK = "black"
    COMPILE = "compile"  # Byte-compile every unit to surface errors


class InputOmitSetting(str, Enum):
    """Input contexts a field can be hidden from."""

    CREATE = "create"
    UPDATE = "update"
    WHERE = "where"
    ORDER_BY = "orderBy"


def get_blocks_to_emit(emit_only: list[EmitBlockKind] | None) -> list[EmitBlockKind]:
    """Expand the user selection with the blocks it depends on.

    The result keeps the canonical block order.
    """
    if emit_only is None:
        return list(ALL_EMIT_BLOCK_KINDS)

    selected = set(emit_only)
    pending = list(emit_only)
    while pending:
        block = pending.pop()
        for dependency in _BLOCK_DEPENDENCIES.get(block, ()):
            if dependency not in selected:
                selected.add(dependency)
                pending.append(dependency)

    return [block for block in ALL_EMIT_BLOCK_KINDS if block in selected]


@dataclass
class FormatterConfig:
    """Options passed to the post-processing formatter."""

    # Line length for the formatter
    line_length: int = 100

    # Python version target (e.g., "py312", "py313")
    target_version: str = "py312"

    # Whether to use string normalization (convert single quotes to double)
    string_normalization: bool = True

    magic_trailing_comma: bool = True


@dataclass
class GeneratorConfig:
    """Configuration options for code generation."""

    # Directory the generated package is written to
    output_dir: str = "generated"

    # None: byte-compile only when the output lives inside site-packages
    emit_compiled_code: bool | None = None

    # Post-processing strategy (None disables formatting)
    formatter: FormatterKind | None = FormatterKind.COMPILE
    formatter_options: FormatterConfig = field(default_factory=FormatterConfig)

    # Blocks selected by the user (None = every block)
    emit_only: list[EmitBlockKind] | None = None

    # Skip compound "operations" inputs in favour of plain scalars
    use_simple_inputs: bool = False

    # Emit and prefer the "Unchecked" scalar input variants
    use_unchecked_scalar_inputs: bool = False

    # Keep the raw action names (findUniquePost) instead of the plural aware ones
    use_original_mapping: bool = False

    # Field names hidden from inputs / outputs unless documented otherwise
    omit_input_fields_by_default: list[str] = field(default_factory=list)
    omit_output_fields_by_default: list[str] = field(default_factory=list)

    verbose_logging: bool = False

    # Module the generated helpers import the client from
    custom_prisma_import_path: str | None = None

    # Key of the client instance in the GraphQL context
    context_prisma_key: str = "prisma"

    # Use strawberry.ID for @id scalar fields
    emit_id_as_id_type: bool = False

    # Dump the raw document next to the generated code
    emit_dmmf: bool = False

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    # Filled in by the CLI with the reconstructed command line
    generation_command: str = ""

    @property
    def blocks_to_emit(self) -> list[EmitBlockKind]:
        return get_blocks_to_emit(self.emit_only)

    @property
    def client_import_path(self) -> str:
        return self.custom_prisma_import_path or "prisma"

    @staticmethod
    def from_dict(d: dict[str, Any]) -> GeneratorConfig:
        """Create a config from a flat dictionary.

        Raises:
            ConfigurationError: If a key holds a value of the wrong kind
        """
        config = GeneratorConfig()
        known = {f.name for f in fields(GeneratorConfig)}

        for raw_key, value in d.items():
            key = _normalize_key(raw_key)
            if key not in known:
                continue

            if key == "formatter":
                config.formatter = _parse_formatter(value)
            elif key == "formatter_options":
                if not isinstance(value, dict):
                    raise ConfigurationError(f"Invalid value for 'formatter_options': {value!r}")
                config.formatter_options = FormatterConfig(**value)
            elif key == "emit_only":
                config.emit_only = _parse_emit_only(value)
            elif key in ("omit_input_fields_by_default", "omit_output_fields_by_default"):
                setattr(config, key, _parse_string_list(value, raw_key))
            elif key == "emit_compiled_code":
                config.emit_compiled_code = None if value is None else _parse_bool(value, raw_key)
            elif isinstance(getattr(config, key), bool):
                setattr(config, key, _parse_bool(value, raw_key))
            elif key == "custom_prisma_import_path":
                config.custom_prisma_import_path = None if value is None else str(value)
            else:
                setattr(config, key, str(value))

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "output_dir": self.output_dir,
            "emit_compiled_code": self.emit_compiled_code,
            "formatter": self.formatter.value if self.formatter else None,
            "formatter_options": {
                "line_length": self.formatter_options.line_length,
                "target_version": self.formatter_options.target_version,
                "string_normalization": self.formatter_options.string_normalization,
                "magic_trailing_comma": self.formatter_options.magic_trailing_comma,
            },
            "emit_only": [block.value for block in self.emit_only] if self.emit_only is not None else None,
            "use_simple_inputs": self.use_simple_inputs,
            "use_unchecked_scalar_inputs": self.use_unchecked_scalar_inputs,
            "use_original_mapping": self.use_original_mapping,
            "omit_input_fields_by_default": self.omit_input_fields_by_default,
            "omit_output_fields_by_default": self.omit_output_fields_by_default,
            "verbose_logging": self.verbose_logging,
            "custom_prisma_import_path": self.custom_prisma_import_path,
            "context_prisma_key": self.context_prisma_key,
            "emit_id_as_id_type": self.emit_id_as_id_type,
            "emit_dmmf": self.emit_dmmf,
            "add_generation_comment": self.add_generation_comment,
        }


# Keys whose camelCase spelling does not map to the attribute name directly
_KEY_ALIASES = {
    "format_generated_code": "formatter",
    "emit_transpiled_code": "emit_compiled_code",
    "output": "output_dir",
    "output_dir_path": "output_dir",
}


def _normalize_key(key: str) -> str:
    key = snake_case(key)
    return _KEY_ALIASES.get(key, key)


def _parse_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ConfigurationError(f"Invalid boolean value for '{name}': {value!r}")


def _parse_string_list(value: Any, name: str) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigurationError(f"Invalid list value for '{name}': {value!r}")


def _parse_emit_only(value: Any) -> list[EmitBlockKind] | None:
    if value is None:
        return None
    blocks = []
    for item in _parse_string_list(value, "emit_only"):
        try:
            blocks.append(EmitBlockKind(item))
        except ValueError:
            allowed = ", ".join(block.value for block in EmitBlockKind)
            raise ConfigurationError(f"Invalid 'emit_only' value {item!r}. Allowed values: {allowed}") from None
    return blocks


def _parse_formatter(value: Any) -> FormatterKind | None:
    if value is None or value is False:
        return None
    if value is True:
        return FormatterKind.COMPILE
    if isinstance(value, FormatterKind):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered in ("false", "none", ""):
            return None
        if lowered == "true":
            return FormatterKind.COMPILE
        try:
            return FormatterKind(lowered)
        except ValueError:
            pass
    allowed = ", ".join(kind.value for kind in FormatterKind)
    raise ConfigurationError(f"Invalid 'formatter' value {value!r}. Allowed values: {allowed}, none")
