"""
Name resolution for the semantic schema model.

Raw names are mapped to display names: models through their explicit alias
or a casing transform, and the derived types (aggregates, group by
outputs, per model enums and inputs) by substituting the model display
name. Results are memoized in a `TypeNameCache` owned by one document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ...utils import pascal_case
from ..errors import SchemaInconsistencyError

if TYPE_CHECKING:
    from .document import DmmfDocument

logger = logging.getLogger(__name__)

# Suffixes of the per model output types, checked in this order
DEDICATED_OUTPUT_TYPE_SUFFIXES = (
    "CountAggregateOutputType",
    "MinAggregateOutputType",
    "MaxAggregateOutputType",
    "AvgAggregateOutputType",
    "SumAggregateOutputType",
    "GroupByOutputType",
    "CountOutputType",
)

ENUM_SUFFIXES = ("OrderByRelevanceFieldEnum", "ScalarFieldEnum")

# Suffixes appended when a computed name is already taken
MODEL_COLLISION_SUFFIX = "Model"
ENUM_COLLISION_SUFFIX = "Enum"
OUTPUT_COLLISION_SUFFIX = "Output"


@dataclass
class TypeNameCache:
    """Memoized name resolutions of one document."""

    output_types: dict[str, str] = field(default_factory=dict)
    input_types: dict[str, str] = field(default_factory=dict)
    enums: dict[str, str] = field(default_factory=dict)

    def clear(self) -> None:
        self.output_types.clear()
        self.input_types.clear()
        self.enums.clear()


class NameRegistry:
    """Hands out unique display names.

    Names are claimed by an owner key ("model:User", "enum:Role", ...). A name
    already held by another owner gets a suffix, then a numeric suffix.
    """

    def __init__(self):
        self._owners: dict[str, str] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._owners

    def owner_of(self, name: str) -> str | None:
        return self._owners.get(name)

    def claim_explicit(self, owner: str, name: str) -> str:
        """Claim a user provided alias.

        Raises:
            SchemaInconsistencyError: If another owner claimed the same alias
        """
        current = self._owners.get(name)
        if current is not None and current != owner:
            raise SchemaInconsistencyError(
                f"Type name '{name}' is declared by both '{current}' and '{owner}'",
                entity=owner.split(":", 1)[-1],
            )
        self._owners[name] = owner
        return name

    def claim(self, owner: str, name: str, suffix: str) -> str:
        """Claim a computed name, disambiguating it when taken."""
        candidate = name
        if self._is_taken(candidate, owner):
            candidate = f"{name}{suffix}"
            counter = 2
            while self._is_taken(candidate, owner):
                candidate = f"{name}{suffix}{counter}"
                counter += 1
            logger.debug(f"Renamed '{owner}' to '{candidate}' to avoid a name collision")
        self._owners[candidate] = owner
        return candidate

    def _is_taken(self, name: str, owner: str) -> bool:
        current = self._owners.get(name)
        return current is not None and current != owner


def compute_model_type_name(model_name: str, alias: str | None) -> str:
    """Display name of a model before collision handling."""
    return alias or pascal_case(model_name)


def find_model_prefix(document: DmmfDocument, type_name: str) -> str | None:
    """Longest raw model name prefixing `type_name` at a word boundary."""
    best: str | None = None
    for model_name in document.model_names:
        if not type_name.startswith(model_name) or len(type_name) == len(model_name):
            continue
        if not type_name[len(model_name)].isupper():
            continue
        if best is None or len(model_name) > len(best):
            best = model_name
    return best


def resolve_output_type_name(document: DmmfDocument, output_type_name: str) -> str:
    """Map a raw output type name to its display name.

    `AggregateUser` -> `Aggregate<Display>`,
    `CreateManyUserAndReturnOutputType` -> `CreateManyAndReturn<Display>`,
    `User` -> `<Display>`, `UserCountAggregateOutputType` -> `<Display>CountAggregate`.
    Other names are returned unchanged.
    """
    cache = document.type_names.output_types
    cached = cache.get(output_type_name)
    if cached is not None:
        return cached

    result = _map_output_type_name(document, output_type_name)
    cache[output_type_name] = result
    return result


def _map_output_type_name(document: DmmfDocument, output_type_name: str) -> str:
    if output_type_name.startswith("Aggregate"):
        model_type_name = document.get_model_type_name(output_type_name[len("Aggregate") :])
        if model_type_name:
            return f"Aggregate{model_type_name}"

    if output_type_name.startswith("CreateMany") and output_type_name.endswith("AndReturnOutputType"):
        model_name = output_type_name[len("CreateMany") : -len("AndReturnOutputType")]
        model_type_name = document.get_model_type_name(model_name)
        if model_type_name:
            return f"CreateManyAndReturn{model_type_name}"

    if document.is_model_name(output_type_name):
        return document.get_model_type_name(output_type_name)

    for suffix in DEDICATED_OUTPUT_TYPE_SUFFIXES:
        if output_type_name.endswith(suffix):
            model_type_name = document.get_model_type_name(output_type_name[: -len(suffix)])
            if model_type_name:
                return f"{model_type_name}{suffix.removesuffix('OutputType')}"
            break

    return output_type_name


def claim_output_type_name(document: DmmfDocument, registry: NameRegistry, output_type_name: str) -> str:
    """Resolve a non model output type name and make it unique."""
    resolved = resolve_output_type_name(document, output_type_name)
    if document.is_model_name(output_type_name):
        return resolved
    unique = registry.claim(f"output:{output_type_name}", resolved, OUTPUT_COLLISION_SUFFIX)
    document.type_names.output_types[output_type_name] = unique
    return unique


def resolve_input_type_name(document: DmmfDocument, input_type_name: str) -> str:
    """Substitute the display name for the model prefix of an input type name."""
    cache = document.type_names.input_types
    cached = cache.get(input_type_name)
    if cached is not None:
        return cached

    result = input_type_name
    model_name = find_model_prefix(document, input_type_name)
    if model_name is not None:
        result = f"{document.get_model_type_name(model_name)}{input_type_name[len(model_name):]}"
    cache[input_type_name] = result
    return result


def resolve_enum_type_name(document: DmmfDocument, registry: NameRegistry, enum_name: str) -> str:
    """Display name of an enum, claimed in the registry on first resolution."""
    cache = document.type_names.enums
    cached = cache.get(enum_name)
    if cached is not None:
        return cached

    type_name = enum_name
    model_name = get_enum_model_name(document, enum_name)
    if model_name is not None:
        type_name = f"{document.get_model_type_name(model_name)}{enum_name[len(model_name):]}"

    result = registry.claim(f"enum:{enum_name}", type_name, ENUM_COLLISION_SUFFIX)
    cache[enum_name] = result
    return result


def get_enum_model_name(document: DmmfDocument, enum_name: str) -> str | None:
    """Raw model name of a per model enum (`UserScalarFieldEnum` -> `User`)."""
    for suffix in ENUM_SUFFIXES:
        if enum_name.endswith(suffix):
            model_name = enum_name[: -len(suffix)]
            if document.is_model_name(model_name):
                return model_name
    return None
