"""
Documentation attributes.

Models and fields are customised through annotations in their schema
comments:

    /// @@GraphQL.type(name: "Client", plural: "Clients")
    /// @@GraphQL.omit(output: true)
    model User { ... }

    /// @GraphQL.field(name: "emailAddress")
    /// @GraphQL.omit(output: true, input: ["create", "update"])
    email String
"""

from __future__ import annotations

import json
import re
from typing import Any

from ..config import InputOmitSetting
from ..errors import SchemaInconsistencyError

_ATTRIBUTE_LINE = re.compile(r"^\s*@@?GraphQL\.\w+\(.*\)\s*$")
_ATTRIBUTE_KEY = re.compile(r"([A-Za-z_]\w*)\s*:")


def parse_documentation_attributes(documentation: str | None, key: str, kind: str) -> dict[str, Any]:
    """Return the arguments of the first `GraphQL.<key>` attribute.

    Args:
        documentation: The raw documentation string
        key: Attribute name ("type", "field" or "omit")
        kind: "model" for `@@` attributes, "field" for `@` attributes

    Raises:
        SchemaInconsistencyError: If the attribute arguments cannot be parsed
    """
    if not documentation:
        return {}

    prefix = "@@" if kind == "model" else "@"
    pattern = re.compile(rf"(?<!@){re.escape(prefix)}GraphQL\.{re.escape(key)}\((.*?)\)", re.DOTALL)
    match = pattern.search(documentation)
    if not match:
        return {}

    body = match.group(1).strip()
    if not body:
        return {}

    try:
        parsed = json.loads("{" + _ATTRIBUTE_KEY.sub(r'"\1":', body) + "}")
    except json.JSONDecodeError as e:
        raise SchemaInconsistencyError(f"Invalid arguments in documentation attribute '{prefix}GraphQL.{key}': {body}") from e
    return parsed


def parse_input_omission(value: Any) -> bool | list[InputOmitSetting] | None:
    """Normalise the `input` argument of an omit attribute."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, list):
        try:
            return [InputOmitSetting(item) for item in value]
        except ValueError:
            allowed = ", ".join(setting.value for setting in InputOmitSetting)
            raise SchemaInconsistencyError(f"Invalid input omit setting in {value!r}. Allowed values: {allowed}") from None
    raise SchemaInconsistencyError(f"Invalid input omit value {value!r}")


def clean_docs(documentation: str | None) -> str | None:
    """Strip attribute lines from documentation, None when nothing is left."""
    if not documentation:
        return None
    lines = [line.strip() for line in documentation.splitlines() if not _ATTRIBUTE_LINE.match(line)]
    cleaned = "\n".join(line for line in lines if line)
    return cleaned or None
