"""
Selection of one input type variant among the candidates of an argument.

The raw document lists every accepted shape of an argument, for example
`String` and `StringFieldUpdateOperationsInput`. The generated API exposes a
single one, chosen with a fixed precedence:

1. object shaped candidates, without compound operation inputs when simple
   inputs are requested and without "Unchecked" variants unless relaxed
   scalar inputs are enabled
2. otherwise scalar candidates (except `Null`)
3. otherwise enum candidates
4. otherwise every candidate

Among the survivors a list candidate wins, then an "Unchecked" candidate
when relaxed scalar inputs are enabled, then the first one.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from ..errors import SchemaInconsistencyError
from .nodes import RawTypeRef

_COMPOUND_OPERATION_PATTERNS = (
    re.compile(r"OperationsInput"),
    re.compile(r"CreateEnvelopeInput"),
    re.compile(r".+Create.+Input"),
    re.compile(r".+Update.+Input"),
)

UNCHECKED_MARKER = "Unchecked"


def is_compound_operation_input(type_name: str) -> bool:
    """Whether an input type wraps operations (`set`, `increment`, nested writes)."""
    return any(pattern.search(type_name) for pattern in _COMPOUND_OPERATION_PATTERNS)


def is_unchecked_input(type_name: str) -> bool:
    return UNCHECKED_MARKER in type_name


def select_input_type_variant(
    candidates: Sequence[RawTypeRef],
    *,
    use_simple_inputs: bool = False,
    use_unchecked_scalar_inputs: bool = False,
) -> RawTypeRef:
    """Pick the input type variant exposed for an argument.

    Raises:
        SchemaInconsistencyError: If there is no candidate at all
    """
    if not candidates:
        raise SchemaInconsistencyError("Argument declares no input type")

    pool = [
        candidate
        for candidate in candidates
        if candidate.location == "inputObjectTypes"
        and not (use_simple_inputs and is_compound_operation_input(candidate.type))
        and (use_unchecked_scalar_inputs or not is_unchecked_input(candidate.type))
    ]
    if not pool:
        pool = [c for c in candidates if c.location == "scalar" and c.type != "Null"]
    if not pool:
        pool = [c for c in candidates if c.location == "enumTypes"]
    if not pool:
        pool = list(candidates)

    for candidate in pool:
        if candidate.is_list:
            return candidate
    if use_unchecked_scalar_inputs:
        for candidate in pool:
            if is_unchecked_input(candidate.type):
                return candidate
    return pool[0]
