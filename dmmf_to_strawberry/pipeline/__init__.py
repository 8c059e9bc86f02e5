"""
DMMF to strawberry generation pipeline.

1. Phase 1 (Parser): Parse the raw DMMF document into raw nodes
2. Phase 2 (Semantic model): Resolve display names, aliases, omissions and
   input variants into `DmmfDocument`
3. Phase 3 (Blocks): Emit one source unit per enum, model, input, output and
   resolver, plus package barrels
4. Phase 4 (Auxiliary): Emit the enhancement map, custom scalars, resolver
   helpers and the index
5. Phase 5 (Persist): Write every unit atomically, optionally byte-compiled
6. Phase 6 (Formatter): Optional post-processing (ruff, black or a compile check)
"""

from __future__ import annotations

from .config import EmitBlockKind, FormatterConfig, FormatterKind, GeneratorConfig, InputOmitSetting
from .dmmf import DmmfDocument
from .errors import ConfigurationError, FormatterError, GeneratedCodeError, GeneratorError, SchemaInconsistencyError
from .generator import CodeGenerator, PipelineState, generate_code
from .metrics import MetricData, MetricsListener, SimpleMetricsCollector

__all__ = [
    "CodeGenerator",
    "ConfigurationError",
    "DmmfDocument",
    "EmitBlockKind",
    "FormatterConfig",
    "FormatterError",
    "FormatterKind",
    "GeneratedCodeError",
    "GeneratorConfig",
    "GeneratorError",
    "InputOmitSetting",
    "MetricData",
    "MetricsListener",
    "PipelineState",
    "SchemaInconsistencyError",
    "SimpleMetricsCollector",
    "generate_code",
]
