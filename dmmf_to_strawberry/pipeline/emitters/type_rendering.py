"""
Rendering of type references as annotations of the generated code.

Object types (models, inputs and outputs) are referenced lazily through
`strawberry.lazy` so that mutually recursive types never import each other
at module load time. Enums, custom scalars and helpers have no back
references and are imported eagerly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..dmmf.types import TypeInfo, TypeLocation
from ..source import SourceFile
from .layout import SCALARS_MODULE, ModuleParts, enum_module, input_module, lazy_module_path, model_module, output_module, relative_level

if TYPE_CHECKING:
    from ..dmmf.document import DmmfDocument

# Scalar -> (annotation, (module, name) to import or None)
SCALAR_TYPE_MAP: dict[str, tuple[str, tuple[str, str | None] | None]] = {
    "String": ("str", None),
    "Int": ("int", None),
    "Float": ("float", None),
    "Boolean": ("bool", None),
    "DateTime": ("datetime.datetime", ("datetime", None)),
    "Decimal": ("Decimal", ("decimal", "Decimal")),
    "Json": ("JSON", ("strawberry.scalars", "JSON")),
}

# Scalars declared by the generated scalars module
CUSTOM_SCALARS = ("BigInt", "Bytes")


class TypeRenderer:
    """Renders annotations for one source unit and registers its imports."""

    def __init__(self, document: DmmfDocument, source_file: SourceFile, module_parts: ModuleParts):
        self.document = document
        self.source_file = source_file
        self.module_parts = module_parts

    @property
    def level(self) -> int:
        return relative_level(self.module_parts)

    def render(self, type_info: TypeInfo, *, is_required: bool, is_id: bool = False) -> str:
        """Annotation of a (possibly list, possibly nullable) type reference."""
        annotation = self.render_base(type_info, is_id=is_id)
        if type_info.is_list:
            annotation = f"list[{annotation}]"
        if not is_required:
            annotation = f"{annotation} | None"
        return annotation

    def render_base(self, type_info: TypeInfo, *, is_id: bool = False) -> str:
        location = type_info.location
        if location is TypeLocation.SCALAR:
            return self.render_scalar(type_info.type, is_id=is_id)
        if location is TypeLocation.ENUM_TYPES:
            return self.import_eager(enum_module(type_info.type), type_info.type)
        if location is TypeLocation.INPUT_OBJECT_TYPES:
            return self.reference(input_module(type_info.type), type_info.type)
        if location is TypeLocation.OUTPUT_OBJECT_TYPES:
            if self.document.is_model_type_name(type_info.type):
                return self.reference(model_module(type_info.type), type_info.type)
            return self.reference(output_module(type_info.type), type_info.type)
        return self.render_json()

    def render_scalar(self, scalar: str, *, is_id: bool = False) -> str:
        if is_id and self.document.config.emit_id_as_id_type:
            self.source_file.add_import("strawberry")
            return "strawberry.ID"
        if scalar in CUSTOM_SCALARS:
            return self.import_eager(SCALARS_MODULE, scalar)
        if scalar not in SCALAR_TYPE_MAP:
            return self.render_json()

        annotation, import_from = SCALAR_TYPE_MAP[scalar]
        if import_from is not None:
            module, name = import_from
            self.source_file.add_import(module, name)
        return annotation

    def render_json(self) -> str:
        self.source_file.add_import("strawberry.scalars", "JSON")
        return "JSON"

    def import_eager(self, target: ModuleParts, name: str) -> str:
        if target != self.module_parts:
            self.source_file.add_import(".".join(target), name, level=self.level)
        return name

    def reference(self, target: ModuleParts, name: str) -> str:
        """Lazy reference to an object type declared in `target` (possibly this unit)."""
        self.source_file.add_import("strawberry")
        self.source_file.add_import("typing", "Annotated")
        if target != self.module_parts:
            self.source_file.add_import(".".join(target), name, level=self.level, type_only=True)
        return f'Annotated["{name}", strawberry.lazy("{lazy_module_path(self.module_parts, target)}")]'
