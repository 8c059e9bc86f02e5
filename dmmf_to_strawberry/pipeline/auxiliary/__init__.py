"""
Schema independent support modules of the output tree.
"""

from __future__ import annotations

from .files import generate_custom_scalars, generate_enhance_map, generate_helpers_file
from .templates import get_template_environment, render_template

__all__ = [
    "generate_custom_scalars",
    "generate_enhance_map",
    "generate_helpers_file",
    "get_template_environment",
    "render_template",
]
