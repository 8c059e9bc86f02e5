"""
Jinja2 environment of the fixed support modules.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import jinja2

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates"


@lru_cache(maxsize=None)
def get_template_environment() -> jinja2.Environment:
    """Set up Jinja2 templates."""
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=True,
    )


def render_template(name: str, **context) -> str:
    return get_template_environment().get_template(name).render(**context)
