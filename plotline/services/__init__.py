"""Service layer for plot structure templates, instances and sections."""

from __future__ import annotations

from .errors import (  # noqa: F401
    InvalidInputError,
    InvalidTemplateError,
    NotFoundError,
    PlotlineError,
)
from .materializer import instantiate  # noqa: F401
from .plot_structures import (  # noqa: F401
    delete_plot_structure,
    get_plot_structure,
    list_plot_structures,
    update_plot_structure,
)
from .section_content import get_section, list_sections, update_section  # noqa: F401
from .template_catalog import (  # noqa: F401
    SectionDefinition,
    create_template,
    get_template,
    list_templates,
    parse_section_definitions,
    seed_builtin_templates,
)

__all__ = [
    "InvalidInputError",
    "InvalidTemplateError",
    "NotFoundError",
    "PlotlineError",
    "SectionDefinition",
    "create_template",
    "delete_plot_structure",
    "get_plot_structure",
    "get_section",
    "get_template",
    "instantiate",
    "list_plot_structures",
    "list_sections",
    "list_templates",
    "parse_section_definitions",
    "seed_builtin_templates",
    "update_plot_structure",
    "update_section",
]
