"""Project Updater scaffolder -- renders the content of generated files.

Quick usage::

    from project_updater.scaffolder import component_generator

    generate = component_generator("AIGeneratedComponent")
    content = generate()
"""

from project_updater.scaffolder.templates import (
    COMPONENT_TEMPLATE,
    TemplateRenderer,
    component_generator,
)

__all__ = [
    "COMPONENT_TEMPLATE",
    "TemplateRenderer",
    "component_generator",
]
