"""Jinja2 template rendering for generated project files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``project_updater/scaffolder/templates/`` directory and renders them with a
context dictionary.  :func:`component_generator` packages a render call as a
deferred, zero-argument content generator for a file directive.
"""

from __future__ import annotations

import re
from functools import partial
from pathlib import Path
from typing import Any, Callable

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

COMPONENT_TEMPLATE = "react_component.jsx.j2"


class TemplateRenderer:
    """Renders Jinja2 templates for generated files.

    Templates are ``.j2`` files under a configurable template directory.
    Missing context variables raise instead of rendering as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["pascal_case"] = _pascal_case_filter
        self.env.filters["kebab_case"] = _kebab_case_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"react_component.jsx.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


def component_generator(
    component_name: str,
    renderer: TemplateRenderer | None = None,
    title: str | None = None,
) -> Callable[[], str]:
    """Return a zero-argument callable that renders the sample component.

    Rendering is deferred until the callable is invoked, so building a plan
    never touches the filesystem.
    """
    context = {
        "component_name": _pascal_case_filter(component_name),
        "title": title or "AI-Powered Component",
    }
    return partial((renderer or TemplateRenderer()).render, COMPONENT_TEMPLATE, context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Words already in mixed case keep their inner capitals
    (``AIGeneratedComponent`` stays as is).
    """
    parts = re.split(r"[-_\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def _kebab_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some_thing`` to ``some-thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1-\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", s1)
    return re.sub(r"[_\s]+", "-", s2).lower()
