"""Jinja2 rendering of resolved template bodies.

The pipeline only depends on the :class:`Renderer` protocol, so the
templating technology can be swapped without touching the resolver or the
generator.  :class:`JinjaRenderer` is the shipped implementation.
"""

from __future__ import annotations

from typing import Any, Protocol

from jinja2 import ChainableUndefined, TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment

from uigen.errors import RenderError
from uigen.models import TemplateSource
from uigen.utils import to_camel_case, to_kebab_case, to_pascal_case, to_snake_case


class Renderer(Protocol):
    """Capability interface for turning a template body into source text."""

    def render(self, source: TemplateSource, context: dict[str, Any]) -> str:
        ...


class JinjaRenderer:
    """Renders template bodies with a sandboxed Jinja2 environment.

    Missing variables (and attributes of missing variables) render as empty
    strings instead of raising, since templates legitimately reference
    optional request fields.  Rendering is a pure function of the template
    body and the context.
    """

    def __init__(self) -> None:
        self.env = SandboxedEnvironment(
            undefined=ChainableUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = to_pascal_case
        self.env.filters["camel_case"] = to_camel_case
        self.env.filters["kebab_case"] = to_kebab_case
        self.env.filters["snake_case"] = to_snake_case

    def render(self, source: TemplateSource, context: dict[str, Any]) -> str:
        """Compile *source* and bind *context* into it.

        Raises:
            RenderError: ``phase="compile"`` for syntax errors, ``phase="bind"``
                for any failure while evaluating the template.
        """
        try:
            template = self.env.from_string(source.body)
        except TemplateSyntaxError as exc:
            raise RenderError(
                source.path,
                RenderError.COMPILE_FAILED,
                f"line {exc.lineno}: {exc.message}",
                component=source.component,
                platform=source.platform.value,
            ) from exc

        try:
            return template.render(**context)
        except Exception as exc:
            raise RenderError(
                source.path,
                RenderError.BIND_FAILED,
                str(exc) or type(exc).__name__,
                component=source.component,
                platform=source.platform.value,
            ) from exc

