"""Template resolution and rendering.

Quick usage::

    from uigen.templating import JinjaRenderer, TemplateResolver, build_render_context

    resolver = TemplateResolver(registry)
    source = resolver.resolve("navbar", "vue")
    context = build_render_context(request, registry.describe("vue"))
    code = JinjaRenderer().render(source, context)
"""

from uigen.templating.context import build_render_context, merge_features
from uigen.templating.renderer import JinjaRenderer, Renderer
from uigen.templating.resolver import SHARED_DIR, TemplateResolver

__all__ = [
    "JinjaRenderer",
    "Renderer",
    "SHARED_DIR",
    "TemplateResolver",
    "build_render_context",
    "merge_features",
]
