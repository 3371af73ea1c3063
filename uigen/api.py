"""Function-call facade over the generation pipeline.

:class:`UIGen` wires a registry, resolver, renderer and generator together
from a :class:`~uigen.config.Config` and exposes the operations a CLI or a
request/response server needs.  Every method accepts either a raw mapping
(validated here) or an already-built :class:`GenerationRequest`.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from uigen.config import Config
from uigen.errors import FieldError
from uigen.generator import ComponentGenerator, summarize
from uigen.models import (
    GenerationOptions,
    GenerationRequest,
    GenerationResult,
    GenerationSummary,
    MultiPlatformResult,
    Platform,
    PlatformDescriptor,
)
from uigen.registry import PlatformRegistry, build_default_registry
from uigen.templating import Renderer, TemplateResolver
from uigen.validator import check, validate

RequestLike = Union[GenerationRequest, dict[str, Any]]


class UIGen:
    """Entry point for component generation.

    Args:
        config: Global configuration.  Defaults to :meth:`Config.from_env`.
        registry: Registry override, mainly for tests.  Defaults to the
            shipped registry rooted at ``config.template_dir``.
        renderer: Renderer override.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        registry: Optional[PlatformRegistry] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.config = config or Config.from_env()
        self.registry = registry or build_default_registry(self.config.template_dir)
        self.resolver = TemplateResolver(self.registry, read_timeout=self.config.read_timeout)
        self.generator = ComponentGenerator(
            self.registry,
            resolver=self.resolver,
            renderer=renderer,
            config=self.config,
        )

    # -- Generation --------------------------------------------------------

    async def generate_component(
        self,
        config: RequestLike,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        return await self.generator.generate_component(validate(config), options)

    async def generate_all_platforms(
        self,
        config: RequestLike,
        options: Optional[GenerationOptions] = None,
        max_concurrency: Optional[int] = None,
    ) -> MultiPlatformResult:
        return await self.generator.generate_all_platforms(
            validate(config), options, max_concurrency
        )

    # -- Discovery ---------------------------------------------------------

    def list_components(self, platform: Platform | str) -> list[str]:
        return self.registry.list_components(platform)

    def describe_platform(self, platform: Platform | str) -> PlatformDescriptor:
        return self.registry.describe(platform)

    def get_template_config(self, component: str) -> GenerationRequest:
        return self.registry.template_config(component)

    def validate_config(self, raw: Any) -> list[FieldError]:
        return check(raw)

    @staticmethod
    def summarize(multi: MultiPlatformResult) -> GenerationSummary:
        return summarize(multi)
