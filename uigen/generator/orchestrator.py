"""Generation orchestrator.

Drives one ``(request, platform)`` pair through the pipeline::

    validated -> resolved -> rendered -> packaged -> done

and fans the same pipeline out over every platform a component supports.
Any stage can short-circuit with an error carrying the component, the
platform and the failing :class:`~uigen.errors.Stage`.

All template files are read during the resolve stage.  The render and
package stages contain no await points, so once a platform has started
rendering it always finishes, even if the surrounding fan-out is cancelled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import pydantic

from uigen.config import Config
from uigen.errors import (
    FieldError,
    GenerationError,
    RenderError,
    Stage,
    UIGenError,
    ValidationError,
)
from uigen.generator.dependencies import infer_dependencies
from uigen.generator.localization import extract_localization_keys
from uigen.generator.manifest import build_manifest
from uigen.models import (
    GenerationOptions,
    GenerationRequest,
    GenerationResult,
    MultiPlatformResult,
    Platform,
    PlatformDescriptor,
    PlatformFailure,
    TemplateMapping,
    TemplateSource,
)
from uigen.registry import PlatformRegistry
from uigen.templating import JinjaRenderer, Renderer, TemplateResolver, build_render_context
from uigen.utils import normalize_component_name

logger = logging.getLogger(__name__)

TYPES_TEMPLATE = "types.ts.j2"
TEST_TEMPLATE = "test.ts.j2"
STORY_TEMPLATE = "story.ts.j2"


class ComponentGenerator:
    """Single- and multi-platform component generation.

    Args:
        registry: The platform registry; the only source of platform
            knowledge the generator consults.
        resolver: Template resolver.  Built from *registry* when omitted.
        renderer: Any :class:`~uigen.templating.Renderer`.  Defaults to
            :class:`~uigen.templating.JinjaRenderer`.
        config: Concurrency limit, read timeout and default options.
    """

    def __init__(
        self,
        registry: PlatformRegistry,
        resolver: Optional[TemplateResolver] = None,
        renderer: Optional[Renderer] = None,
        config: Optional[Config] = None,
    ) -> None:
        self.config = config or Config()
        self.registry = registry
        self.resolver = resolver or TemplateResolver(registry, read_timeout=self.config.read_timeout)
        self.renderer = renderer or JinjaRenderer()

    # -- Public API --------------------------------------------------------

    async def generate_component(
        self,
        request: GenerationRequest,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Generate *request* for the platform it names.

        Raises:
            ValidationError: If the request has no platform.
            NotFoundError: Unknown component or unsupported platform, or no
                template body even after the fallback hop.
            TemplateTimeoutError: A template read exceeded the timeout.
            RenderError: A template failed to compile or bind.
            GenerationError: Anything else, tagged with the failing stage.
        """
        if request.platform is None:
            raise ValidationError(
                [FieldError("platform", "is required for single-platform generation")]
            )
        return await self._run_pipeline(request, request.platform, options or self.config.options)

    def generate_component_sync(
        self,
        request: GenerationRequest,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Blocking wrapper around :meth:`generate_component`."""
        return asyncio.run(self.generate_component(request, options))

    async def generate_all_platforms(
        self,
        request: GenerationRequest,
        options: Optional[GenerationOptions] = None,
        max_concurrency: Optional[int] = None,
    ) -> MultiPlatformResult:
        """Generate *request* for every platform its mapping declares.

        Platforms run independently, at most *max_concurrency* at a time.
        A failing platform is recorded in ``errors`` and never aborts the
        others.  ``request.platform`` is ignored.

        Raises:
            NotFoundError: If the component itself is not registered, since
                there is then no platform set to iterate.
            ValidationError: If *max_concurrency* is below 1.
        """
        component = normalize_component_name(request.name)
        platforms = self.registry.supported_platforms(component)
        limit = self.config.max_concurrency if max_concurrency is None else max_concurrency
        if limit < 1:
            raise ValidationError([FieldError("max_concurrency", "must be at least 1")])
        options = options or self.config.options
        semaphore = asyncio.Semaphore(limit)

        async def _generate_with_semaphore(platform: Platform) -> GenerationResult:
            async with semaphore:
                return await self._run_pipeline(request, platform, options)

        tasks = [_generate_with_semaphore(p) for p in platforms]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        multi = MultiPlatformResult(component=component)
        for platform, outcome in zip(platforms, outcomes):
            if isinstance(outcome, GenerationResult):
                multi.results[platform] = outcome
            else:
                failure = _to_failure(platform, component, outcome)
                logger.warning(
                    "Generation of %s failed for %s at %s: %s",
                    component,
                    platform.value,
                    failure.stage.value,
                    failure.message,
                )
                multi.errors[platform] = failure

        logger.debug(
            "Generated %s for %d/%d platforms",
            component,
            len(multi.results),
            len(platforms),
        )
        return multi

    # -- Pipeline ----------------------------------------------------------

    async def _run_pipeline(
        self,
        request: GenerationRequest,
        platform: Platform,
        options: GenerationOptions,
    ) -> GenerationResult:
        request = request.for_platform(platform)
        component = normalize_component_name(request.name)
        descriptor = self.registry.describe(platform)
        mapping = self.registry.mapping(component)
        logger.debug("Generating %s for %s", component, platform.value)

        # 1. Resolve every template body this run needs.
        try:
            source = await self.resolver.aresolve(component, platform)
            shared = await self._resolve_shared(component, platform, options)
        except UIGenError:
            raise
        except OSError as exc:
            raise GenerationError(
                Stage.RESOLVE,
                f"cannot read template: {exc}",
                component=component,
                platform=platform.value,
            ) from exc

        # 2. Render.  No await points from here on.
        context = build_render_context(request, descriptor, options)
        component_code = self._render(source, context)
        rendered = {name: self._render(src, context) for name, src in shared.items()}

        # 3. Package.
        localization_keys = extract_localization_keys(component_code)
        enabled = [flag for flag, on in context["features"].items() if on]
        dependencies = infer_dependencies(descriptor, enabled)
        files = build_manifest(
            request,
            descriptor,
            options,
            component_code=component_code,
            types_code=rendered.get(TYPES_TEMPLATE, ""),
            localization_keys=localization_keys,
            test_code=rendered.get(TEST_TEMPLATE, ""),
            story_code=rendered.get(STORY_TEMPLATE, ""),
        )
        try:
            result = GenerationResult(
                platform=platform,
                component=component,
                architecture=descriptor.architecture,
                component_code=component_code,
                types_code=rendered.get(TYPES_TEMPLATE, ""),
                localization_keys=localization_keys,
                dependencies=dependencies,
                files=files,
                fallback=source.fallback,
                template_path=source.path,
                warnings=self._warnings(request, descriptor, mapping, source),
            )
        except pydantic.ValidationError as exc:
            raise GenerationError(
                Stage.PACKAGE,
                f"incomplete result: {exc.error_count()} problem(s)",
                component=component,
                platform=platform.value,
            ) from exc

        logger.debug(
            "Generated %s for %s (%d files%s)",
            component,
            platform.value,
            len(result.files),
            ", fallback" if result.fallback else "",
        )
        return result

    def _render(self, source: TemplateSource, context: dict[str, Any]) -> str:
        """Render *source*, attributing any renderer failure to the render stage."""
        try:
            return self.renderer.render(source, context)
        except UIGenError:
            raise
        except Exception as exc:
            raise RenderError(
                source.path,
                RenderError.BIND_FAILED,
                str(exc) or type(exc).__name__,
                component=source.component,
                platform=source.platform.value,
            ) from exc

    async def _resolve_shared(
        self,
        component: str,
        platform: Platform,
        options: GenerationOptions,
    ) -> dict[str, TemplateSource]:
        wanted = []
        if options.include_types:
            wanted.append(TYPES_TEMPLATE)
        if options.include_tests:
            wanted.append(TEST_TEMPLATE)
        if options.include_stories:
            wanted.append(STORY_TEMPLATE)
        return {
            name: await self.resolver.aresolve_shared(name, component, platform)
            for name in wanted
        }

    def _warnings(
        self,
        request: GenerationRequest,
        descriptor: PlatformDescriptor,
        mapping: TemplateMapping,
        source: TemplateSource,
    ) -> list[str]:
        warnings: list[str] = []
        if source.fallback:
            warnings.append(
                f"No {descriptor.id.value} template for {source.component}; "
                f"rendered from the {source.source_platform.value} template"
            )
        for flag in self.registry.check_feature_support(descriptor.id, request.features):
            warnings.append(
                f"Feature '{flag}' is not supported on {descriptor.id.value} and was ignored"
            )
        if request.category != mapping.category:
            warnings.append(
                f"Requested category '{request.category.value}' differs from the "
                f"registered category '{mapping.category.value}'"
            )
        return warnings


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


def _to_failure(platform: Platform, component: str, exc: BaseException) -> PlatformFailure:
    """Convert an exception from one platform's pipeline into a record."""
    if isinstance(exc, asyncio.CancelledError):
        stage, message = Stage.RESOLVE, "cancelled"
    elif isinstance(exc, UIGenError):
        stage, message = exc.stage, exc.message
    else:
        stage, message = Stage.PACKAGE, f"Unhandled exception: {exc}"
    return PlatformFailure(
        platform=platform,
        component=component,
        stage=stage,
        error_type=type(exc).__name__,
        message=message,
    )
