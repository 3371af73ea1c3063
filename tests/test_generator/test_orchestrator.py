"""Unit tests for uigen.generator.ComponentGenerator.

Tests cover:
- Single-platform generation of authored and fallback templates
- Error identity for unknown components, unsupported platforms, missing
  and broken templates
- Warnings for fallbacks, unsupported features and category mismatches
- Optional artefacts in the manifest
- Multi-platform fan-out: failure isolation, concurrency bound, stage
  attribution and determinism
"""

from __future__ import annotations

import asyncio
import json
import time
from unittest.mock import patch

import pytest

from uigen.errors import (
    GenerationError,
    NotFoundError,
    RenderError,
    Stage,
    TemplateTimeoutError,
    ValidationError,
)
from uigen.generator import ComponentGenerator
from uigen.generator.orchestrator import _to_failure
from uigen.models import (
    Category,
    FileType,
    GenerationOptions,
    GenerationRequest,
    Platform,
)
from uigen.templating import JinjaRenderer, TemplateResolver
from uigen.templating.resolver import _read_if_exists

pytestmark = pytest.mark.unit

ALL_OPTIONS = GenerationOptions(include_tests=True, include_stories=True, include_locales=True)


def _request(name: str = "Widget", platform: Platform | None = Platform.REACT, **overrides) -> GenerationRequest:
    payload = {"name": name, "category": "components", "platform": platform}
    payload.update(overrides)
    return GenerationRequest.model_validate(payload)


class _CountingResolver(TemplateResolver):
    """Resolver that records how many resolutions overlap."""

    def __init__(self, registry):
        super().__init__(registry)
        self.active = 0
        self.peak = 0

    async def aresolve(self, component, platform):
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(0.01)
            return await super().aresolve(component, platform)
        finally:
            self.active -= 1


class _ExplodingRenderer(JinjaRenderer):
    """Renderer that fails with a non-uigen exception on Svelte."""

    def render(self, source, context):
        if source.platform is Platform.SVELTE:
            raise RuntimeError("kaboom")
        return super().render(source, context)


class _StallingResolver(TemplateResolver):
    """Resolver whose reads for one platform never complete."""

    def __init__(self, registry, stalled: Platform):
        super().__init__(registry)
        self.stalled = stalled
        self.cancelled: list[Platform] = []

    async def aresolve(self, component, platform):
        if platform is self.stalled:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled.append(platform)
                raise
        return await super().aresolve(component, platform)


class _RecordingRenderer(JinjaRenderer):
    """Renderer that remembers which platforms it rendered for."""

    def __init__(self):
        super().__init__()
        self.platforms: set[Platform] = set()

    def render(self, source, context):
        output = super().render(source, context)
        self.platforms.add(source.platform)
        return output


def _slow_for(platform: Platform, delay: float):
    def _read(path):
        if platform.value in path.parts:
            time.sleep(delay)
        return _read_if_exists(path)

    return _read


# ---------------------------------------------------------------------------
# Single platform
# ---------------------------------------------------------------------------


class TestGenerateComponent:
    @pytest.mark.asyncio
    async def test_authored_template(self, generator):
        result = await generator.generate_component(_request())

        assert result.platform is Platform.REACT
        assert result.component == "widget"
        assert result.architecture == "semantic-cva"
        assert result.fallback is False
        assert "export const Widget" in result.component_code
        assert result.localization_keys == {"widget.title": "Title"}
        assert result.types_code == "export interface WidgetProps {}\n"
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_default_files(self, generator):
        result = await generator.generate_component(_request())
        assert [(f.path, f.type) for f in result.files] == [
            ("components/components/Widget.tsx", FileType.COMPONENT),
            ("types/widget.types.ts", FileType.TYPES),
        ]
        assert result.files[0].content == result.component_code

    @pytest.mark.asyncio
    async def test_dependencies_sorted_and_unique(self, generator):
        result = await generator.generate_component(_request())
        assert result.dependencies == [
            "@xala-technologies/ui-system",
            "class-variance-authority",
            "lucide-react",
            "react",
            "react-i18next",
        ]

    @pytest.mark.asyncio
    async def test_fallback_keeps_requested_platform(self, generator, template_dir):
        result = await generator.generate_component(_request("UserCard", Platform.VUE))

        assert result.platform is Platform.VUE
        assert result.fallback is True
        assert result.template_path == str(template_dir / "react" / "components" / "user-card.j2")
        assert result.files[0].path == "components/components/UserCard.vue"
        # The canonical body is rendered with the requested platform's context.
        assert "platform=vue" in result.component_code
        assert "vue" in result.dependencies
        assert any("No vue template for user-card" in w for w in result.warnings)

    @pytest.mark.asyncio
    async def test_requires_platform(self, generator):
        with pytest.raises(ValidationError) as exc_info:
            await generator.generate_component(_request(platform=None))
        assert exc_info.value.errors[0].field == "platform"

    @pytest.mark.asyncio
    async def test_unknown_component(self, generator):
        with pytest.raises(NotFoundError) as exc_info:
            await generator.generate_component(_request("HoloDeck"))
        assert exc_info.value.reason == NotFoundError.REASON_NO_MAPPING
        assert exc_info.value.component == "holo-deck"

    @pytest.mark.asyncio
    async def test_unsupported_platform(self, generator):
        with pytest.raises(NotFoundError) as exc_info:
            await generator.generate_component(_request("react-only", Platform.VUE))
        assert exc_info.value.reason == NotFoundError.REASON_UNSUPPORTED

    @pytest.mark.asyncio
    async def test_missing_template(self, generator):
        with pytest.raises(NotFoundError) as exc_info:
            await generator.generate_component(_request("Ghost", Platform.VUE))
        assert exc_info.value.reason == NotFoundError.REASON_MISSING_FILE
        assert exc_info.value.platform == "vue"

    @pytest.mark.asyncio
    async def test_broken_template(self, generator):
        with pytest.raises(RenderError) as exc_info:
            await generator.generate_component(_request("Broken", Platform.VUE))
        exc = exc_info.value
        assert exc.phase == RenderError.COMPILE_FAILED
        assert exc.component == "broken"
        assert exc.platform == "vue"

    @pytest.mark.asyncio
    async def test_unreadable_template(self, generator):
        with patch("uigen.templating.resolver._read_if_exists", side_effect=PermissionError("denied")):
            with pytest.raises(GenerationError) as exc_info:
                await generator.generate_component(_request())
        assert exc_info.value.stage is Stage.RESOLVE
        assert "denied" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_undecodable_template(self, generator, template_dir):
        (template_dir / "vue" / "components" / "widget.j2").write_bytes(b"\xff\xfe bad")

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate_component(_request(platform=Platform.VUE))
        exc = exc_info.value
        assert exc.stage is Stage.RESOLVE
        assert exc.component == "widget"
        assert exc.platform == "vue"
        assert "not valid UTF-8" in str(exc)

    @pytest.mark.asyncio
    async def test_renderer_exception_carries_identity(self, registry, config):
        generator = ComponentGenerator(registry, renderer=_ExplodingRenderer(), config=config)
        with pytest.raises(RenderError) as exc_info:
            await generator.generate_component(_request(platform=Platform.SVELTE))
        exc = exc_info.value
        assert exc.stage is Stage.RENDER
        assert exc.phase == RenderError.BIND_FAILED
        assert exc.component == "widget"
        assert exc.platform == "svelte"
        assert isinstance(exc.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_unsupported_feature_warns(self, generator):
        result = await generator.generate_component(
            _request(platform=Platform.REACT_NATIVE, features={"tooltips": True})
        )
        assert "Feature 'tooltips' is not supported on react-native and was ignored" in result.warnings
        assert "tooltips" not in result.component_code

    @pytest.mark.asyncio
    async def test_category_mismatch_warns(self, generator):
        result = await generator.generate_component(_request("react-only"))
        assert any("registered category 'patterns'" in w for w in result.warnings)

    @pytest.mark.asyncio
    async def test_all_artefacts(self, generator):
        result = await generator.generate_component(_request(), ALL_OPTIONS)

        types = [f.type for f in result.files]
        assert types.count(FileType.LOCALE) == 4
        assert FileType.TEST in types and FileType.STORY in types
        paths = {f.path for f in result.files}
        assert "components/components/__tests__/Widget.test.ts" in paths
        assert "stories/Widget.stories.ts" in paths
        assert "locales/ar/widget.json" in paths
        locale = next(f for f in result.files if f.path == "locales/en/widget.json")
        assert json.loads(locale.content) == {"widget": {"title": "Title"}}

    @pytest.mark.asyncio
    async def test_options_default_from_config(self, registry, config):
        config = config.model_copy(update={"options": GenerationOptions(include_types=False)})
        generator = ComponentGenerator(registry, config=config)
        result = await generator.generate_component(_request())
        assert [f.type for f in result.files] == [FileType.COMPONENT]
        assert result.types_code == ""

    @pytest.mark.asyncio
    async def test_deterministic(self, generator):
        first = await generator.generate_component(_request(), ALL_OPTIONS)
        second = await generator.generate_component(_request(), ALL_OPTIONS)
        assert first.model_dump() == second.model_dump()

    def test_sync_wrapper(self, generator):
        result = generator.generate_component_sync(_request("UserCard", Platform.SVELTE))
        assert result.fallback is True
        assert result.files[0].path.endswith("UserCard.svelte")


# ---------------------------------------------------------------------------
# All platforms
# ---------------------------------------------------------------------------


class TestGenerateAllPlatforms:
    @pytest.mark.asyncio
    async def test_every_supported_platform(self, generator):
        multi = await generator.generate_all_platforms(_request(platform=None))

        assert multi.component == "widget"
        assert list(multi.results) == list(Platform)
        assert multi.errors == {}
        fallbacks = {p for p, r in multi.results.items() if r.fallback}
        assert fallbacks == set(Platform) - {Platform.REACT, Platform.VUE}

    @pytest.mark.asyncio
    async def test_request_platform_ignored(self, generator):
        multi = await generator.generate_all_platforms(_request(platform=Platform.ANGULAR))
        assert len(multi.results) == len(Platform)
        assert multi.results[Platform.VUE].platform is Platform.VUE

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, generator, caplog):
        with caplog.at_level("WARNING", logger="uigen"):
            multi = await generator.generate_all_platforms(_request("Broken", platform=None))

        assert list(multi.results) == [Platform.REACT, Platform.SVELTE]
        assert multi.results[Platform.SVELTE].fallback is True
        failure = multi.errors[Platform.VUE]
        assert failure.stage is Stage.RENDER
        assert failure.error_type == "RenderError"
        assert failure.component == "broken"
        assert multi.is_partial_failure
        assert "Generation of broken failed for vue at render" in caplog.text

    @pytest.mark.asyncio
    async def test_all_failed(self, generator):
        multi = await generator.generate_all_platforms(_request("Ghost", platform=None))
        assert multi.all_failed
        assert set(multi.errors) == {Platform.REACT, Platform.VUE}
        assert all(f.stage is Stage.RESOLVE for f in multi.errors.values())
        assert all(f.error_type == "NotFoundError" for f in multi.errors.values())

    @pytest.mark.asyncio
    async def test_unknown_component_raises(self, generator):
        with pytest.raises(NotFoundError):
            await generator.generate_all_platforms(_request("HoloDeck", platform=None))

    @pytest.mark.asyncio
    async def test_renderer_exception_recorded_as_render_failure(self, registry, config):
        generator = ComponentGenerator(registry, renderer=_ExplodingRenderer(), config=config)
        multi = await generator.generate_all_platforms(_request(platform=None))

        failure = multi.errors[Platform.SVELTE]
        assert failure.stage is Stage.RENDER
        assert failure.error_type == "RenderError"
        assert failure.message.endswith("failed to bind: kaboom")
        assert len(multi.results) == len(Platform) - 1

    @pytest.mark.asyncio
    async def test_undecodable_template_is_isolated(self, generator, template_dir):
        (template_dir / "vue" / "components" / "widget.j2").write_bytes(b"\xff\xfe bad")

        multi = await generator.generate_all_platforms(_request(platform=None))

        assert list(multi.errors) == [Platform.VUE]
        failure = multi.errors[Platform.VUE]
        assert failure.stage is Stage.RESOLVE
        assert failure.error_type == "GenerationError"
        assert len(multi.results) == len(Platform) - 1

    @pytest.mark.asyncio
    async def test_slow_read_fails_only_that_platform(self, registry, config):
        config = config.model_copy(update={"read_timeout": 0.05})
        generator = ComponentGenerator(registry, config=config)

        with patch("uigen.templating.resolver._read_if_exists", side_effect=_slow_for(Platform.VUE, 0.3)):
            multi = await generator.generate_all_platforms(_request(platform=None))

        assert list(multi.errors) == [Platform.VUE]
        failure = multi.errors[Platform.VUE]
        assert failure.stage is Stage.RESOLVE
        assert failure.error_type == TemplateTimeoutError.__name__
        assert "timed out after 0.05s" in failure.message
        assert len(multi.results) == len(Platform) - 1

    @pytest.mark.asyncio
    async def test_cancel_stops_pending_platforms(self, registry, config):
        resolver = _StallingResolver(registry, stalled=Platform.VUE)
        renderer = _RecordingRenderer()
        generator = ComponentGenerator(registry, resolver=resolver, renderer=renderer, config=config)
        others = set(Platform) - {Platform.VUE}

        task = asyncio.create_task(
            generator.generate_all_platforms(_request(platform=None), max_concurrency=len(Platform))
        )
        for _ in range(200):
            if renderer.platforms == others:
                break
            await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        # Every platform that reached rendering finished; the stalled one was cancelled.
        assert renderer.platforms == others
        assert resolver.cancelled == [Platform.VUE]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [0, -1])
    async def test_rejects_concurrency_below_one(self, generator, limit):
        with pytest.raises(ValidationError) as exc_info:
            await generator.generate_all_platforms(_request(platform=None), max_concurrency=limit)
        assert exc_info.value.errors[0].field == "max_concurrency"

    @pytest.mark.asyncio
    async def test_concurrency_bound(self, registry, config):
        resolver = _CountingResolver(registry)
        generator = ComponentGenerator(registry, resolver=resolver, config=config)

        await generator.generate_all_platforms(_request(platform=None), max_concurrency=2)
        assert resolver.peak == 2

        resolver.peak = 0
        await generator.generate_all_platforms(_request(platform=None), max_concurrency=1)
        assert resolver.peak == 1

    @pytest.mark.asyncio
    async def test_deterministic_across_runs(self, generator):
        first = await generator.generate_all_platforms(_request(platform=None), ALL_OPTIONS)
        second = await generator.generate_all_platforms(_request(platform=None), ALL_OPTIONS)
        assert first.model_dump() == second.model_dump()


class TestToFailure:
    def test_cancellation_is_a_resolve_failure(self):
        failure = _to_failure(Platform.VUE, "widget", asyncio.CancelledError())
        assert failure.stage is Stage.RESOLVE
        assert failure.message == "cancelled"
        assert failure.error_type == "CancelledError"

    def test_uigen_error_keeps_stage(self):
        exc = GenerationError(Stage.PACKAGE, "incomplete result")
        failure = _to_failure(Platform.REACT, "widget", exc)
        assert failure.stage is Stage.PACKAGE
        assert failure.message == "package failed: incomplete result"
