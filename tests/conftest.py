"""Shared pytest fixtures for the uigen test suite.

Provides reusable fixtures for:
- A small on-disk template tree with authored, fallback-only, broken and
  missing templates
- A registry and generator bound to that tree
- Raw and validated generation requests
"""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Any

import pytest

from uigen.config import Config
from uigen.generator import ComponentGenerator
from uigen.models import Category, GenerationRequest, Platform, TemplateMapping
from uigen.registry import PlatformRegistry
from uigen.registry.platforms import default_platform_descriptors
from uigen.templating import TemplateResolver


# ---------------------------------------------------------------------------
# Template tree
# ---------------------------------------------------------------------------

WIDGET_REACT = """\
import { useTranslation } from 'react-i18next';

export const {{ component_name }} = () => {
  const { t } = useTranslation();
  return <div className="{{ class_name }}">{t('{{ template_name }}.title')}</div>;
};
// platform={{ platform }} features={{ enabled_features | join(',') }}
"""

WIDGET_VUE = """\
<template>
  <div class="{{ class_name }}" v-text="$t('{{ template_name }}.label')" />
</template>
"""

USER_CARD_REACT = """\
export const {{ component_name }} = () => t('{{ template_name }}.name');
// platform={{ platform }}
"""

BROKEN_REACT = "export const {{ component_name }} = () => null;\n"
BROKEN_VUE = "<template>{% if %}</template>\n"

SHARED = {
    "types.ts.j2": "export interface {{ component_name }}Props {}\n",
    "test.ts.j2": "describe('{{ component_name }}', () => {});\n",
    "story.ts.j2": "export default { title: '{{ category }}/{{ component_name }}' };\n",
}


def _write(path: Path, body: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(body), encoding="utf-8")


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Template tree with one authored override, one fallback-only template,
    one template that fails to compile on Vue and one with no body at all.
    """
    root = tmp_path / "templates"
    _write(root / "react" / "components" / "widget.j2", WIDGET_REACT)
    _write(root / "vue" / "components" / "widget.j2", WIDGET_VUE)
    _write(root / "react" / "components" / "user-card.j2", USER_CARD_REACT)
    _write(root / "react" / "components" / "broken.j2", BROKEN_REACT)
    _write(root / "vue" / "components" / "broken.j2", BROKEN_VUE)
    for name, body in SHARED.items():
        _write(root / "_shared" / name, body)
    return root


# ---------------------------------------------------------------------------
# Registry & generator
# ---------------------------------------------------------------------------

ALL = frozenset(Platform)


def _mapping(path: str, platforms: frozenset[Platform], category: Category = Category.COMPONENTS) -> TemplateMapping:
    return TemplateMapping(
        relative_template_path=path,
        category=category,
        supported_platforms=platforms,
    )


@pytest.fixture
def mappings() -> dict[str, TemplateMapping]:
    return {
        "widget": _mapping("components/widget.j2", ALL),
        "user-card": _mapping("components/user-card.j2", ALL),
        "broken": _mapping(
            "components/broken.j2",
            frozenset({Platform.REACT, Platform.VUE, Platform.SVELTE}),
        ),
        "ghost": _mapping("components/ghost.j2", frozenset({Platform.REACT, Platform.VUE})),
        "react-only": _mapping(
            "components/widget.j2", frozenset({Platform.REACT}), Category.PATTERNS
        ),
    }


@pytest.fixture
def registry(template_dir: Path, mappings: dict[str, TemplateMapping]) -> PlatformRegistry:
    return PlatformRegistry(
        platforms=default_platform_descriptors(template_dir),
        mappings=mappings,
        template_configs={"widget": {"features": {"icons": True, "searchable": True}}},
    )


@pytest.fixture
def config(template_dir: Path) -> Config:
    return Config(template_dir=template_dir, max_concurrency=2, read_timeout=2.0)


@pytest.fixture
def resolver(registry: PlatformRegistry) -> TemplateResolver:
    return TemplateResolver(registry, read_timeout=2.0)


@pytest.fixture
def generator(registry: PlatformRegistry, config: Config) -> ComponentGenerator:
    return ComponentGenerator(registry, config=config)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

@pytest.fixture
def raw_request() -> dict[str, Any]:
    """A valid raw request, as it would arrive from JSON."""
    return {
        "name": "Widget",
        "category": "components",
        "platform": "react",
        "variant": "primary",
        "features": {"interactive": True, "searchable": True},
        "accessibility": {"level": "AA", "screenReader": True},
    }


@pytest.fixture
def widget_request() -> GenerationRequest:
    return GenerationRequest(name="Widget", category=Category.COMPONENTS, platform=Platform.REACT)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture
def clean_uigen_logger():
    """Restore the ``uigen`` logger after a test reconfigures it."""
    logger = logging.getLogger("uigen")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
