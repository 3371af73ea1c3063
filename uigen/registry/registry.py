"""The platform registry: single source of truth for what exists per platform.

A :class:`PlatformRegistry` is constructed once (usually through
:func:`build_default_registry`) and then passed by reference to the
resolver and the generator.  Its tables are exposed read-only; there is no
write path after construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

from uigen.errors import NotFoundError
from uigen.models import (
    FeatureFlags,
    GenerationRequest,
    Platform,
    PlatformDescriptor,
    TemplateMapping,
)
from uigen.registry.mappings import default_template_configs, default_template_mappings
from uigen.registry.platforms import CANONICAL_PLATFORM, default_platform_descriptors
from uigen.utils import normalize_component_name, to_pascal_case


class PlatformRegistry:
    """Immutable catalog of platforms, template mappings and template defaults.

    Args:
        platforms: Platform descriptors, in the order platforms should be
            listed and iterated.
        mappings: Component name -> template mapping.  Names are normalised
            to their canonical key on construction.
        template_configs: Optional per-template overrides for the default
            request shape returned by :meth:`template_config`.
        canonical_platform: The fixed fallback platform.  Must be one of
            *platforms*.

    Raises:
        ValueError: If the canonical platform is not registered or a mapping
            refers to an unregistered platform.
    """

    def __init__(
        self,
        platforms: Iterable[PlatformDescriptor],
        mappings: Mapping[str, TemplateMapping],
        template_configs: Optional[Mapping[str, Mapping[str, Any]]] = None,
        canonical_platform: Platform = CANONICAL_PLATFORM,
    ) -> None:
        descriptors = {d.id: d for d in platforms}
        if canonical_platform not in descriptors:
            raise ValueError(
                f"Canonical platform {canonical_platform.value!r} is not registered"
            )

        normalised: dict[str, TemplateMapping] = {}
        for name, mapping in mappings.items():
            unknown = mapping.supported_platforms - descriptors.keys()
            if unknown:
                names = ", ".join(sorted(p.value for p in unknown))
                raise ValueError(f"Mapping {name!r} refers to unregistered platforms: {names}")
            normalised[normalize_component_name(name)] = mapping

        self._platforms = MappingProxyType(descriptors)
        self._mappings = MappingProxyType(normalised)
        self._template_configs = MappingProxyType(
            {normalize_component_name(k): dict(v) for k, v in (template_configs or {}).items()}
        )
        self._canonical = canonical_platform

    # -- Platforms -----------------------------------------------------------

    @property
    def canonical_platform(self) -> Platform:
        return self._canonical

    def platforms(self) -> list[Platform]:
        """All registered platforms in registration order."""
        return list(self._platforms)

    def describe(self, platform: Platform | str) -> PlatformDescriptor:
        """Return the descriptor for *platform*.

        Raises:
            NotFoundError: If the platform is not registered.
        """
        key = _coerce_platform(platform)
        if key is None or key not in self._platforms:
            raise NotFoundError(NotFoundError.REASON_UNKNOWN_PLATFORM, platform=str(platform))
        return self._platforms[key]

    def default_features(self, platform: Platform | str) -> dict[str, bool]:
        """Return a copy of the platform's default feature flag map."""
        return dict(self.describe(platform).default_feature_flags)

    def check_feature_support(
        self, platform: Platform | str, features: FeatureFlags
    ) -> list[str]:
        """Return the enabled flags that *platform* does not support."""
        descriptor = self.describe(platform)
        return [f for f in features.enabled() if not descriptor.supports_feature(f)]

    # -- Components ------------------------------------------------------------

    def mapping(self, component: str) -> TemplateMapping:
        """Return the template mapping for *component*.

        Raises:
            NotFoundError: With reason ``no mapping`` if the name is unknown.
        """
        key = normalize_component_name(component)
        try:
            return self._mappings[key]
        except KeyError:
            raise NotFoundError(NotFoundError.REASON_NO_MAPPING, component=key) from None

    def has_component(self, component: str) -> bool:
        return normalize_component_name(component) in self._mappings

    def components(self) -> list[str]:
        """Every registered component name in registration order."""
        return list(self._mappings)

    def list_components(self, platform: Platform | str) -> list[str]:
        """Component names the platform supports, in registration order."""
        key = self.describe(platform).id
        return [
            name
            for name, mapping in self._mappings.items()
            if key in mapping.supported_platforms
        ]

    def supported_platforms(self, component: str) -> list[Platform]:
        """Platforms declared for *component*, in registry order."""
        mapping = self.mapping(component)
        return [p for p in self._platforms if p in mapping.supported_platforms]

    def component_category(self, component: str) -> str:
        return self.mapping(component).category.value

    def template_count_by_platform(self) -> dict[Platform, int]:
        counts = {platform: 0 for platform in self._platforms}
        for mapping in self._mappings.values():
            for platform in mapping.supported_platforms:
                counts[platform] += 1
        return counts

    def total_template_count(self) -> int:
        return sum(self.template_count_by_platform().values())

    def template_config(self, component: str) -> GenerationRequest:
        """Return the default request shape for a named template.

        The returned request has no platform set, so it can be fed straight
        into an all-platforms run or pinned with
        :meth:`GenerationRequest.for_platform`.
        """
        key = normalize_component_name(component)
        mapping = self.mapping(key)
        overrides = self._template_configs.get(key, {})
        payload: dict[str, Any] = {
            "name": to_pascal_case(key),
            "category": mapping.category,
            **overrides,
        }
        return GenerationRequest.model_validate(payload)


def _coerce_platform(value: Platform | str) -> Optional[Platform]:
    if isinstance(value, Platform):
        return value
    try:
        return Platform(value)
    except ValueError:
        return None


def build_default_registry(template_dir: Path) -> PlatformRegistry:
    """Build the shipped registry with template bodies under *template_dir*."""
    return PlatformRegistry(
        platforms=default_platform_descriptors(template_dir),
        mappings=default_template_mappings(),
        template_configs=default_template_configs(),
    )
