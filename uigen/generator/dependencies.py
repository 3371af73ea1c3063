"""Package dependency inference for generated components."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from uigen.models import PlatformDescriptor, PlatformFamily
from uigen.registry import FEATURE_DEPENDENCIES, SHARED_DEPENDENCIES


def infer_dependencies(
    descriptor: PlatformDescriptor,
    enabled_features: Iterable[str],
    feature_dependencies: Mapping[str, Mapping[PlatformFamily, tuple[str, ...]]] = FEATURE_DEPENDENCIES,
) -> list[str]:
    """Return the sorted, de-duplicated package list for one platform.

    Combines the shared base packages, the platform's own packages and any
    package pulled in by an enabled feature flag for the platform's family.
    """
    deps: set[str] = set(SHARED_DEPENDENCIES)
    deps.update(descriptor.dependencies)
    for flag in enabled_features:
        deps.update(feature_dependencies.get(flag, {}).get(descriptor.family, ()))
    return sorted(deps)
