"""Platform registry and template mapping tables.

Quick usage::

    from uigen.registry import build_default_registry

    registry = build_default_registry(template_dir)
    registry.describe("vue").file_extension      # ".vue"
    registry.list_components("react-native")     # ["navbar", "modal", ...]
"""

from uigen.registry.platforms import CANONICAL_PLATFORM, FEATURE_DEPENDENCIES, SHARED_DEPENDENCIES
from uigen.registry.registry import PlatformRegistry, build_default_registry

__all__ = [
    "CANONICAL_PLATFORM",
    "FEATURE_DEPENDENCIES",
    "SHARED_DEPENDENCIES",
    "PlatformRegistry",
    "build_default_registry",
]
