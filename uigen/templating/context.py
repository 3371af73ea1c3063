"""Render context construction.

A render context is the plain dict bound into a template.  It is rebuilt for
every render call from the request, the platform descriptor and the
generation options; nothing is cached across requests.
"""

from __future__ import annotations

from typing import Any, Optional

from uigen.models import (
    FEATURE_FLAG_NAMES,
    FeatureFlags,
    GenerationOptions,
    GenerationRequest,
    Platform,
    PlatformDescriptor,
    PlatformFamily,
)
from uigen.utils import normalize_component_name, to_camel_case, to_kebab_case, to_pascal_case

DEFAULT_VARIANT = "default"
DEFAULT_SIZE = "md"
DEFAULT_THEME = "enterprise"
DEFAULT_LOCALE = "en"


def merge_features(features: FeatureFlags, descriptor: PlatformDescriptor) -> dict[str, bool]:
    """Overlay explicitly requested flags on the platform's defaults.

    Flags the platform does not support are always ``False`` in the result;
    the generator reports them as warnings.
    """
    requested = features.model_dump()
    merged: dict[str, bool] = {}
    for flag in FEATURE_FLAG_NAMES:
        if not descriptor.supports_feature(flag):
            merged[flag] = False
        elif flag in features.model_fields_set:
            merged[flag] = requested[flag]
        else:
            merged[flag] = descriptor.default_feature_flags[flag]
    return merged


def build_render_context(
    request: GenerationRequest,
    descriptor: PlatformDescriptor,
    options: Optional[GenerationOptions] = None,
) -> dict[str, Any]:
    """Build the template context for *request* on *descriptor*'s platform."""
    options = options or GenerationOptions()
    platform = descriptor.id
    family = descriptor.family
    template_name = normalize_component_name(request.name)
    features = merge_features(request.features, descriptor)

    return {
        # Request fields
        "name": request.name,
        "category": request.category.value,
        "variant": request.variant or DEFAULT_VARIANT,
        "size": (request.size.value if request.size else DEFAULT_SIZE),
        "theme": (request.theme.value if request.theme else DEFAULT_THEME),
        "locale": (request.locale.value if request.locale else DEFAULT_LOCALE),
        "features": features,
        "enabled_features": [flag for flag, on in features.items() if on],
        "accessibility": request.accessibility.model_dump(mode="json"),
        "responsive": request.responsive.model_dump(mode="json"),
        # Naming conversions
        "component_name": to_pascal_case(request.name),
        "class_name": to_kebab_case(request.name),
        "template_name": template_name,
        "variable_name": to_camel_case(template_name),
        # Platform descriptor
        "platform": platform.value,
        "framework": descriptor.framework_label,
        "file_extension": descriptor.file_extension,
        "localization_pattern": descriptor.localization_pattern,
        "architecture": descriptor.architecture,
        # Family booleans
        "is_react_like": family is PlatformFamily.REACT_LIKE,
        "is_template_based": family is PlatformFamily.TEMPLATE_BASED,
        "is_reactive_store": family is PlatformFamily.REACTIVE_STORE,
        "is_compiled_component": family is PlatformFamily.COMPILED_COMPONENT,
        "is_desktop_shell": family is PlatformFamily.DESKTOP_SHELL,
        "is_mobile_native": family is PlatformFamily.MOBILE_NATIVE,
        # Platform booleans
        "is_react": platform in (Platform.REACT, Platform.NEXTJS, Platform.ELECTRON),
        "is_nextjs": platform is Platform.NEXTJS,
        "is_vue": platform is Platform.VUE,
        "is_angular": platform is Platform.ANGULAR,
        "is_svelte": platform is Platform.SVELTE,
        "is_electron": platform is Platform.ELECTRON,
        "is_react_native": platform is Platform.REACT_NATIVE,
        # Architecture flags
        "use_semantic_ui": True,
        "use_tokens": True,
        "use_localization": True,
        # Generation options
        "include_tests": options.include_tests,
        "include_stories": options.include_stories,
    }
