"""Static platform catalog.

One entry per target platform.  Everything platform-conditional in the
pipeline (file extension, dependencies, context booleans, architecture
label, supported feature flags) is read from these descriptors.
"""

from __future__ import annotations

from pathlib import Path

from uigen.models import (
    FEATURE_FLAG_NAMES,
    Platform,
    PlatformDescriptor,
    PlatformFamily,
)

# The platform whose template tree is the single source of truth.  A
# platform that is registered for a component but has no authored template
# borrows this tree's body, exactly once.
CANONICAL_PLATFORM = Platform.REACT

# Dependencies every generated component needs, regardless of platform.
SHARED_DEPENDENCIES: tuple[str, ...] = ("@xala-technologies/ui-system",)

# Feature flags that pull in an extra package, per platform family.
FEATURE_DEPENDENCIES: dict[str, dict[PlatformFamily, tuple[str, ...]]] = {
    "icons": {
        PlatformFamily.REACT_LIKE: ("lucide-react",),
        PlatformFamily.DESKTOP_SHELL: ("lucide-react",),
        PlatformFamily.TEMPLATE_BASED: ("lucide-vue-next",),
        PlatformFamily.COMPILED_COMPONENT: ("lucide-angular",),
        PlatformFamily.REACTIVE_STORE: ("lucide-svelte",),
        PlatformFamily.MOBILE_NATIVE: ("lucide-react-native", "react-native-svg"),
    },
    "animated": {
        PlatformFamily.REACT_LIKE: ("framer-motion",),
        PlatformFamily.DESKTOP_SHELL: ("framer-motion",),
        PlatformFamily.COMPILED_COMPONENT: ("@angular/animations",),
        PlatformFamily.MOBILE_NATIVE: ("react-native-reanimated",),
    },
    "draggable": {
        PlatformFamily.REACT_LIKE: ("@dnd-kit/core",),
        PlatformFamily.DESKTOP_SHELL: ("@dnd-kit/core",),
        PlatformFamily.TEMPLATE_BASED: ("vuedraggable",),
        PlatformFamily.COMPILED_COMPONENT: ("@angular/cdk",),
    },
    "paginated": {
        PlatformFamily.REACT_LIKE: ("@tanstack/react-table",),
        PlatformFamily.DESKTOP_SHELL: ("@tanstack/react-table",),
        PlatformFamily.TEMPLATE_BASED: ("@tanstack/vue-table",),
        PlatformFamily.REACTIVE_STORE: ("@tanstack/svelte-table",),
    },
}

_BASE_DEFAULTS = {"interactive": True, "loading": True, "error": True}


def _feature_defaults(
    unsupported: tuple[str, ...] = (),
    enabled: tuple[str, ...] = (),
) -> dict[str, bool]:
    """Build a default flag map; absent keys mean "not supported"."""
    flags: dict[str, bool] = {}
    for name in FEATURE_FLAG_NAMES:
        if name in unsupported:
            continue
        flags[name] = _BASE_DEFAULTS.get(name, False) or name in enabled
    return flags


def default_platform_descriptors(template_dir: Path) -> list[PlatformDescriptor]:
    """Return the shipped platform catalog rooted at *template_dir*."""
    root = Path(template_dir)
    return [
        PlatformDescriptor(
            id=Platform.REACT,
            family=PlatformFamily.REACT_LIKE,
            file_extension=".tsx",
            template_root=root / "react",
            localization_pattern="t()",
            framework_label="React 18",
            architecture="semantic-cva",
            default_feature_flags=_feature_defaults(enabled=("icons",)),
            dependencies=("react", "react-i18next", "class-variance-authority"),
        ),
        PlatformDescriptor(
            id=Platform.NEXTJS,
            family=PlatformFamily.REACT_LIKE,
            file_extension=".tsx",
            template_root=root / "nextjs",
            localization_pattern="t()",
            framework_label="Next.js 14",
            architecture="semantic-cva-app-router",
            default_feature_flags=_feature_defaults(enabled=("icons",)),
            dependencies=("react", "next", "react-i18next", "class-variance-authority"),
        ),
        PlatformDescriptor(
            id=Platform.VUE,
            family=PlatformFamily.TEMPLATE_BASED,
            file_extension=".vue",
            template_root=root / "vue",
            localization_pattern="{{ t() }}",
            framework_label="Vue 3",
            architecture="composition-api",
            default_feature_flags=_feature_defaults(),
            dependencies=("vue", "vue-i18n"),
        ),
        PlatformDescriptor(
            id=Platform.ANGULAR,
            family=PlatformFamily.COMPILED_COMPONENT,
            file_extension=".component.ts",
            template_root=root / "angular",
            localization_pattern="| translate",
            framework_label="Angular 17",
            architecture="standalone-component",
            default_feature_flags=_feature_defaults(),
            dependencies=("@angular/core", "@angular/common", "@ngx-translate/core"),
        ),
        PlatformDescriptor(
            id=Platform.SVELTE,
            family=PlatformFamily.REACTIVE_STORE,
            file_extension=".svelte",
            template_root=root / "svelte",
            localization_pattern="{$t()}",
            framework_label="Svelte 4",
            architecture="store-driven",
            default_feature_flags=_feature_defaults(unsupported=("draggable",)),
            dependencies=("svelte", "svelte-i18n"),
        ),
        PlatformDescriptor(
            id=Platform.ELECTRON,
            family=PlatformFamily.DESKTOP_SHELL,
            file_extension=".tsx",
            template_root=root / "electron",
            localization_pattern="{t()}",
            framework_label="Electron 28",
            architecture="semantic-cva-desktop",
            default_feature_flags=_feature_defaults(enabled=("resizable",)),
            dependencies=("react", "electron", "react-i18next", "class-variance-authority"),
        ),
        PlatformDescriptor(
            id=Platform.REACT_NATIVE,
            family=PlatformFamily.MOBILE_NATIVE,
            file_extension=".tsx",
            template_root=root / "react-native",
            localization_pattern="t()",
            framework_label="React Native 0.73",
            architecture="native-stylesheet",
            default_feature_flags=_feature_defaults(
                unsupported=("resizable", "tooltips", "paginated"),
            ),
            dependencies=(
                "react",
                "react-native",
                "react-i18next",
                "react-native-safe-area-context",
            ),
        ),
    ]
