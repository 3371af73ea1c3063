"""Static template mapping table.

Binds every logical component name to the relative path of its template
body and the set of platforms it may be generated for.  The table lists
coverage, not authorship: a platform can be registered for a component
before its template body exists, in which case the resolver falls back to
the canonical platform's body.
"""

from __future__ import annotations

from typing import Any

from uigen.models import Category, Platform, TemplateMapping

ALL_PLATFORMS: frozenset[Platform] = frozenset(Platform)
WEB_AND_DESKTOP: frozenset[Platform] = ALL_PLATFORMS - {Platform.REACT_NATIVE}
REACT_FAMILY: frozenset[Platform] = frozenset({Platform.REACT, Platform.NEXTJS})

# name -> (relative path, category, platforms), in registration order.
_TABLE: list[tuple[str, str, Category, frozenset[Platform]]] = [
    # UI components
    ("navbar", "components/navbar.j2", Category.COMPONENTS, ALL_PLATFORMS),
    ("modal", "components/modal.j2", Category.COMPONENTS, ALL_PLATFORMS),
    ("sidebar", "components/sidebar.j2", Category.COMPONENTS, ALL_PLATFORMS),
    ("header", "components/header.j2", Category.COMPONENTS, ALL_PLATFORMS),
    ("form", "components/form.j2", Category.COMPONENTS, ALL_PLATFORMS),
    ("card", "components/card.j2", Category.COMPONENTS, ALL_PLATFORMS),
    ("user-card", "components/user-card.j2", Category.COMPONENTS, ALL_PLATFORMS),
    ("dashboard", "components/dashboard.j2", Category.COMPONENTS, ALL_PLATFORMS),
    # Data components
    ("data-table", "components/data-table.j2", Category.DATA_COMPONENTS, WEB_AND_DESKTOP),
    ("virtual-list", "components/virtual-list.j2", Category.DATA_COMPONENTS, WEB_AND_DESKTOP),
    ("command-palette", "components/command-palette.j2", Category.DATA_COMPONENTS, WEB_AND_DESKTOP),
    ("global-search", "components/global-search.j2", Category.DATA_COMPONENTS, WEB_AND_DESKTOP),
    # Theme components
    ("theme-switcher", "components/theme-switcher.j2", Category.THEME_COMPONENTS, WEB_AND_DESKTOP),
    ("theme-selector", "components/theme-selector.j2", Category.THEME_COMPONENTS, WEB_AND_DESKTOP),
    # Layouts
    ("app-shell", "layouts/app-shell.j2", Category.LAYOUTS, REACT_FAMILY),
    ("layout", "components/layout.j2", Category.LAYOUTS, WEB_AND_DESKTOP),
    # Providers
    ("auth-provider", "providers/auth-provider.j2", Category.PROVIDERS, REACT_FAMILY),
    ("theme-provider", "providers/theme-provider.j2", Category.PROVIDERS, REACT_FAMILY),
    ("error-boundary", "providers/error-boundary.j2", Category.PROVIDERS, REACT_FAMILY),
    ("notification-provider", "providers/notification-provider.j2", Category.PROVIDERS, REACT_FAMILY),
    ("token-provider", "providers/token-provider.j2", Category.PROVIDERS, REACT_FAMILY),
    ("feature-flags", "providers/feature-flags.j2", Category.PROVIDERS, REACT_FAMILY),
    # Patterns
    ("render-props", "patterns/render-props.j2", Category.PATTERNS, REACT_FAMILY),
    ("hoc-collection", "patterns/hoc-collection.j2", Category.PATTERNS, REACT_FAMILY),
    ("component-factory", "patterns/component-factory.j2", Category.PATTERNS, REACT_FAMILY),
    # Tools
    ("performance-monitor", "tools/performance-monitor.j2", Category.TOOLS, REACT_FAMILY),
    ("code-generator", "tools/code-generator.j2", Category.TOOLS, REACT_FAMILY),
    # Platform-specific templates
    ("app-router-layout", "app-router/layout.j2", Category.LAYOUTS, frozenset({Platform.NEXTJS})),
    ("app-router-page", "app-router/page.j2", Category.LAYOUTS, frozenset({Platform.NEXTJS})),
    ("vue-composable-theme", "composables/use-theme.j2", Category.PROVIDERS, frozenset({Platform.VUE})),
    ("angular-theme-service", "services/theme.service.j2", Category.PROVIDERS, frozenset({Platform.ANGULAR})),
    ("svelte-theme-store", "stores/theme.j2", Category.PROVIDERS, frozenset({Platform.SVELTE})),
    ("electron-main", "main/main.j2", Category.TOOLS, frozenset({Platform.ELECTRON})),
    ("electron-preload", "preload/preload.j2", Category.TOOLS, frozenset({Platform.ELECTRON})),
    ("rn-navigator", "navigation/app-navigator.j2", Category.LAYOUTS, frozenset({Platform.REACT_NATIVE})),
    ("rn-home-screen", "screens/home-screen.j2", Category.LAYOUTS, frozenset({Platform.REACT_NATIVE})),
]

# Feature presets applied to the default request shape of a template.
TEMPLATE_FEATURE_PRESETS: dict[str, dict[str, bool]] = {
    "navbar": {"interactive": True, "searchable": True, "collapsible": True, "icons": True},
    "modal": {"interactive": True, "animated": True},
    "sidebar": {"interactive": True, "collapsible": True, "icons": True, "badges": True},
    "form": {"interactive": True, "validation": True, "loading": True, "error": True},
    "card": {"interactive": True},
    "user-card": {"interactive": True, "badges": True},
    "dashboard": {"loading": True, "error": True, "icons": True},
    "data-table": {
        "interactive": True,
        "sortable": True,
        "filterable": True,
        "paginated": True,
        "selectable": True,
        "searchable": True,
        "loading": True,
    },
    "virtual-list": {"selectable": True, "loading": True},
    "command-palette": {"interactive": True, "searchable": True, "icons": True},
    "global-search": {"interactive": True, "searchable": True, "loading": True},
    "theme-switcher": {"interactive": True, "icons": True},
    "theme-selector": {"interactive": True},
    "app-shell": {"interactive": True, "collapsible": True},
    "notification-provider": {"animated": True},
    "error-boundary": {"error": True},
}


def default_template_mappings() -> dict[str, TemplateMapping]:
    """Return the shipped mapping table, keyed by canonical component name."""
    return {
        name: TemplateMapping(
            relative_template_path=path,
            category=category,
            supported_platforms=platforms,
        )
        for name, path, category, platforms in _TABLE
    }


def default_template_configs() -> dict[str, dict[str, Any]]:
    """Return per-template overrides merged into the default request shape."""
    return {
        name: {"features": dict(preset)}
        for name, preset in TEMPLATE_FEATURE_PRESETS.items()
    }
