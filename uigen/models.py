"""Pydantic v2 models for the uigen generation pipeline.

Defines the request schema accepted from callers, the static registry
records, and the result contract returned for single- and multi-platform
generation.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from uigen.errors import Stage
from uigen.utils import to_pascal_case


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Platform(str, Enum):
    """Independently targetable front-end platforms."""
    REACT = "react"
    NEXTJS = "nextjs"
    VUE = "vue"
    ANGULAR = "angular"
    SVELTE = "svelte"
    ELECTRON = "electron"
    REACT_NATIVE = "react-native"


class PlatformFamily(str, Enum):
    """Code-shape family a platform belongs to."""
    REACT_LIKE = "react-like"
    TEMPLATE_BASED = "template-based"
    REACTIVE_STORE = "reactive-store"
    COMPILED_COMPONENT = "compiled-component"
    DESKTOP_SHELL = "desktop-shell"
    MOBILE_NATIVE = "mobile-native"


class Category(str, Enum):
    """Logical groupings of component templates."""
    COMPONENTS = "components"
    DATA_COMPONENTS = "data-components"
    THEME_COMPONENTS = "theme-components"
    LAYOUTS = "layouts"
    PROVIDERS = "providers"
    PATTERNS = "patterns"
    TOOLS = "tools"


class AccessibilityLevel(str, Enum):
    """WCAG conformance target."""
    AA = "AA"
    AAA = "AAA"


class Breakpoint(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"
    WIDE = "wide"
    ULTRA = "ultra"


class Size(str, Enum):
    XS = "xs"
    SM = "sm"
    MD = "md"
    LG = "lg"
    XL = "xl"


class Locale(str, Enum):
    EN = "en"
    NO = "no"
    FR = "fr"
    AR = "ar"


class Theme(str, Enum):
    """Industry and municipal presentation themes."""
    ENTERPRISE = "enterprise"
    FINANCE = "finance"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    ECOMMERCE = "ecommerce"
    PRODUCTIVITY = "productivity"
    OSLO = "oslo"
    BERGEN = "bergen"
    DRAMMEN = "drammen"


class FileType(str, Enum):
    COMPONENT = "component"
    TYPES = "types"
    TEST = "test"
    STORY = "story"
    LOCALE = "locale"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class _RequestModel(BaseModel):
    """Base for request models: immutable, camelCase aliases, no extras."""
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class FeatureFlags(_RequestModel):
    """Flat, explicitly enumerated component feature switches."""
    interactive: bool = False
    animated: bool = False
    searchable: bool = False
    sortable: bool = False
    filterable: bool = False
    paginated: bool = False
    selectable: bool = False
    draggable: bool = False
    resizable: bool = False
    collapsible: bool = False
    tooltips: bool = False
    icons: bool = False
    badges: bool = False
    loading: bool = False
    error: bool = False
    validation: bool = False

    def enabled(self) -> list[str]:
        """Names of the flags switched on, in declaration order."""
        return [name for name, value in self.model_dump().items() if value]


FEATURE_FLAG_NAMES: tuple[str, ...] = tuple(FeatureFlags.model_fields)


class AccessibilityOptions(_RequestModel):
    level: AccessibilityLevel = AccessibilityLevel.AAA
    screen_reader: bool = True
    keyboard_navigation: bool = True
    high_contrast: bool = False
    reduced_motion: bool = False
    focus_management: bool = True
    aria_labels: bool = True


class ResponsiveOptions(_RequestModel):
    breakpoints: list[Breakpoint] = Field(
        default_factory=lambda: [Breakpoint.MOBILE, Breakpoint.TABLET, Breakpoint.DESKTOP]
    )
    mobile_first: bool = True
    adaptive_layout: bool = True
    touch_optimized: bool = True
    fluid_typography: bool = True

    @field_validator("breakpoints")
    @classmethod
    def _dedupe_breakpoints(cls, value: list[Breakpoint]) -> list[Breakpoint]:
        seen: list[Breakpoint] = []
        for bp in value:
            if bp not in seen:
                seen.append(bp)
        return seen


class GenerationRequest(_RequestModel):
    """Immutable, validated description of the component to generate.

    ``platform`` of ``None`` means "all platforms the component supports".
    """
    name: str = Field(..., min_length=1)
    category: Category
    platform: Optional[Platform] = None
    variant: Optional[str] = None
    size: Optional[Size] = None
    theme: Optional[Theme] = None
    locale: Optional[Locale] = None
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    accessibility: AccessibilityOptions = Field(default_factory=AccessibilityOptions)
    responsive: ResponsiveOptions = Field(default_factory=ResponsiveOptions)

    @field_validator("name")
    @classmethod
    def _name_is_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        identifier = to_pascal_case(value)
        if not identifier:
            raise ValueError("must contain at least one letter or digit")
        if not identifier[0].isalpha():
            raise ValueError("must start with a letter")
        return value

    def for_platform(self, platform: Platform) -> "GenerationRequest":
        """Return a copy of this request pinned to *platform*."""
        return self.model_copy(update={"platform": platform})


class GenerationOptions(BaseModel):
    """Which optional artefacts to include in the file manifest."""
    include_types: bool = True
    include_tests: bool = False
    include_stories: bool = False
    include_locales: bool = False


# ---------------------------------------------------------------------------
# Registry records
# ---------------------------------------------------------------------------

class PlatformDescriptor(BaseModel):
    """Static description of one target platform. Built once, never mutated."""
    model_config = ConfigDict(frozen=True)

    id: Platform
    family: PlatformFamily
    file_extension: str
    template_root: Path
    localization_pattern: str
    framework_label: str
    architecture: str
    default_feature_flags: dict[str, bool]
    dependencies: tuple[str, ...] = ()

    def supports_feature(self, flag: str) -> bool:
        return flag in self.default_feature_flags


class TemplateMapping(BaseModel):
    """Binding of a logical component name to its template location."""
    model_config = ConfigDict(frozen=True)

    relative_template_path: str
    category: Category
    supported_platforms: frozenset[Platform]

    @field_validator("supported_platforms")
    @classmethod
    def _not_empty(cls, value: frozenset[Platform]) -> frozenset[Platform]:
        if not value:
            raise ValueError("must list at least one platform")
        return value


class TemplateSource(BaseModel):
    """A resolved template body plus where it came from.

    ``platform`` is the platform the caller asked for; ``source_platform``
    is the tree the body was actually read from.  They differ only when
    ``fallback`` is set.
    """
    model_config = ConfigDict(frozen=True)

    component: str
    platform: Platform
    source_platform: Platform
    path: str
    body: str
    fallback: bool = False


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------

class GeneratedFile(BaseModel):
    path: str
    type: FileType
    content: str = ""


class GenerationResult(BaseModel):
    """Output of a single-platform generation run."""
    platform: Platform
    component: str
    architecture: str
    component_code: str
    types_code: str = ""
    localization_keys: dict[str, str] = Field(default_factory=dict)
    dependencies: list[str]
    files: list[GeneratedFile] = Field(..., min_length=1)
    fallback: bool = False
    template_path: str = ""
    warnings: list[str] = Field(default_factory=list)

    @field_validator("dependencies")
    @classmethod
    def _unique_sorted_dependencies(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("dependencies must be unique")
        return sorted(value)


class PlatformFailure(BaseModel):
    """A recorded per-platform failure inside a multi-platform run."""
    platform: Platform
    component: str
    stage: Stage
    error_type: str
    message: str


class MultiPlatformResult(BaseModel):
    """Per-platform outcomes of an all-platforms run.

    Successful platforms are never discarded because another one failed.
    """
    component: str
    results: dict[Platform, GenerationResult] = Field(default_factory=dict)
    errors: dict[Platform, PlatformFailure] = Field(default_factory=dict)

    @property
    def succeeded(self) -> list[Platform]:
        return list(self.results)

    @property
    def failed(self) -> list[Platform]:
        return list(self.errors)

    @property
    def is_partial_failure(self) -> bool:
        return bool(self.results) and bool(self.errors)

    @property
    def all_failed(self) -> bool:
        return not self.results and bool(self.errors)


class GenerationSummary(BaseModel):
    total_files: int = 0
    unique_dependencies: int = 0
    platform_count: int = 0
    failed_platforms: list[Platform] = Field(default_factory=list)
    fallback_platforms: list[Platform] = Field(default_factory=list)
